"""escposlink/adapters/network.py

TCP socket transport for network printers (raw port 9100 by default).

The socket is opened lazily and dropped on any error, so the next write
reconnects. Network printers commonly time out idle sockets; the engine
treats the resulting errors as transient.

Copyright escposlink contributors
Last modified: 2026-10-18
"""

from __future__ import annotations

import socket
import threading
from typing import Callable, Optional

from ..logging_utils import logprintf


class NetworkTransport:
    def __init__(
        self,
        host: str,
        port: int = 9100,
        *,
        connect_timeout: float = 3.0,
        read_timeout: float = 0.05,
        logger: Callable[..., None] = logprintf,
    ) -> None:
        if not host:
            raise ValueError("host is required")
        self.host = host
        self.port = int(port)
        self._connect_timeout = connect_timeout
        self._read_timeout = read_timeout
        self._logger = logger
        self._lock = threading.Lock()
        self._sock: Optional[socket.socket] = None

    @property
    def is_open(self) -> bool:
        return self._sock is not None

    def _connect(self) -> socket.socket:
        with self._lock:
            if self._sock is None:
                sock = socket.create_connection(
                    (self.host, self.port), timeout=self._connect_timeout
                )
                sock.settimeout(self._read_timeout)
                sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)
                self._sock = sock
                self._logger(2, "Connected to printer at %s:%d", self.host, self.port)
            return self._sock

    def _drop(self, sock: socket.socket) -> None:
        with self._lock:
            if self._sock is sock:
                self._sock = None
        try:
            sock.close()
        except OSError:  # pragma: no cover - already closed
            pass

    def close(self) -> None:
        with self._lock:
            sock, self._sock = self._sock, None
        if sock is not None:
            sock.close()

    # --- TransportPort -------------------------------------------------------

    def read_bytes(self, buffer: bytearray, offset: int, size: int) -> int:
        sock = self._sock
        if sock is None:
            return 0
        try:
            count = sock.recv_into(memoryview(buffer)[offset : offset + size])
        except socket.timeout:
            return 0
        except OSError:
            self._drop(sock)
            raise
        if count == 0:
            self._logger(1, "Printer at %s:%d closed the connection", self.host, self.port)
            self._drop(sock)
        return count

    def write_bytes(self, data: bytes, offset: int, count: int) -> None:
        sock = self._connect()
        try:
            sock.sendall(memoryview(data)[offset : offset + count])
        except OSError:
            self._drop(sock)
            raise

    def flush(self) -> None:
        # sendall() hands everything to the kernel already.
        return None


__all__ = ["NetworkTransport"]
