"""escposlink/adapters/serial_backend.py

Serial transport built on ``pyserial-asyncio``.

The serial connection lives in a dedicated asyncio loop thread. Received
bytes are pushed into a thread-safe queue that the reader loop drains
without blocking; writes are scheduled onto the asyncio loop.

Copyright escposlink contributors
Last modified: 2026-10-18
"""

from __future__ import annotations

import asyncio
import queue
import threading
import time
from typing import Callable, Optional

from ..logging_utils import logprintf


class _AsyncSerialProtocol(asyncio.Protocol):
    """Protocol that pushes received bytes into a thread-safe queue."""

    def __init__(
        self,
        read_queue: queue.Queue[int],
        on_connection_lost: Callable[[Optional[Exception]], None],
    ) -> None:
        self._read_queue = read_queue
        self._on_connection_lost = on_connection_lost
        self.transport: Optional[asyncio.Transport] = None

    def connection_made(self, transport: asyncio.BaseTransport) -> None:  # type: ignore[override]
        self.transport = transport  # type: ignore[assignment]

    def data_received(self, data: bytes) -> None:  # type: ignore[override]
        for b in data:
            try:
                self._read_queue.put_nowait(b)
            except queue.Full:  # pragma: no cover - defensive
                break

    def connection_lost(self, exc: Optional[Exception]) -> None:  # type: ignore[override]
        self._on_connection_lost(exc)


class SerialTransport:
    """Serial port transport implementing :class:`~escposlink.ports.TransportPort`."""

    def __init__(
        self,
        port: str,
        baudrate: int = 9600,
        *,
        logger: Callable[..., None] = logprintf,
        reconnect_interval: float = 2.0,
    ) -> None:
        self.port = port
        self.baudrate = int(baudrate)
        self._logger = logger
        self._reconnect_interval = reconnect_interval
        self._last_attempt: Optional[float] = None
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None
        self._transport: Optional[asyncio.Transport] = None
        self._protocol: Optional[_AsyncSerialProtocol] = None
        self._read_queue: queue.Queue[int] = queue.Queue(maxsize=65536)
        self._serial_asyncio = None

    def _load_serial_asyncio(self):
        if self._serial_asyncio is None:
            import serial_asyncio  # type: ignore[import]

            self._serial_asyncio = serial_asyncio
        return self._serial_asyncio

    @staticmethod
    def _serial_loop_worker(loop: asyncio.AbstractEventLoop) -> None:
        asyncio.set_event_loop(loop)
        loop.run_forever()

    @property
    def is_open(self) -> bool:
        return self._loop is not None and self._transport is not None

    def close(self) -> None:
        try:
            if self._loop is not None and self._transport is not None:
                self._loop.call_soon_threadsafe(self._transport.close)
        except RuntimeError:  # pragma: no cover - loop already closed
            pass

        try:
            if self._loop is not None:
                self._loop.call_soon_threadsafe(self._loop.stop)
        except RuntimeError:  # pragma: no cover - loop already closed
            pass

        if self._thread is not None:
            self._thread.join(timeout=1.5)

        if self._loop is not None and not self._loop.is_running():
            self._loop.close()

        self._loop = None
        self._thread = None
        self._transport = None
        self._protocol = None

    def open(self) -> bool:
        self.close()
        self._read_queue = queue.Queue(maxsize=65536)
        self._last_attempt = time.monotonic()

        try:
            serial_asyncio = self._load_serial_asyncio()
            self._loop = asyncio.new_event_loop()
            self._thread = threading.Thread(
                target=self._serial_loop_worker,
                args=(self._loop,),
                name=f"escposlink-serial-{self.port}",
                daemon=True,
            )
            self._thread.start()

            def _on_lost(exc: Optional[Exception]) -> None:
                self._transport = None
                if exc:
                    self._logger(1, "Serial connection lost: %s", exc)

            async def _open():
                return await serial_asyncio.create_serial_connection(
                    self._loop,
                    lambda: _AsyncSerialProtocol(self._read_queue, _on_lost),
                    self.port,
                    baudrate=self.baudrate,
                )

            fut = asyncio.run_coroutine_threadsafe(_open(), self._loop)
            self._transport, self._protocol = fut.result(timeout=5.0)
            self._logger(2, "Serial port opened on %s at %d baud", self.port, self.baudrate)
            return True
        except Exception as e:
            self._logger(0, "Opening serial port %s failed: %s", self.port, e)
            self.close()
            return False

    def _ensure_open(self) -> None:
        if self.is_open:
            return
        if (
            self._last_attempt is None
            or time.monotonic() - self._last_attempt >= self._reconnect_interval
        ):
            self.open()
        if not self.is_open:
            raise ConnectionError(f"serial port {self.port} is not open")

    # --- TransportPort -------------------------------------------------------

    def read_bytes(self, buffer: bytearray, offset: int, size: int) -> int:
        count = 0
        while count < size:
            try:
                buffer[offset + count] = self._read_queue.get_nowait()
            except queue.Empty:
                break
            count += 1
        return count

    def write_bytes(self, data: bytes, offset: int, count: int) -> None:
        self._ensure_open()
        payload = bytes(data[offset : offset + count])
        loop = self._loop
        assert loop is not None

        def _write() -> None:
            if self._transport is not None:
                self._transport.write(payload)

        loop.call_soon_threadsafe(_write)

    def flush(self) -> None:
        loop = self._loop
        if loop is None or self._transport is None:
            return

        def _flush() -> None:
            serial = getattr(self._transport, "serial", None)
            if serial is not None:
                serial.flush()

        loop.call_soon_threadsafe(_flush)


__all__ = ["SerialTransport", "_AsyncSerialProtocol"]
