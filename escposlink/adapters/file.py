"""escposlink/adapters/file.py

File sink transport, e.g. ``/dev/usb/lp0`` or a capture file.

There is no back channel, so reads never return data and a file printer
is reported disconnected once the inactivity timeout elapses.
"""

from __future__ import annotations

import threading
from typing import BinaryIO, Optional


class FileTransport:
    def __init__(self, path: str, *, append: bool = False) -> None:
        if not path:
            raise ValueError("path is required")
        self.path = path
        self._mode = "ab" if append else "wb"
        self._lock = threading.Lock()
        self._file: Optional[BinaryIO] = None

    def _open(self) -> BinaryIO:
        with self._lock:
            if self._file is None:
                self._file = open(self.path, self._mode)
                # later reopenings must not truncate what was written so far
                self._mode = "ab"
            return self._file

    def close(self) -> None:
        with self._lock:
            f, self._file = self._file, None
        if f is not None:
            f.close()

    def read_bytes(self, buffer: bytearray, offset: int, size: int) -> int:
        return 0

    def write_bytes(self, data: bytes, offset: int, count: int) -> None:
        f = self._open()
        f.write(memoryview(data)[offset : offset + count])

    def flush(self) -> None:
        f = self._file
        if f is not None:
            f.flush()


__all__ = ["FileTransport"]
