"""escposlink/application/inbound.py

Inbound pipeline: byte ingestion, positional framing and liveness.

Frames are purely positional. Every appended byte triggers a check, and
whenever the buffered length is a non-zero multiple of four the oldest
four bytes form a status frame. A stray noise byte therefore shifts all
later frame boundaries; there is no resynchronisation.

Copyright escposlink contributors
Last modified: 2026-10-18
"""

from __future__ import annotations

import threading
import time
from typing import Callable, Optional

from ..constants import STATUS_FRAME_SIZE
from ..domain import EngineSettings
from ..logging_utils import logprintf
from ..ports import TransportPort
from ..time_utils import Stopwatch
from .events import PrinterEvents
from .status_engine import StatusEngine


class FrameAssembler:
    """Mutex-guarded byte buffer cut into 4-byte status frames."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._buffer = bytearray()

    def __len__(self) -> int:
        with self._lock:
            return len(self._buffer)

    def append(self, value: int) -> Optional[bytes]:
        """Append one byte; return a complete frame when one is available."""

        with self._lock:
            self._buffer.append(value)
            size = len(self._buffer)
            if size == 0 or size % STATUS_FRAME_SIZE != 0:
                return None
            frame = bytes(self._buffer[:STATUS_FRAME_SIZE])
            del self._buffer[:STATUS_FRAME_SIZE]
            return frame


class InboundPipeline:
    """Reader loop feeding the :class:`StatusEngine`."""

    def __init__(
        self,
        transport: TransportPort,
        status_engine: StatusEngine,
        events: PrinterEvents,
        settings: EngineSettings,
        *,
        name: str = "",
        logger: Callable[..., None] = logprintf,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._transport = transport
        self._status_engine = status_engine
        self._events = events
        self._settings = settings
        self._name = name
        self._logger = logger
        self.assembler = FrameAssembler()
        self._buffer = bytearray(settings.read_buffer_size)
        self._since_last_read = Stopwatch(clock)
        self.connection = True
        self.running = False

    def _read(self) -> int:
        try:
            return self._transport.read_bytes(
                self._buffer, 0, self._settings.read_buffer_size
            )
        except Exception as exc:
            # Serial drivers occasionally fail mid-read when the status
            # changes during a write; those bytes are simply missed.
            self._logger(3, "[%s] Swallowing read exception: %s", self._name, exc)
            self._events.report_error("read", exc)
            return 0

    def data_available(self, value: int) -> bool:
        """Feed one byte; return True when it completed a published frame."""

        frame = self.assembler.append(value)
        if frame is None:
            return False
        return self._status_engine.update(True, frame)

    def step(self) -> int:
        """Run one reader iteration and return the number of bytes read."""

        count = self._read()
        if count > 0:
            published = False
            for value in self._buffer[:count]:
                published = self.data_available(value) or published
            self._since_last_read.restart()

            if not self.connection:
                self.connection = True
                self._logger(2, "[%s] Printer connection restored", self._name)
                self._events.connected.emit(True)
                # a frame in this read already carried connection=True
                if not published:
                    self._status_engine.update(True, None, force=True)
        elif (
            self.connection
            and self._since_last_read.elapsed >= self._settings.inactivity_timeout
        ):
            self.connection = False
            self._logger(1, "[%s] No data from printer, marking disconnected", self._name)
            self._events.disconnected.emit(False)
            self._status_engine.update(False, None, force=True)
        return count

    def run(self, cancel: threading.Event) -> None:
        self.running = True
        self._since_last_read.restart()
        try:
            while not cancel.wait(self._settings.tick):
                try:
                    self.step()
                except Exception as exc:
                    self._logger(3, "[%s] Swallowing read loop exception: %s", self._name, exc)
                    self._events.report_error("read", exc)
            self._logger(3, "[%s] Read loop cancellation was requested", self._name)
        finally:
            self._logger(3, "[%s] Read loop has exited", self._name)
            self.running = False


__all__ = ["FrameAssembler", "InboundPipeline"]
