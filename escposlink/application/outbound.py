"""escposlink/application/outbound.py

Outbound pipeline: FIFO submission queue drained by the writer loop.

Each tick moves at most one submission into an accumulation buffer (or
injects a status poll after an idle period) and writes the buffer to the
transport in bounded chunks. Bytes leave the buffer only after the write
primitive returned, so a failing transport keeps the unwritten remainder
for the next tick.

Copyright escposlink contributors
Last modified: 2026-10-18
"""

from __future__ import annotations

import queue
import threading
import time
from typing import Callable, Optional

from ..constants import POLL_COMMAND
from ..domain import EngineSettings
from ..logging_utils import logprintf
from ..ports import TransportPort
from ..time_utils import Stopwatch
from .events import PrinterEvents


class OutboundPipeline:
    """Writer loop with chunking, flush discipline and idle polling."""

    def __init__(
        self,
        transport: TransportPort,
        events: PrinterEvents,
        settings: EngineSettings,
        *,
        name: str = "",
        logger: Callable[..., None] = logprintf,
        clock: Callable[[], float] = time.monotonic,
        poll_command: bytes = POLL_COMMAND,
    ) -> None:
        self._transport = transport
        self._events = events
        self._settings = settings
        self._name = name
        self._logger = logger
        self._poll_command = bytes(poll_command)
        self._queue: queue.Queue[bytes] = queue.Queue()
        self._pending = bytearray()
        self._idle = Stopwatch(clock)
        self.bytes_since_flush = 0
        self.running = False

    # --- caller side --------------------------------------------------------

    def submit(self, data: Optional[bytes]) -> None:
        """Queue ``data`` for transmission; empty payloads are ignored."""

        if data is None:
            raise ValueError("data must not be None")
        if not isinstance(data, (bytes, bytearray, memoryview)):
            raise TypeError(f"expected bytes-like object, got {type(data).__name__}")
        payload = bytes(data)
        if not payload:
            return
        self._queue.put_nowait(payload)

    def pending(self) -> int:
        """Number of submissions not yet moved into the write buffer."""

        return self._queue.qsize()

    @property
    def buffered(self) -> int:
        """Bytes dequeued but not yet accepted by the transport."""

        return len(self._pending)

    # --- writer loop --------------------------------------------------------

    def flush(self) -> None:
        try:
            self.bytes_since_flush = 0
            self._transport.flush()
        except Exception as exc:
            self._logger(0, "[%s] Flush threw exception: %s", self._name, exc)
            self._events.report_error("flush", exc)

    def _write_pending(self) -> bool:
        max_chunk = self._settings.max_bytes_per_write
        while self._pending:
            count = min(max_chunk, len(self._pending))
            chunk = bytes(self._pending[:count])
            try:
                self._transport.write_bytes(chunk, 0, count)
            except Exception as exc:
                written = getattr(exc, "characters_written", 0) or 0
                if 0 < written <= count:
                    del self._pending[:written]
                    self.bytes_since_flush += written
                if isinstance(exc, OSError):
                    self._logger(
                        3,
                        "[%s] Device appears disconnected, %d bytes kept until it is reconnected: %s",
                        self._name,
                        len(self._pending),
                        exc,
                    )
                else:
                    self._logger(
                        3, "[%s] Swallowing generic write exception: %s", self._name, exc
                    )
                self._events.report_error("write", exc)
                return False

            del self._pending[:count]
            self.bytes_since_flush += count
            if self.bytes_since_flush >= self._settings.flush_threshold:
                self.flush()

        self.flush()
        return True

    def step(self) -> None:
        """Run one writer iteration without sleeping."""

        try:
            data: Optional[bytes] = self._queue.get_nowait()
        except queue.Empty:
            data = None

        if data:
            self._pending.extend(data)
            self._idle.restart()
        elif not self._pending and self._idle.elapsed >= self._settings.poll_interval:
            self._pending.extend(self._poll_command)
            self._idle.restart()

        if self._pending:
            self._write_pending()

    def run(self, cancel: threading.Event) -> None:
        """Drain the queue until cancellation is requested and it is empty."""

        self.running = True
        self._idle.restart()
        try:
            while True:
                time.sleep(self._settings.tick)
                try:
                    self.step()
                except Exception as exc:
                    self._logger(3, "[%s] Swallowing write loop exception: %s", self._name, exc)
                    self._events.report_error("write", exc)

                if cancel.is_set() and self._queue.empty():
                    self._logger(3, "[%s] Write loop cancellation was requested", self._name)
                    break
        finally:
            self._logger(3, "[%s] Write loop has exited", self._name)
            self.running = False


__all__ = ["OutboundPipeline"]
