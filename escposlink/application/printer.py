"""escposlink/application/printer.py

Lifecycle controller and public facade of the transport engine.

A :class:`Printer` owns two background threads: the writer drains the
outbound queue and the reader assembles status frames. Each loop has its
own cancellation token. Shutdown requests cancellation, waits for both
loops to report stopped (the writer only stops once its queue is empty)
and then tears down the transport.

Copyright escposlink contributors
Last modified: 2026-10-18
"""

from __future__ import annotations

import threading
import time
import uuid
from typing import Callable, Optional

from ..domain import EngineSettings, StatusSnapshot
from ..logging_utils import logprintf
from ..ports import TransportPort
from .commands import combine
from .events import PrinterEvents
from .inbound import InboundPipeline
from .outbound import OutboundPipeline
from .status_engine import StatusEngine


class Printer:
    """Full-duplex printer connection over a :class:`TransportPort`."""

    def __init__(
        self,
        transport: TransportPort,
        name: Optional[str] = None,
        settings: Optional[EngineSettings] = None,
        *,
        logger: Callable[..., None] = logprintf,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.name = name or str(uuid.uuid4())
        self.settings = settings or EngineSettings()
        self._transport = transport
        self._logger = logger
        self.events = PrinterEvents(logger)
        self._status_engine = StatusEngine(self.events, self.name, logger)
        self._outbound = OutboundPipeline(
            transport, self.events, self.settings, name=self.name, logger=logger, clock=clock
        )
        self._inbound = InboundPipeline(
            transport,
            self._status_engine,
            self.events,
            self.settings,
            name=self.name,
            logger=logger,
            clock=clock,
        )
        self._read_cancel: Optional[threading.Event] = None
        self._write_cancel: Optional[threading.Event] = None
        self._read_thread: Optional[threading.Thread] = None
        self._write_thread: Optional[threading.Thread] = None
        self._dispose_lock = threading.Lock()
        self._disposed = False

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"

    # --- lifecycle ----------------------------------------------------------

    def connect(self, reconnecting: bool = False) -> None:
        """Start the reader and writer loops.

        Reconnecting leaves the running loops alone; the transport is
        expected to re-establish its medium by itself.
        """

        if reconnecting:
            self._logger(3, "[%s] Reconnecting, loops keep running", self.name)
            return
        if self._disposed:
            raise RuntimeError(f"printer {self.name} has been disposed")
        if self._write_thread is not None:
            return

        self._read_cancel = threading.Event()
        self._write_cancel = threading.Event()
        self._logger(3, "[%s] Initializing loop threads...", self.name)

        self._outbound.running = True
        self._inbound.running = True
        self._write_thread = threading.Thread(
            target=self._outbound.run,
            args=(self._write_cancel,),
            name=f"escposlink-write-{self.name}",
            daemon=True,
        )
        self._read_thread = threading.Thread(
            target=self._inbound.run,
            args=(self._read_cancel,),
            name=f"escposlink-read-{self.name}",
            daemon=True,
        )
        self._write_thread.start()
        self._read_thread.start()
        self._logger(3, "[%s] Loop threads started", self.name)

    @property
    def is_running(self) -> bool:
        return self._outbound.running or self._inbound.running

    def _wait_for_loops(self, timeout: Optional[float]) -> bool:
        deadline = None if timeout is None else time.monotonic() + timeout
        while self.is_running:
            if deadline is not None and time.monotonic() >= deadline:
                self._logger(
                    1,
                    "[%s] Loops still running after %.1fs, giving up on shutdown wait",
                    self.name,
                    timeout,
                )
                return False
            time.sleep(self.settings.shutdown_poll)
        return True

    def _dispose_underlying(self) -> None:
        """Release the transport; subclasses extend this for their own teardown."""

        close = getattr(self._transport, "close", None)
        if callable(close):
            close()

    def dispose(self, timeout: Optional[float] = None) -> bool:
        """Stop both loops, draining queued writes, then release the transport.

        Without ``timeout`` this waits for as long as the loops take. Returns
        ``False`` only when ``timeout`` expired first. Calling it again is a
        no-op.
        """

        with self._dispose_lock:
            if self._disposed:
                return True
            self._disposed = True

        try:
            if self._read_cancel is not None:
                self._read_cancel.set()
            if self._write_cancel is not None:
                self._write_cancel.set()
        except Exception as exc:
            self._logger(3, "[%s] Dispose issue during cancellation: %s", self.name, exc)

        stopped = self._wait_for_loops(timeout)

        try:
            self._dispose_underlying()
        except Exception as exc:
            self._logger(3, "[%s] Dispose issue during transport teardown: %s", self.name, exc)
        return stopped

    close = dispose

    def __enter__(self) -> "Printer":
        self.connect()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.dispose()

    def __del__(self) -> None:
        if getattr(self, "_disposed", True):
            return
        transport = getattr(self, "_transport", None)
        try:
            if transport is not None:
                transport.flush()
        except Exception:  # pragma: no cover - best effort during finalization
            pass
        for token in (getattr(self, "_read_cancel", None), getattr(self, "_write_cancel", None)):
            if token is not None:
                token.set()
        self._disposed = True
        try:
            self._dispose_underlying()
        except Exception:  # pragma: no cover - best effort during finalization
            pass

    # --- caller API ---------------------------------------------------------

    def write(self, *arrays: bytes) -> None:
        """Queue one frame; several arrays are concatenated into one frame."""

        data = arrays[0] if len(arrays) == 1 else combine(*arrays)
        self._outbound.submit(data)

    @property
    def pending(self) -> int:
        return self._outbound.pending()

    @property
    def buffered(self) -> int:
        """Bytes taken off the queue that the transport has not accepted."""

        return self._outbound.buffered

    @property
    def status(self) -> StatusSnapshot:
        return self._status_engine.status

    @property
    def is_connected(self) -> bool:
        return self._inbound.connection

    def wait_for_status_change(
        self, timeout: Optional[float] = None
    ) -> Optional[StatusSnapshot]:
        return self._status_engine.wait_for_change(timeout)


__all__ = ["Printer"]
