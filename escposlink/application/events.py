"""escposlink/application/events.py

Observer hub for printer notifications.

Subscribers are plain callables invoked synchronously on the loop thread
that raised the event. A failing subscriber is logged and skipped so the
background loops and the remaining subscribers are unaffected; subscribers
should hand long work off to their own threads.

Copyright escposlink contributors
Last modified: 2026-10-18
"""

from __future__ import annotations

import threading
from typing import Callable, Generic, TypeVar

from ..domain import StatusSnapshot
from ..logging_utils import logprintf

T = TypeVar("T")


class EventChannel(Generic[T]):
    """Thread-safe list of subscribers for one kind of notification."""

    def __init__(self, name: str, logger: Callable[..., None] = logprintf) -> None:
        self.name = name
        self._logger = logger
        self._lock = threading.Lock()
        self._subscribers: list[Callable[[T], None]] = []

    def subscribe(self, callback: Callable[[T], None]) -> Callable[[], None]:
        """Register ``callback`` and return a function that unregisters it."""

        with self._lock:
            self._subscribers.append(callback)

        def _unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return _unsubscribe

    def __len__(self) -> int:
        with self._lock:
            return len(self._subscribers)

    def emit(self, payload: T) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            try:
                callback(payload)
            except Exception as exc:
                self._logger(0, "Subscriber of %s event failed: %s", self.name, exc)


class ErrorReport:
    """Failure swallowed by a background loop."""

    __slots__ = ("source", "error")

    def __init__(self, source: str, error: BaseException) -> None:
        self.source = source
        self.error = error

    def __repr__(self) -> str:
        return f"ErrorReport(source={self.source!r}, error={self.error!r})"


class PrinterEvents:
    """Notifications raised by a :class:`~escposlink.application.printer.Printer`."""

    def __init__(self, logger: Callable[..., None] = logprintf) -> None:
        self.connected: EventChannel[bool] = EventChannel("connected", logger)
        self.disconnected: EventChannel[bool] = EventChannel("disconnected", logger)
        self.status_changed: EventChannel[StatusSnapshot] = EventChannel(
            "status_changed", logger
        )
        self.error: EventChannel[ErrorReport] = EventChannel("error", logger)

    def report_error(self, source: str, error: BaseException) -> None:
        self.error.emit(ErrorReport(source, error))


__all__ = ["EventChannel", "ErrorReport", "PrinterEvents"]
