"""escposlink/application/status_engine.py

Publish decision and atomic snapshot storage for printer status.

Copyright escposlink contributors
Last modified: 2026-10-18
"""

from __future__ import annotations

import threading
from typing import Callable, Optional

from ..constants import EMPTY_STATUS_BYTES
from ..domain import (
    StatusSnapshot,
    decode_status,
    did_status_change,
    is_well_formed_header,
)
from ..logging_utils import logprintf
from .events import PrinterEvents


class StatusEngine:
    """Decode candidate frames and publish them when they differ.

    The previously published raw bytes are kept only to diff the next
    candidate against; readers see the decoded :class:`StatusSnapshot`.
    """

    def __init__(
        self,
        events: PrinterEvents,
        name: str = "",
        logger: Callable[..., None] = logprintf,
    ) -> None:
        self._events = events
        self._name = name
        self._logger = logger
        self._cond = threading.Condition()
        self._status = StatusSnapshot()
        self._status_bytes: Optional[bytes] = None
        self._published_connection: Optional[bool] = None
        self._generation = 0

    @property
    def status(self) -> StatusSnapshot:
        with self._cond:
            return self._status

    @property
    def status_bytes(self) -> Optional[bytes]:
        with self._cond:
            return self._status_bytes

    def update(
        self, connection: bool, frame: Optional[bytes] = None, force: bool = False
    ) -> bool:
        """Offer a candidate status; return ``True`` when it was published.

        Without ``frame`` the last stored bytes are reused, so a pure
        connection change republishes the previous device flags.
        """

        with self._cond:
            candidate = frame or self._status_bytes or EMPTY_STATUS_BYTES
            self._logger(
                3,
                "[%s] Status candidate %s (connection=%s)",
                self._name,
                candidate.hex("-"),
                connection,
            )

            if is_well_formed_header(candidate[0]):
                self._logger(3, "[%s] Status header is well formed", self._name)

            changed = did_status_change(
                self._published_connection, connection, self._status_bytes, candidate
            )
            if not (force or changed):
                return False

            snapshot = decode_status(candidate, connection)
            self._status_bytes = bytes(candidate)
            self._published_connection = connection
            self._status = snapshot
            self._generation += 1
            self._cond.notify_all()

        self._logger(3, "[%s] Publishing status change", self._name)
        self._events.status_changed.emit(snapshot)
        return True

    def wait_for_change(self, timeout: Optional[float] = None) -> Optional[StatusSnapshot]:
        """Block until the next publish and return it, or ``None`` on timeout."""

        with self._cond:
            start = self._generation
            if not self._cond.wait_for(lambda: self._generation != start, timeout):
                return None
            return self._status


__all__ = ["StatusEngine"]
