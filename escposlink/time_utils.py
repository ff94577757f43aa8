"""Monotonic timing helpers."""

from __future__ import annotations

import datetime
import time
from typing import Callable


def get_usecs() -> int:
    return int(time.time() * 1_000_000)


def utc_iso_from_us(ts_us: int) -> str:
    dt = datetime.datetime.fromtimestamp(ts_us / 1_000_000, tz=datetime.timezone.utc)
    return dt.isoformat(timespec="microseconds").replace("+00:00", "Z")


class Stopwatch:
    """Elapsed-time counter on a monotonic clock.

    ``clock`` returns seconds and defaults to :func:`time.monotonic`; tests
    inject a fake clock to drive idle and inactivity timers.
    """

    def __init__(self, clock: Callable[[], float] = time.monotonic) -> None:
        self._clock = clock
        self._started = clock()

    def restart(self) -> None:
        self._started = self._clock()

    @property
    def elapsed(self) -> float:
        return self._clock() - self._started
