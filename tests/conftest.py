"""Shared pytest fixtures for the escposlink test suite."""

from __future__ import annotations

import threading
from collections import deque
from typing import Callable, Union

import pytest

from escposlink.domain import EngineSettings


class FakeTransport:
    """In-memory transport recording writes and serving scripted reads."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.writes: list[bytes] = []
        self.reads: deque[Union[bytes, Exception]] = deque()
        self.write_errors: deque[Exception] = deque()
        self.flush_error: Exception | None = None
        self.flushes = 0
        self.closed = 0

    def feed(self, item: Union[bytes, Exception]) -> None:
        with self._lock:
            self.reads.append(item)

    @property
    def written(self) -> bytes:
        with self._lock:
            return b"".join(self.writes)

    def read_bytes(self, buffer: bytearray, offset: int, size: int) -> int:
        with self._lock:
            if not self.reads:
                return 0
            item = self.reads.popleft()
            if isinstance(item, Exception):
                raise item
            chunk, rest = item[:size], item[size:]
            if rest:
                self.reads.appendleft(rest)
        buffer[offset : offset + len(chunk)] = chunk
        return len(chunk)

    def write_bytes(self, data: bytes, offset: int, count: int) -> None:
        with self._lock:
            if self.write_errors:
                raise self.write_errors.popleft()
            self.writes.append(bytes(data[offset : offset + count]))

    def flush(self) -> None:
        self.flushes += 1
        if self.flush_error is not None:
            raise self.flush_error

    def close(self) -> None:
        self.closed += 1


class FakeClock:
    def __init__(self) -> None:
        self.now = 0.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def fast_settings() -> EngineSettings:
    """Millisecond ticks and no idle polling, for tests with real threads."""
    return EngineSettings(
        tick=0.002,
        poll_interval=60.0,
        inactivity_timeout=60.0,
        shutdown_poll=0.002,
    )


@pytest.fixture
def log_records() -> tuple[list[str], Callable[..., None]]:
    """Capture ``logprintf``-style calls as formatted strings."""
    logs: list[str] = []

    def logger(_level: int, fmt: str, *args: object) -> None:
        logs.append(fmt % args if args else fmt)

    return logs, logger
