"""escposlink/ports/__init__.py

Hexagonal architecture ports (abstract interfaces).

The transport engine only needs three primitives from a concrete medium.
Adapters in :mod:`escposlink.adapters` provide the serial, network and
file implementations.

Copyright escposlink contributors
Last modified: 2026-10-18
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from ..domain import StatusSnapshot


@runtime_checkable
class TransportPort(Protocol):
    """Byte-level read/write/flush provider for a concrete medium.

    The engine calls these only from its two background loops: reads from
    the inbound loop, writes and flushes from the outbound loop.
    """

    def read_bytes(
        self, buffer: bytearray, offset: int, size: int
    ) -> int:  # pragma: no cover - structural
        """Read up to ``size`` bytes into ``buffer[offset:]``.

        Returns the number of bytes read, ``0`` when nothing is available.
        May raise on medium failure.
        """

    def write_bytes(
        self, data: bytes, offset: int, count: int
    ) -> None:  # pragma: no cover - structural
        """Write ``data[offset:offset + count]``; raises ``OSError`` on failure."""

    def flush(self) -> None:  # pragma: no cover - structural
        """Best-effort flush of any buffered output."""


@runtime_checkable
class StatusPublisherPort(Protocol):
    """Sink for published status snapshots.

    Concrete implementation: :class:`escposlink.adapters.zmq_pub.ZmqStatusPublisher`.
    """

    def start(self) -> bool:  # pragma: no cover - structural
        """Open the publisher, returning ``True`` on success."""

    def stop(self) -> None:  # pragma: no cover - structural
        """Release the publisher."""

    def publish_status(
        self, printer: str, status: StatusSnapshot
    ) -> None:  # pragma: no cover - structural
        """Publish one snapshot for the named printer."""


__all__ = [
    "TransportPort",
    "StatusPublisherPort",
]
