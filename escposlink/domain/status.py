"""escposlink/domain/status.py

Pure decoding rules for the 4-byte status frame.

Bit positions count from 0 at the least significant bit. Byte 3 of the
frame is carried along for change detection but never decoded.

Copyright escposlink contributors
Last modified: 2026-10-18
"""

from __future__ import annotations

from typing import Optional

from .models import StatusSnapshot


def is_bit_set(value: int, bit: int) -> bool:
    return (value >> bit) & 1 == 1


def is_bit_not_set(value: int, bit: int) -> bool:
    return not is_bit_set(value, bit)


def is_well_formed_header(first: int) -> bool:
    """Return ``True`` when bits 0, 1 and 7 are clear and bit 4 is set."""

    return (
        is_bit_not_set(first, 0)
        and is_bit_not_set(first, 1)
        and is_bit_set(first, 4)
        and is_bit_not_set(first, 7)
    )


def decode_status(frame: bytes, connection: bool) -> StatusSnapshot:
    """Decode ``frame`` into a :class:`StatusSnapshot`.

    A closed cash drawer reports ``0x14`` in the first byte and an open one
    ``0x10``; some drawers never report closed properly.
    """

    if len(frame) < 3:
        raise ValueError(f"status frame too short: {len(frame)} bytes")
    b0, b1, b2 = frame[0], frame[1], frame[2]
    return StatusSnapshot(
        connection=connection,
        is_cash_drawer_open=is_bit_not_set(b0, 2),
        is_printer_online=is_bit_not_set(b0, 3),
        is_cover_open=is_bit_set(b0, 5),
        is_paper_currently_feeding=is_bit_set(b0, 6),
        is_waiting_for_online_recovery=is_bit_set(b1, 0),
        is_paper_feed_button_pushed=is_bit_set(b1, 1),
        did_recoverable_non_autocutter_error_occur=is_bit_set(b1, 2),
        did_autocutter_error_occur=is_bit_set(b1, 3),
        did_unrecoverable_error_occur=is_bit_set(b1, 5),
        did_recoverable_error_occur=is_bit_set(b1, 6),
        is_paper_low=is_bit_set(b2, 0) and is_bit_set(b2, 1),
        is_paper_out=is_bit_set(b2, 2) and is_bit_set(b2, 3),
    )


def did_status_change(
    old_connection: Optional[bool],
    new_connection: bool,
    old_bytes: Optional[bytes],
    new_bytes: Optional[bytes],
) -> bool:
    """Decide whether a candidate status differs from the published one.

    ``old_connection`` is ``None`` before anything was published.
    """

    if old_connection is None or old_bytes is None:
        return True
    if old_connection != new_connection:
        return True
    if new_bytes is None:
        return False
    return any(a != b for a, b in zip(old_bytes, new_bytes))


__all__ = [
    "is_bit_set",
    "is_bit_not_set",
    "is_well_formed_header",
    "decode_status",
    "did_status_change",
]
