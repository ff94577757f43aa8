"""escposlink/application/commands.py

Status command builders from the ESC/POS command catalog.

Copyright escposlink contributors
Last modified: 2026-10-18
"""

from __future__ import annotations

from typing import Optional, Union

from ..constants import (
    ASB_DISABLE,
    ASB_ENABLE,
    AUTOMATIC_INK_STATUS_BACK,
    AUTOMATIC_STATUS_BACK,
    DRAWER_STATUS,
    GS,
    INK_STATUS,
    PAPER_STATUS,
    REQUEST_STATUS,
    SERIAL_NUMBER,
)

BytesLike = Union[bytes, bytearray, memoryview]


def combine(*arrays: Optional[BytesLike]) -> bytes:
    """Concatenate byte arrays, skipping ``None`` entries."""

    return b"".join(bytes(a) for a in arrays if a is not None)


def enable_automatic_status_back() -> bytes:
    return bytes((GS, AUTOMATIC_STATUS_BACK, ASB_ENABLE))


def disable_automatic_status_back() -> bytes:
    return bytes((GS, AUTOMATIC_STATUS_BACK, ASB_DISABLE))


def enable_automatic_ink_status_back() -> bytes:
    return bytes((GS, AUTOMATIC_INK_STATUS_BACK, ASB_ENABLE))


def disable_automatic_ink_status_back() -> bytes:
    return bytes((GS, AUTOMATIC_INK_STATUS_BACK, ASB_DISABLE))


def request_paper_status() -> bytes:
    return bytes((GS, REQUEST_STATUS, PAPER_STATUS))


def request_drawer_status() -> bytes:
    return bytes((GS, REQUEST_STATUS, DRAWER_STATUS))


def request_ink_status() -> bytes:
    return bytes((GS, REQUEST_STATUS, INK_STATUS))


def request_serial_number() -> bytes:
    return bytes((GS, REQUEST_STATUS, SERIAL_NUMBER))


__all__ = [
    "combine",
    "enable_automatic_status_back",
    "disable_automatic_status_back",
    "enable_automatic_ink_status_back",
    "disable_automatic_ink_status_back",
    "request_paper_status",
    "request_drawer_status",
    "request_ink_status",
    "request_serial_number",
]
