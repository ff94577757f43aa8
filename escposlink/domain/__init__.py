"""escposlink/domain/__init__.py

Domain models and status decoding rules.

Copyright escposlink contributors
Last modified: 2026-10-18
"""

from .models import Config, EngineSettings, StatusSnapshot
from .status import decode_status, did_status_change, is_well_formed_header

__all__ = [
    "Config",
    "EngineSettings",
    "StatusSnapshot",
    "decode_status",
    "did_status_change",
    "is_well_formed_header",
]
