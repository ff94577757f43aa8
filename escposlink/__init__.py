"""escposlink: full-duplex transport engine for ESC/POS receipt printers."""

from .application.events import ErrorReport, PrinterEvents
from .application.printer import Printer
from .domain import Config, EngineSettings, StatusSnapshot

__version__ = "0.1.0"

__all__ = [
    "Config",
    "EngineSettings",
    "ErrorReport",
    "Printer",
    "PrinterEvents",
    "StatusSnapshot",
]
