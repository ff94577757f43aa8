"""escposlink/application/__init__.py

Application services of the transport engine: the outbound and inbound
pipelines, the status engine and the printer lifecycle controller.

Copyright escposlink contributors
Last modified: 2026-10-18
"""

from .control import process_client_command
from .events import ErrorReport, EventChannel, PrinterEvents
from .inbound import FrameAssembler, InboundPipeline
from .outbound import OutboundPipeline
from .printer import Printer
from .status_engine import StatusEngine

__all__ = [
    "process_client_command",
    "ErrorReport",
    "EventChannel",
    "PrinterEvents",
    "FrameAssembler",
    "InboundPipeline",
    "OutboundPipeline",
    "Printer",
    "StatusEngine",
]
