"""escposlink/adapters/__init__.py

Adapters that connect the engine to external systems (serial ports,
sockets, files, ZeroMQ).

Copyright escposlink contributors
Last modified: 2026-10-18
"""

from .file import FileTransport  # noqa: F401
from .network import NetworkTransport  # noqa: F401
from .serial_backend import SerialTransport, _AsyncSerialProtocol  # noqa: F401
from .zmq_pub import ZmqStatusPublisher  # noqa: F401

__all__ = [
    "FileTransport",
    "NetworkTransport",
    "SerialTransport",
    "_AsyncSerialProtocol",
    "ZmqStatusPublisher",
]
