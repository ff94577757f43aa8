"""Runtime wiring for the escposlink monitor daemon.

The daemon builds the configured transport, starts a :class:`Printer`,
logs connection and status changes, optionally publishes snapshots over
ZeroMQ and serves a small TCP control protocol.
"""

from __future__ import annotations

import json
import socket
import threading
from typing import Optional

from .adapters.file import FileTransport
from .adapters.network import NetworkTransport
from .adapters.serial_backend import SerialTransport
from .adapters.zmq_pub import ZmqStatusPublisher
from .application import control as app_control
from .application import commands
from .application.events import ErrorReport
from .application.printer import Printer
from .domain import Config, StatusSnapshot
from .logging_utils import logprintf
from .ports import StatusPublisherPort, TransportPort


def build_transport(cfg: Config) -> TransportPort:
    if cfg.transport == "network":
        return NetworkTransport(cfg.host, cfg.tcp_port, logger=logprintf)
    if cfg.transport == "file":
        return FileTransport(cfg.filepath)
    transport = SerialTransport(cfg.serialport, cfg.baudrate, logger=logprintf)
    if not transport.open():
        logprintf(1, "Serial port %s not available yet, will retry on write", cfg.serialport)
    return transport


def build_printer(cfg: Config, transport: Optional[TransportPort] = None) -> Printer:
    return Printer(
        transport if transport is not None else build_transport(cfg),
        name=cfg.printer_name or None,
        settings=cfg.engine_settings(),
    )


class PrinterDaemon:
    """Long-running monitor around a single :class:`Printer`."""

    def __init__(
        self,
        cfg: Config,
        printer: Optional[Printer] = None,
        publisher: Optional[StatusPublisherPort] = None,
    ) -> None:
        self._cfg = cfg
        self._stop_event = threading.Event()
        self.printer = printer if printer is not None else build_printer(cfg)
        if publisher is None and cfg.zmq_pub_endpoint:
            publisher = ZmqStatusPublisher(
                endpoint=cfg.zmq_pub_endpoint,
                bind=cfg.zmq_pub_bind,
                topic=cfg.zmq_pub_topic,
                hwm=cfg.zmq_pub_hwm,
            )
        self._publisher = publisher
        self._unsubscribe: list = []

    # --- event observers ---------------------------------------------------

    def _on_connected(self, _state: bool) -> None:
        logprintf(2, "[%s] Printer connected", self.printer.name)

    def _on_disconnected(self, _state: bool) -> None:
        logprintf(1, "[%s] Printer disconnected", self.printer.name)

    def _on_status(self, status: StatusSnapshot) -> None:
        logprintf(2, "[%s] Status changed: %s", self.printer.name, status_summary(status))
        if self._publisher is not None:
            self._publisher.publish_status(self.printer.name, status)

    def _on_error(self, report: ErrorReport) -> None:
        logprintf(3, "[%s] %s error: %s", self.printer.name, report.source, report.error)

    # --- control actions ---------------------------------------------------

    def status_json(self) -> str:
        return json.dumps(self.printer.status.model_dump(), sort_keys=True)

    def request_status(self) -> None:
        self.printer.write(commands.request_paper_status())

    def set_automatic_status_back(self, enabled: bool) -> None:
        if enabled:
            self.printer.write(commands.enable_automatic_status_back())
        else:
            self.printer.write(commands.disable_automatic_status_back())

    # --- lifecycle ---------------------------------------------------------

    def start(self) -> None:
        events = self.printer.events
        self._unsubscribe = [
            events.connected.subscribe(self._on_connected),
            events.disconnected.subscribe(self._on_disconnected),
            events.status_changed.subscribe(self._on_status),
            events.error.subscribe(self._on_error),
        ]
        if self._publisher is not None and not self._publisher.start():
            logprintf(0, "ZeroMQ publisher could not be started, publishing disabled")
            self._publisher = None
        self.printer.connect()
        if self._cfg.automatic_status_back:
            self.set_automatic_status_back(True)

    def stop(self) -> None:
        self._stop_event.set()

    def shutdown(self) -> None:
        self.printer.dispose()
        for unsubscribe in self._unsubscribe:
            unsubscribe()
        self._unsubscribe = []
        if self._publisher is not None:
            self._publisher.stop()

    # --- TCP control server ------------------------------------------------

    def _handle_client(self, conn: socket.socket, addr: tuple[str, int]) -> None:
        logprintf(2, "Client connected from %s:%d", addr[0], addr[1])
        with conn:
            conn.sendall(b"escposlink " + self.printer.name.encode("ascii", "ignore") + b"\n")
            f = conn.makefile("rwb", buffering=0)
            try:
                while not self._stop_event.is_set():
                    line = f.readline()
                    if not line:
                        break
                    text = line.decode("ascii", errors="ignore")
                    resp = app_control.process_client_command(
                        text,
                        self.status_json,
                        self.request_status,
                        self.set_automatic_status_back,
                    )
                    if resp is None:
                        break
                    f.write(resp.encode("ascii", errors="ignore"))
            except OSError as exc:
                logprintf(1, "Control client %s:%d failed: %s", addr[0], addr[1], exc)
            finally:
                f.close()
        logprintf(2, "Client disconnected from %s:%d", addr[0], addr[1])

    def _server_loop(self) -> None:
        srv = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
        srv.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
        srv.bind(("0.0.0.0", int(self._cfg.net_port)))
        srv.listen(5)
        srv.settimeout(1.0)
        logprintf(2, "Control server listening on %d", self._cfg.net_port)
        with srv:
            while not self._stop_event.is_set():
                try:
                    conn, addr = srv.accept()
                except OSError:
                    continue
                threading.Thread(
                    target=self._handle_client, args=(conn, addr), daemon=True
                ).start()

    def serve_forever(self) -> int:
        """Run until :meth:`stop` is called, then drain and shut down."""

        self.start()
        try:
            if self._cfg.net_port > 0:
                self._server_loop()
            else:
                logprintf(2, "net_port not configured; control server disabled")
                self._stop_event.wait()
        finally:
            self.shutdown()
        return 0


def status_summary(status: StatusSnapshot) -> str:
    """Short human readable list of the flags that are set."""

    flags = [name for name, value in status.model_dump().items() if value and name != "connection"]
    state = "online" if status.connection else "offline"
    return f"{state} [{', '.join(flags)}]" if flags else state


__all__ = ["PrinterDaemon", "build_printer", "build_transport", "status_summary"]
