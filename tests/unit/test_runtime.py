from __future__ import annotations

import json
import threading

from escposlink.adapters.file import FileTransport
from escposlink.adapters.network import NetworkTransport
from escposlink.application import commands
from escposlink.application.printer import Printer
from escposlink.domain import Config, StatusSnapshot
from escposlink.runtime import PrinterDaemon, build_transport, status_summary


class FakePublisher:
    def __init__(self, ok: bool = True) -> None:
        self.ok = ok
        self.started = False
        self.stopped = False
        self.published: list[tuple[str, StatusSnapshot]] = []

    def start(self) -> bool:
        self.started = True
        return self.ok

    def stop(self) -> None:
        self.stopped = True

    def publish_status(self, printer: str, status: StatusSnapshot) -> None:
        self.published.append((printer, status))


def _daemon(transport, fast_settings, **cfg_values):
    cfg = Config(**cfg_values)
    printer = Printer(transport, "daemon", fast_settings, logger=lambda *_: None)
    publisher = FakePublisher()
    return PrinterDaemon(cfg, printer=printer, publisher=publisher), printer, publisher


def test_build_transport_variants(tmp_path) -> None:
    assert isinstance(
        build_transport(Config(transport="network", host="127.0.0.1")), NetworkTransport
    )
    file_transport = build_transport(
        Config(transport="file", filepath=str(tmp_path / "out.bin"))
    )
    assert isinstance(file_transport, FileTransport)


def test_status_changes_are_published(transport, fast_settings) -> None:
    daemon, printer, publisher = _daemon(transport, fast_settings)
    daemon.start()
    assert publisher.started is True

    done = threading.Event()
    printer.events.status_changed.subscribe(lambda _s: done.set())
    transport.feed(bytes([0x12, 0x00, 0x00, 0x0F]))
    assert done.wait(2.0)

    daemon.shutdown()
    assert publisher.published[0][0] == "daemon"
    assert publisher.published[0][1].is_paper_out is True
    assert publisher.stopped is True
    assert transport.closed == 1


def test_start_enables_automatic_status_back(transport, fast_settings) -> None:
    daemon, _, _ = _daemon(transport, fast_settings, automatic_status_back=True)
    daemon.start()
    daemon.request_status()
    daemon.shutdown()
    assert transport.writes == [
        commands.enable_automatic_status_back(),
        commands.request_paper_status(),
    ]


def test_failed_publisher_is_disabled(transport, fast_settings) -> None:
    cfg = Config()
    printer = Printer(transport, "daemon", fast_settings, logger=lambda *_: None)
    publisher = FakePublisher(ok=False)
    daemon = PrinterDaemon(cfg, printer=printer, publisher=publisher)
    daemon.start()
    daemon.shutdown()
    assert publisher.stopped is False


def test_status_json_reflects_snapshot(transport, fast_settings) -> None:
    daemon, _, _ = _daemon(transport, fast_settings)
    doc = json.loads(daemon.status_json())
    assert doc["connection"] is False
    assert set(doc) == set(StatusSnapshot.model_fields)


def test_serve_forever_returns_after_stop(transport, fast_settings) -> None:
    daemon, printer, _ = _daemon(transport, fast_settings)
    daemon.stop()
    assert daemon.serve_forever() == 0
    assert printer.is_running is False


def test_status_summary() -> None:
    assert status_summary(StatusSnapshot()) == "offline"
    summary = status_summary(StatusSnapshot(connection=True, is_paper_out=True))
    assert summary == "online [is_paper_out]"
