from __future__ import annotations

import threading

from escposlink.application.events import PrinterEvents
from escposlink.application.status_engine import StatusEngine
from escposlink.domain import StatusSnapshot

FRAME = bytes([0x12, 0x00, 0x00, 0x0F])


def _engine(logger=None):
    events = PrinterEvents()
    published: list[StatusSnapshot] = []
    events.status_changed.subscribe(published.append)
    kwargs = {"logger": logger} if logger is not None else {}
    return StatusEngine(events, "test", **kwargs), published


def test_first_status_is_always_published() -> None:
    engine, published = _engine()
    assert engine.status_bytes is None
    assert engine.update(True, FRAME) is True
    assert engine.status_bytes == FRAME
    assert published == [engine.status]
    assert engine.status.is_paper_out is True


def test_identical_status_is_debounced() -> None:
    engine, published = _engine()
    engine.update(True, FRAME)
    assert engine.update(True, FRAME) is False
    assert len(published) == 1


def test_connection_change_republishes_last_bytes() -> None:
    engine, published = _engine()
    engine.update(True, FRAME)
    assert engine.update(False) is True
    assert published[-1].connection is False
    assert published[-1].is_paper_out is True
    assert engine.status_bytes == FRAME


def test_byte_change_is_published() -> None:
    engine, published = _engine()
    engine.update(True, FRAME)
    engine.update(True, bytes([0x12, 0x00, 0x00, 0x00]))
    assert len(published) == 2
    assert published[-1].is_paper_out is False


def test_force_publishes_without_change() -> None:
    engine, published = _engine()
    engine.update(True, FRAME)
    assert engine.update(True, None, force=True) is True
    assert len(published) == 2


def test_missing_frame_falls_back_to_empty_bytes() -> None:
    engine, published = _engine()
    assert engine.update(False) is True
    assert engine.status_bytes == bytes(4)
    assert published[0].connection is False


def test_well_formed_header_still_goes_through_diff(log_records) -> None:
    logs, logger = log_records
    engine, published = _engine(logger)
    header_frame = bytes([0x14, 0x00, 0x00, 0x00])
    engine.update(True, header_frame)
    engine.update(True, header_frame)
    assert len(published) == 1
    assert any("well formed" in line for line in logs)


def test_wait_for_change_returns_next_publish() -> None:
    engine, _ = _engine()
    ready = threading.Event()
    result: list = []

    def waiter() -> None:
        ready.set()
        result.append(engine.wait_for_change(timeout=5.0))

    t = threading.Thread(target=waiter)
    t.start()
    ready.wait(1.0)
    # keep publishing until the waiter has registered and woken up
    for value in range(100):
        engine.update(True, bytes([0x12, value, 0, 0]))
        t.join(timeout=0.01)
        if not t.is_alive():
            break
    t.join(timeout=1.0)
    assert result and isinstance(result[0], StatusSnapshot)


def test_wait_for_change_times_out() -> None:
    engine, _ = _engine()
    assert engine.wait_for_change(timeout=0.01) is None
