from __future__ import annotations

import queue

import pytest

from escposlink.adapters.serial_backend import SerialTransport, _AsyncSerialProtocol


def test_protocol_data_received_pushes_bytes() -> None:
    q: queue.Queue[int] = queue.Queue(maxsize=10)
    lost: list[Exception | None] = []

    proto = _AsyncSerialProtocol(q, lambda exc: lost.append(exc))
    proto.data_received(b"\x12\x00\x0f")

    assert q.get_nowait() == 0x12
    assert q.get_nowait() == 0x00
    assert q.get_nowait() == 0x0F


def test_protocol_connection_lost_callback() -> None:
    q: queue.Queue[int] = queue.Queue(maxsize=10)
    lost: list[Exception | None] = []

    proto = _AsyncSerialProtocol(q, lambda exc: lost.append(exc))
    err = RuntimeError("boom")
    proto.connection_lost(err)

    assert lost == [err]


def test_read_bytes_drains_queue_without_blocking() -> None:
    transport = SerialTransport("/dev/ttyFAKE", logger=lambda *_: None)
    for b in b"\x12\x00\x00\x0f\x14":
        transport._read_queue.put(b)

    buffer = bytearray(8)
    assert transport.read_bytes(buffer, 1, 4) == 4
    assert bytes(buffer[1:5]) == b"\x12\x00\x00\x0f"
    assert transport.read_bytes(buffer, 0, 8) == 1
    assert transport.read_bytes(buffer, 0, 8) == 0


def test_flush_without_port_is_noop() -> None:
    SerialTransport("/dev/ttyFAKE", logger=lambda *_: None).flush()


def test_open_failure_returns_false(monkeypatch, log_records) -> None:
    logs, logger = log_records
    transport = SerialTransport("/dev/ttyFAKE", logger=logger)

    def fail():
        raise RuntimeError("x")

    monkeypatch.setattr(transport, "_load_serial_asyncio", fail)

    assert transport.open() is False
    assert transport.is_open is False
    assert any("Opening serial port /dev/ttyFAKE failed" in msg for msg in logs)


def test_write_without_port_raises_connection_error(monkeypatch) -> None:
    transport = SerialTransport(
        "/dev/ttyFAKE", logger=lambda *_: None, reconnect_interval=60.0
    )
    attempts: list[int] = []

    def fail():
        attempts.append(1)
        raise RuntimeError("no such port")

    monkeypatch.setattr(transport, "_load_serial_asyncio", fail)

    with pytest.raises(ConnectionError):
        transport.write_bytes(b"abc", 0, 3)
    with pytest.raises(ConnectionError):
        transport.write_bytes(b"abc", 0, 3)
    # the second write is inside the reconnect interval
    assert len(attempts) == 1
