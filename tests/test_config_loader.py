from __future__ import annotations

import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from escposlink.application.config_loader import load_config
from escposlink.domain import Config, EngineSettings


def test_load_config_from_example(tmp_path: Path) -> None:
    root = Path(__file__).resolve().parents[1]
    example = root / "examples" / "escposlink.cfg"
    cfg_path = tmp_path / "escposlink.cfg"
    cfg_path.write_text(example.read_text(encoding="utf-8"), encoding="utf-8")

    cfg = load_config(str(cfg_path), env={})
    assert isinstance(cfg, Config)

    assert cfg.printer_name == "front-counter"
    assert cfg.transport == "network"
    assert cfg.host == "192.168.1.50"
    assert cfg.tcp_port == 9100
    assert cfg.baudrate == 9600
    assert cfg.automatic_status_back is True
    assert cfg.net_port == 6200
    assert cfg.zmq_pub_endpoint == "tcp://127.0.0.1:5560"


def test_missing_file_gives_defaults(tmp_path: Path) -> None:
    cfg = load_config(str(tmp_path / "nope.cfg"), env={})
    assert cfg == Config()
    assert cfg.engine_settings() == EngineSettings()


def test_engine_settings_conversion(tmp_path: Path) -> None:
    cfg_path = tmp_path / "escposlink.cfg"
    cfg_path.write_text(
        "[tick_ms]=50\n"
        "[poll_interval_ms]=451\n"
        "[inactivity_timeout_ms]=3000\n"
        "[max_bytes_per_write]=1024\n"
        "[flush_threshold]=64\n"
        "[read_buffer_size]=512\n",
        encoding="utf-8",
    )
    settings = load_config(str(cfg_path), env={}).engine_settings()
    assert settings.tick == pytest.approx(0.05)
    assert settings.poll_interval == pytest.approx(0.451)
    assert settings.inactivity_timeout == pytest.approx(3.0)
    assert settings.max_bytes_per_write == 1024
    assert settings.flush_threshold == 64
    assert settings.read_buffer_size == 512


def test_aliases_comments_and_relative_paths(tmp_path: Path) -> None:
    cfg_path = tmp_path / "escposlink.cfg"
    cfg_path.write_text(
        "# comment\n"
        "// another comment\n"
        "[Transport]=FILE   // upper case is accepted\n"
        "[file]=capture.bin\n"
        "[logpath]=logs\n"
        "[unknown]=ignored\n"
        "not a pair\n",
        encoding="utf-8",
    )
    cfg = load_config(str(cfg_path), env={})
    assert cfg.transport == "file"
    assert cfg.filepath == os.path.join(str(tmp_path), "capture.bin")
    assert cfg.logdir == os.path.join(str(tmp_path), "logs")


def test_env_overrides(tmp_path: Path) -> None:
    cfg_path = tmp_path / "escposlink.cfg"
    cfg_path.write_text("[transport]=serial\n[serialport]=/dev/ttyUSB1\n", encoding="utf-8")

    env = {
        "ESCPOSLINK_TRANSPORT": "network",
        "ESCPOSLINK_HOST": "printer.local",
        "ESCPOSLINK_ZMQ_PUB_ENDPOINT": "tcp://127.0.0.1:5561",
        "ESCPOSLINK_LOGDIR": str(tmp_path / "logs"),
    }
    cfg = load_config(str(cfg_path), env=env)

    assert cfg.transport == "network"
    assert cfg.serialport == "/dev/ttyUSB1"
    assert cfg.host == "printer.local"
    assert cfg.zmq_pub_endpoint == env["ESCPOSLINK_ZMQ_PUB_ENDPOINT"]
    assert cfg.logdir == env["ESCPOSLINK_LOGDIR"]


def test_invalid_number_is_rejected(tmp_path: Path) -> None:
    cfg_path = tmp_path / "escposlink.cfg"
    cfg_path.write_text("[baudrate]=fast\n", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_config(str(cfg_path), env={})


def test_invalid_transport_is_rejected(tmp_path: Path) -> None:
    cfg_path = tmp_path / "escposlink.cfg"
    cfg_path.write_text("[transport]=bluetooth\n", encoding="utf-8")
    with pytest.raises(ValidationError):
        load_config(str(cfg_path), env={})
