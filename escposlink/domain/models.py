"""escposlink/domain/models.py

Pydantic domain models for the printer transport engine.

Copyright escposlink contributors
Last modified: 2026-10-18
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from ..constants import (
    FLUSH_THRESHOLD,
    INACTIVITY_TIMEOUT_MS,
    MAX_BYTES_PER_WRITE,
    POLL_INTERVAL_MS,
    READ_BUFFER_SIZE,
    SHUTDOWN_POLL_MS,
    TICK_MS,
)


class StatusSnapshot(BaseModel):
    """Decoded printer status plus inferred connection liveness.

    Instances are immutable; the status engine swaps in a new snapshot
    each time it publishes a change.
    """

    model_config = ConfigDict(frozen=True)

    connection: bool = False
    is_cash_drawer_open: bool = False
    is_printer_online: bool = False
    is_cover_open: bool = False
    is_paper_currently_feeding: bool = False
    is_waiting_for_online_recovery: bool = False
    is_paper_feed_button_pushed: bool = False
    did_recoverable_non_autocutter_error_occur: bool = False
    did_autocutter_error_occur: bool = False
    did_unrecoverable_error_occur: bool = False
    did_recoverable_error_occur: bool = False
    is_paper_low: bool = False
    is_paper_out: bool = False


class EngineSettings(BaseModel):
    """Timing and sizing knobs for the outbound and inbound loops.

    Attributes
    ----------
    tick:
        Suspension between loop iterations, in seconds.
    poll_interval:
        Idle time after which the writer injects a status poll.
    inactivity_timeout:
        Read inactivity after which the connection is marked down.
    shutdown_poll:
        Sleep between checks while waiting for the loops to stop.
    """

    model_config = ConfigDict(frozen=True)

    tick: float = Field(default=TICK_MS / 1000.0, gt=0)
    poll_interval: float = Field(default=POLL_INTERVAL_MS / 1000.0, ge=0)
    inactivity_timeout: float = Field(default=INACTIVITY_TIMEOUT_MS / 1000.0, gt=0)
    max_bytes_per_write: int = Field(default=MAX_BYTES_PER_WRITE, ge=1)
    flush_threshold: int = Field(default=FLUSH_THRESHOLD, ge=1)
    read_buffer_size: int = Field(default=READ_BUFFER_SIZE, ge=1)
    shutdown_poll: float = Field(default=SHUTDOWN_POLL_MS / 1000.0, gt=0)


class Config(BaseModel):
    """Runtime configuration for a printer daemon instance."""

    # Printer and transport -----------------------------------------------------
    printer_name: str = ""
    transport: Literal["serial", "network", "file"] = "serial"
    serialport: str = "/dev/ttyUSB0"
    baudrate: int = 9600
    host: str = ""
    tcp_port: int = 9100
    filepath: str = ""
    automatic_status_back: bool = False

    # Engine tuning -------------------------------------------------------------
    tick_ms: int = TICK_MS
    poll_interval_ms: int = POLL_INTERVAL_MS
    inactivity_timeout_ms: int = INACTIVITY_TIMEOUT_MS
    max_bytes_per_write: int = MAX_BYTES_PER_WRITE
    flush_threshold: int = FLUSH_THRESHOLD
    read_buffer_size: int = READ_BUFFER_SIZE

    # Daemon --------------------------------------------------------------------
    net_port: int = 0
    logdir: Optional[str] = None

    # ZeroMQ PUB (optional). When empty, publishing is disabled.
    zmq_pub_endpoint: str = ""
    zmq_pub_bind: bool = True
    zmq_pub_topic: str = "escposlink"
    zmq_pub_hwm: int = 10

    def engine_settings(self) -> EngineSettings:
        return EngineSettings(
            tick=self.tick_ms / 1000.0,
            poll_interval=self.poll_interval_ms / 1000.0,
            inactivity_timeout=self.inactivity_timeout_ms / 1000.0,
            max_bytes_per_write=self.max_bytes_per_write,
            flush_threshold=self.flush_threshold,
            read_buffer_size=self.read_buffer_size,
        )


__all__ = [
    "StatusSnapshot",
    "EngineSettings",
    "Config",
]
