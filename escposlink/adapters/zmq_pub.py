"""escposlink/adapters/zmq_pub.py

ZeroMQ (PUB) publisher for printer status snapshots.

Multipart frame layout
----------------------
- [0] topic (bytes)
- [1] JSON document (UTF-8), schema ``escposlink-status-1``

Copyright escposlink contributors
Last modified: 2026-10-18
"""

from __future__ import annotations

import json
from typing import Any, Optional

from ..domain import StatusSnapshot
from ..time_utils import get_usecs, utc_iso_from_us

SCHEMA = "escposlink-status-1"


def encode_status(printer: str, status: StatusSnapshot, ts_us: int) -> bytes:
    doc: dict[str, Any] = {
        "schema": SCHEMA,
        "printer": str(printer),
        "ts_us": int(ts_us),
        "ts": utc_iso_from_us(ts_us),
    }
    doc.update(status.model_dump())
    return json.dumps(doc, separators=(",", ":"), sort_keys=True).encode("utf-8")


class ZmqStatusPublisher:
    def __init__(
        self,
        *,
        endpoint: str,
        bind: bool = True,
        topic: str = "escposlink",
        hwm: int = 10,
    ) -> None:
        if not endpoint:
            raise ValueError("endpoint is required")
        self._endpoint = endpoint
        self._bind = bool(bind)
        self._topic = (topic or "escposlink").encode("ascii", errors="ignore")
        self._hwm = int(hwm)

        self._zmq = None
        self._ctx = None
        self._sock = None

    def start(self) -> bool:
        if self._sock is not None:
            return True
        try:
            import zmq  # type: ignore

            self._zmq = zmq
            self._ctx = zmq.Context.instance()
            sock = self._ctx.socket(zmq.PUB)
            sock.setsockopt(zmq.SNDHWM, self._hwm)
            if self._bind:
                sock.bind(self._endpoint)
            else:
                sock.connect(self._endpoint)
            self._sock = sock
            return True
        except Exception:  # pragma: no cover - depends on env
            self.stop()
            return False

    def stop(self) -> None:
        if self._sock is not None:
            self._sock.close(linger=0)
        self._sock = None

    def publish_status(
        self, printer: str, status: StatusSnapshot, ts_us: Optional[int] = None
    ) -> None:
        if self._sock is None:
            return
        payload = encode_status(printer, status, get_usecs() if ts_us is None else ts_us)
        # NOBLOCK: a slow subscriber must never stall the reader loop.
        try:
            self._sock.send_multipart([self._topic, payload], flags=self._zmq.NOBLOCK)
        except self._zmq.Again:
            pass


__all__ = ["ZmqStatusPublisher", "encode_status", "SCHEMA"]
