"""examples/status_viewer.py

Terminal client printing the status snapshots published via the
escposlink ZeroMQ PUB interface.

The program subscribes to the two-part messages described in
``escposlink/adapters/zmq_pub.py`` and prints one line per change.
"""

from __future__ import annotations

import argparse
import json
import sys
from typing import Any, Optional


def _format(doc: dict[str, Any]) -> str:
    flags = [
        key
        for key, value in sorted(doc.items())
        if value is True and key != "connection"
    ]
    state = "online" if doc.get("connection") else "offline"
    return f"{doc.get('ts', '?')} {doc.get('printer', '?')}: {state} {' '.join(flags)}"


def run(endpoint: str, topic: str) -> int:  # pragma: no cover - manual helper
    import zmq  # type: ignore

    ctx = zmq.Context.instance()
    sock = ctx.socket(zmq.SUB)
    try:
        sock.connect(endpoint)
        sock.setsockopt(zmq.SUBSCRIBE, topic.encode("ascii", errors="ignore"))
        while True:
            parts = sock.recv_multipart()
            if len(parts) < 2:
                continue
            try:
                doc: dict[str, Any] = json.loads(parts[1].decode("utf-8"))
            except ValueError as exc:
                sys.stderr.write(f"Skipping malformed message: {exc}\n")
                continue
            print(_format(doc), flush=True)
    except KeyboardInterrupt:
        return 0
    finally:
        sock.close(linger=0)


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="escposlink status viewer")
    parser.add_argument(
        "--endpoint",
        default="tcp://127.0.0.1:5560",
        help="ZMQ SUB endpoint to connect to (default: tcp://127.0.0.1:5560)",
    )
    parser.add_argument(
        "--topic",
        default="escposlink",
        help="Topic prefix to subscribe to (default: escposlink)",
    )
    args = parser.parse_args(argv)

    return run(endpoint=args.endpoint, topic=args.topic)


if __name__ == "__main__":  # pragma: no cover - manual entrypoint
    raise SystemExit(main())
