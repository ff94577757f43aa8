"""Command-line interface for escposlink.

Without ``--send`` the CLI runs the monitor daemon until interrupted.
With ``--send FILE`` the raw file contents are queued to the printer and
the command exits once the writer drained them.

Configuration files use the ``[key]=value`` format read by
:func:`escposlink.application.config_loader.load_config`. The default
path comes from ``ESCPOSLINK_CONFIG_PATH`` or ``./escposlink.cfg``.
"""

from __future__ import annotations

import argparse
import os
import signal
from typing import Optional, Sequence

from .application.config_loader import load_config
from .logging_utils import logprintf, set_debug, setup_file_logging
from .runtime import PrinterDaemon, build_printer
from .settings import get_settings


def _build_arg_parser(default_config: str) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="escposlink", description="ESC/POS printer transport daemon"
    )
    parser.add_argument(
        "-c",
        "--config",
        metavar="PATH",
        default=default_config,
        help=f"Path to the configuration file (default: {default_config})",
    )
    parser.add_argument(
        "--send",
        metavar="FILE",
        default=None,
        help="Send the raw contents of FILE to the printer and exit",
    )
    parser.add_argument(
        "--logdir",
        metavar="DIR",
        default=None,
        help="Also write logs to DIR/escposlink.log",
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    return parser


def _send_file(cfg, path: str) -> int:
    with open(path, "rb") as f:
        payload = f.read()
    printer = build_printer(cfg)
    printer.connect()
    try:
        printer.write(payload)
    finally:
        printer.dispose()
    unsent = printer.buffered
    if printer.pending or unsent:
        logprintf(
            0,
            "Printer %s stopped with %d bytes of %s unsent",
            printer.name,
            unsent,
            path,
        )
        return 1
    logprintf(2, "Sent %d bytes from %s to %s", len(payload), path, printer.name)
    return 0


def main(argv: Optional[Sequence[str]] = None) -> int:
    """CLI entry point used by the ``escposlink`` script."""

    settings = get_settings()
    parser = _build_arg_parser(settings.config_path)
    args = parser.parse_args(list(argv) if argv is not None else None)

    set_debug(args.debug or settings.debug)

    config_path = os.path.abspath(args.config)
    cfg = load_config(config_path)

    logdir = args.logdir or settings.logdir or cfg.logdir
    if logdir:
        logfile = setup_file_logging(logdir)
        logprintf(3, "Logging to %s", logfile)

    if args.send:
        return _send_file(cfg, args.send)

    daemon = PrinterDaemon(cfg)
    signal.signal(signal.SIGTERM, lambda *_: daemon.stop())
    try:
        return daemon.serve_forever()
    except KeyboardInterrupt:
        daemon.stop()
        return 0
