"""escposlink/application/control.py

High-level command processing for the TCP control interface.

This module implements the small line protocol used by the daemon
control socket, delegating concrete actions to callbacks supplied by the
runtime layer.

Copyright escposlink contributors
Last modified: 2026-10-18
"""

from __future__ import annotations

from typing import Callable, Optional


def process_client_command(
    line: str,
    on_status: Callable[[], str],
    on_poll: Callable[[], None],
    on_asb: Callable[[bool], None],
) -> Optional[str]:
    """Process a textual command and return the protocol response.

    Returns
    -------
    str | None
        * ``str``: response already formatted for the client (includes
          the blank line terminator).
        * ``None``: signal that the connection should be closed.
    """

    cmd = (line or "").strip().lower()
    if not cmd:
        return "OK\n\n"

    if cmd == "quit":
        return None

    if cmd == "status":
        return f"OK {on_status()}\n\n"

    if cmd == "poll":
        on_poll()
        return "OK status requested\n\n"

    if cmd == "asb-on":
        on_asb(True)
        return "OK automatic status back enabled\n\n"

    if cmd == "asb-off":
        on_asb(False)
        return "OK automatic status back disabled\n\n"

    return f"ERROR unrecognized command ({cmd})\n\n"
