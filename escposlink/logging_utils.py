"""Shared logging infrastructure for escposlink.

Components take a ``logprintf``-style callable (numeric level, printf
format, args) so tests can capture log lines without touching the
``logging`` configuration.
"""

import logging
import os
import sys

_FORMAT = "%(asctime)s %(levelname)s: %(message)s"

# 0 = error, 1 = warning, 2 = info, 3 = debug
_LEVELS = {
    0: logging.ERROR,
    1: logging.WARNING,
    2: logging.INFO,
    3: logging.DEBUG,
}

logger = logging.getLogger("escposlink")
logger.setLevel(logging.INFO)
if not logger.handlers:
    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(_handler)


def set_debug(enabled: bool) -> None:
    logger.setLevel(logging.DEBUG if enabled else logging.INFO)


def logprintf(level: int, fmt: str, *args: object) -> None:
    py_level = _LEVELS.get(level, logging.INFO)
    if not logger.isEnabledFor(py_level):
        return
    logger.log(py_level, fmt % args if args else fmt)


def setup_file_logging(logdir: str, log_filename: str = "escposlink.log") -> str:
    """Add a file handler writing to ``logdir/log_filename`` and return its path.

    Calling it twice for the same file does not add a second handler.
    """

    os.makedirs(logdir, exist_ok=True)
    if not os.access(logdir, os.W_OK):
        raise PermissionError(f"Cannot write to log directory: {logdir}")

    logfile = os.path.abspath(os.path.join(logdir, log_filename))
    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == logfile:
            return logfile

    fh = logging.FileHandler(logfile)
    fh.setFormatter(logging.Formatter(_FORMAT))
    logger.addHandler(fh)
    return logfile
