"""escposlink/application/config_loader.py

Configuration loader for ``escposlink.cfg`` files.

The file format is one ``[key]=value`` pair per line, with ``#`` and
``//`` comments. Values are coerced into the types declared on
:class:`escposlink.domain.models.Config`; pydantic validation rejects
values that cannot be coerced.

Copyright escposlink contributors
Last modified: 2026-10-18
"""

from __future__ import annotations

import os
import re
from typing import Mapping, Optional

from ..domain import Config

_KEY_VALUE_RE = re.compile(r"^\[(?P<key>[^\]]+)\]\s*=\s*(?P<value>.*)$")
_INLINE_COMMENT_RE = re.compile(r"(^|\s+)(//|#).*$")

_ALIASES: dict[str, str] = {
    "name": "printer_name",
    "printer": "printer_name",
    "printer_name": "printer_name",
    "transport": "transport",
    "serialport": "serialport",
    "comport": "serialport",
    "baudrate": "baudrate",
    "host": "host",
    "tcp_port": "tcp_port",
    "port": "tcp_port",
    "filepath": "filepath",
    "file": "filepath",
    "automatic_status_back": "automatic_status_back",
    "asb": "automatic_status_back",
    "tick_ms": "tick_ms",
    "poll_interval_ms": "poll_interval_ms",
    "inactivity_timeout_ms": "inactivity_timeout_ms",
    "max_bytes_per_write": "max_bytes_per_write",
    "flush_threshold": "flush_threshold",
    "read_buffer_size": "read_buffer_size",
    "net_port": "net_port",
    "logdir": "logdir",
    "logpath": "logdir",
    "zmq_pub_endpoint": "zmq_pub_endpoint",
    "zmq_pub_bind": "zmq_pub_bind",
    "zmq_pub_topic": "zmq_pub_topic",
    "zmq_pub_hwm": "zmq_pub_hwm",
}

_ENV_OVERRIDES: dict[str, str] = {
    "ESCPOSLINK_TRANSPORT": "transport",
    "ESCPOSLINK_SERIALPORT": "serialport",
    "ESCPOSLINK_HOST": "host",
    "ESCPOSLINK_LOGDIR": "logdir",
    "ESCPOSLINK_ZMQ_PUB_ENDPOINT": "zmq_pub_endpoint",
}


def _strip_inline_comment(value: str) -> str:
    # comment markers only count after whitespace, so "tcp://host" survives
    return _INLINE_COMMENT_RE.sub("", value).strip()


def _coerce_value(field: str, text: str) -> object:
    """Try to coerce ``text`` into the type of ``Config.field``.

    Falls back to the raw string when coercion is not possible.
    """

    text = text.strip()
    field_info = Config.model_fields.get(field)
    if field_info is None or field_info.annotation is None:
        return text

    target = field_info.annotation

    if target is bool:
        lowered = text.lower()
        if lowered in {"1", "true", "yes", "on"}:
            return True
        if lowered in {"0", "false", "no", "off"}:
            return False
        return text

    try:
        if target is int:
            return int(float(text))
        if target is float:
            return float(text)
    except ValueError:
        return text

    if target == Optional[str] and text == "":
        return None
    if field == "transport":
        return text.lower()
    return text


def _apply_cfg_pair(values: dict[str, object], key: str, value: str) -> None:
    field = _ALIASES.get(key.strip().lower())
    if field is None:
        return
    values[field] = _coerce_value(field, _strip_inline_comment(value))


def load_config(
    path: str,
    *,
    base_dir: Optional[str] = None,
    env: Optional[Mapping[str, str]] = None,
) -> Config:
    """Load a :class:`Config` from an ``escposlink.cfg``-style file.

    Parameters
    ----------
    path:
        Path to the configuration file. If it does not exist, defaults
        are returned and only environment overrides are applied.
    base_dir:
        Base directory used to resolve relative paths, defaults to the
        directory of ``path``.
    env:
        Optional environment mapping, defaults to :data:`os.environ`.
    """

    env = dict(os.environ if env is None else env)
    values: dict[str, object] = {}

    if base_dir is None:
        base_dir = os.path.dirname(os.path.abspath(path)) or os.getcwd()

    if os.path.isfile(path):
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith("#") or line.startswith("//"):
                    continue
                m = _KEY_VALUE_RE.match(line)
                if not m:
                    continue
                _apply_cfg_pair(values, m.group("key"), m.group("value"))

    for var, field in _ENV_OVERRIDES.items():
        if var in env:
            values[field] = _coerce_value(field, env[var])

    cfg = Config(**values)

    # resolve relative paths against base_dir
    updates: dict[str, object] = {}
    if cfg.filepath and not os.path.isabs(cfg.filepath):
        updates["filepath"] = os.path.join(base_dir, cfg.filepath)
    if cfg.logdir and not os.path.isabs(cfg.logdir):
        updates["logdir"] = os.path.join(base_dir, cfg.logdir)
    if updates:
        cfg = cfg.model_copy(update=updates)

    return cfg


__all__ = ["load_config"]
