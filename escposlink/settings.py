"""
Process-level settings for escposlink.
Path: escposlink/settings.py
"""

from __future__ import annotations

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Settings read from the environment (``ESCPOSLINK_*``) or ``.env``."""

    config_path: str = Field(
        default="escposlink.cfg",
        description="Path to the printer configuration file",
    )
    debug: bool = Field(default=False)
    logdir: Optional[str] = Field(
        default=None,
        description="Directory for the log file; stderr only when unset",
    )

    model_config = {
        "env_prefix": "ESCPOSLINK_",
        "env_file": ".env",
        "case_sensitive": False,
        "extra": "ignore",
    }


def get_settings() -> Settings:
    return Settings()


__all__ = ["Settings", "get_settings"]
