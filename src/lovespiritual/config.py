# src/lovespiritual/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

One Settings object for the whole app; nothing here is required to be set.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "LOVESPIRITUAL"

DEFAULT_DATA_FILE = Path("data/lovespiritual.txt")
DEFAULT_LOG_DIR = Path(".local/lovespiritual")

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    log_dir: Path

    # ---- Storage ----
    data_file: Path

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            app_name=_env(_k("APP_NAME"), "lovespiritual").strip() or "lovespiritual",
            # Console stays quiet by default; the log file always gets DEBUG.
            log_level=_env(_k("LOG_LEVEL"), "WARNING"),
            log_dir=_env_path(_k("LOG_DIR"), DEFAULT_LOG_DIR),
            data_file=_env_path(_k("DATA_FILE"), DEFAULT_DATA_FILE),
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
