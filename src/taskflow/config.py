# src/taskflow/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No store URL required at import time (the console still starts without one).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "TASKFLOW"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


# Local .env never overrides variables already set in the environment.
load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


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

    # ---- Store endpoint ----
    store_url: str
    task_sheet: str
    roster_sheet: str
    http_timeout_seconds: float

    # ---- Connectors ----
    console_enabled: bool

    # ---- Local data (logs) ----
    data_dir: Path

    @staticmethod
    def from_env() -> "Settings":
        return Settings(
            app_name=_env(_k("APP_NAME"), "taskflow").strip() or "taskflow",
            log_level=_env(_k("LOG_LEVEL"), "INFO"),
            store_url=_env(_k("STORE_URL"), "").strip(),
            task_sheet=_env(_k("TASK_SHEET"), "Master").strip() or "Master",
            roster_sheet=_env(_k("ROSTER_SHEET"), "Doers").strip() or "Doers",
            http_timeout_seconds=_env_float(_k("HTTP_TIMEOUT_SECONDS"), 30.0),
            console_enabled=_env_bool(_k("CONSOLE_ENABLED"), True),
            data_dir=_env_path(_k("DATA_DIR"), Path(".local/taskflow")),
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
