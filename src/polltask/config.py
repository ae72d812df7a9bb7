# src/polltask/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the CLI host (normal "settings layer").
- The task library itself never reads settings; the composition root passes
  values in explicitly.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "POLLTASK"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


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
    log_dir: Path
    log_to_file: bool

    # ---- Driver ----
    poll_interval_seconds: float

    # ---- Retry / timeout ----
    retry_max_attempts: int
    retry_base_delay_seconds: float
    timeout_seconds: float

    # ---- State machine ----
    state_threshold: int
    state_start_delay_seconds: float
    state_step_delay_seconds: float

    # ---- Simulated work ----
    item_delay_seconds: float
    stream_delay_seconds: float

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "polltask").strip() or "polltask"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        log_dir = _env_path(_k("LOG_DIR"), Path(".local/polltask"))
        log_to_file = _env_bool(_k("LOG_TO_FILE"), False)

        poll_interval_seconds = max(0.0, _env_float(_k("POLL_INTERVAL_SECONDS"), 0.001))

        retry_max_attempts = max(1, _env_int(_k("RETRY_MAX_ATTEMPTS"), 3))
        retry_base_delay_seconds = max(0.0, _env_float(_k("RETRY_BASE_DELAY_SECONDS"), 0.1))
        timeout_seconds = max(0.0, _env_float(_k("TIMEOUT_SECONDS"), 1.0))

        state_threshold = max(1, _env_int(_k("STATE_THRESHOLD"), 3))
        state_start_delay_seconds = max(0.0, _env_float(_k("STATE_START_DELAY_SECONDS"), 0.1))
        state_step_delay_seconds = max(0.0, _env_float(_k("STATE_STEP_DELAY_SECONDS"), 0.05))

        item_delay_seconds = max(0.0, _env_float(_k("ITEM_DELAY_SECONDS"), 0.01))
        stream_delay_seconds = max(0.0, _env_float(_k("STREAM_DELAY_SECONDS"), 0.1))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            log_dir=log_dir,
            log_to_file=log_to_file,
            poll_interval_seconds=poll_interval_seconds,
            retry_max_attempts=retry_max_attempts,
            retry_base_delay_seconds=retry_base_delay_seconds,
            timeout_seconds=timeout_seconds,
            state_threshold=state_threshold,
            state_start_delay_seconds=state_start_delay_seconds,
            state_step_delay_seconds=state_step_delay_seconds,
            item_delay_seconds=item_delay_seconds,
            stream_delay_seconds=stream_delay_seconds,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
