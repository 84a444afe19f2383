# src/taskboard/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- No secrets required at import time (the REST client checks them when built).
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "TASKBOARD"


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except ImportError:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _first_env(*names: str, default: str | None = None) -> str | None:
    for n in names:
        v = os.getenv(n)
        if v is not None and v.strip() != "":
            return v
    return default


def _env_int(name: str, default: int | None) -> int | None:
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


def rest_base_url(backend_url: str) -> str:
    """Return `<host>/rest/v1` for a project host (idempotent)."""
    base = backend_url.strip().rstrip("/")
    if not base:
        return ""
    if base.endswith("/rest/v1"):
        return base
    return f"{base}/rest/v1"


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path

    # ---- Backend ----
    backend_url: str
    api_key: str | None
    request_timeout_seconds: float
    connect_timeout_seconds: float

    # ---- Listing ----
    task_page_limit: int | None

    @property
    def rest_url(self) -> str:
        return rest_base_url(self.backend_url)

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "taskboard").strip() or "taskboard"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/taskboard"))

        # Accept the usual SUPABASE_* names as a fallback.
        backend_url = (
            _first_env(_k("BACKEND_URL"), "SUPABASE_URL", default="") or ""
        ).strip()
        api_key = _first_env(_k("API_KEY"), "SUPABASE_ANON_KEY", default=None)

        request_timeout_seconds = _env_float(_k("REQUEST_TIMEOUT_SECONDS"), 15.0)
        connect_timeout_seconds = _env_float(_k("CONNECT_TIMEOUT_SECONDS"), 5.0)

        task_page_limit = _env_int(_k("TASK_PAGE_LIMIT"), None)
        if task_page_limit is not None and task_page_limit <= 0:
            task_page_limit = None

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            backend_url=backend_url,
            api_key=api_key.strip() if api_key else None,
            request_timeout_seconds=request_timeout_seconds,
            connect_timeout_seconds=connect_timeout_seconds,
            task_page_limit=task_page_limit,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
