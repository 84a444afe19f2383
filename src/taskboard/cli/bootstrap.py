# src/taskboard/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires the REST client and both stores into AppState.
"""

from __future__ import annotations

import logging

from ..api.client import RestClient
from ..config import get_settings
from ..core.ports import TaskBackend
from ..core.state import AppState
from ..tasks.category_store import CategoryStore
from ..tasks.task_store import TaskStore

logger = logging.getLogger(__name__)


def _ensure_local_dirs(settings) -> None:
    data_dir = getattr(settings, "data_dir", None)
    if data_dir is not None:
        data_dir.mkdir(parents=True, exist_ok=True)


def create_initial_state(*, settings=None, backend: TaskBackend | None = None) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings and backend injectable makes the app easier to test.
    If settings is None, falls back to get_settings(); if backend is None a
    RestClient is built from settings (raises RuntimeError when unconfigured).
    """
    if settings is None:
        settings = get_settings()

    _ensure_local_dirs(settings)

    if backend is None:
        backend = RestClient.from_settings(settings)
        logger.info("Backend: %s", backend.base_url)

    return AppState(
        settings=settings,
        backend=backend,
        tasks=TaskStore(backend, page_limit=getattr(settings, "task_page_limit", None)),
        categories=CategoryStore(backend),
    )


async def shutdown_state(state: AppState) -> None:
    """Best-effort shutdown (no exceptions should escape)."""
    aclose = getattr(state.backend, "aclose", None)
    if aclose is None:
        return
    try:
        await aclose()
    except Exception:
        logger.debug("Backend close failed.", exc_info=True)
