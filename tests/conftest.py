# tests/conftest.py

from __future__ import annotations

from pathlib import Path
from types import SimpleNamespace

import pytest

from taskboard.cli.bootstrap import create_initial_state
from taskboard.core.state import AppState
from taskboard.tasks.task_models import Category

from .fakes import FakeBackend, make_task


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with AppState and the REST client.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated and deterministic.
    """
    return SimpleNamespace(
        app_name="taskboard-test",
        log_level="DEBUG",
        data_dir=tmp_path / "data",
        backend_url="https://example.supabase.co",
        api_key="test-key",
        request_timeout_seconds=1.0,
        connect_timeout_seconds=1.0,
        task_page_limit=None,
    )


@pytest.fixture()
def backend() -> FakeBackend:
    """Three tasks (newest first by id) and two categories."""
    return FakeBackend(
        tasks=[
            make_task(1, "write report", category_id=1, priority="high"),
            make_task(2, "buy milk", category_id=2, priority="low", completed=True),
            make_task(3, "call bob", category_id=1, priority="medium"),
        ],
        categories=[Category(id=2, name="Home"), Category(id=1, name="Work")],
    )


@pytest.fixture()
def state(settings: SimpleNamespace, backend: FakeBackend) -> AppState:
    """AppState wired with the in-memory backend."""
    return create_initial_state(settings=settings, backend=backend)
