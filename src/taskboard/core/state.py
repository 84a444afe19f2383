# src/taskboard/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..tasks.category_store import CategoryStore
from ..tasks.task_store import TaskStore


@dataclass
class AppState:
    """
    Everything a front-end needs, passed explicitly (no module-level stores).

    `backend` is kept so the composition root can close it on shutdown.
    """

    settings: Any
    backend: Any
    tasks: TaskStore
    categories: CategoryStore
