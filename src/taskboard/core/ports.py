# src/taskboard/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the stores.

The stores depend on Protocols instead of the concrete REST client.
This keeps the backend swappable and makes testing easier.
"""

from typing import Any, Protocol

from ..tasks.task_models import Category, RecordId, Task, TaskQuery


class CategoryBackend(Protocol):
    async def list_categories(self) -> list[Category]: ...


class TaskBackend(CategoryBackend, Protocol):
    """Everything the task store needs from the backend."""

    async def list_tasks(self, query: TaskQuery | None = None) -> list[Task]: ...
    async def get_task(self, task_id: RecordId) -> Task | None: ...
    async def create_task(self, payload: dict[str, Any]) -> Task: ...
    async def update_task(self, task_id: RecordId, payload: dict[str, Any]) -> Task: ...
    async def delete_task(self, task_id: RecordId) -> None: ...
