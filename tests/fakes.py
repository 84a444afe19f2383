# tests/fakes.py

from __future__ import annotations

import asyncio
from datetime import datetime, timedelta, timezone
from typing import Any

from taskboard.api.errors import RequestError
from taskboard.tasks.task_models import Category, Task, TaskQuery

BASE_TS = datetime(2025, 1, 1, 12, 0, tzinfo=timezone.utc)


def make_task(task_id: int, title: str | None = None, **kw: Any) -> Task:
    kw.setdefault("created_at", BASE_TS + timedelta(minutes=task_id))
    return Task(id=task_id, title=title or f"task {task_id}", **kw)


class FakeBackend:
    """
    In-memory TaskBackend for store tests.

    - Records every call as (method, args) for assertions
    - `fail[method] = exc` makes the next calls of that method raise exc
    - `hold_lists = True` parks list_tasks calls until release_list(i) is called
    """

    def __init__(self, tasks: list[Task] | None = None, categories: list[Category] | None = None) -> None:
        self.tasks: list[Task] = list(tasks or [])
        self.categories: list[Category] = list(categories or [])
        self.calls: list[tuple[str, tuple[Any, ...]]] = []
        self.fail: dict[str, Exception] = {}
        self.hold_lists = False
        self._held: list[tuple[asyncio.Event, list[Task]]] = []
        self._next_id = 1000

    def _check(self, method: str, *args: Any) -> None:
        self.calls.append((method, args))
        exc = self.fail.get(method)
        if exc is not None:
            raise exc

    def count(self, method: str) -> int:
        return sum(1 for m, _ in self.calls if m == method)

    async def list_categories(self) -> list[Category]:
        self._check("list_categories")
        return sorted(self.categories, key=lambda c: c.name)

    async def list_tasks(self, query: TaskQuery | None = None) -> list[Task]:
        self._check("list_tasks", query)
        q = query or TaskQuery()
        out = [
            t
            for t in self.tasks
            if (q.category_id is None or t.category_id == q.category_id)
            and (q.completed is None or t.completed == q.completed)
            and (q.priority is None or t.priority == q.priority)
        ]
        out.sort(key=lambda t: t.created_at, reverse=True)
        if self.hold_lists:
            gate = asyncio.Event()
            self._held.append((gate, out))
            await gate.wait()
        return out

    def release_list(self, index: int) -> None:
        self._held[index][0].set()

    async def get_task(self, task_id):
        self._check("get_task", task_id)
        for t in self.tasks:
            if t.id == task_id:
                return t
        return None

    async def create_task(self, payload: dict[str, Any]) -> Task:
        self._check("create_task", payload)
        self._next_id += 1
        task = Task.from_row({**payload, "id": self._next_id, "created_at": BASE_TS + timedelta(days=1)})
        self.tasks.append(task)
        return task

    async def update_task(self, task_id, payload: dict[str, Any]) -> Task:
        self._check("update_task", task_id, payload)
        for i, t in enumerate(self.tasks):
            if t.id == task_id:
                merged = Task.from_row(
                    {
                        "id": t.id,
                        "title": t.title,
                        "description": t.description,
                        "priority": t.priority,
                        "category_id": t.category_id,
                        "due_date": t.due_date,
                        "completed": t.completed,
                        "created_at": t.created_at,
                        **payload,
                    }
                )
                self.tasks[i] = merged
                return merged
        raise RequestError(404, "Backend returned no record")

    async def delete_task(self, task_id) -> None:
        self._check("delete_task", task_id)
        self.tasks = [t for t in self.tasks if t.id != task_id]
