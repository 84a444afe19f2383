# src/taskboard/tasks/task_models.py

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from typing import Any

# Task/category ids are opaque: whatever the backend hands out (int or uuid str).
RecordId = int | str

ALL = "all"


class TaskPriority(StrEnum):
    """Priority labels offered by the front-end. Stored tasks may carry others."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


def _parse_date(raw: Any) -> date | None:
    if raw is None or raw == "":
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    try:
        return date.fromisoformat(str(raw)[:10])
    except ValueError:
        return None


def _parse_datetime(raw: Any) -> datetime | None:
    if raw is None or raw == "":
        return None
    if isinstance(raw, datetime):
        return raw
    s = str(raw)
    if s.endswith("Z"):
        s = s[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(s)
    except ValueError:
        return None


@dataclass(frozen=True, slots=True)
class Category:
    id: RecordId
    name: str

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> Category:
        return cls(id=row["id"], name=str(row.get("name") or ""))


@dataclass(frozen=True, slots=True)
class Task:
    """
    A task exactly as the backend returned it.

    Instances are only built from server rows; the client never fabricates
    ids or timestamps.
    """

    id: RecordId
    title: str
    description: str | None = None
    priority: str | None = None
    category_id: RecordId | None = None
    due_date: date | None = None
    completed: bool = False
    created_at: datetime | None = None

    @classmethod
    def from_row(cls, row: dict[str, Any]) -> Task:
        return cls(
            id=row["id"],
            title=str(row.get("title") or ""),
            description=row.get("description"),
            priority=row.get("priority"),
            category_id=row.get("category_id"),
            due_date=_parse_date(row.get("due_date")),
            completed=bool(row.get("completed")),
            created_at=_parse_datetime(row.get("created_at")),
        )


@dataclass(slots=True)
class TaskFilters:
    """List filters as the UI holds them (text selectors, "all" = no constraint)."""

    category_id: str = ALL
    completed: str = ALL  # "all" | "true" | "false"
    priority: str = ALL


@dataclass(frozen=True, slots=True)
class TaskQuery:
    """List options understood by the REST client. None = not constrained."""

    limit: int | None = None
    offset: int | None = None
    category_id: RecordId | None = None
    completed: bool | None = None
    priority: str | None = None


@dataclass(slots=True)
class TaskForm:
    """Create/edit form fields. Empty strings mean "not set"."""

    title: str = ""
    description: str | None = None
    priority: str | None = None
    category_id: RecordId | None = None
    due_date: date | str | None = None
    completed: bool = False
    id: RecordId | None = None

    @classmethod
    def from_task(cls, task: Task) -> TaskForm:
        return cls(
            id=task.id,
            title=task.title,
            description=task.description,
            priority=task.priority,
            category_id=task.category_id,
            due_date=task.due_date,
            completed=task.completed,
        )

    def to_payload(self) -> dict[str, Any]:
        """Write payload in the backend's column names."""
        due = self.due_date
        if isinstance(due, date):
            due = due.isoformat()
        return {
            "title": self.title,
            "description": self.description or None,
            "priority": self.priority or None,
            "category_id": self.category_id,
            "due_date": due or None,
            "completed": bool(self.completed),
        }


@dataclass(frozen=True, slots=True)
class TaskState:
    """Snapshot of everything the task store holds."""

    items: tuple[Task, ...] = ()
    selected: Task | None = None

    loading_list: bool = False
    loading_selected: bool = False
    saving: bool = False
    deleting: bool = False

    error_list: str | None = None
    error_selected: str | None = None

    filters: TaskFilters = field(default_factory=TaskFilters)
