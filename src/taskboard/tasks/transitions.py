# src/taskboard/tasks/transitions.py

"""
Pure state transitions for the task store.

Each function takes the current TaskState and returns the next one; nothing
here performs I/O. TaskStore wraps them around the awaited backend calls.
"""

from __future__ import annotations

from dataclasses import replace

from .task_models import ALL, RecordId, Task, TaskFilters, TaskQuery, TaskState

# Accepted names for set_filter (UI-style camelCase kept for familiarity).
FILTER_FIELDS = {
    "category_id": "category_id",
    "categoryId": "category_id",
    "category": "category_id",
    "completed": "completed",
    "priority": "priority",
}


def query_from_filters(filters: TaskFilters, *, limit: int | None = None) -> TaskQuery:
    """Only filters not set to "all" become constraints; completed turns into a bool."""
    category_id = filters.category_id if filters.category_id and filters.category_id != ALL else None
    completed = None if filters.completed == ALL else filters.completed == "true"
    priority = filters.priority if filters.priority and filters.priority != ALL else None
    return TaskQuery(limit=limit, category_id=category_id, completed=completed, priority=priority)


def set_filter(state: TaskState, name: str, value: str) -> TaskState:
    attr = FILTER_FIELDS.get(name)
    if attr is None:
        raise ValueError(f"Unknown filter: {name!r}")
    return replace(state, filters=replace(state.filters, **{attr: str(value)}))


def _replace_by_id(items: tuple[Task, ...], task: Task) -> tuple[Task, ...]:
    for i, t in enumerate(items):
        if t.id == task.id:
            return items[:i] + (task,) + items[i + 1 :]
    return items


# ---- list ----

def list_started(state: TaskState) -> TaskState:
    return replace(state, loading_list=True, error_list=None)


def list_loaded(state: TaskState, items: list[Task]) -> TaskState:
    return replace(state, items=tuple(items))


def list_failed(state: TaskState, message: str) -> TaskState:
    return replace(state, error_list=message)


def list_finished(state: TaskState) -> TaskState:
    return replace(state, loading_list=False)


# ---- selected ----

def selected_started(state: TaskState) -> TaskState:
    return replace(state, loading_selected=True, error_selected=None, selected=None)


def selected_loaded(state: TaskState, task: Task | None) -> TaskState:
    return replace(state, selected=task)


def selected_failed(state: TaskState, message: str) -> TaskState:
    return replace(state, error_selected=message)


def selected_finished(state: TaskState) -> TaskState:
    return replace(state, loading_selected=False)


# ---- save ----

def save_started(state: TaskState) -> TaskState:
    return replace(state, saving=True, error_selected=None)


def task_created(state: TaskState, task: Task) -> TaskState:
    # newest first, so a fresh task goes on top
    return replace(state, items=(task, *state.items), selected=task)


def task_updated(state: TaskState, task: Task) -> TaskState:
    return replace(state, items=_replace_by_id(state.items, task), selected=task)


def save_failed(state: TaskState, message: str) -> TaskState:
    return replace(state, error_selected=message)


def save_finished(state: TaskState) -> TaskState:
    return replace(state, saving=False)


# ---- toggle ----

def task_toggled(state: TaskState, task: Task) -> TaskState:
    selected = state.selected
    if selected is not None and selected.id == task.id:
        selected = task
    return replace(state, items=_replace_by_id(state.items, task), selected=selected)


# ---- delete ----

def delete_started(state: TaskState) -> TaskState:
    return replace(state, deleting=True, error_selected=None)


def task_removed(state: TaskState, task_id: RecordId) -> TaskState:
    selected = state.selected
    if selected is not None and selected.id == task_id:
        selected = None
    items = tuple(t for t in state.items if t.id != task_id)
    return replace(state, items=items, selected=selected)


def delete_failed(state: TaskState, message: str) -> TaskState:
    return replace(state, error_selected=message)


def delete_finished(state: TaskState) -> TaskState:
    return replace(state, deleting=False)
