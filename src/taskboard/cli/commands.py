# src/taskboard/cli/commands.py

from __future__ import annotations

import contextlib
import logging
import shlex
from collections.abc import Awaitable, Callable
from datetime import date

from ..api.errors import BackendError
from ..core.state import AppState
from ..tasks.task_models import ALL, RecordId, Task, TaskForm, TaskPriority

CommandEmitter = Callable[[str], None]
CommandHandler = Callable[[AppState, list[str], CommandEmitter | None], Awaitable[str]]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console (/help, /tasks, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        """
        if not line.startswith("/"):
            return None

        try:
            parts = shlex.split(line[1:])
        except ValueError as e:
            return f"Could not parse command: {e}"
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        return await handler(state, args, emit)

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


# ---- parsing / rendering helpers ----

FORM_KEYS = {
    "title": "title",
    "desc": "description",
    "description": "description",
    "priority": "priority",
    "category": "category_id",
    "due": "due_date",
    "done": "completed",
    "completed": "completed",
}


def parse_id(raw: str) -> RecordId:
    """Numeric ids become ints (as the backend returns them); anything else stays text."""
    raw = raw.strip()
    return int(raw) if raw.isdigit() else raw


def _parse_bool(raw: str) -> bool:
    return raw.strip().lower() in {"1", "true", "yes", "y", "on", "done"}


def apply_form_args(form: TaskForm, args: list[str]) -> None:
    """Apply `key=value` arguments to a form. Raises ValueError on bad input."""
    for arg in args:
        key, sep, value = arg.partition("=")
        if not sep:
            raise ValueError(f"Expected key=value, got {arg!r}")
        attr = FORM_KEYS.get(key.strip().lower())
        if attr is None:
            raise ValueError(f"Unknown field {key!r}. Fields: {', '.join(sorted(set(FORM_KEYS)))}")
        value = value.strip()

        if attr == "completed":
            form.completed = _parse_bool(value)
        elif attr == "category_id":
            form.category_id = parse_id(value) if value else None
        elif attr == "due_date":
            form.due_date = date.fromisoformat(value) if value else None
        elif attr == "priority":
            if value and value not in {p.value for p in TaskPriority}:
                raise ValueError(f"Priority must be one of: {', '.join(p.value for p in TaskPriority)}")
            form.priority = value or None
        else:
            setattr(form, attr, value)


def _category_name(state: AppState, category_id: RecordId | None) -> str | None:
    if category_id is None:
        return None
    c = state.categories.get_by_id(category_id)
    return c.name if c is not None else f"category {category_id}"


def format_task_line(state: AppState, task: Task) -> str:
    mark = "x" if task.completed else " "
    extras = [
        x
        for x in (
            task.priority,
            _category_name(state, task.category_id),
            f"due {task.due_date.isoformat()}" if task.due_date else None,
        )
        if x
    ]
    tail = f" ({', '.join(extras)})" if extras else ""
    return f"[{mark}] #{task.id} {task.title}{tail}"


def format_task_detail(state: AppState, task: Task) -> str:
    created = task.created_at.isoformat(sep=" ", timespec="seconds") if task.created_at else "-"
    return "\n".join(
        [
            f"Task #{task.id}: {task.title}",
            f"  Status: {'done' if task.completed else 'open'}",
            f"  Priority: {task.priority or '-'}",
            f"  Category: {_category_name(state, task.category_id) or '-'}",
            f"  Due: {task.due_date.isoformat() if task.due_date else '-'}",
            f"  Created: {created}",
            f"  Description: {task.description or '-'}",
        ]
    )


def _render_list(state: AppState) -> str:
    store = state.tasks
    if store.error_list:
        return f"Could not load tasks: {store.error_list}"
    if not store.items:
        return "No tasks match the current filters."
    lines = [f"Tasks ({len(store.items)}):"]
    lines.extend(format_task_line(state, t) for t in store.items)
    return "\n".join(lines)


def _notify(emit: CommandEmitter | None, text: str) -> None:
    """Immediate user-visible feedback before a slow backend call."""
    if emit:
        with contextlib.suppress(Exception):
            emit(text)


def _find_loaded(state: AppState, task_id: RecordId) -> Task | None:
    for t in state.tasks.items:
        if t.id == task_id:
            return t
    sel = state.tasks.selected
    if sel is not None and sel.id == task_id:
        return sel
    return None


# ---- commands ----

async def cmd_help(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


async def cmd_status(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    f = state.tasks.filters
    backend_url = getattr(state.backend, "base_url", None) or getattr(state.settings, "backend_url", "-")
    return (
        "Status:\n"
        f"  Backend: {backend_url}\n"
        f"  Filters: category={f.category_id} completed={f.completed} priority={f.priority}\n"
        f"  Tasks loaded: {len(state.tasks.items)}\n"
        f"  Categories loaded: {len(state.categories.items)}"
    )


async def cmd_categories(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    await state.categories.load()
    if state.categories.error:
        return f"Could not load categories: {state.categories.error}"
    if not state.categories.items:
        return "No categories."
    lines = ["Categories:"]
    lines.extend(f"  {c.id}: {c.name}" for c in state.categories.items)
    return "\n".join(lines)


async def cmd_tasks(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    _notify(emit, "Loading tasks...")
    await state.categories.load()
    await state.tasks.load_tasks()
    return _render_list(state)


async def cmd_filter(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /filter                  -> show filters
    /filter <name> <value>   -> set one filter and reload
    /filter reset            -> set all filters to "all" and reload
    """
    store = state.tasks
    if not args:
        f = store.filters
        return f"Filters: category={f.category_id} completed={f.completed} priority={f.priority}"

    if len(args) == 1 and args[0].lower() == "reset":
        for name in ("category_id", "completed", "priority"):
            store.set_filter(name, ALL)
    elif len(args) == 2:
        name, value = args
        if name == "completed" and value not in {ALL, "true", "false"}:
            return "Usage: /filter completed all|true|false"
        try:
            store.set_filter(name, value)
        except ValueError as e:
            return f"{e}. Use category, completed or priority."
    else:
        return "Usage: /filter <category|completed|priority> <value|all> or /filter reset"

    # set_filter never reloads on its own.
    _notify(emit, "Reloading tasks...")
    await store.load_tasks()
    return _render_list(state)


async def cmd_show(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if len(args) != 1:
        return "Usage: /show <id>"
    await state.categories.load()
    await state.tasks.load_task(parse_id(args[0]))
    if state.tasks.error_selected:
        return f"Could not load task: {state.tasks.error_selected}"
    if state.tasks.selected is None:
        return f"Task #{args[0]} not found."
    return format_task_detail(state, state.tasks.selected)


async def cmd_new(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/new title="Buy milk" priority=high category=2 due=2025-01-31 desc="..." """
    form = TaskForm()
    try:
        apply_form_args(form, args)
    except ValueError as e:
        return str(e)
    if not form.title.strip():
        return 'Title is required: /new title="..." [priority=..] [category=..] [due=YYYY-MM-DD] [desc=..]'

    try:
        task = await state.tasks.save_task(form, is_edit=False)
    except BackendError:
        return f"Could not save task: {state.tasks.error_selected}"
    return f"Created:\n{format_task_detail(state, task)}"


async def cmd_edit(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """/edit <id> key=value ... (unspecified fields keep their stored values)"""
    if len(args) < 2:
        return "Usage: /edit <id> key=value ..."
    task_id = parse_id(args[0])

    await state.tasks.load_task(task_id)
    if state.tasks.error_selected:
        return f"Could not load task: {state.tasks.error_selected}"
    current = state.tasks.selected
    if current is None:
        return f"Task #{task_id} not found."

    form = TaskForm.from_task(current)
    try:
        apply_form_args(form, args[1:])
    except ValueError as e:
        return str(e)
    if not form.title.strip():
        return "Title cannot be empty."

    try:
        task = await state.tasks.save_task(form, is_edit=True)
    except BackendError:
        return f"Could not save task: {state.tasks.error_selected}"
    return f"Updated:\n{format_task_detail(state, task)}"


async def cmd_toggle(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if len(args) != 1:
        return "Usage: /toggle <id>"
    task_id = parse_id(args[0])

    task = _find_loaded(state, task_id)
    if task is None:
        await state.tasks.load_task(task_id)
        if state.tasks.error_selected:
            return f"Could not load task: {state.tasks.error_selected}"
        task = state.tasks.selected
    if task is None:
        return f"Task #{task_id} not found."

    await state.tasks.toggle_completed(task)

    after = _find_loaded(state, task_id)
    if after is None or after.completed == task.completed:
        # toggle failures are only logged
        return f"Task #{task_id} unchanged."
    return f"Task #{task_id} is now {'done' if after.completed else 'open'}."


async def cmd_delete(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    if len(args) != 1:
        return "Usage: /delete <id>"
    task_id = parse_id(args[0])
    try:
        await state.tasks.remove_task(task_id)
    except BackendError:
        return f"Could not delete task: {state.tasks.error_selected}"
    return f"Deleted task #{task_id}."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show backend and current filters.")
registry.register("categories", cmd_categories, help_text="List categories.", aliases=["cats"])
registry.register("tasks", cmd_tasks, help_text="List tasks with the current filters.", aliases=["ls"])
registry.register(
    "filter",
    cmd_filter,
    help_text="Filters: /filter <category|completed|priority> <value|all> | /filter reset.",
)
registry.register("show", cmd_show, help_text="Show one task: /show <id>.")
registry.register(
    "new",
    cmd_new,
    help_text='Create: /new title="..." [priority=low|medium|high] [category=<id>] [due=YYYY-MM-DD] [desc=".."].',
    aliases=["add"],
)
registry.register("edit", cmd_edit, help_text="Edit: /edit <id> key=value ...")
registry.register("toggle", cmd_toggle, help_text="Flip done/open: /toggle <id>.", aliases=["done"])
registry.register("delete", cmd_delete, help_text="Delete: /delete <id>.", aliases=["rm"])
