# tests/test_commands.py

from __future__ import annotations

from datetime import date

import pytest

from taskboard.api.errors import RequestError
from taskboard.cli.commands import CommandRegistry, apply_form_args, registry
from taskboard.connectors.console_connector import handle_line
from taskboard.tasks.task_models import TaskForm


@pytest.mark.asyncio
async def test_command_registry_routes_and_aliases(state) -> None:
    reg = CommandRegistry()
    called = []

    async def h(state, args, emit):
        called.append(args)
        return "ok"

    reg.register("a", h, "a", aliases=["alpha"])

    assert await reg.handle(state, '/a "two words"') == "ok"
    assert await reg.handle(state, "/ALPHA x") == "ok"
    assert called == [["two words"], ["x"]]


@pytest.mark.asyncio
async def test_command_registry_unknown_and_non_command(state) -> None:
    reg = CommandRegistry()
    assert await reg.handle(state, "hello") is None
    assert "Unknown command" in (await reg.handle(state, "/nope") or "")


def test_apply_form_args() -> None:
    form = TaskForm()
    apply_form_args(form, ["title=Buy milk", "priority=high", "category=2", "due=2025-03-01", "done=yes"])

    assert form.title == "Buy milk"
    assert form.priority == "high"
    assert form.category_id == 2
    assert form.due_date == date(2025, 3, 1)
    assert form.completed is True

    with pytest.raises(ValueError):
        apply_form_args(form, ["priority=urgent"])
    with pytest.raises(ValueError):
        apply_form_args(form, ["colour=red"])


@pytest.mark.asyncio
async def test_tasks_and_filter_commands(state, backend) -> None:
    out = await registry.handle(state, "/tasks")
    assert "Tasks (3)" in out
    assert "(high, Work)" in out

    out = await registry.handle(state, "/filter completed true")
    assert "buy milk" in out
    assert "write report" not in out
    assert state.tasks.filters.completed == "true"

    out = await registry.handle(state, "/filter reset")
    assert "Tasks (3)" in out


@pytest.mark.asyncio
async def test_new_edit_toggle_delete(state, backend) -> None:
    await registry.handle(state, "/tasks")

    out = await registry.handle(state, '/new title="plan trip" priority=low category=2')
    assert out.startswith("Created:")
    new_id = state.tasks.items[0].id
    assert state.tasks.items[0].title == "plan trip"

    out = await registry.handle(state, f"/edit {new_id} title=\"plan holiday\"")
    assert out.startswith("Updated:")
    assert state.tasks.items[0].title == "plan holiday"

    out = await registry.handle(state, f"/toggle {new_id}")
    assert out == f"Task #{new_id} is now done."

    out = await registry.handle(state, f"/delete {new_id}")
    assert out == f"Deleted task #{new_id}."
    assert all(t.id != new_id for t in state.tasks.items)


@pytest.mark.asyncio
async def test_show_missing_task(state) -> None:
    assert await registry.handle(state, "/show 999") == "Task #999 not found."


@pytest.mark.asyncio
async def test_save_failure_is_reported(state, backend) -> None:
    backend.fail["create_task"] = RequestError(409, "duplicate")
    out = await registry.handle(state, "/new title=x")
    assert out == "Could not save task: duplicate"


@pytest.mark.asyncio
async def test_toggle_failure_reports_unchanged(state, backend) -> None:
    await registry.handle(state, "/tasks")
    backend.fail["update_task"] = RequestError(500, "nope")
    assert await registry.handle(state, "/toggle 1") == "Task #1 unchanged."


@pytest.mark.asyncio
async def test_console_handle_line(state) -> None:
    assert await handle_line(state, "   ") is None
    assert "start with '/'" in (await handle_line(state, "hello") or "")
    assert "Available commands" in (await handle_line(state, "/help") or "")


@pytest.mark.asyncio
async def test_list_commands_emit_progress(state) -> None:
    lines: list[str] = []
    await registry.handle(state, "/tasks", emit=lines.append)
    await registry.handle(state, "/filter priority high", emit=lines.append)
    assert lines == ["Loading tasks...", "Reloading tasks..."]


@pytest.mark.asyncio
async def test_emit_failure_does_not_break_command(state) -> None:
    def broken(_text: str) -> None:
        raise OSError("stdout closed")

    out = await registry.handle(state, "/tasks", emit=broken)
    assert "Tasks (3)" in out
