# src/taskboard/tasks/task_store.py

from __future__ import annotations

import itertools
import logging

from ..api.errors import BackendError
from ..core.ports import TaskBackend
from . import transitions as tr
from .task_models import RecordId, Task, TaskFilters, TaskForm, TaskState

logger = logging.getLogger(__name__)


class TaskStore:
    """
    Task list, selected task, filters and per-operation flags.

    Every action follows the same cycle: mark in-flight, await the backend,
    apply the result (or record the error), clear the flag. The list, detail,
    save and delete families have their own flags and run independently.

    The state is an immutable TaskState snapshot; it is re-read after every
    await so interleaved actions never overwrite each other.

    Error policy:
    - load_tasks / load_task record the error and return.
    - save_task / remove_task record the error and re-raise it.
    - toggle_completed only logs; state stays as it was.
    """

    def __init__(self, backend: TaskBackend, *, page_limit: int | None = None) -> None:
        self._backend = backend
        self._page_limit = page_limit
        self.state = TaskState()
        self._list_tokens = itertools.count(1)
        self._latest_list_token = 0

    # ---- read-only views ----

    @property
    def items(self) -> tuple[Task, ...]:
        return self.state.items

    @property
    def selected(self) -> Task | None:
        return self.state.selected

    @property
    def filters(self) -> TaskFilters:
        return self.state.filters

    @property
    def loading_list(self) -> bool:
        return self.state.loading_list

    @property
    def loading_selected(self) -> bool:
        return self.state.loading_selected

    @property
    def saving(self) -> bool:
        return self.state.saving

    @property
    def deleting(self) -> bool:
        return self.state.deleting

    @property
    def error_list(self) -> str | None:
        return self.state.error_list

    @property
    def error_selected(self) -> str | None:
        return self.state.error_selected

    # ---- actions ----

    async def load_tasks(self) -> None:
        """
        Reload the list with the current filters.

        Only the most recently started call may apply its result: responses
        that resolve after a newer call was issued are dropped, and the newer
        call owns `loading_list`.
        """
        token = next(self._list_tokens)
        self._latest_list_token = token

        query = tr.query_from_filters(self.state.filters, limit=self._page_limit)
        self.state = tr.list_started(self.state)
        try:
            items = await self._backend.list_tasks(query)
            if token != self._latest_list_token:
                logger.debug("Dropping stale list response token=%s", token)
                return
            self.state = tr.list_loaded(self.state, items)
            logger.debug("Loaded %d tasks (filters=%s)", len(items), self.state.filters)
        except BackendError as e:
            if token != self._latest_list_token:
                logger.debug("Dropping stale list failure token=%s", token)
                return
            logger.info("Loading tasks failed: %s", e)
            self.state = tr.list_failed(self.state, e.message or "Failed to load tasks")
        finally:
            if token == self._latest_list_token:
                self.state = tr.list_finished(self.state)

    async def load_task(self, task_id: RecordId) -> None:
        """Load one task into `selected`; a missing task leaves it None with no error."""
        self.state = tr.selected_started(self.state)
        try:
            task = await self._backend.get_task(task_id)
            self.state = tr.selected_loaded(self.state, task)
        except BackendError as e:
            logger.info("Loading task id=%s failed: %s", task_id, e)
            self.state = tr.selected_failed(self.state, e.message or "Failed to load task")
        finally:
            self.state = tr.selected_finished(self.state)

    async def save_task(self, form: TaskForm, is_edit: bool) -> Task:
        if is_edit and form.id is None:
            raise ValueError("Editing requires the task id on the form")

        self.state = tr.save_started(self.state)
        payload = form.to_payload()
        try:
            if is_edit:
                task = await self._backend.update_task(form.id, payload)
                self.state = tr.task_updated(self.state, task)
            else:
                task = await self._backend.create_task(payload)
                self.state = tr.task_created(self.state, task)
        except BackendError as e:
            logger.info("Saving task failed (edit=%s): %s", is_edit, e)
            self.state = tr.save_failed(self.state, e.message or "Failed to save task")
            raise
        finally:
            self.state = tr.save_finished(self.state)

        logger.info("Saved task id=%s (edit=%s)", task.id, is_edit)
        return task

    async def toggle_completed(self, task: Task) -> None:
        """
        Flip `completed` on the server, then take the server's record.

        Failures are logged only; no error slot is set and nothing is raised.
        """
        try:
            saved = await self._backend.update_task(task.id, {"completed": not task.completed})
        except BackendError:
            logger.exception("Toggling completed failed for task id=%s", task.id)
            return
        self.state = tr.task_toggled(self.state, saved)

    async def remove_task(self, task_id: RecordId) -> None:
        self.state = tr.delete_started(self.state)
        try:
            await self._backend.delete_task(task_id)
            self.state = tr.task_removed(self.state, task_id)
        except BackendError as e:
            logger.info("Deleting task id=%s failed: %s", task_id, e)
            self.state = tr.delete_failed(self.state, e.message or "Failed to delete task")
            raise
        finally:
            self.state = tr.delete_finished(self.state)
        logger.info("Deleted task id=%s", task_id)

    def set_filter(self, name: str, value: str) -> None:
        """Change one filter. Does not reload: call load_tasks() afterwards."""
        self.state = tr.set_filter(self.state, name, value)
