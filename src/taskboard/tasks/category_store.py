# src/taskboard/tasks/category_store.py

from __future__ import annotations

import logging

from ..api.errors import BackendError
from ..core.ports import CategoryBackend
from .task_models import Category, RecordId

logger = logging.getLogger(__name__)


class CategoryStore:
    """Category list. Loaded once per store; later load() calls are no-ops."""

    def __init__(self, backend: CategoryBackend) -> None:
        self._backend = backend
        self.items: list[Category] = []
        self.loading = False
        self.error: str | None = None

    async def load(self) -> None:
        if self.items:
            return

        self.loading = True
        self.error = None
        try:
            self.items = await self._backend.list_categories()
            logger.debug("Loaded %d categories", len(self.items))
        except BackendError as e:
            logger.info("Loading categories failed: %s", e)
            self.error = e.message or "Failed to load categories"
        finally:
            self.loading = False

    def get_by_id(self, category_id: RecordId | None) -> Category | None:
        for c in self.items:
            if c.id == category_id:
                return c
        return None
