# src/taskboard/api/client.py

from __future__ import annotations

import logging
from collections.abc import Callable
from typing import Any, TypeVar

import httpx

from ..config import rest_base_url
from ..tasks.task_models import Category, RecordId, Task, TaskQuery
from .errors import RequestError, TransportError

logger = logging.getLogger(__name__)

T = TypeVar("T")

UNEXPECTED_PAYLOAD = "Backend returned an unexpected payload"

# what a 2xx row missing columns or of the wrong shape raises in from_row
_ROW_ERRORS = (KeyError, TypeError, IndexError, AttributeError)


def _eq(value: Any) -> str:
    """PostgREST equality filter value (`eq.<value>`, booleans lower-cased)."""
    if isinstance(value, bool):
        value = "true" if value else "false"
    return f"eq.{value}"


def build_task_params(query: TaskQuery | None) -> dict[str, str]:
    """
    Translate list options into query parameters.

    Options that are not set are left out entirely; nothing is ever sent as a
    wildcard. Rows always come back newest first.
    """
    params: dict[str, str] = {"order": "created_at.desc"}
    if query is None:
        return params

    if query.limit:
        params["limit"] = str(query.limit)
    if query.offset:
        params["offset"] = str(query.offset)
    if query.category_id is not None and query.category_id != "":
        params["category_id"] = _eq(query.category_id)
    if query.completed is not None:
        params["completed"] = _eq(bool(query.completed))
    if query.priority:
        params["priority"] = _eq(query.priority)
    return params


def _error_message(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        msg = body.get("message")
        if isinstance(msg, str) and msg.strip():
            return msg
    return f"Request failed with {response.status_code}"


class RestClient:
    """
    Async client for the task backend's REST API (`<host>/rest/v1`).

    Every request carries the static API key (as bearer token and `apikey`
    header). Non-success statuses raise RequestError, network failures raise
    TransportError. Nothing is retried.
    """

    def __init__(
        self,
        base_url: str,
        api_key: str,
        *,
        timeout: float = 15.0,
        connect_timeout: float = 5.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        base_url = rest_base_url(base_url or "")
        if not base_url:
            raise RuntimeError("Backend URL is not set. Set TASKBOARD_BACKEND_URL in your .env.")
        if not api_key or not str(api_key).strip():
            raise RuntimeError("Backend API key is not set. Set TASKBOARD_API_KEY in your .env.")

        self.base_url = base_url
        self._http = httpx.AsyncClient(
            base_url=base_url,
            headers=self._headers(str(api_key).strip()),
            timeout=httpx.Timeout(timeout, connect=connect_timeout),
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings, *, transport: httpx.AsyncBaseTransport | None = None) -> RestClient:
        return cls(
            getattr(settings, "backend_url", ""),
            getattr(settings, "api_key", None) or "",
            timeout=float(getattr(settings, "request_timeout_seconds", 15.0)),
            connect_timeout=float(getattr(settings, "connect_timeout_seconds", 5.0)),
            transport=transport,
        )

    @staticmethod
    def _headers(api_key: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {api_key}",
            "apikey": api_key,
            "Content-Type": "application/json",
            # ask the backend to echo created/updated rows
            "Prefer": "return=representation",
        }

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> RestClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    # ---- low-level helpers ----

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, str] | None = None,
        json: Any = None,
    ) -> httpx.Response:
        try:
            response = await self._http.request(method, path, params=params, json=json)
        except httpx.TransportError as e:
            logger.info("%s %s failed: %s", method, path, e.__class__.__name__)
            raise TransportError(f"Could not reach the backend: {e}") from e

        logger.debug("%s %s -> %s", method, response.request.url, response.status_code)
        if response.is_error:
            raise RequestError(response.status_code, _error_message(response))
        return response

    async def _json(self, method: str, path: str, **kwargs: Any) -> tuple[int, Any]:
        response = await self._request(method, path, **kwargs)
        try:
            return response.status_code, response.json()
        except ValueError as e:
            raise RequestError(response.status_code, "Backend returned invalid JSON") from e

    async def _rows(self, method: str, path: str, parse: Callable[[Any], T], **kwargs: Any) -> list[T]:
        status, data = await self._json(method, path, **kwargs)
        if not isinstance(data, list):
            raise RequestError(status, UNEXPECTED_PAYLOAD)
        try:
            return [parse(row) for row in data]
        except _ROW_ERRORS as e:
            raise RequestError(status, UNEXPECTED_PAYLOAD) from e

    async def _single(self, method: str, path: str, **kwargs: Any) -> Task:
        status, data = await self._json(method, path, **kwargs)
        if isinstance(data, dict):
            data = [data]
        if not isinstance(data, list):
            raise RequestError(status, UNEXPECTED_PAYLOAD)
        if not data:
            raise RequestError(status, "Backend returned no record")
        try:
            return Task.from_row(data[0])
        except _ROW_ERRORS as e:
            raise RequestError(status, UNEXPECTED_PAYLOAD) from e

    # ---- categories ----

    async def list_categories(self) -> list[Category]:
        return await self._rows("GET", "/categories", Category.from_row, params={"order": "name.asc"})

    # ---- tasks ----

    async def list_tasks(self, query: TaskQuery | None = None) -> list[Task]:
        return await self._rows("GET", "/tasks", Task.from_row, params=build_task_params(query))

    async def get_task(self, task_id: RecordId) -> Task | None:
        """Fetch one task; an empty result means "not found" and returns None."""
        tasks = await self._rows("GET", "/tasks", Task.from_row, params={"id": _eq(task_id)})
        return tasks[0] if tasks else None

    async def create_task(self, payload: dict[str, Any]) -> Task:
        return await self._single("POST", "/tasks", json=payload)

    async def update_task(self, task_id: RecordId, payload: dict[str, Any]) -> Task:
        """PATCH only the given fields; returns the full stored record."""
        return await self._single("PATCH", "/tasks", params={"id": _eq(task_id)}, json=payload)

    async def delete_task(self, task_id: RecordId) -> None:
        await self._request("DELETE", "/tasks", params={"id": _eq(task_id)})
