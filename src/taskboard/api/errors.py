# src/taskboard/api/errors.py

from __future__ import annotations


class BackendError(Exception):
    """Base class for everything the REST client raises."""

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


class RequestError(BackendError):
    """The backend answered with a non-success HTTP status."""

    def __init__(self, status: int, message: str) -> None:
        super().__init__(message)
        self.status = status

    def __repr__(self) -> str:
        return f"RequestError(status={self.status!r}, message={self.message!r})"


class TransportError(BackendError):
    """The request could not be sent or no response was received."""
