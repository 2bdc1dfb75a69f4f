"""Error types raised by the ordering layer."""

from __future__ import annotations


class CafeOrderError(Exception):
    """Base class for ordering failures."""


class MalformedRecord(CafeOrderError, ValueError):
    """A menu record is missing its keys or carries an unknown role."""


class ValidationFailure(CafeOrderError, ValueError):
    """The order cannot be submitted as entered."""


class NetworkFailure(CafeOrderError, RuntimeError):
    """The backend could not be reached or rejected the request."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
