"""Errors raised by the quote service and their HTTP form."""

from __future__ import annotations

from typing import Any


class AppError(Exception):
    """Base class for errors that map onto an HTTP response."""

    status_code = 500
    label = "Error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __str__(self) -> str:
        return f"{self.label}: {self.message}"

    def to_response(self) -> tuple[int, dict[str, Any]]:
        """Return the HTTP status code and the JSON body for this error."""
        return self.status_code, {"error": self.message}


class NotFoundError(AppError):
    """The requested item does not exist."""

    status_code = 404
    label = "Not Found"


class InternalError(AppError):
    """An unexpected failure inside the service."""

    status_code = 500
    label = "Internal Error"


class DatabaseError(AppError):
    """A failure reported by the database."""

    status_code = 500
    label = "Database Error"

    def __init__(self, error: BaseException | str) -> None:
        self.error = error
        super().__init__(str(error))


class InvalidInputError(AppError):
    """The request carried invalid data."""

    status_code = 400
    label = "Invalid Input"


class UnauthorizedError(AppError):
    """The caller is not allowed to do this."""

    status_code = 401
    label = "Unauthorized"

    def __init__(self) -> None:
        super().__init__("Unauthorized")

    def __str__(self) -> str:
        return "Unauthorized"