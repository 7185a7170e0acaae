"""Exceptions raised while validating and serving student requests."""

from __future__ import annotations


class HandlerError(RuntimeError):
    """Base class for request handling failures."""


class InvalidInputError(HandlerError, ValueError):
    """Raised when a request carries a malformed or missing value."""


class StudentNotFoundError(HandlerError):
    """Raised when a request targets a student that does not exist."""

    def __init__(self, student_id: int) -> None:
        super().__init__(f"Student not found with id: {student_id}")
        self.student_id = student_id
