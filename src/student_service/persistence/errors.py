"""Custom persistence exceptions."""

from __future__ import annotations


class RepositoryError(RuntimeError):
    """Base class for persistence layer errors."""


class NotFoundError(RepositoryError):
    """Raised when a requested entity is missing."""


class ConflictError(RepositoryError):
    """Raised when a write would violate a uniqueness constraint."""


class InvalidQueryError(RepositoryError, ValueError):
    """Raised when query arguments cannot be evaluated."""
