"""Persistence layer for student records."""

from .errors import ConflictError, InvalidQueryError, NotFoundError, RepositoryError
from .interfaces import StudentRepository, UnitOfWork
from .memory import InMemoryStudentRepository, InMemoryUnitOfWork

__all__ = [
    "ConflictError",
    "InMemoryStudentRepository",
    "InMemoryUnitOfWork",
    "InvalidQueryError",
    "NotFoundError",
    "RepositoryError",
    "StudentRepository",
    "UnitOfWork",
]
