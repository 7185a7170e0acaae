"""Request handling for student operations."""

from .exceptions import HandlerError, InvalidInputError, StudentNotFoundError
from .students import (
    HandlerResponse,
    StudentHandlers,
    UnitOfWorkFactory,
    parse_course,
    parse_student_id,
)

__all__ = [
    "HandlerError",
    "HandlerResponse",
    "InvalidInputError",
    "StudentHandlers",
    "StudentNotFoundError",
    "UnitOfWorkFactory",
    "parse_course",
    "parse_student_id",
]
