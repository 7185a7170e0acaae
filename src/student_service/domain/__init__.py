"""Domain models for the student service."""

from .base import DomainModel, PayloadModel
from .enums import COURSE_ORDER, Course
from .student import (
    EnrollmentRequest,
    Student,
    StudentCreate,
    StudentStats,
    StudentUpdate,
)
from .types import StudentId

__all__ = [
    "COURSE_ORDER",
    "Course",
    "DomainModel",
    "EnrollmentRequest",
    "PayloadModel",
    "Student",
    "StudentCreate",
    "StudentId",
    "StudentStats",
    "StudentUpdate",
]
