"""Student domain models and inbound payloads."""

from __future__ import annotations

from datetime import date
from typing import Annotated

from pydantic import Field, field_serializer

from student_service.utils.time import today

from .base import DomainModel, PayloadModel
from .enums import COURSE_ORDER, Course
from .types import StudentId

NonEmptyText = Annotated[str, Field(min_length=1)]


class Student(DomainModel):
    """A student record.

    ``id`` stays ``None`` until storage assigns one. Two records are equal when
    both ``id`` and ``email`` match; the remaining fields do not take part in
    equality or hashing.
    """

    id: StudentId | None = None
    first_name: NonEmptyText
    last_name: NonEmptyText
    email: NonEmptyText
    enrollment_date: date = Field(default_factory=today)
    enrolled_courses: frozenset[Course] = frozenset()

    def enroll_in(self, course: Course) -> Student:
        if course in self.enrolled_courses:
            return self
        return self.model_copy(update={"enrolled_courses": self.enrolled_courses | {course}})

    def drop(self, course: Course) -> Student:
        if course not in self.enrolled_courses:
            return self
        return self.model_copy(update={"enrolled_courses": self.enrolled_courses - {course}})

    @property
    def is_enrolled(self) -> bool:
        return bool(self.enrolled_courses)

    @field_serializer("enrolled_courses")
    def _serialize_courses(self, value: frozenset[Course]) -> list[str]:
        return [course.value for course in COURSE_ORDER if course in value]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Student):
            return NotImplemented
        return (self.id, self.email) == (other.id, other.email)

    def __hash__(self) -> int:
        return hash((self.id, self.email))


class StudentCreate(PayloadModel):
    """Body of a create request."""

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    enrollment_date: date | None = None
    enrolled_courses: list[str] | None = None


class StudentUpdate(PayloadModel):
    """Body of a partial update.

    Only fields that were supplied with a non-null value are merged into the
    stored record.
    """

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    enrollment_date: date | None = None

    def supplied_fields(self) -> dict[str, object]:
        return {
            name: getattr(self, name)
            for name in self.model_fields_set
            if getattr(self, name) is not None
        }


class EnrollmentRequest(PayloadModel):
    """Single-course body used by enroll and drop operations."""

    course: str | None = None


class StudentStats(DomainModel):
    """Aggregate enrollment figures."""

    total_students: int
    enrolled_students: int
    unenrolled_students: int
    enrollments_by_course: dict[str, int] = Field(default_factory=dict)
