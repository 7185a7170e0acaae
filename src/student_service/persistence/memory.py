"""In-memory repository implementations for unit testing."""

from __future__ import annotations

import asyncio
import itertools
from collections.abc import Callable, Iterable, Sequence
from copy import deepcopy
from dataclasses import dataclass, field
from types import TracebackType
from typing import TypeVar

from student_service.domain import Course, Student, StudentId
from student_service.persistence.errors import (
    ConflictError,
    InvalidQueryError,
    NotFoundError,
)
from student_service.persistence.interfaces import StudentRepository, UnitOfWork

T = TypeVar("T")


def _copy(value: T) -> T:
    return deepcopy(value)


def _name_order(student: Student) -> tuple[str, str, int]:
    return (student.last_name, student.first_name, student.id or 0)


def _sorted(students: Iterable[Student]) -> list[Student]:
    return [_copy(student) for student in sorted(students, key=_name_order)]


@dataclass
class InMemoryStudentRepository(StudentRepository):
    _students: dict[StudentId, Student] = field(default_factory=dict)
    _ids: Callable[[], int] = field(default_factory=lambda: itertools.count(1).__next__)

    async def list_all(self) -> Sequence[Student]:
        return _sorted(self._students.values())

    async def find_by_id(self, student_id: StudentId) -> Student | None:
        return _copy(self._students.get(student_id))

    async def find_by_name_containing(self, fragment: str) -> Sequence[Student]:
        if not fragment:
            msg = "Search fragment must not be empty"
            raise InvalidQueryError(msg)
        needle = fragment.casefold()
        return _sorted(
            student
            for student in self._students.values()
            if needle in student.first_name.casefold() or needle in student.last_name.casefold()
        )

    async def find_by_course(self, course: Course) -> Sequence[Student]:
        return _sorted(
            student for student in self._students.values() if course in student.enrolled_courses
        )

    async def save(self, student: Student) -> Student:
        if student.id is not None and student.id not in self._students:
            msg = f"Student {student.id} not found"
            raise NotFoundError(msg)
        for existing in self._students.values():
            if existing.email == student.email and existing.id != student.id:
                msg = f"Email already registered: {student.email}"
                raise ConflictError(msg)
        stored = student
        if stored.id is None:
            stored = student.model_copy(update={"id": StudentId(self._ids())})
        self._students[stored.id] = stored
        return _copy(stored)

    async def delete_by_id(self, student_id: StudentId) -> None:
        if self._students.pop(student_id, None) is None:
            msg = f"Student {student_id} not found"
            raise NotFoundError(msg)

    async def exists_by_id(self, student_id: StudentId) -> bool:
        return student_id in self._students

    async def count(self) -> int:
        return len(self._students)

    async def count_enrolled_students(self) -> int:
        return sum(1 for student in self._students.values() if student.is_enrolled)


@dataclass
class InMemoryUnitOfWork(UnitOfWork):
    student_repository: InMemoryStudentRepository = field(
        default_factory=InMemoryStudentRepository
    )
    _lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    async def __aenter__(self) -> InMemoryUnitOfWork:
        await self._lock.acquire()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self._lock.release()

    async def commit(self) -> None:
        return None

    async def rollback(self) -> None:
        return None
