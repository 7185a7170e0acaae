"""Persistence layer abstractions for repositories and unit of work."""

from __future__ import annotations

from collections.abc import Sequence
from types import TracebackType
from typing import Protocol

from student_service.domain import Course, Student, StudentId


class StudentRepository(Protocol):
    """CRUD, search and aggregate operations for student records.

    ``save`` inserts when the student has no id and replaces the stored record
    otherwise. It raises ``ConflictError`` when the email belongs to another
    record and ``NotFoundError`` when an id is given that storage does not know.
    """

    async def list_all(self) -> Sequence[Student]: ...

    async def find_by_id(self, student_id: StudentId) -> Student | None: ...

    async def find_by_name_containing(self, fragment: str) -> Sequence[Student]: ...

    async def find_by_course(self, course: Course) -> Sequence[Student]: ...

    async def save(self, student: Student) -> Student: ...

    async def delete_by_id(self, student_id: StudentId) -> None: ...

    async def exists_by_id(self, student_id: StudentId) -> bool: ...

    async def count(self) -> int: ...

    async def count_enrolled_students(self) -> int: ...


class UnitOfWork(Protocol):
    """Transactional boundary for repository operations."""

    student_repository: StudentRepository

    async def __aenter__(self) -> UnitOfWork: ...

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None: ...

    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...
