"""SQLite repository implementations."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from sqlalchemy import Select, distinct, func, or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from student_service.domain import COURSE_ORDER, Course, Student, StudentId
from student_service.persistence.errors import (
    ConflictError,
    InvalidQueryError,
    NotFoundError,
)
from student_service.persistence.interfaces import StudentRepository

from .models import StudentCourseRecord, StudentRecord

_NAME_ORDER = (StudentRecord.last_name, StudentRecord.first_name, StudentRecord.id)

# Registered on every connection by the unit of work; SQLite lower() only folds ASCII.
CASEFOLD_FUNCTION = "py_casefold"


def casefold_text(value: str | None) -> str | None:
    return None if value is None else value.casefold()


def _to_domain(record: StudentRecord) -> Student:
    return Student(
        id=StudentId(record.id),
        first_name=record.first_name,
        last_name=record.last_name,
        email=record.email,
        enrollment_date=record.enrollment_date,
        enrolled_courses=frozenset(Course(link.course) for link in record.courses),
    )


def _course_values(courses: Iterable[Course]) -> list[str]:
    wanted = set(courses)
    return [course.value for course in COURSE_ORDER if course in wanted]


class SQLiteStudentRepository(StudentRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _fetch(self, stmt: Select[tuple[StudentRecord]]) -> list[Student]:
        result = await self._session.execute(stmt)
        return [_to_domain(record) for record in result.scalars().all()]

    async def list_all(self) -> Sequence[Student]:
        return await self._fetch(select(StudentRecord).order_by(*_NAME_ORDER))

    async def find_by_id(self, student_id: StudentId) -> Student | None:
        record = await self._session.get(StudentRecord, int(student_id))
        if record is None:
            return None
        return _to_domain(record)

    async def find_by_name_containing(self, fragment: str) -> Sequence[Student]:
        if not fragment:
            msg = "Search fragment must not be empty"
            raise InvalidQueryError(msg)
        needle = fragment.casefold()
        casefold = getattr(func, CASEFOLD_FUNCTION)
        stmt = (
            select(StudentRecord)
            .where(
                or_(
                    casefold(StudentRecord.first_name).contains(needle, autoescape=True),
                    casefold(StudentRecord.last_name).contains(needle, autoescape=True),
                )
            )
            .order_by(*_NAME_ORDER)
        )
        return await self._fetch(stmt)

    async def find_by_course(self, course: Course) -> Sequence[Student]:
        stmt = (
            select(StudentRecord)
            .join(StudentRecord.courses)
            .where(StudentCourseRecord.course == course.value)
            .order_by(*_NAME_ORDER)
        )
        return await self._fetch(stmt)

    async def save(self, student: Student) -> Student:
        await self._ensure_email_available(student)
        if student.id is None:
            record = StudentRecord(
                first_name=student.first_name,
                last_name=student.last_name,
                email=student.email,
                enrollment_date=student.enrollment_date,
                courses=[
                    StudentCourseRecord(course=value)
                    for value in _course_values(student.enrolled_courses)
                ],
            )
            self._session.add(record)
        else:
            existing = await self._session.get(StudentRecord, int(student.id))
            if existing is None:
                msg = f"Student {student.id} not found"
                raise NotFoundError(msg)
            record = existing
            record.first_name = student.first_name
            record.last_name = student.last_name
            record.email = student.email
            record.enrollment_date = student.enrollment_date
            self._sync_courses(record, student.enrolled_courses)
        try:
            await self._session.flush()
        except IntegrityError as exc:
            msg = f"Email already registered: {student.email}"
            raise ConflictError(msg) from exc
        return _to_domain(record)

    async def delete_by_id(self, student_id: StudentId) -> None:
        record = await self._session.get(StudentRecord, int(student_id))
        if record is None:
            msg = f"Student {student_id} not found"
            raise NotFoundError(msg)
        await self._session.delete(record)
        await self._session.flush()

    async def exists_by_id(self, student_id: StudentId) -> bool:
        stmt = select(StudentRecord.id).where(StudentRecord.id == int(student_id)).limit(1)
        result = await self._session.execute(stmt)
        return result.first() is not None

    async def count(self) -> int:
        result = await self._session.execute(select(func.count()).select_from(StudentRecord))
        return int(result.scalar_one())

    async def count_enrolled_students(self) -> int:
        stmt = select(func.count(distinct(StudentCourseRecord.student_id)))
        result = await self._session.execute(stmt)
        return int(result.scalar_one())

    async def _ensure_email_available(self, student: Student) -> None:
        stmt = select(StudentRecord.id).where(StudentRecord.email == student.email)
        if student.id is not None:
            stmt = stmt.where(StudentRecord.id != int(student.id))
        result = await self._session.execute(stmt.limit(1))
        if result.first() is not None:
            msg = f"Email already registered: {student.email}"
            raise ConflictError(msg)

    @staticmethod
    def _sync_courses(record: StudentRecord, courses: frozenset[Course]) -> None:
        wanted = set(_course_values(courses))
        for link in list(record.courses):
            if link.course not in wanted:
                record.courses.remove(link)
        present = {link.course for link in record.courses}
        for value in sorted(wanted - present):
            record.courses.append(StudentCourseRecord(course=value))


__all__ = ["CASEFOLD_FUNCTION", "SQLiteStudentRepository", "casefold_text"]
