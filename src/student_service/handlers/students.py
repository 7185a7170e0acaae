"""Request handlers for student operations.

Each public coroutine validates its input, runs the repository calls inside a
single unit of work and returns a :class:`HandlerResponse`. Failures never
escape a handler: they are mapped to an error response carrying a single
``error`` message.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Awaitable, Callable, Mapping
from dataclasses import dataclass
from datetime import date
from http import HTTPStatus
from typing import Any

from pydantic import BaseModel, ValidationError

from student_service.domain import (
    Course,
    EnrollmentRequest,
    Student,
    StudentCreate,
    StudentId,
    StudentStats,
    StudentUpdate,
)
from student_service.persistence import (
    ConflictError,
    InvalidQueryError,
    NotFoundError,
    UnitOfWork,
)
from student_service.utils import today

from .exceptions import InvalidInputError, StudentNotFoundError

UnitOfWorkFactory = Callable[[], UnitOfWork]
Payload = Mapping[str, Any] | None

logger = logging.getLogger(__name__)

_ID_PATTERN = re.compile(r"[+-]?\d+")
_ID_MIN = -(2**63)
_ID_MAX = 2**63 - 1
_REQUIRED_TEXT = (
    ("first_name", "First name"),
    ("last_name", "Last name"),
    ("email", "Email"),
)


@dataclass(frozen=True, slots=True)
class HandlerResponse:
    """Outcome of a handled request: a status and an optional JSON body."""

    status: HTTPStatus
    body: Any = None

    @property
    def ok(self) -> bool:
        return self.status < HTTPStatus.BAD_REQUEST


def _error(status: HTTPStatus, message: str) -> HandlerResponse:
    return HandlerResponse(status, {"error": message})


def _dump(model: BaseModel) -> dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True)


def _describe(exc: ValidationError) -> str:
    first = exc.errors()[0]
    location = ".".join(str(part) for part in first["loc"])
    if not location:
        return f"Invalid request body: {first['msg']}"
    return f"Invalid value for {location}: {first['msg']}"


def parse_student_id(raw: str | int | None) -> StudentId:
    """Parse a student identifier supplied as text.

    Identifiers are signed 64-bit integers; anything outside that range is
    rejected like any other malformed value.
    """

    if isinstance(raw, int):
        value = raw
    elif raw is not None and _ID_PATTERN.fullmatch(raw):
        value = int(raw)
    else:
        raise InvalidInputError("Invalid student ID format")
    if not _ID_MIN <= value <= _ID_MAX:
        raise InvalidInputError("Invalid student ID format")
    return StudentId(value)


def parse_course(raw: str | None) -> Course:
    if raw is None or not raw.strip():
        raise InvalidInputError("Course is required")
    try:
        return Course.parse(raw)
    except ValueError as exc:
        raise InvalidInputError(str(exc)) from exc


def _required_text(value: str | None, label: str) -> str:
    if value is None or not value.strip():
        raise InvalidInputError(f"{label} is required")
    return value.strip()


class StudentHandlers:
    """Validates student requests and maps them onto repository calls."""

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        *,
        clock: Callable[[], date] = today,
    ) -> None:
        self._uow_factory = uow_factory
        self._clock = clock

    async def _guarded(
        self,
        context: str,
        operation: Callable[[], Awaitable[HandlerResponse]],
    ) -> HandlerResponse:
        try:
            return await operation()
        except (InvalidInputError, InvalidQueryError) as exc:
            return _error(HTTPStatus.BAD_REQUEST, str(exc))
        except ValidationError as exc:
            return _error(HTTPStatus.BAD_REQUEST, _describe(exc))
        except (StudentNotFoundError, NotFoundError) as exc:
            return _error(HTTPStatus.NOT_FOUND, str(exc))
        except ConflictError as exc:
            return _error(HTTPStatus.CONFLICT, str(exc))
        except Exception as exc:
            logger.exception(context)
            return _error(HTTPStatus.INTERNAL_SERVER_ERROR, f"{context}: {exc}")

    async def list_students(self) -> HandlerResponse:
        async def _run() -> HandlerResponse:
            async with self._uow_factory() as uow:
                students = await uow.student_repository.list_all()
            return HandlerResponse(HTTPStatus.OK, [_dump(student) for student in students])

        return await self._guarded("Error listing students", _run)

    async def get_student(self, raw_id: str | int | None) -> HandlerResponse:
        async def _run() -> HandlerResponse:
            student_id = parse_student_id(raw_id)
            async with self._uow_factory() as uow:
                student = await uow.student_repository.find_by_id(student_id)
            if student is None:
                raise StudentNotFoundError(student_id)
            return HandlerResponse(HTTPStatus.OK, _dump(student))

        return await self._guarded("Error retrieving student", _run)

    async def search_students(self, name: str | None) -> HandlerResponse:
        async def _run() -> HandlerResponse:
            if name is None or not name.strip():
                raise InvalidInputError("Query parameter 'name' is required")
            async with self._uow_factory() as uow:
                students = await uow.student_repository.find_by_name_containing(name.strip())
            return HandlerResponse(HTTPStatus.OK, [_dump(student) for student in students])

        return await self._guarded("Error searching students", _run)

    async def create_student(self, payload: Payload) -> HandlerResponse:
        async def _run() -> HandlerResponse:
            data = StudentCreate.model_validate(payload or {})
            student = Student(
                first_name=_required_text(data.first_name, "First name"),
                last_name=_required_text(data.last_name, "Last name"),
                email=_required_text(data.email, "Email"),
                enrollment_date=data.enrollment_date or self._clock(),
                enrolled_courses=frozenset(
                    parse_course(value) for value in data.enrolled_courses or ()
                ),
            )
            async with self._uow_factory() as uow:
                saved = await uow.student_repository.save(student)
                await uow.commit()
            logger.info("Created student %s <%s>", saved.id, saved.email)
            return HandlerResponse(HTTPStatus.CREATED, _dump(saved))

        return await self._guarded("Error creating student", _run)

    async def update_student(self, raw_id: str | int | None, payload: Payload) -> HandlerResponse:
        """Merge the supplied, non-null fields of ``payload`` into a stored student.

        Omitted and null fields leave the stored values untouched. Names and
        email may not be replaced with blank text.
        """

        async def _run() -> HandlerResponse:
            student_id = parse_student_id(raw_id)
            changes = StudentUpdate.model_validate(payload or {}).supplied_fields()
            for field_name, label in _REQUIRED_TEXT:
                if field_name in changes:
                    value = str(changes[field_name]).strip()
                    if not value:
                        raise InvalidInputError(f"{label} must not be blank")
                    changes[field_name] = value
            async with self._uow_factory() as uow:
                existing = await uow.student_repository.find_by_id(student_id)
                if existing is None:
                    raise StudentNotFoundError(student_id)
                saved = await uow.student_repository.save(existing.model_copy(update=changes))
                await uow.commit()
            logger.info("Updated student %s fields=%s", student_id, sorted(changes))
            return HandlerResponse(HTTPStatus.OK, _dump(saved))

        return await self._guarded("Error updating student", _run)

    async def delete_student(self, raw_id: str | int | None) -> HandlerResponse:
        async def _run() -> HandlerResponse:
            student_id = parse_student_id(raw_id)
            async with self._uow_factory() as uow:
                if not await uow.student_repository.exists_by_id(student_id):
                    raise StudentNotFoundError(student_id)
                await uow.student_repository.delete_by_id(student_id)
                await uow.commit()
            logger.info("Deleted student %s", student_id)
            return HandlerResponse(HTTPStatus.NO_CONTENT)

        return await self._guarded("Error deleting student", _run)

    async def enroll_student(self, raw_id: str | int | None, payload: Payload) -> HandlerResponse:
        async def _run() -> HandlerResponse:
            student_id = parse_student_id(raw_id)
            course = parse_course(EnrollmentRequest.model_validate(payload or {}).course)
            saved = await self._change_courses(student_id, lambda s: s.enroll_in(course))
            logger.info("Enrolled student %s in %s", student_id, course.value)
            return HandlerResponse(HTTPStatus.OK, _dump(saved))

        return await self._guarded("Error enrolling student", _run)

    async def drop_course(self, raw_id: str | int | None, payload: Payload) -> HandlerResponse:
        async def _run() -> HandlerResponse:
            student_id = parse_student_id(raw_id)
            course = parse_course(EnrollmentRequest.model_validate(payload or {}).course)
            saved = await self._change_courses(student_id, lambda s: s.drop(course))
            logger.info("Dropped %s for student %s", course.value, student_id)
            return HandlerResponse(HTTPStatus.OK, _dump(saved))

        return await self._guarded("Error dropping course", _run)

    async def get_stats(self) -> HandlerResponse:
        async def _run() -> HandlerResponse:
            async with self._uow_factory() as uow:
                repository = uow.student_repository
                total = await repository.count()
                enrolled = await repository.count_enrolled_students()
                by_course: dict[str, int] = {}
                for course in Course:
                    matches = len(await repository.find_by_course(course))
                    if matches > 0:
                        by_course[course.value] = matches
            stats = StudentStats(
                total_students=total,
                enrolled_students=enrolled,
                unenrolled_students=total - enrolled,
                enrollments_by_course=by_course,
            )
            return HandlerResponse(HTTPStatus.OK, _dump(stats))

        return await self._guarded("Error generating statistics", _run)

    async def list_courses(self) -> HandlerResponse:
        catalogue = [{"name": course.value, "displayName": course.display_name} for course in Course]
        return HandlerResponse(HTTPStatus.OK, catalogue)

    async def _change_courses(
        self,
        student_id: StudentId,
        change: Callable[[Student], Student],
    ) -> Student:
        async with self._uow_factory() as uow:
            student = await uow.student_repository.find_by_id(student_id)
            if student is None:
                raise StudentNotFoundError(student_id)
            saved = await uow.student_repository.save(change(student))
            await uow.commit()
        return saved


__all__ = [
    "HandlerResponse",
    "StudentHandlers",
    "UnitOfWorkFactory",
    "parse_course",
    "parse_student_id",
]
