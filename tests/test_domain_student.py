from __future__ import annotations

from datetime import UTC, date, datetime

import pytest
from pydantic import ValidationError

from student_service.domain import (
    Course,
    EnrollmentRequest,
    Student,
    StudentId,
    StudentStats,
    StudentUpdate,
)
from student_service.utils import time as time_utils


def _student(**overrides: object) -> Student:
    values: dict[str, object] = {
        "first_name": "John",
        "last_name": "Doe",
        "email": "john@x.com",
    }
    values.update(overrides)
    return Student(**values)


def test_course_catalogue_has_ten_fixed_values() -> None:
    assert len(Course) == 10
    assert Course.COMPUTER_SCIENCE.value == "COMPUTER_SCIENCE"
    assert Course.BUSINESS.display_name == "Business Administration"
    assert Course.parse(" computer_science ") is Course.COMPUTER_SCIENCE


def test_course_parse_rejects_display_labels() -> None:
    with pytest.raises(ValueError, match="Unknown course: Computer Science"):
        Course.parse("Computer Science")


def test_new_student_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    # 23:30 the evening before in UTC-5
    monkeypatch.setattr(time_utils, "utc_now", lambda: datetime(2025, 3, 15, 4, 30, tzinfo=UTC))

    student = _student()

    assert student.id is None
    assert student.enrollment_date == date(2025, 3, 15)
    assert student.enrolled_courses == frozenset()
    assert not student.is_enrolled


def test_student_requires_non_empty_text() -> None:
    with pytest.raises(ValidationError):
        _student(email="")


def test_student_equality_uses_id_and_email_only() -> None:
    first = _student(id=StudentId(1), first_name="John")
    renamed = _student(id=StudentId(1), first_name="Johnny", enrolled_courses={Course.PHYSICS})
    other_email = _student(id=StudentId(1), email="other@x.com")

    assert first == renamed
    assert hash(first) == hash(renamed)
    assert first != other_email
    assert _student() != _student(id=StudentId(2))


def test_enroll_is_idempotent_and_drop_removes() -> None:
    student = _student(id=StudentId(3))

    enrolled = student.enroll_in(Course.MATHEMATICS).enroll_in(Course.MATHEMATICS)
    assert enrolled.enrolled_courses == frozenset({Course.MATHEMATICS})
    assert student.enrolled_courses == frozenset()

    dropped = enrolled.drop(Course.MATHEMATICS)
    assert dropped.enrolled_courses == frozenset()
    assert dropped.drop(Course.PHYSICS) is dropped


def test_student_serialises_camel_case_with_catalogue_order() -> None:
    student = _student(
        id=StudentId(7),
        enrollment_date=date(2024, 9, 1),
        enrolled_courses={Course.LITERATURE, Course.COMPUTER_SCIENCE},
    )

    payload = student.model_dump(mode="json", by_alias=True)

    assert payload == {
        "id": 7,
        "firstName": "John",
        "lastName": "Doe",
        "email": "john@x.com",
        "enrollmentDate": "2024-09-01",
        "enrolledCourses": ["COMPUTER_SCIENCE", "LITERATURE"],
    }
    assert Student.model_validate(payload).enrolled_courses == student.enrolled_courses


def test_update_payload_reports_only_supplied_non_null_fields() -> None:
    update = StudentUpdate.model_validate({"firstName": "Jane", "lastName": None, "unknown": 1})

    assert update.supplied_fields() == {"first_name": "Jane"}
    assert StudentUpdate.model_validate({}).supplied_fields() == {}


def test_enrollment_request_and_stats_aliases() -> None:
    assert EnrollmentRequest.model_validate({}).course is None
    stats = StudentStats(
        total_students=2,
        enrolled_students=1,
        unenrolled_students=1,
        enrollments_by_course={"PHYSICS": 1},
    )
    assert stats.model_dump(by_alias=True) == {
        "totalStudents": 2,
        "enrolledStudents": 1,
        "unenrolledStudents": 1,
        "enrollmentsByCourse": {"PHYSICS": 1},
    }
