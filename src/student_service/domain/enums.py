"""Enumerations used across the student service domain layer."""

from __future__ import annotations

from enum import StrEnum


class Course(StrEnum):
    """Fixed catalogue of courses a student can enroll in."""

    COMPUTER_SCIENCE = "COMPUTER_SCIENCE"
    MATHEMATICS = "MATHEMATICS"
    PHYSICS = "PHYSICS"
    CHEMISTRY = "CHEMISTRY"
    BIOLOGY = "BIOLOGY"
    ENGINEERING = "ENGINEERING"
    BUSINESS = "BUSINESS"
    ECONOMICS = "ECONOMICS"
    PSYCHOLOGY = "PSYCHOLOGY"
    LITERATURE = "LITERATURE"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]

    @classmethod
    def parse(cls, value: str) -> Course:
        """Resolve a course by name, ignoring case and surrounding whitespace."""

        try:
            return cls(value.strip().upper())
        except ValueError as exc:
            msg = f"Unknown course: {value}"
            raise ValueError(msg) from exc


_DISPLAY_NAMES: dict[Course, str] = {
    Course.COMPUTER_SCIENCE: "Computer Science",
    Course.MATHEMATICS: "Mathematics",
    Course.PHYSICS: "Physics",
    Course.CHEMISTRY: "Chemistry",
    Course.BIOLOGY: "Biology",
    Course.ENGINEERING: "Engineering",
    Course.BUSINESS: "Business Administration",
    Course.ECONOMICS: "Economics",
    Course.PSYCHOLOGY: "Psychology",
    Course.LITERATURE: "Literature",
}

COURSE_ORDER: tuple[Course, ...] = tuple(Course)

__all__ = ["COURSE_ORDER", "Course"]
