"""SQLAlchemy ORM models for student SQLite persistence."""

from __future__ import annotations

from datetime import date

from sqlalchemy import Date, ForeignKey, Integer, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column, relationship


class Base(DeclarativeBase):  # type: ignore[misc]
    pass


class StudentRecord(Base):
    __tablename__ = "students"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False, index=True)
    email: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)
    enrollment_date: Mapped[date] = mapped_column(Date, nullable=False)
    courses: Mapped[list[StudentCourseRecord]] = relationship(
        back_populates="student",
        cascade="all, delete-orphan",
        lazy="selectin",
    )


class StudentCourseRecord(Base):
    __tablename__ = "student_courses"

    student_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("students.id", ondelete="CASCADE"),
        primary_key=True,
    )
    course: Mapped[str] = mapped_column(String(32), primary_key=True, index=True)
    student: Mapped[StudentRecord] = relationship(back_populates="courses")
