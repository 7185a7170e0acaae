from __future__ import annotations

import asyncio
from datetime import date
from pathlib import Path

import pytest
from sqlalchemy import text
from sqlalchemy.ext.asyncio import create_async_engine

from student_service.domain import Course, Student
from student_service.persistence.sqlite import create_sqlite_unit_of_work_factory
from student_service.persistence.sqlite.migrations import SCHEMA_VERSION


def _db_url(tmp_path: Path) -> str:
    db_file = tmp_path / "students.db"
    return f"sqlite+aiosqlite:///{db_file}"


def _student(email: str = "john@x.com") -> Student:
    return Student(
        first_name="John",
        last_name="Doe",
        email=email,
        enrollment_date=date(2024, 1, 15),
        enrolled_courses=frozenset({Course.ENGINEERING}),
    )


def test_sqlite_records_schema_version(tmp_path: Path) -> None:
    url = _db_url(tmp_path)
    factory = create_sqlite_unit_of_work_factory(url)

    async def _run() -> tuple[int | None, list[str]]:
        async with factory() as uow:
            await uow.student_repository.count()
        engine = create_async_engine(url)
        try:
            async with engine.connect() as conn:
                version = (
                    await conn.execute(
                        text("SELECT MAX(version) FROM student_service_schema_migrations")
                    )
                ).scalar()
                tables = (
                    await conn.execute(
                        text("SELECT name FROM sqlite_master WHERE type = 'table' ORDER BY name")
                    )
                ).scalars().all()
        finally:
            await engine.dispose()
        return version, list(tables)

    version, tables = asyncio.run(_run())

    assert version == SCHEMA_VERSION
    assert {"students", "student_courses"} <= set(tables)


def test_sqlite_rolls_back_when_unit_of_work_fails(tmp_path: Path) -> None:
    factory = create_sqlite_unit_of_work_factory(_db_url(tmp_path))

    async def _store_then_fail() -> None:
        async with factory() as uow:
            await uow.student_repository.save(_student())
            raise RuntimeError("boom")

    async def _count() -> int:
        async with factory() as uow:
            return await uow.student_repository.count()

    async def _run() -> int:
        with pytest.raises(RuntimeError, match="boom"):
            await _store_then_fail()
        return await _count()

    assert asyncio.run(_run()) == 0


def test_sqlite_persists_across_units_of_work(tmp_path: Path) -> None:
    factory = create_sqlite_unit_of_work_factory(_db_url(tmp_path))

    async def _run() -> Student | None:
        async with factory() as uow:
            saved = await uow.student_repository.save(_student())
            await uow.commit()
        async with factory() as uow:
            return await uow.student_repository.find_by_id(saved.id)

    loaded = asyncio.run(_run())

    assert loaded is not None
    assert loaded.enrollment_date == date(2024, 1, 15)
    assert loaded.enrolled_courses == frozenset({Course.ENGINEERING})


def test_unit_of_work_requires_active_session(tmp_path: Path) -> None:
    factory = create_sqlite_unit_of_work_factory(_db_url(tmp_path))

    with pytest.raises(RuntimeError, match="session not started"):
        asyncio.run(factory().commit())
