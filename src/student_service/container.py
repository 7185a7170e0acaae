"""Service container wiring application components."""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

from student_service.config import AppSettings
from student_service.handlers import StudentHandlers
from student_service.persistence import UnitOfWork
from student_service.persistence.sqlite import create_sqlite_unit_of_work_factory

UnitOfWorkFactory = Callable[[], UnitOfWork]


logger = logging.getLogger(__name__)


@dataclass(slots=True)
class ServiceContainer:
    """Aggregates constructed services with shared configuration."""

    settings: AppSettings
    unit_of_work_factory: UnitOfWorkFactory
    student_handlers: StudentHandlers


def _ensure_sqlite_directory(database_url: str) -> None:
    if not database_url.startswith("sqlite"):
        return
    try:
        _, path = database_url.split(":///", maxsplit=1)
    except ValueError:
        return
    if not path or path == ":memory:":
        return
    db_path = Path(path).expanduser()
    db_path.parent.mkdir(parents=True, exist_ok=True)


def build_container(
    settings: AppSettings | None = None,
    *,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
) -> ServiceContainer:
    """Construct the primary service container.

    A ready-made ``unit_of_work_factory`` replaces the SQLite backend, which is
    how tests plug in the in-memory implementation.
    """

    resolved_settings = settings or AppSettings.from_env()
    if unit_of_work_factory is None:
        _ensure_sqlite_directory(resolved_settings.database_url)
        unit_of_work_factory = create_sqlite_unit_of_work_factory(
            resolved_settings.database_url,
            create_schema=resolved_settings.create_schema,
        )
        logger.debug("Using database %s", resolved_settings.database_url)

    return ServiceContainer(
        settings=resolved_settings,
        unit_of_work_factory=unit_of_work_factory,
        student_handlers=StudentHandlers(unit_of_work_factory),
    )


__all__ = ["ServiceContainer", "UnitOfWorkFactory", "build_container"]
