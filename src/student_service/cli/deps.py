"""Shared CLI dependency helpers."""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from dotenv import load_dotenv

from student_service.config import AppSettings
from student_service.container import ServiceContainer, build_container
from student_service.handlers import StudentHandlers


@lru_cache(maxsize=1)
def get_container() -> ServiceContainer:
    """Return the service container shared by every command in this process.

    Values from a ``.env`` file in the working directory fill in any
    ``STUDENT_SERVICE_*`` variables not already set in the environment.
    """

    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(env_path)
    return build_container(AppSettings.from_env())


def get_student_handlers() -> StudentHandlers:
    return get_container().student_handlers


def reset_container() -> None:
    """Drop the cached container so the next command re-reads the environment."""

    get_container.cache_clear()
