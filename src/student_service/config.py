"""Lightweight application configuration loader."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() not in {"0", "false", "no"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError as exc:
        msg = f"{name} must be an integer, got {raw!r}"
        raise ValueError(msg) from exc


@dataclass(frozen=True)
class AppSettings:
    """Immutable configuration sourced from environment variables."""

    environment: str = "development"
    database_url: str = "sqlite+aiosqlite:///student_service.db"
    host: str = "127.0.0.1"
    port: int = 8080
    log_level: str = "INFO"
    create_schema: bool = True

    @classmethod
    def from_env(cls) -> AppSettings:
        return cls(
            environment=os.getenv("STUDENT_SERVICE_ENV", cls.environment),
            database_url=os.getenv("STUDENT_SERVICE_DATABASE_URL", cls.database_url),
            host=os.getenv("STUDENT_SERVICE_HOST", cls.host),
            port=_env_int("STUDENT_SERVICE_PORT", cls.port),
            log_level=os.getenv("STUDENT_SERVICE_LOG_LEVEL", cls.log_level).upper(),
            create_schema=_env_bool("STUDENT_SERVICE_CREATE_SCHEMA", cls.create_schema),
        )


__all__ = ["AppSettings"]
