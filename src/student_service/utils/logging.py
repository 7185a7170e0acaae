"""Logging configuration for the server and CLI entry points."""

from __future__ import annotations

import logging
import sys

_QUIET_LOGGERS = ("uvicorn.access", "httpx", "httpcore", "sqlalchemy", "asyncio", "aiosqlite")


def configure_logging(level: str = "INFO") -> None:
    """Route stdlib logging to stdout at ``level``."""

    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    logging.basicConfig(
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
        level=log_level,
    )
    for logger_name in _QUIET_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)
    logging.getLogger("student_service").setLevel(log_level)
