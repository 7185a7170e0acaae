"""Time-related helpers."""

from __future__ import annotations

from datetime import UTC, date, datetime


def utc_now() -> datetime:
    """Return a timezone-aware UTC timestamp."""

    return datetime.now(UTC)


def today() -> date:
    """Return the current calendar date in UTC."""

    return utc_now().date()
