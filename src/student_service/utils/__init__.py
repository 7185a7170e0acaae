"""Shared utilities."""

from .logging import configure_logging
from .time import today, utc_now

__all__ = ["configure_logging", "today", "utc_now"]
