"""Shared type aliases for the domain layer."""

from __future__ import annotations

from typing import NewType

StudentId = NewType("StudentId", int)

__all__ = ["StudentId"]
