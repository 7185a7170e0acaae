"""HTTP transport for the student service."""

from .app import create_app

__all__ = ["create_app"]
