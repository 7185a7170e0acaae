"""Run the CLI with ``python -m student_service.cli``."""

from __future__ import annotations

from .app import app

if __name__ == "__main__":
    app(prog_name="student-service")
