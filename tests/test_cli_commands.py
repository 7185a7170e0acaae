from __future__ import annotations

from pathlib import Path

import pytest
from typer.testing import CliRunner

from student_service.cli import deps
from student_service.cli.app import app
from student_service.config import AppSettings
from student_service.container import ServiceContainer, build_container
from student_service.persistence import InMemoryUnitOfWork

runner = CliRunner()


def _row(output: str, label: str) -> str:
    """Return the table row mentioning ``label`` with the box characters removed."""

    line = next(line for line in output.splitlines() if label in line)
    for border in ("\u2502", "|"):
        line = line.replace(border, " ")
    return line.strip()


def _env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    db_url = f"sqlite+aiosqlite:///{tmp_path / 'cli.db'}"
    monkeypatch.setenv("STUDENT_SERVICE_DATABASE_URL", db_url)
    monkeypatch.setenv("STUDENT_SERVICE_ENV", "test")
    deps.reset_container()


@pytest.fixture
def memory_container(monkeypatch: pytest.MonkeyPatch) -> ServiceContainer:
    shared = InMemoryUnitOfWork()
    container = build_container(
        AppSettings(environment="test"),
        unit_of_work_factory=lambda: shared,
    )
    monkeypatch.setattr(deps, "get_container", lambda: container)
    return container


def test_show_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _env(monkeypatch, tmp_path)

    result = runner.invoke(app, ["show-settings"])

    assert result.exit_code == 0
    assert "Environment:\ttest" in result.stdout
    assert "cli.db" in result.stdout


def test_dotenv_file_fills_settings(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _env(monkeypatch, tmp_path)
    monkeypatch.setenv("STUDENT_SERVICE_LOG_LEVEL", "placeholder")
    monkeypatch.delenv("STUDENT_SERVICE_LOG_LEVEL")
    (tmp_path / ".env").write_text(
        "STUDENT_SERVICE_LOG_LEVEL=DEBUG\nSTUDENT_SERVICE_ENV=ignored\n",
        encoding="utf-8",
    )
    monkeypatch.chdir(tmp_path)

    result = runner.invoke(app, ["show-settings"])

    assert result.exit_code == 0
    assert "Log level:\tDEBUG" in result.stdout
    assert "Environment:\ttest" in result.stdout


def test_init_db_creates_schema(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    _env(monkeypatch, tmp_path)

    result = runner.invoke(app, ["init-db"])

    assert result.exit_code == 0
    assert "(0 students)" in result.stdout
    assert (tmp_path / "cli.db").exists()


def test_add_enroll_and_list(memory_container: ServiceContainer) -> None:
    added = runner.invoke(
        app,
        ["add-student", "John", "Doe", "john@x.com", "--enrolled-on", "2024-09-01"],
    )
    enrolled = runner.invoke(app, ["enroll", "1", "computer_science"])
    listed = runner.invoke(app, ["list-students"])

    assert added.exit_code == 0
    assert "Created student 1" in added.stdout
    assert enrolled.exit_code == 0
    assert "COMPUTER_SCIENCE" in enrolled.stdout
    assert listed.stdout.strip() == "1\tDoe, John\tjohn@x.com\t2024-09-01\tCOMPUTER_SCIENCE"


def test_add_student_with_courses_and_stats(memory_container: ServiceContainer) -> None:
    runner.invoke(app, ["add-student", "Ann", "Lee", "ann@x.com", "-c", "PHYSICS", "-c", "BIOLOGY"])
    runner.invoke(app, ["add-student", "Bob", "Ray", "bob@x.com"])

    result = runner.invoke(app, ["stats"])

    assert result.exit_code == 0
    assert _row(result.stdout, "Total students").endswith("2")
    assert _row(result.stdout, "Enrolled students").endswith("1")
    assert _row(result.stdout, "PHYSICS").endswith("1")
    assert "COMPUTER_SCIENCE" not in result.stdout


def test_search_update_drop_and_delete(memory_container: ServiceContainer) -> None:
    runner.invoke(app, ["add-student", "John", "Doe", "john@x.com", "-c", "ECONOMICS"])

    found = runner.invoke(app, ["search", "DOE"])
    updated = runner.invoke(app, ["update-student", "1", "--first-name", "Jon"])
    dropped = runner.invoke(app, ["drop", "1", "ECONOMICS"])
    deleted = runner.invoke(app, ["delete-student", "1"])
    missing = runner.invoke(app, ["show", "1"])

    assert "john@x.com" in found.stdout
    assert "Doe, Jon" in updated.stdout
    assert dropped.stdout.rstrip().endswith("-")
    assert deleted.exit_code == 0
    assert missing.exit_code == 1
    assert "Student not found with id: 1" in missing.stdout


def test_errors_exit_non_zero(memory_container: ServiceContainer) -> None:
    runner.invoke(app, ["add-student", "John", "Doe", "john@x.com"])

    duplicate = runner.invoke(app, ["add-student", "Jane", "Doe", "john@x.com"])
    bad_course = runner.invoke(app, ["enroll", "1", "ALCHEMY"])
    bad_id = runner.invoke(app, ["show", "abc"])

    assert duplicate.exit_code == 1
    assert "Error (409)" in duplicate.stdout
    assert bad_course.exit_code == 1
    assert "Unknown course: ALCHEMY" in bad_course.stdout
    assert bad_id.exit_code == 1
    assert "Invalid student ID format" in bad_id.stdout


def test_courses_lists_catalogue(memory_container: ServiceContainer) -> None:
    result = runner.invoke(app, ["courses"])

    assert result.exit_code == 0
    assert "Business Administration" in _row(result.stdout, "BUSINESS")
    assert "Computer Science" in _row(result.stdout, "COMPUTER_SCIENCE")
