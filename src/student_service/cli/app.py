"""Typer CLI wiring student service handlers."""

from __future__ import annotations

import asyncio
from collections.abc import Coroutine, Mapping
from typing import Any

import typer
from rich.console import Console
from rich.table import Table

from student_service.handlers import HandlerResponse
from student_service.utils import configure_logging

from . import deps

app = typer.Typer(help="Student service command-line interface")
console = Console()


def _call(operation: Coroutine[Any, Any, HandlerResponse]) -> HandlerResponse:
    result = asyncio.run(operation)
    if not result.ok:
        typer.echo(f"Error ({result.status.value}): {result.body['error']}")
        raise typer.Exit(code=1)
    return result


def _format_student(student: Mapping[str, Any]) -> str:
    courses = ", ".join(student["enrolledCourses"]) or "-"
    return (
        f"{student['id']}\t{student['lastName']}, {student['firstName']}"
        f"\t{student['email']}\t{student['enrollmentDate']}\t{courses}"
    )


def _echo_students(students: list[Mapping[str, Any]]) -> None:
    if not students:
        typer.echo("No students found")
        return
    for student in students:
        typer.echo(_format_student(student))


@app.command("show-settings")
def show_settings() -> None:
    """Print the resolved application settings."""

    container = deps.get_container()
    settings = container.settings
    typer.echo("Environment:\t" + settings.environment)
    typer.echo("Database URL:\t" + settings.database_url)
    typer.echo(f"Listen:\t\t{settings.host}:{settings.port}")
    typer.echo("Log level:\t" + settings.log_level)


@app.command("init-db")
def init_db() -> None:
    """Create the database schema if it does not exist yet."""

    container = deps.get_container()

    async def _run() -> int:
        async with container.unit_of_work_factory() as uow:
            return await uow.student_repository.count()

    total = asyncio.run(_run())
    typer.echo(f"Database ready at {container.settings.database_url} ({total} students)")


@app.command("serve")
def serve(
    host: str | None = typer.Option(None, help="Override the listen address"),
    port: int | None = typer.Option(None, min=1, max=65535, help="Override the listen port"),
) -> None:
    """Run the HTTP API with uvicorn."""

    import uvicorn

    from student_service.api import create_app

    container = deps.get_container()
    settings = container.settings
    configure_logging(settings.log_level)
    uvicorn.run(
        create_app(container),
        host=host or settings.host,
        port=port or settings.port,
        log_level=settings.log_level.lower(),
    )


@app.command("add-student")
def add_student(
    first_name: str,
    last_name: str,
    email: str,
    enrolled_on: str | None = typer.Option(None, help="Enrollment date (YYYY-MM-DD)"),
    course: list[str] | None = typer.Option(None, "--course", "-c", help="Course to enroll in"),
) -> None:
    """Create a student record."""

    payload: dict[str, Any] = {"firstName": first_name, "lastName": last_name, "email": email}
    if enrolled_on is not None:
        payload["enrollmentDate"] = enrolled_on
    if course:
        payload["enrolledCourses"] = list(course)

    result = _call(deps.get_student_handlers().create_student(payload))
    typer.echo(f"Created student {result.body['id']}")


@app.command("list-students")
def list_students() -> None:
    """List students ordered by last name, then first name."""

    result = _call(deps.get_student_handlers().list_students())
    _echo_students(result.body)


@app.command("show")
def show_student(student_id: str) -> None:
    """Display a single student."""

    result = _call(deps.get_student_handlers().get_student(student_id))
    typer.echo(_format_student(result.body))


@app.command("search")
def search(name: str) -> None:
    """Find students whose first or last name contains NAME."""

    result = _call(deps.get_student_handlers().search_students(name))
    _echo_students(result.body)


@app.command("update-student")
def update_student(
    student_id: str,
    first_name: str | None = typer.Option(None, help="New first name"),
    last_name: str | None = typer.Option(None, help="New last name"),
    email: str | None = typer.Option(None, help="New email"),
) -> None:
    """Change selected fields of a student."""

    payload = {
        key: value
        for key, value in (("firstName", first_name), ("lastName", last_name), ("email", email))
        if value is not None
    }
    result = _call(deps.get_student_handlers().update_student(student_id, payload))
    typer.echo(_format_student(result.body))


@app.command("enroll")
def enroll(student_id: str, course: str) -> None:
    """Enroll a student in COURSE."""

    handlers = deps.get_student_handlers()
    result = _call(handlers.enroll_student(student_id, {"course": course}))
    typer.echo(_format_student(result.body))


@app.command("drop")
def drop(student_id: str, course: str) -> None:
    """Remove COURSE from a student's enrollments."""

    handlers = deps.get_student_handlers()
    result = _call(handlers.drop_course(student_id, {"course": course}))
    typer.echo(_format_student(result.body))


@app.command("delete-student")
def delete_student(student_id: str) -> None:
    """Delete a student record."""

    _call(deps.get_student_handlers().delete_student(student_id))
    typer.echo(f"Deleted student {student_id}")


@app.command("stats")
def stats() -> None:
    """Show enrollment statistics."""

    result = _call(deps.get_student_handlers().get_stats())
    body = result.body
    summary = Table(title="Students")
    summary.add_column("Metric", style="cyan")
    summary.add_column("Count", justify="right", style="green")
    summary.add_row("Total students", str(body["totalStudents"]))
    summary.add_row("Enrolled students", str(body["enrolledStudents"]))
    summary.add_row("Unenrolled students", str(body["unenrolledStudents"]))
    console.print(summary)

    by_course = body["enrollmentsByCourse"]
    if not by_course:
        console.print("[yellow]No enrollments yet[/yellow]")
        return
    table = Table(title="Enrollments by course")
    table.add_column("Course", style="magenta")
    table.add_column("Students", justify="right", style="green")
    for name, total in by_course.items():
        table.add_row(name, str(total))
    console.print(table)


@app.command("courses")
def courses() -> None:
    """List the course catalogue."""

    result = _call(deps.get_student_handlers().list_courses())
    table = Table(title="Courses")
    table.add_column("Name", style="cyan", no_wrap=True)
    table.add_column("Display name", no_wrap=True)
    for entry in result.body:
        table.add_row(entry["name"], entry["displayName"])
    console.print(table)
