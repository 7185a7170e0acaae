"""Student API endpoints.

- GET /students - List students ordered by last name, then first name
- GET /students/search?name= - Case-insensitive name search
- GET /students/stats - Enrollment statistics
- GET /students/{id} - Get a student
- POST /students - Create a student
- PUT /students/{id} - Partially update a student
- DELETE /students/{id} - Delete a student
- POST /students/{id}/enroll - Enroll a student in a course
- POST /students/{id}/drop - Drop a course
- GET /courses - Course catalogue

Path identifiers are accepted as text and parsed by the handlers so malformed
ids produce the same ``{"error": ...}`` payload as every other failure.
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body, Depends, Query, status
from fastapi.responses import JSONResponse, Response

from student_service.handlers import HandlerResponse, StudentHandlers

from .dependencies import get_student_handlers

router = APIRouter(prefix="/students", tags=["Students"])
courses_router = APIRouter(prefix="/courses", tags=["Courses"])

Handlers = Annotated[StudentHandlers, Depends(get_student_handlers)]
JsonBody = Annotated[dict[str, Any] | None, Body()]


def to_response(result: HandlerResponse) -> Response:
    if result.body is None:
        return Response(status_code=result.status)
    return JSONResponse(status_code=result.status, content=result.body)


@router.get("", summary="List students")
async def list_students(handlers: Handlers) -> Response:
    return to_response(await handlers.list_students())


@router.get("/search", summary="Search students by name")
async def search_students(
    handlers: Handlers,
    name: Annotated[str | None, Query()] = None,
) -> Response:
    return to_response(await handlers.search_students(name))


@router.get("/stats", summary="Enrollment statistics")
async def get_stats(handlers: Handlers) -> Response:
    return to_response(await handlers.get_stats())


@router.get("/{student_id}", summary="Get student")
async def get_student(student_id: str, handlers: Handlers) -> Response:
    return to_response(await handlers.get_student(student_id))


@router.post("", status_code=status.HTTP_201_CREATED, summary="Create student")
async def create_student(handlers: Handlers, payload: JsonBody = None) -> Response:
    return to_response(await handlers.create_student(payload))


@router.put("/{student_id}", summary="Update student")
async def update_student(
    student_id: str,
    handlers: Handlers,
    payload: JsonBody = None,
) -> Response:
    return to_response(await handlers.update_student(student_id, payload))


@router.delete(
    "/{student_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete student",
)
async def delete_student(student_id: str, handlers: Handlers) -> Response:
    return to_response(await handlers.delete_student(student_id))


@router.post("/{student_id}/enroll", summary="Enroll student in a course")
async def enroll_student(
    student_id: str,
    handlers: Handlers,
    payload: JsonBody = None,
) -> Response:
    return to_response(await handlers.enroll_student(student_id, payload))


@router.post("/{student_id}/drop", summary="Drop a course")
async def drop_course(
    student_id: str,
    handlers: Handlers,
    payload: JsonBody = None,
) -> Response:
    return to_response(await handlers.drop_course(student_id, payload))


@courses_router.get("", summary="List the course catalogue")
async def list_courses(handlers: Handlers) -> Response:
    return to_response(await handlers.list_courses())


__all__ = ["courses_router", "router", "to_response"]
