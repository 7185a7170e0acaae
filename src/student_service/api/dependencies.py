"""FastAPI dependencies resolving services from the application container."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request

from student_service.container import ServiceContainer
from student_service.handlers import StudentHandlers


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container


def get_student_handlers(
    container: Annotated[ServiceContainer, Depends(get_container)],
) -> StudentHandlers:
    return container.student_handlers


__all__ = ["get_container", "get_student_handlers"]
