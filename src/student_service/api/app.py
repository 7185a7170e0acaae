"""FastAPI application factory for the student service."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from student_service import __version__
from student_service.container import ServiceContainer, build_container

from . import health, students

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    settings = app.state.container.settings
    logger.info(
        "Starting student service",
        extra={"environment": settings.environment},
    )
    yield
    logger.info("Shutting down student service")


async def _validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    errors = exc.errors()
    message = errors[0].get("msg", "Invalid request") if errors else "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"error": f"Malformed request: {message}"},
    )


def create_app(container: ServiceContainer | None = None) -> FastAPI:
    """Create the FastAPI application around ``container``."""

    app = FastAPI(
        title="Student Service API",
        description="Student records, course enrollment and statistics",
        version=__version__,
        lifespan=lifespan,
        redirect_slashes=False,
    )
    app.state.container = container or build_container()

    app.add_exception_handler(RequestValidationError, _validation_error_handler)

    app.include_router(health.router)
    app.include_router(students.router)
    app.include_router(students.courses_router)

    return app


__all__ = ["create_app"]
