"""Health check endpoints."""

from __future__ import annotations

import logging
from typing import Annotated

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from student_service import __version__
from student_service.container import ServiceContainer
from student_service.utils import utc_now

from .dependencies import get_container

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/health", tags=["Health"])


class HealthResponse(BaseModel):
    """Liveness payload."""

    status: str = Field(description="Overall health status")
    environment: str = Field(description="Deployment environment")
    version: str = Field(description="Service version")
    checked_at: str = Field(description="When health was checked")


@router.get("", response_model=HealthResponse)
async def health(
    container: Annotated[ServiceContainer, Depends(get_container)],
) -> HealthResponse:
    return HealthResponse(
        status="UP",
        environment=container.settings.environment,
        version=__version__,
        checked_at=utc_now().isoformat(),
    )


@router.get("/ready")
async def ready(
    container: Annotated[ServiceContainer, Depends(get_container)],
) -> JSONResponse:
    """Report readiness by running a trivial query against storage."""

    try:
        async with container.unit_of_work_factory() as uow:
            total = await uow.student_repository.count()
    except Exception as exc:
        logger.warning("Readiness check failed: %s", exc)
        return JSONResponse(status_code=503, content={"ready": False, "error": str(exc)})
    return JSONResponse(content={"ready": True, "students": total})
