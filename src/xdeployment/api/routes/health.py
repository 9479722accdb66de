from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel

from xdeployment import __version__
from xdeployment.api.deps import get_registry
from xdeployment.composer.registry import ComposerRegistry

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    version: str = __version__


class ReadinessResponse(BaseModel):
    status: str
    composers: List[str]
    problems: List[str] = []


@router.get("/health", response_model=HealthResponse, status_code=status.HTTP_200_OK)
async def health_check() -> HealthResponse:
    """Basic health check endpoint."""
    return HealthResponse(status="healthy")


@router.get("/ready", response_model=ReadinessResponse, status_code=status.HTTP_200_OK)
async def readiness_check(
    registry: ComposerRegistry = Depends(get_registry),  # noqa: B008
) -> ReadinessResponse:
    """Readiness check reporting composer registry validation."""
    problems = registry.validate()
    return ReadinessResponse(
        status="ready" if not problems else "not_ready",
        composers=registry.list(),
        problems=problems,
    )
