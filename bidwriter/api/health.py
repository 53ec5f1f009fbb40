"""
BidWriter Health Check Endpoint
"""

from fastapi import APIRouter
from pydantic import BaseModel

from bidwriter.api.deps import WritingAssistantDep
from bidwriter.core.config import settings

router = APIRouter(prefix="/health", tags=["Health"])


class HealthResponse(BaseModel):
    """Liveness check response."""

    status: str
    app: str
    version: str
    ai_available: bool


@router.get(
    "",
    response_model=HealthResponse,
    summary="Basic liveness check",
    description="Returns OK if the service is running, with AI generation availability.",
)
async def basic_health(assistant: WritingAssistantDep) -> HealthResponse:
    """Basic liveness check."""
    return HealthResponse(
        status="ok",
        app=settings.app_name,
        version=settings.app_version,
        ai_available=assistant.is_available,
    )
