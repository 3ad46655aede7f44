"""
Health check endpoint. Minimal, stable, no catalogue logic.
"""
from datetime import datetime

from fastapi import APIRouter

from catalogue_api.schemas import HealthResponse
from catalogue_api.settings import settings

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check() -> HealthResponse:
    """
    Simple health check. Returns service status, version, commit.
    Does not touch the registry.
    """
    return HealthResponse(
        status="ok",
        service="pattern-catalogue-api",
        version=settings.api_version,
        commit=settings.build_commit,
        timestamp=datetime.utcnow().isoformat() + "Z",
    )
