"""Health check API route."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ...application.dtos import HealthResponseDTO
from ...env import Settings
from ..dependencies import get_settings

SERVICE_NAME = "verifier"

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponseDTO)
async def health_check(
    settings: Settings = Depends(get_settings),
) -> HealthResponseDTO:
    """Health check endpoint."""
    return HealthResponseDTO(
        status="healthy",
        service=SERVICE_NAME,
        version=settings.app_version,
    )
