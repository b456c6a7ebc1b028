"""Health endpoints."""

from __future__ import annotations

from fastapi import APIRouter, status

from ...config import settings

router = APIRouter(tags=["health"])


@router.get("/health", status_code=status.HTTP_200_OK)
def health_root() -> dict:
    """Simple health check endpoint that doesn't require any dependencies."""
    return {"status": "ok"}


@router.get("/health/config", status_code=status.HTTP_200_OK)
def health_config() -> dict:
    """Report the attendance settings in effect, without secrets."""
    return {
        "attendance_api_configured": bool(settings.attendance_api_base_url),
        "geofence_radius_meters": settings.geofence_radius_meters,
        "location_retry_attempts": settings.location_retry_attempts,
        "location_retry_delay_seconds": settings.location_retry_delay_seconds,
        "require_biometric": settings.require_biometric,
    }
