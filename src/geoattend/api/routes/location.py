"""Device location profile endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Path, status

from ...schemas.geofence import LocationProfileResponse
from ...services.location.profiles import classify_platform, version_name

router = APIRouter(prefix="/location", tags=["location"])


@router.get(
    "/profile/{platform_version}",
    response_model=LocationProfileResponse,
    status_code=status.HTTP_200_OK,
)
def profile(platform_version: int = Path(..., ge=1, description="Android API level")) -> LocationProfileResponse:
    return LocationProfileResponse.from_profile(
        platform_version,
        version_name(platform_version),
        classify_platform(platform_version),
    )
