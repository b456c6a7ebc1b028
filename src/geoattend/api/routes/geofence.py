"""Geofence endpoints."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException, status

from ...config import settings
from ...models.domain import Coordinate, EmployeeSession
from ...schemas.geofence import GeofenceCheckRequest, GeofenceCheckResponse
from ...services.geospatial import evaluate_geofence

router = APIRouter(prefix="/geofence", tags=["geofence"])


@router.post("/check", response_model=GeofenceCheckResponse, status_code=status.HTTP_200_OK)
def check(payload: GeofenceCheckRequest) -> GeofenceCheckResponse:
    """Check whether a coordinate is inside the radius of any branch."""
    session = EmployeeSession.from_records(None, [branch.model_dump() for branch in payload.branches])
    if not session.branches:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="No branch with usable coordinates was supplied.",
        )
    radius = payload.radius_meters or settings.geofence_radius_meters
    result = evaluate_geofence(Coordinate(payload.latitude, payload.longitude), session.branches, radius)
    return GeofenceCheckResponse.from_result(result, radius)
