"""Geofence and device profile request/response schemas."""

from __future__ import annotations

import math
from typing import List, Optional, Union

from pydantic import BaseModel, Field

from ..models.domain import BranchLocation, DeviceLocationProfile, GeofenceResult


class BranchModel(BaseModel):
    """Branch as stored in the employee session; coordinates arrive as strings."""

    id: Union[int, str]
    name: str = ""
    lat: Union[str, float]
    lng: Union[str, float]
    radius_meters: Optional[float] = Field(default=None, gt=0)

    @classmethod
    def from_domain(cls, branch: BranchLocation) -> "BranchModel":
        return cls(
            id=branch.id,
            name=branch.name,
            lat=branch.coordinate.latitude,
            lng=branch.coordinate.longitude,
            radius_meters=branch.radius_meters,
        )


class CoordinateModel(BaseModel):
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class GeofenceCheckRequest(CoordinateModel):
    branches: List[BranchModel]
    radius_meters: Optional[float] = Field(default=None, gt=0, description="Defaults to the configured radius.")


class GeofenceCheckResponse(BaseModel):
    within_radius: bool
    distance_meters: Optional[float] = Field(default=None, description="Null when no branch was usable.")
    nearest_branch: Optional[BranchModel] = None
    radius_meters: float

    @classmethod
    def from_result(cls, result: GeofenceResult, radius_meters: float) -> "GeofenceCheckResponse":
        distance = result.distance_meters if math.isfinite(result.distance_meters) else None
        return cls(
            within_radius=result.within_radius,
            distance_meters=distance,
            nearest_branch=BranchModel.from_domain(result.nearest_branch) if result.nearest_branch else None,
            radius_meters=radius_meters,
        )


class LocationProfileResponse(BaseModel):
    platform_version: int
    version_name: str
    platform_version_class: str
    accuracy_preference: bool
    timeout_ms: int
    max_cache_age_ms: int

    @classmethod
    def from_profile(cls, version: int, name: str, profile: DeviceLocationProfile) -> "LocationProfileResponse":
        return cls(
            platform_version=version,
            version_name=name,
            platform_version_class=profile.platform_version_class.value,
            accuracy_preference=profile.accuracy_preference,
            timeout_ms=profile.timeout_ms,
            max_cache_age_ms=profile.max_cache_age_ms,
        )
