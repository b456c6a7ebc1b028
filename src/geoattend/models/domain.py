"""Domain models for device location, branches and attendance records."""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Coordinate:
    """A captured latitude/longitude pair in decimal degrees."""

    latitude: float
    longitude: float


@dataclass(frozen=True, slots=True)
class BranchLocation:
    """Represents a gym branch the employee is assigned to."""

    id: str
    name: str
    coordinate: Coordinate
    radius_meters: Optional[float] = None

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "BranchLocation":
        """Build a branch from a session record whose lat/lng are strings."""
        latitude = float(record["lat"])
        longitude = float(record["lng"])
        if not (math.isfinite(latitude) and math.isfinite(longitude)):
            raise ValueError(f"Branch {record.get('id')} has non-finite coordinates.")
        radius = record.get("radius_meters")
        return cls(
            id=str(record.get("id", "")),
            name=str(record.get("name") or ""),
            coordinate=Coordinate(latitude, longitude),
            radius_meters=float(radius) if radius is not None else None,
        )


class PlatformTier(str, Enum):
    PRE_MODERN = "pre_modern"
    TRANSITIONAL = "transitional"
    MODERN = "modern"


@dataclass(frozen=True, slots=True)
class DeviceLocationProfile:
    """Acquisition parameters chosen for a device generation."""

    platform_version_class: PlatformTier
    accuracy_preference: bool
    timeout_ms: int
    max_cache_age_ms: int


@dataclass(frozen=True, slots=True)
class PositionOptions:
    """Options passed to the native ``getCurrentPosition`` call."""

    enable_high_accuracy: bool
    timeout_ms: int
    maximum_age_ms: int

    @classmethod
    def from_profile(cls, profile: DeviceLocationProfile) -> "PositionOptions":
        return cls(
            enable_high_accuracy=profile.accuracy_preference,
            timeout_ms=profile.timeout_ms,
            maximum_age_ms=profile.max_cache_age_ms,
        )

    def as_native(self) -> dict[str, Any]:
        return {
            "enableHighAccuracy": self.enable_high_accuracy,
            "timeout": self.timeout_ms,
            "maximumAge": self.maximum_age_ms,
        }


@dataclass(frozen=True, slots=True)
class Position:
    """A fix reported by the platform geolocation API."""

    coordinate: Coordinate
    accuracy_m: Optional[float] = None
    timestamp_ms: Optional[int] = None


@dataclass(frozen=True, slots=True)
class PlatformInfo:
    os: str
    version: int

    @property
    def is_android(self) -> bool:
        return self.os.lower() == "android"


class AcquisitionStatus(str, Enum):
    SUCCESS = "success"
    PERMISSION_DENIED = "permission_denied"
    SERVICE_DISABLED = "service_disabled"
    UNAVAILABLE = "unavailable"


@dataclass(frozen=True, slots=True)
class AcquisitionOutcome:
    """Tagged result of a full location acquisition."""

    status: AcquisitionStatus
    coordinate: Optional[Coordinate] = None
    reason: Optional[str] = None

    @classmethod
    def success(cls, coordinate: Coordinate) -> "AcquisitionOutcome":
        return cls(AcquisitionStatus.SUCCESS, coordinate=coordinate)

    @classmethod
    def permission_denied(cls) -> "AcquisitionOutcome":
        return cls(AcquisitionStatus.PERMISSION_DENIED, reason="Location permission was not granted.")

    @classmethod
    def service_disabled(cls) -> "AcquisitionOutcome":
        return cls(AcquisitionStatus.SERVICE_DISABLED, reason="Device location services are disabled.")

    @classmethod
    def unavailable(cls, reason: str) -> "AcquisitionOutcome":
        return cls(AcquisitionStatus.UNAVAILABLE, reason=reason)

    @property
    def ok(self) -> bool:
        return self.status is AcquisitionStatus.SUCCESS


@dataclass(frozen=True, slots=True)
class GeofenceResult:
    within_radius: bool
    nearest_branch: Optional[BranchLocation]
    distance_meters: float


@dataclass(frozen=True, slots=True)
class AttendancePayload:
    """Body of the remote attendance POST."""

    emp_id: Optional[int]
    lat: float
    lng: float
    date: str
    time: str
    type: str = "in"

    def as_json(self) -> dict[str, Any]:
        return {
            "emp_id": self.emp_id,
            "lat": self.lat,
            "lng": self.lng,
            "date": self.date,
            "time": self.time,
            "type": self.type,
        }


@dataclass(frozen=True, slots=True)
class SubmissionResult:
    success: bool
    message: str


@dataclass(slots=True)
class EmployeeSession:
    """The slice of the authenticated session this subsystem reads."""

    user_id: Optional[int]
    branches: list[BranchLocation] = field(default_factory=list)

    @classmethod
    def from_records(cls, user_id: Optional[int], records: list[dict[str, Any]]) -> "EmployeeSession":
        branches: list[BranchLocation] = []
        for record in records:
            try:
                branches.append(BranchLocation.from_record(record))
            except (KeyError, TypeError, ValueError) as exc:
                logger.warning(f"Skipping branch {record.get('id')!r} with unusable coordinates: {exc}")
        return cls(user_id=user_id, branches=branches)
