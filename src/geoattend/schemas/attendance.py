"""Attendance simulation request/response schemas."""

from __future__ import annotations

from typing import List, Literal, Optional

from pydantic import BaseModel, Field

from .geofence import BranchModel, CoordinateModel, GeofenceCheckResponse


class SimulatedDeviceModel(BaseModel):
    os: str = "android"
    platform_version: int = Field(default=34, ge=1)
    coordinate: Optional[CoordinateModel] = Field(default=None, description="Fix the device reports; null means no fix.")
    accuracy_m: Optional[float] = Field(default=None, ge=0)
    permission_result: Literal["granted", "denied", "never_ask_again"] = "granted"
    services_enabled: bool = True
    failures: int = Field(default=0, ge=0, description="Acquisition requests that time out before a fix is reported.")
    biometry_type: Optional[Literal["TouchID", "FaceID", "Biometrics"]] = None
    biometric_accepts: bool = True


class AttendanceSimulationRequest(BaseModel):
    emp_id: Optional[int] = None
    branches: List[BranchModel]
    device: SimulatedDeviceModel = Field(default_factory=SimulatedDeviceModel)
    punch_type: Literal["in", "out"] = "in"
    radius_meters: Optional[float] = Field(default=None, gt=0)
    retry_delay_seconds: Optional[float] = Field(default=None, ge=0, le=30)
    require_biometric: Optional[bool] = None
    dry_run: bool = Field(default=False, description="Skip the remote attendance API call.")


class StatusUpdateModel(BaseModel):
    state: str
    message: str


class SubmissionModel(BaseModel):
    success: bool
    message: str


class AttendanceSimulationResponse(BaseModel):
    state: str
    message: str
    acquisition_attempts: int
    coordinate: Optional[CoordinateModel] = None
    geofence: Optional[GeofenceCheckResponse] = None
    submission: Optional[SubmissionModel] = None
    history: List[StatusUpdateModel]
    position_requests: int
    alerts_shown: List[str]
