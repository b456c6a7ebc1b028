"""Run the full attendance flow against a scripted device."""

from __future__ import annotations

import logging

from ...clients.attendance_api import AttendanceApiClient
from ...config import settings
from ...models.domain import AttendancePayload, Coordinate, EmployeeSession, PlatformInfo, SubmissionResult
from ...platform.simulated import SimulatedDevice
from ...schemas.attendance import (
    AttendanceSimulationRequest,
    AttendanceSimulationResponse,
    StatusUpdateModel,
    SubmissionModel,
)
from ...schemas.geofence import CoordinateModel, GeofenceCheckResponse
from ..biometrics import BiometricService
from ..location import LocationService
from .orchestrator import AttendanceOrchestrator

logger = logging.getLogger(__name__)


class DryRunSubmitter:
    def __init__(self) -> None:
        self.payloads: list[AttendancePayload] = []

    async def submit(self, payload: AttendancePayload) -> SubmissionResult:
        self.payloads.append(payload)
        return SubmissionResult(success=True, message="Dry run: attendance not sent.")


def _build_device(request: AttendanceSimulationRequest) -> SimulatedDevice:
    device_model = request.device
    coordinate = None
    if device_model.coordinate is not None:
        coordinate = Coordinate(device_model.coordinate.latitude, device_model.coordinate.longitude)
    return SimulatedDevice(
        platform=PlatformInfo(os=device_model.os, version=device_model.platform_version),
        coordinate=coordinate,
        accuracy_m=device_model.accuracy_m,
        permission_result=device_model.permission_result,
        services_enabled=device_model.services_enabled,
        failures=device_model.failures,
        biometry_type=device_model.biometry_type,
        biometric_accepts=device_model.biometric_accepts,
    )


async def simulate_attendance(request: AttendanceSimulationRequest) -> AttendanceSimulationResponse:
    device = _build_device(request)
    bridges = device.bridges()
    session = EmployeeSession.from_records(request.emp_id, [branch.model_dump() for branch in request.branches])
    if not session.branches:
        raise ValueError("No branch with usable coordinates was supplied.")

    submitter = DryRunSubmitter() if request.dry_run else AttendanceApiClient()
    require_biometric = (
        request.require_biometric if request.require_biometric is not None else settings.require_biometric
    )
    radius = request.radius_meters or settings.geofence_radius_meters
    delay = (
        request.retry_delay_seconds
        if request.retry_delay_seconds is not None
        else settings.location_retry_delay_seconds
    )

    orchestrator = AttendanceOrchestrator(
        platform=bridges.platform,
        session=session,
        locator=LocationService.from_bridges(bridges, grace_seconds=settings.position_timeout_grace_seconds),
        submitter=submitter,
        alerts=bridges.alerts,
        biometrics=(
            BiometricService(bridges.platform, bridges.biometrics)
            if require_biometric and bridges.biometrics is not None
            else None
        ),
        radius_meters=radius,
        retry_attempts=settings.location_retry_attempts,
        retry_delay_seconds=delay,
        punch_type=request.punch_type,
    )
    report = await orchestrator.run()
    logger.info(f"Simulated attendance for employee {request.emp_id} ended in {report.state.value}")

    return AttendanceSimulationResponse(
        state=report.state.value,
        message=report.message,
        acquisition_attempts=report.acquisition_attempts,
        coordinate=(
            CoordinateModel(latitude=report.coordinate.latitude, longitude=report.coordinate.longitude)
            if report.coordinate
            else None
        ),
        geofence=GeofenceCheckResponse.from_result(report.geofence, radius) if report.geofence else None,
        submission=(
            SubmissionModel(success=report.submission.success, message=report.submission.message)
            if report.submission
            else None
        ),
        history=[StatusUpdateModel(state=update.state.value, message=update.message) for update in report.history],
        position_requests=len(device.position_requests),
        alerts_shown=list(device.alerts_shown),
    )
