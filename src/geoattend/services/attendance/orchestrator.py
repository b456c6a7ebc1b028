"""Sequencing of a single attendance punch.

One ``run()`` walks the flow below and ends in exactly one terminal state::

    IDLE -> AUTHENTICATING (optional) -> ACQUIRING_LOCATION -> EVALUATING
         -> SUBMITTING -> SUCCESS | SUBMISSION_FAILED

Location failures loop through ``LOCATION_FAILED`` for a bounded number of
retries before ``LOCATION_FAILED_FINAL``. A fix outside every branch goes
``OUT_OF_RANGE -> CANCELLED``. Permission and services problems halt the
flow without retrying; the user has to act on the device first.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Callable, Optional, Protocol

from ...models.domain import (
    AcquisitionOutcome,
    AcquisitionStatus,
    AttendancePayload,
    Coordinate,
    EmployeeSession,
    GeofenceResult,
    PlatformInfo,
    SubmissionResult,
)
from ...platform.base import AlertButton, AlertPresenter, SleepFn
from ..biometrics import BIOMETRIC_UNAVAILABLE, BiometricService
from ..geospatial import DEFAULT_RADIUS_M, evaluate_geofence
from ..location.profiles import profile_for_platform, troubleshooting_hint

logger = logging.getLogger(__name__)


class AttendanceState(str, Enum):
    IDLE = "idle"
    AUTHENTICATING = "authenticating"
    ACQUIRING_LOCATION = "acquiring_location"
    LOCATION_FAILED = "location_failed"
    EVALUATING = "evaluating"
    SUBMITTING = "submitting"
    OUT_OF_RANGE = "out_of_range"
    SUCCESS = "success"
    LOCATION_FAILED_FINAL = "location_failed_final"
    PERMISSION_DENIED = "permission_denied"
    SERVICE_DISABLED = "service_disabled"
    AUTHENTICATION_FAILED = "authentication_failed"
    SUBMISSION_FAILED = "submission_failed"
    CANCELLED = "cancelled"


TERMINAL_STATES = frozenset(
    {
        AttendanceState.SUCCESS,
        AttendanceState.LOCATION_FAILED_FINAL,
        AttendanceState.PERMISSION_DENIED,
        AttendanceState.SERVICE_DISABLED,
        AttendanceState.AUTHENTICATION_FAILED,
        AttendanceState.SUBMISSION_FAILED,
        AttendanceState.CANCELLED,
    }
)

BUSY_STATES = frozenset(
    {
        AttendanceState.AUTHENTICATING,
        AttendanceState.ACQUIRING_LOCATION,
        AttendanceState.EVALUATING,
        AttendanceState.SUBMITTING,
    }
)


class Locator(Protocol):
    async def locate(self) -> AcquisitionOutcome:
        ...


class Submitter(Protocol):
    async def submit(self, payload: AttendancePayload) -> SubmissionResult:
        ...


@dataclass(frozen=True, slots=True)
class StatusUpdate:
    state: AttendanceState
    message: str


@dataclass(slots=True)
class AttendanceReport:
    state: AttendanceState
    message: str
    acquisition_attempts: int = 0
    coordinate: Optional[Coordinate] = None
    geofence: Optional[GeofenceResult] = None
    submission: Optional[SubmissionResult] = None
    history: list[StatusUpdate] = field(default_factory=list)


class AttendanceOrchestrator:
    """Drives one attendance punch from authentication to submission."""

    def __init__(
        self,
        *,
        platform: PlatformInfo,
        session: EmployeeSession,
        locator: Locator,
        submitter: Submitter,
        alerts: AlertPresenter,
        biometrics: Optional[BiometricService] = None,
        radius_meters: float = DEFAULT_RADIUS_M,
        retry_attempts: int = 2,
        retry_delay_seconds: float = 2.0,
        sleep: SleepFn = asyncio.sleep,
        clock: Callable[[], datetime] = datetime.now,
        punch_type: str = "in",
        on_status: Optional[Callable[[StatusUpdate], None]] = None,
    ) -> None:
        if retry_attempts < 0:
            raise ValueError("retry_attempts must be >= 0")
        self.platform = platform
        self.session = session
        self.locator = locator
        self.submitter = submitter
        self.alerts = alerts
        self.biometrics = biometrics
        self.radius_meters = radius_meters
        self.retry_attempts = retry_attempts
        self.retry_delay_seconds = retry_delay_seconds
        self.sleep = sleep
        self.clock = clock
        self.punch_type = punch_type
        self.on_status = on_status

        self.state = AttendanceState.IDLE
        self.history: list[StatusUpdate] = []
        self.acquisition_attempts = 0
        self._close_requested = False

    @property
    def can_close(self) -> bool:
        return self.state not in BUSY_STATES

    def request_close(self) -> bool:
        """Ask to dismiss the flow; refused while a native request is in flight."""
        if not self.can_close:
            logger.debug(f"Close refused while {self.state.value}")
            return False
        self._close_requested = True
        return True

    def _transition(self, state: AttendanceState, message: str) -> None:
        self.state = state
        update = StatusUpdate(state, message)
        self.history.append(update)
        logger.info(f"Attendance {state.value}: {message}")
        if self.on_status is not None:
            self.on_status(update)

    def _finish(self, state: AttendanceState, message: str, **details) -> AttendanceReport:
        self._transition(state, message)
        return AttendanceReport(
            state=state,
            message=message,
            acquisition_attempts=self.acquisition_attempts,
            history=list(self.history),
            **details,
        )

    async def run(self) -> AttendanceReport:
        if self.state in BUSY_STATES or self.state is AttendanceState.LOCATION_FAILED:
            raise RuntimeError("An attendance flow is already in progress.")
        self.state = AttendanceState.IDLE
        self.history = []
        self.acquisition_attempts = 0
        self._close_requested = False

        if self.biometrics is not None:
            self._transition(AttendanceState.AUTHENTICATING, "Confirm your identity to mark attendance.")
            auth = await self.biometrics.authenticate()
            if not auth.success:
                # Devices without a sensor are let through; a failed or refused prompt is not.
                if auth.error == BIOMETRIC_UNAVAILABLE:
                    logger.warning("Biometric sensor unavailable, continuing without biometric check")
                else:
                    return self._finish(
                        AttendanceState.AUTHENTICATION_FAILED,
                        auth.help_text or auth.error or "Authentication failed.",
                    )

        outcome = await self._acquire_with_retries()
        if outcome is None:
            return self._finish(AttendanceState.CANCELLED, "Attendance cancelled.")

        if outcome.status is AcquisitionStatus.PERMISSION_DENIED:
            return self._finish(AttendanceState.PERMISSION_DENIED, "Please allow location access to mark attendance.")
        if outcome.status is AcquisitionStatus.SERVICE_DISABLED:
            return self._finish(AttendanceState.SERVICE_DISABLED, "Please enable location services to mark attendance.")
        if outcome.coordinate is None:
            return self._final_location_failure(outcome)

        coordinate = outcome.coordinate
        self._transition(AttendanceState.EVALUATING, "Checking your distance from the branch.")
        geofence = evaluate_geofence(coordinate, self.session.branches, self.radius_meters)
        if not geofence.within_radius:
            self._transition(
                AttendanceState.OUT_OF_RANGE,
                f"You are not within {self.radius_meters:g} meters of any branch.",
            )
            return self._finish(
                AttendanceState.CANCELLED,
                "Attendance not marked: too far from branch.",
                coordinate=coordinate,
                geofence=geofence,
            )

        self._transition(AttendanceState.SUBMITTING, "Marking your attendance.")
        submission = await self._submit(coordinate)
        state = AttendanceState.SUCCESS if submission.success else AttendanceState.SUBMISSION_FAILED
        return self._finish(
            state,
            submission.message,
            coordinate=coordinate,
            geofence=geofence,
            submission=submission,
        )

    async def _acquire_with_retries(self) -> AcquisitionOutcome | None:
        total_attempts = 1 + self.retry_attempts
        outcome: AcquisitionOutcome | None = None
        for attempt in range(1, total_attempts + 1):
            if self._close_requested:
                return None
            message = "Getting your location..." if attempt == 1 else (
                f"Retrying location ({attempt}/{total_attempts})..."
            )
            self._transition(AttendanceState.ACQUIRING_LOCATION, message)
            self.acquisition_attempts += 1
            try:
                outcome = await self.locator.locate()
            except Exception as exc:
                logger.warning(f"Locate attempt {attempt} raised: {exc}")
                outcome = AcquisitionOutcome.unavailable(str(exc))

            if outcome.status is not AcquisitionStatus.UNAVAILABLE:
                return outcome
            if attempt < total_attempts:
                self._transition(
                    AttendanceState.LOCATION_FAILED,
                    f"Location unavailable, retrying in {self.retry_delay_seconds:g}s.",
                )
                await self.sleep(self.retry_delay_seconds)
        if self._close_requested:
            return None
        return outcome

    def _final_location_failure(self, outcome: AcquisitionOutcome) -> AttendanceReport:
        tier = profile_for_platform(self.platform).platform_version_class
        guidance = troubleshooting_hint(tier)
        try:
            self.alerts.alert("Location Unavailable", guidance, [AlertButton("OK", style="cancel")])
        except Exception as exc:
            logger.warning(f"Could not present location failure guidance: {exc}")
        reason = outcome.reason or "Location unavailable"
        return self._finish(AttendanceState.LOCATION_FAILED_FINAL, f"{reason}.\n{guidance}")

    async def _submit(self, coordinate: Coordinate) -> SubmissionResult:
        now = self.clock()
        payload = AttendancePayload(
            emp_id=self.session.user_id,
            lat=coordinate.latitude,
            lng=coordinate.longitude,
            date=now.strftime("%Y-%m-%d"),
            time=now.strftime("%H:%M:%S"),
            type=self.punch_type,
        )
        try:
            return await self.submitter.submit(payload)
        except Exception as exc:
            logger.error(f"Attendance submission failed: {exc}")
            return SubmissionResult(success=False, message="Could not mark attendance.")
