"""Scripted in-memory device used by the simulation endpoint."""

from __future__ import annotations

import time
from dataclasses import dataclass, field
from typing import Any, Optional, Sequence

from ..models.domain import Coordinate, PlatformInfo, Position, PositionOptions
from .base import (
    PERMISSION_GRANTED,
    SERVICES_PROBE_OPTIONS,
    AlertButton,
    DeviceBridges,
    ErrorCallback,
    PermissionRationale,
    PositionError,
    PositionErrorCode,
    SuccessCallback,
)

PROBE_PLACEHOLDER = Coordinate(0.0, 0.0)


@dataclass(slots=True)
class SimulatedDevice:
    """A device whose answers are fixed up front.

    Acquisition requests first use up ``failures`` as timeouts, then report
    ``coordinate``. The services probe is never counted against ``failures``.
    With services disabled every request fails as provider-unavailable.
    """

    platform: PlatformInfo
    coordinate: Optional[Coordinate] = None
    accuracy_m: Optional[float] = None
    permission_result: str = PERMISSION_GRANTED
    services_enabled: bool = True
    failures: int = 0
    biometry_type: Optional[str] = None
    biometric_accepts: bool = True
    position_requests: list[PositionOptions] = field(default_factory=list)
    alerts_shown: list[str] = field(default_factory=list)
    settings_opened: int = 0

    async def request(self, permission: str, rationale: PermissionRationale) -> str:
        return self.permission_result

    def get_current_position(
        self,
        on_success: SuccessCallback,
        on_error: ErrorCallback,
        options: PositionOptions,
    ) -> None:
        self.position_requests.append(options)
        if not self.services_enabled:
            on_error(PositionError(PositionErrorCode.POSITION_UNAVAILABLE, "No location provider available."))
            return
        if options == SERVICES_PROBE_OPTIONS:
            # The probe only checks that services are on.
            on_success(self._fix(self.coordinate or PROBE_PLACEHOLDER))
            return
        if self.failures > 0:
            self.failures -= 1
            on_error(PositionError(PositionErrorCode.TIMEOUT, "Location request timed out."))
            return
        if self.coordinate is None:
            on_error(PositionError(PositionErrorCode.TIMEOUT, "No fix available."))
            return
        on_success(self._fix(self.coordinate))

    def _fix(self, coordinate: Coordinate) -> Position:
        return Position(coordinate, accuracy_m=self.accuracy_m, timestamp_ms=int(time.time() * 1000))

    def open_settings(self) -> None:
        self.settings_opened += 1

    def alert(self, title: str, message: str, buttons: Sequence[AlertButton]) -> None:
        self.alerts_shown.append(title)

    async def is_sensor_available(self) -> dict[str, Any]:
        return {"available": self.biometry_type is not None, "biometryType": self.biometry_type}

    async def simple_prompt(self, prompt_message: str, cancel_button_text: str) -> dict[str, Any]:
        return {"success": self.biometric_accepts}

    def bridges(self) -> DeviceBridges:
        return DeviceBridges(
            platform=self.platform,
            permissions=self,
            geolocation=self,
            settings_linker=self,
            alerts=self,
            biometrics=self,
        )
