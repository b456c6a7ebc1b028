from __future__ import annotations

from typing import Any, Optional, Sequence

import pytest

from geoattend.models.domain import (
    AcquisitionOutcome,
    AttendancePayload,
    BranchLocation,
    Coordinate,
    PlatformInfo,
    Position,
    PositionOptions,
    SubmissionResult,
)
from geoattend.platform.base import AlertButton, DeviceBridges, PermissionRationale, PositionError

EMPLOYEE = Coordinate(22.5738994, 88.3065939)
BRANCH = Coordinate(22.5739500, 88.3066500)

HANG = object()


class FakeGeolocation:
    """Answers each request with the next scripted response.

    A ``Position`` or ``Coordinate`` succeeds, a ``PositionError`` fails and
    ``HANG`` never calls back. Once the script runs out the last entry repeats.
    """

    def __init__(self, *responses: Any) -> None:
        self.responses = list(responses)
        self.requests: list[PositionOptions] = []
        self.pending: list[tuple] = []

    def get_current_position(self, on_success, on_error, options: PositionOptions) -> None:
        self.requests.append(options)
        response = self.responses.pop(0) if len(self.responses) > 1 else self.responses[0]
        if response is HANG:
            self.pending.append((on_success, on_error))
        elif isinstance(response, PositionError):
            on_error(response)
        elif isinstance(response, Coordinate):
            on_success(Position(response, accuracy_m=12.0))
        else:
            on_success(response)


class FakePermissions:
    def __init__(self, result: str = "granted", error: Optional[Exception] = None) -> None:
        self.result = result
        self.error = error
        self.calls: list[tuple[str, PermissionRationale]] = []

    async def request(self, permission: str, rationale: PermissionRationale) -> str:
        self.calls.append((permission, rationale))
        if self.error is not None:
            raise self.error
        return self.result


class FakeAlerts:
    def __init__(self) -> None:
        self.shown: list[tuple[str, str, Sequence[AlertButton]]] = []

    def alert(self, title: str, message: str, buttons: Sequence[AlertButton]) -> None:
        self.shown.append((title, message, buttons))

    def press(self, title: str, text: str) -> None:
        for shown_title, _, buttons in self.shown:
            if shown_title == title:
                for button in buttons:
                    if button.text == text and button.on_press is not None:
                        button.on_press()
                        return
        raise AssertionError(f"No button {text!r} on alert {title!r}")


class FakeSettingsLinker:
    def __init__(self) -> None:
        self.opened = 0

    def open_settings(self) -> None:
        self.opened += 1


class FakeBiometrics:
    def __init__(
        self,
        available: bool = True,
        biometry_type: Optional[str] = "Biometrics",
        prompt_success: bool = True,
        check_error: Optional[Exception] = None,
        prompt_error: Optional[Exception] = None,
    ) -> None:
        self.available = available
        self.biometry_type = biometry_type
        self.prompt_success = prompt_success
        self.check_error = check_error
        self.prompt_error = prompt_error
        self.prompts: list[str] = []

    async def is_sensor_available(self) -> dict[str, Any]:
        if self.check_error is not None:
            raise self.check_error
        return {"available": self.available, "biometryType": self.biometry_type}

    async def simple_prompt(self, prompt_message: str, cancel_button_text: str) -> dict[str, Any]:
        self.prompts.append(prompt_message)
        if self.prompt_error is not None:
            raise self.prompt_error
        return {"success": self.prompt_success}


class FakeLocator:
    def __init__(self, *outcomes: AcquisitionOutcome) -> None:
        self.outcomes = list(outcomes)
        self.calls = 0

    async def locate(self) -> AcquisitionOutcome:
        self.calls += 1
        return self.outcomes.pop(0) if len(self.outcomes) > 1 else self.outcomes[0]


class FakeSubmitter:
    def __init__(self, result: Optional[SubmissionResult] = None, error: Optional[Exception] = None) -> None:
        self.result = result or SubmissionResult(success=True, message="Attendance marked")
        self.error = error
        self.payloads: list[AttendancePayload] = []

    async def submit(self, payload: AttendancePayload) -> SubmissionResult:
        self.payloads.append(payload)
        if self.error is not None:
            raise self.error
        return self.result


class RecordingSleep:
    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


def make_bridges(
    geolocation: FakeGeolocation,
    *,
    platform: PlatformInfo = PlatformInfo("android", 34),
    permissions: Optional[FakePermissions] = None,
) -> DeviceBridges:
    return DeviceBridges(
        platform=platform,
        permissions=permissions or FakePermissions(),
        geolocation=geolocation,
        settings_linker=FakeSettingsLinker(),
        alerts=FakeAlerts(),
    )


def branch(bid: str, coordinate: Coordinate, radius: Optional[float] = None) -> BranchLocation:
    return BranchLocation(id=bid, name=f"Branch {bid}", coordinate=coordinate, radius_meters=radius)


@pytest.fixture
def android_modern() -> PlatformInfo:
    return PlatformInfo("android", 34)
