"""Contracts for the native platform bridges the location subsystem talks to."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any, Awaitable, Callable, Optional, Protocol, Sequence

from ..models.domain import PlatformInfo, Position, PositionOptions

PERMISSION_GRANTED = "granted"
PERMISSION_DENIED = "denied"
PERMISSION_NEVER_ASK_AGAIN = "never_ask_again"

ACCESS_FINE_LOCATION = "android.permission.ACCESS_FINE_LOCATION"

# Low-cost request used only to find out whether location services are on.
SERVICES_PROBE_OPTIONS = PositionOptions(enable_high_accuracy=False, timeout_ms=10_000, maximum_age_ms=600_000)


class PositionErrorCode(IntEnum):
    PERMISSION_DENIED = 1
    POSITION_UNAVAILABLE = 2
    TIMEOUT = 3
    ACTIVITY_NULL = 4


class PositionError(Exception):
    """Error reported by the geolocation API for a single position request."""

    def __init__(self, code: int, message: str = "") -> None:
        super().__init__(message or f"Position error {code}")
        self.code = code
        self.message = message

    @property
    def provider_disabled(self) -> bool:
        return self.code == PositionErrorCode.POSITION_UNAVAILABLE

    def __repr__(self) -> str:
        return f"PositionError(code={self.code}, message={self.message!r})"


@dataclass(frozen=True, slots=True)
class PermissionRationale:
    title: str
    message: str
    button_neutral: str = "Ask Me Later"
    button_negative: str = "Cancel"
    button_positive: str = "Allow"


@dataclass(frozen=True, slots=True)
class AlertButton:
    text: str
    style: str = "default"
    on_press: Optional[Callable[[], Any]] = None


SuccessCallback = Callable[[Position], None]
ErrorCallback = Callable[[PositionError], None]


class PermissionsBridge(Protocol):
    async def request(self, permission: str, rationale: PermissionRationale) -> str:
        ...


class GeolocationBridge(Protocol):
    def get_current_position(
        self,
        on_success: SuccessCallback,
        on_error: ErrorCallback,
        options: PositionOptions,
    ) -> None:
        ...


class SettingsLinker(Protocol):
    def open_settings(self) -> None:
        ...


class AlertPresenter(Protocol):
    """Shows a native alert; returns immediately, buttons fire their callbacks later."""

    def alert(self, title: str, message: str, buttons: Sequence[AlertButton]) -> None:
        ...


class BiometricsBridge(Protocol):
    async def is_sensor_available(self) -> dict[str, Any]:
        ...

    async def simple_prompt(self, prompt_message: str, cancel_button_text: str) -> dict[str, Any]:
        ...


@dataclass(slots=True)
class DeviceBridges:
    """Everything the location subsystem needs from the device, bundled for injection."""

    platform: PlatformInfo
    permissions: PermissionsBridge
    geolocation: GeolocationBridge
    settings_linker: SettingsLinker
    alerts: AlertPresenter
    biometrics: Optional[BiometricsBridge] = None


SleepFn = Callable[[float], Awaitable[None]]
