"""Probe for whether device location services are switched on."""

from __future__ import annotations

import logging

from ...models.domain import PlatformInfo
from ...platform.base import (
    SERVICES_PROBE_OPTIONS,
    AlertButton,
    AlertPresenter,
    GeolocationBridge,
    PositionError,
    SettingsLinker,
)
from ...platform.position import current_position
from .profiles import profile_for_platform, services_hint

logger = logging.getLogger(__name__)


class LocationServiceProber:
    def __init__(
        self,
        platform: PlatformInfo,
        geolocation: GeolocationBridge,
        alerts: AlertPresenter,
        settings_linker: SettingsLinker,
        *,
        grace_seconds: float = 1.0,
    ) -> None:
        self.platform = platform
        self.geolocation = geolocation
        self.alerts = alerts
        self.settings_linker = settings_linker
        self.grace_seconds = grace_seconds

    async def check_location_services_enabled(self) -> bool:
        """Issue a cheap throwaway fix request; False on any failure.

        When the failure says the provider is off, the user is offered the
        system location settings. That prompt does not block and its answer
        does not change the result.
        """
        if not self.platform.is_android:
            return True

        try:
            await current_position(self.geolocation, SERVICES_PROBE_OPTIONS, grace_seconds=self.grace_seconds)
        except PositionError as exc:
            logger.warning(f"Location services may be disabled: {exc.message or exc}")
            if exc.provider_disabled:
                self._offer_settings()
            return False
        except Exception as exc:
            logger.warning(f"Location services probe failed: {exc}")
            return False

        logger.info("Location services are enabled")
        return True

    def _offer_settings(self) -> None:
        tier = profile_for_platform(self.platform).platform_version_class
        try:
            self.alerts.alert(
                "Location Services Required",
                services_hint(tier),
                [
                    AlertButton("Cancel", style="cancel"),
                    AlertButton("Open Settings", on_press=self.settings_linker.open_settings),
                ],
            )
        except Exception as exc:
            logger.warning(f"Could not present location services prompt: {exc}")
