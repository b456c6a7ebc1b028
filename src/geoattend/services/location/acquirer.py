"""Multi-strategy location acquisition and the full locate sequence."""

from __future__ import annotations

import logging
from typing import Callable, Optional, Sequence

from ...models.domain import AcquisitionOutcome, Coordinate, DeviceLocationProfile, PlatformInfo
from ...platform.base import AlertButton, DeviceBridges, GeolocationBridge, PositionError
from .availability import LocationServiceProber
from .permissions import PermissionNegotiator
from .profiles import platform_label, profile_for_platform
from .strategies import LocationStrategy, default_strategies

logger = logging.getLogger(__name__)


class LocationAcquirer:
    """Try each strategy in order, strictly one at a time, until one yields a fix."""

    def __init__(
        self,
        platform: PlatformInfo,
        geolocation: GeolocationBridge,
        strategies: Optional[Sequence[LocationStrategy]] = None,
        *,
        profile_selector: Callable[[PlatformInfo], DeviceLocationProfile] = profile_for_platform,
        grace_seconds: float = 1.0,
    ) -> None:
        self.platform = platform
        self.geolocation = geolocation
        self.strategies = list(strategies) if strategies is not None else default_strategies()
        self.profile_selector = profile_selector
        self.grace_seconds = grace_seconds

    async def acquire_location(self) -> Coordinate | None:
        profile = self.profile_selector(self.platform)
        label = platform_label(self.platform)
        logger.info(f"Getting location for {label} ({profile.platform_version_class.value} profile)")

        for index, strategy in enumerate(self.strategies, start=1):
            try:
                coordinate = await strategy.locate(self.geolocation, profile, grace_seconds=self.grace_seconds)
            except PositionError as exc:
                logger.info(f"Strategy {index} ({strategy.name}) failed with code {exc.code}: {exc.message}")
                continue
            except Exception as exc:
                logger.warning(f"Strategy {index} ({strategy.name}) raised unexpectedly: {exc}")
                continue
            logger.info(f"Strategy {index} ({strategy.name}) succeeded on {label}")
            return coordinate

        logger.error(f"All {len(self.strategies)} location strategies failed on {label}")
        return None


class LocationService:
    """Permission, services probe, then acquisition, reported as one outcome."""

    def __init__(
        self,
        negotiator: PermissionNegotiator,
        prober: LocationServiceProber,
        acquirer: LocationAcquirer,
        bridges: DeviceBridges,
    ) -> None:
        self.negotiator = negotiator
        self.prober = prober
        self.acquirer = acquirer
        self.bridges = bridges

    @classmethod
    def from_bridges(cls, bridges: DeviceBridges, *, grace_seconds: float = 1.0) -> "LocationService":
        return cls(
            negotiator=PermissionNegotiator(bridges.platform, bridges.permissions),
            prober=LocationServiceProber(
                bridges.platform,
                bridges.geolocation,
                bridges.alerts,
                bridges.settings_linker,
                grace_seconds=grace_seconds,
            ),
            acquirer=LocationAcquirer(bridges.platform, bridges.geolocation, grace_seconds=grace_seconds),
            bridges=bridges,
        )

    async def locate(self) -> AcquisitionOutcome:
        if not await self.negotiator.request_location_permission():
            self._offer_permission_settings()
            return AcquisitionOutcome.permission_denied()

        if not await self.prober.check_location_services_enabled():
            return AcquisitionOutcome.service_disabled()

        try:
            coordinate = await self.acquirer.acquire_location()
        except Exception as exc:
            logger.warning(f"Location acquisition failed: {exc}")
            coordinate = None

        if coordinate is None:
            return AcquisitionOutcome.unavailable(
                f"Could not get location on {platform_label(self.bridges.platform)}"
            )
        return AcquisitionOutcome.success(coordinate)

    def _offer_permission_settings(self) -> None:
        try:
            self.bridges.alerts.alert(
                "Location Permission Required",
                "Please allow location access to mark attendance.",
                [
                    AlertButton("Cancel", style="cancel"),
                    AlertButton("Open Settings", on_press=self.bridges.settings_linker.open_settings),
                ],
            )
        except Exception as exc:
            logger.warning(f"Could not present permission prompt: {exc}")
