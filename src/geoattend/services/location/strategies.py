"""Location acquisition strategies, from fastest to most tolerant."""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod

from ...models.domain import Coordinate, DeviceLocationProfile, PositionOptions
from ...platform.base import GeolocationBridge
from ...platform.position import current_position

logger = logging.getLogger(__name__)


class LocationStrategy(ABC):
    """Contract for a single bounded attempt at a position fix."""

    name: str = "strategy"

    @abstractmethod
    def options(self, profile: DeviceLocationProfile) -> PositionOptions:
        raise NotImplementedError

    async def locate(
        self,
        geolocation: GeolocationBridge,
        profile: DeviceLocationProfile,
        *,
        grace_seconds: float = 1.0,
    ) -> Coordinate:
        """Return a coordinate or raise ``PositionError``."""
        options = self.options(profile)
        logger.debug(f"{self.name}: requesting position with {options.as_native()}")
        position = await current_position(geolocation, options, grace_seconds=grace_seconds)
        accuracy = f"{position.accuracy_m}m" if position.accuracy_m is not None else "unknown"
        if position.timestamp_ms is not None:
            age_s = max(0.0, time.time() - position.timestamp_ms / 1000.0)
            logger.info(f"{self.name}: fix accuracy {accuracy}, {age_s:.0f}s old")
        else:
            logger.info(f"{self.name}: fix accuracy {accuracy}")
        return position.coordinate


class VersionOptimizedStrategy(LocationStrategy):
    name = "version_optimized"

    def options(self, profile: DeviceLocationProfile) -> PositionOptions:
        return PositionOptions.from_profile(profile)


class NetworkOnlyStrategy(LocationStrategy):
    """Network positioning; works on every device tier."""

    name = "network_only"

    def options(self, profile: DeviceLocationProfile) -> PositionOptions:
        return PositionOptions(enable_high_accuracy=False, timeout_ms=30_000, maximum_age_ms=600_000)


class MaximumToleranceStrategy(LocationStrategy):
    """Accept almost any last-known fix."""

    name = "maximum_tolerance"

    def options(self, profile: DeviceLocationProfile) -> PositionOptions:
        return PositionOptions(enable_high_accuracy=False, timeout_ms=60_000, maximum_age_ms=86_400_000)


def get_strategy(method: str) -> LocationStrategy:
    match method:
        case "version_optimized":
            return VersionOptimizedStrategy()
        case "network_only":
            return NetworkOnlyStrategy()
        case "maximum_tolerance":
            return MaximumToleranceStrategy()
        case _:
            raise ValueError(f"Unknown location strategy '{method}'.")


DEFAULT_STRATEGY_ORDER = ("version_optimized", "network_only", "maximum_tolerance")


def default_strategies() -> list[LocationStrategy]:
    return [get_strategy(name) for name in DEFAULT_STRATEGY_ORDER]
