"""Runtime location permission negotiation."""

from __future__ import annotations

import logging

from ...models.domain import PlatformInfo
from ...platform.base import (
    ACCESS_FINE_LOCATION,
    PERMISSION_DENIED,
    PERMISSION_GRANTED,
    PERMISSION_NEVER_ASK_AGAIN,
    PermissionRationale,
    PermissionsBridge,
)
from .profiles import RUNTIME_PERMISSIONS_API_LEVEL, platform_label

logger = logging.getLogger(__name__)

LOCATION_RATIONALE = PermissionRationale(
    title="Location Access Required",
    message="This app needs location access to mark your attendance accurately.",
)


class PermissionNegotiator:
    def __init__(self, platform: PlatformInfo, permissions: PermissionsBridge) -> None:
        self.platform = platform
        self.permissions = permissions

    async def request_location_permission(self) -> bool:
        """Ask for fine location access; never raises."""
        if not self.platform.is_android:
            return True
        if self.platform.version < RUNTIME_PERMISSIONS_API_LEVEL:
            logger.info(f"{platform_label(self.platform)}: location permission granted at install time")
            return True

        try:
            result = await self.permissions.request(ACCESS_FINE_LOCATION, LOCATION_RATIONALE)
        except Exception as exc:
            logger.warning(f"Location permission request failed: {exc}")
            return False

        label = platform_label(self.platform)
        if result == PERMISSION_GRANTED:
            logger.info(f"Location permission granted on {label}")
            return True
        if result == PERMISSION_NEVER_ASK_AGAIN:
            logger.warning(f"Location permission permanently denied on {label}; only app settings can restore it")
        elif result == PERMISSION_DENIED:
            logger.warning(f"Location permission denied on {label}")
        else:
            logger.warning(f"Unexpected location permission result {result!r} on {label}")
        return False
