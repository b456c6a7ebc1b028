"""Device location acquisition."""

from .acquirer import LocationAcquirer, LocationService
from .availability import LocationServiceProber
from .permissions import PermissionNegotiator
from .profiles import classify_platform, profile_for_platform

__all__ = [
    "LocationAcquirer",
    "LocationService",
    "LocationServiceProber",
    "PermissionNegotiator",
    "classify_platform",
    "profile_for_platform",
]
