"""Device generation tiers and the location parameters chosen for each."""

from __future__ import annotations

from ...models.domain import DeviceLocationProfile, PlatformInfo, PlatformTier

# Android API levels bounding each tier.
RUNTIME_PERMISSIONS_API_LEVEL = 23  # Android 6.0
MODERN_API_LEVEL = 29  # Android 10

_PROFILES: dict[PlatformTier, DeviceLocationProfile] = {
    # Legacy chipsets are slow to lock, so prefer network fixes and accept stale ones.
    PlatformTier.PRE_MODERN: DeviceLocationProfile(
        platform_version_class=PlatformTier.PRE_MODERN,
        accuracy_preference=False,
        timeout_ms=60_000,
        max_cache_age_ms=900_000,
    ),
    PlatformTier.TRANSITIONAL: DeviceLocationProfile(
        platform_version_class=PlatformTier.TRANSITIONAL,
        accuracy_preference=True,
        timeout_ms=35_000,
        max_cache_age_ms=300_000,
    ),
    PlatformTier.MODERN: DeviceLocationProfile(
        platform_version_class=PlatformTier.MODERN,
        accuracy_preference=True,
        timeout_ms=25_000,
        max_cache_age_ms=180_000,
    ),
}

_VERSION_NAMES = {
    34: "Android 14", 33: "Android 13", 32: "Android 12L",
    31: "Android 12", 30: "Android 11", 29: "Android 10",
    28: "Android 9 Pie", 27: "Android 8.1", 26: "Android 8.0",
    25: "Android 7.1", 24: "Android 7.0", 23: "Android 6.0",
    22: "Android 5.1", 21: "Android 5.0", 20: "Android 4.4W",
    19: "Android 4.4", 18: "Android 4.3", 17: "Android 4.2",
    16: "Android 4.1",
}

_SERVICES_HINTS = {
    PlatformTier.PRE_MODERN: "Go to Settings > Location and enable location services.",
    PlatformTier.TRANSITIONAL: "Please enable location services to mark attendance.",
    PlatformTier.MODERN: "Swipe down and enable Location, or go to Settings > Location.",
}

_TROUBLESHOOTING_HINTS = {
    PlatformTier.PRE_MODERN: (
        "For older Android devices:\n"
        "• Enable GPS in Settings\n"
        "• Wait 1-2 minutes for GPS lock\n"
        "• Try in open area\n"
        "• Restart location services"
    ),
    PlatformTier.TRANSITIONAL: (
        "For Android 6.0-9.0:\n"
        "• Allow location permission\n"
        "• Enable high accuracy mode\n"
        "• Check internet connection\n"
        "• Try outdoor for better GPS"
    ),
    PlatformTier.MODERN: (
        "For modern Android:\n"
        "• Allow precise location\n"
        "• Disable battery optimization\n"
        "• Enable all location services"
    ),
}


def tier_for_version(version: int) -> PlatformTier:
    if version < RUNTIME_PERMISSIONS_API_LEVEL:
        return PlatformTier.PRE_MODERN
    if version < MODERN_API_LEVEL:
        return PlatformTier.TRANSITIONAL
    return PlatformTier.MODERN


def classify_platform(version: int) -> DeviceLocationProfile:
    """Pick acquisition parameters for an Android API level."""
    return _PROFILES[tier_for_version(version)]


def profile_for_platform(platform: PlatformInfo) -> DeviceLocationProfile:
    if not platform.is_android:
        return _PROFILES[PlatformTier.MODERN]
    return classify_platform(platform.version)


def version_name(version: int) -> str:
    return _VERSION_NAMES.get(version, f"Android {version}")


def platform_label(platform: PlatformInfo) -> str:
    if platform.is_android:
        return version_name(platform.version)
    return f"{platform.os} {platform.version}"


def services_hint(tier: PlatformTier) -> str:
    return _SERVICES_HINTS[tier]


def troubleshooting_hint(tier: PlatformTier) -> str:
    return _TROUBLESHOOTING_HINTS[tier]
