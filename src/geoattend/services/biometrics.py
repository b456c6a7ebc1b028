"""Biometric confirmation before attendance is marked."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..models.domain import PlatformInfo
from ..platform.base import BiometricsBridge

logger = logging.getLogger(__name__)

BIOMETRIC_UNAVAILABLE = "BIOMETRIC_UNAVAILABLE"
AUTH_FAILED = "AUTH_FAILED"

DEFAULT_PROMPT = "Authenticate to mark attendance"


@dataclass(frozen=True, slots=True)
class BiometricAvailability:
    available: bool
    biometry_type: Optional[str] = None
    details: str = ""
    error: Optional[str] = None


@dataclass(frozen=True, slots=True)
class BiometricResult:
    success: bool
    error: Optional[str] = None
    help_text: Optional[str] = None


_SENSOR_DETAILS = {
    "TouchID": "Fingerprint sensor available",
    "FaceID": "Face recognition available",
    "Biometrics": "Biometric authentication available",
}

_SENSOR_INFO = {
    "TouchID": ("Touch ID", "Touch the Home button fingerprint sensor"),
    "FaceID": ("Face ID", "Look at the front camera"),
    "Biometrics": ("Fingerprint", "Use fingerprint sensor (Check: Back, Front, or Power button)"),
}


class BiometricService:
    """Wraps the native biometrics bridge; one instance per app session."""

    def __init__(self, platform: PlatformInfo, bridge: BiometricsBridge) -> None:
        self.platform = platform
        self.bridge = bridge

    async def is_biometric_available(self) -> BiometricAvailability:
        try:
            sensor = await self.bridge.is_sensor_available()
        except Exception as exc:
            logger.error(f"Biometric check error: {exc}")
            return BiometricAvailability(
                available=False,
                error="Biometric check failed",
                details="Unable to check biometric capabilities",
            )

        available = bool(sensor.get("available"))
        biometry_type = sensor.get("biometryType") or None
        if available:
            details = _SENSOR_DETAILS.get(biometry_type or "", "Biometric available")
        else:
            details = "Biometric not available on this device"
        return BiometricAvailability(available=available, biometry_type=biometry_type, details=details)

    def _prompt_for(self, biometry_type: Optional[str], prompt_message: str) -> str:
        if self.platform.is_android:
            if biometry_type == "Biometrics":
                return "Use fingerprint sensor to authenticate\n\nCheck: Back, Front, or Power button"
            return prompt_message
        if biometry_type == "TouchID":
            return "Touch the Home button fingerprint sensor"
        if biometry_type == "FaceID":
            return "Face ID to authenticate"
        return prompt_message

    async def authenticate(self, prompt_message: str = DEFAULT_PROMPT) -> BiometricResult:
        availability = await self.is_biometric_available()
        if not availability.available:
            return BiometricResult(
                success=False,
                error=BIOMETRIC_UNAVAILABLE,
                help_text="Fingerprint/Face ID not available on this device",
            )

        logger.info(f"Starting biometric auth: {availability.biometry_type}")
        try:
            result = await self.bridge.simple_prompt(
                self._prompt_for(availability.biometry_type, prompt_message),
                "Cancel",
            )
        except Exception as exc:
            logger.error(f"Biometric authentication error: {exc}")
            text = str(exc).lower()
            if "cancel" in text:
                return BiometricResult(
                    success=False,
                    error="Authentication cancelled",
                    help_text="You cancelled the biometric authentication",
                )
            if "not enrolled" in text:
                return BiometricResult(
                    success=False,
                    error="Biometric not set up",
                    help_text="Please set up fingerprint/face ID in device settings",
                )
            return BiometricResult(success=False, error="Authentication failed", help_text="Please try again")

        if result.get("success"):
            logger.info("Biometric authentication successful")
            return BiometricResult(success=True)

        logger.info("Biometric authentication failed or cancelled")
        return BiometricResult(
            success=False,
            error=AUTH_FAILED,
            help_text="Authentication failed. Please try again.",
        )

    async def biometric_info(self) -> dict:
        availability = await self.is_biometric_available()
        type_name, instructions = "Not Available", "Biometric authentication not available"
        if availability.available and availability.biometry_type:
            type_name, instructions = _SENSOR_INFO.get(
                availability.biometry_type, ("Biometric", "Use biometric authentication")
            )
        return {
            "available": availability.available,
            "type": availability.biometry_type,
            "type_name": type_name,
            "instructions": instructions,
            "details": availability.details,
        }
