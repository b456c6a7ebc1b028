"""Application configuration and settings management."""

from typing import Any, Optional

import json
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration loaded from environment variables or defaults."""

    model_config = SettingsConfigDict(
        env_prefix="GEOATTEND_",
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    app_name: str = "Geofenced Attendance API"
    api_prefix: str = "/api"
    log_level: str = Field(default="INFO", description="Level applied to the geoattend logger.")
    attendance_api_base_url: Optional[str] = Field(
        default="https://performyx.fitbuddy.in/app_api",
        description="Base URL of the remote attendance API.",
    )
    attendance_endpoint: str = Field(default="/employee_attendance.php")
    attendance_api_timeout_seconds: float = Field(default=30.0, gt=0.0)
    geofence_radius_meters: float = Field(
        default=100.0,
        gt=0.0,
        description="Radius around each branch inside which an employee counts as on-site.",
    )
    location_retry_attempts: int = Field(
        default=2,
        ge=0,
        description="Extra location attempts after the first one fails.",
    )
    location_retry_delay_seconds: float = Field(default=2.0, ge=0.0)
    position_timeout_grace_seconds: float = Field(
        default=1.0,
        ge=0.0,
        description="Slack added on top of each native location timeout before the attempt is abandoned.",
    )
    require_biometric: bool = False
    frontend_allowed_origins: tuple[str, ...] = Field(
        default=(
            "http://localhost:8081",
            "http://127.0.0.1:8081",
        ),
        description="Permitted web origins for browser clients (CORS).",
    )

    @field_validator("attendance_api_base_url", mode="before")
    @classmethod
    def _strip_trailing_slash(cls, value: Any) -> Optional[str]:
        if value is None:
            return None
        text = str(value).strip()
        return text.rstrip("/") or None

    @field_validator("frontend_allowed_origins", mode="before")
    @classmethod
    def _parse_str_tuple_from_env(cls, value: Any) -> tuple[str, ...]:
        """Parse string tuple from environment variable (comma-separated or JSON array)."""
        if isinstance(value, tuple):
            return value
        if isinstance(value, list):
            return tuple(str(item) for item in value)
        if isinstance(value, str):
            try:
                parsed = json.loads(value)
                if isinstance(parsed, list):
                    return tuple(str(item) for item in parsed)
            except (json.JSONDecodeError, TypeError):
                pass
            if "," in value:
                return tuple(item.strip() for item in value.split(",") if item.strip())
            if value.strip():
                return (value.strip(),)
        return tuple()


settings = Settings()
