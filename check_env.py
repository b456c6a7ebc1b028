#!/usr/bin/env python3
"""Helper script to check and create .env file for the attendance service."""

from pathlib import Path
import sys

TEMPLATE = """# Remote attendance API
GEOATTEND_ATTENDANCE_API_BASE_URL=https://performyx.fitbuddy.in/app_api
GEOATTEND_ATTENDANCE_ENDPOINT=/employee_attendance.php

# Geofence and location retries
GEOATTEND_GEOFENCE_RADIUS_METERS=100
GEOATTEND_LOCATION_RETRY_ATTEMPTS=2
GEOATTEND_LOCATION_RETRY_DELAY_SECONDS=2

# Biometric confirmation before each punch
GEOATTEND_REQUIRE_BIOMETRIC=false

# API Configuration
GEOATTEND_API_PREFIX=/api
# GEOATTEND_FRONTEND_ALLOWED_ORIGINS accepts a JSON array or comma-separated list
"""


def main():
    project_root = Path(__file__).parent
    env_file = project_root / ".env"

    print("=" * 60)
    print("Attendance Service Environment Checker")
    print("=" * 60)
    print()

    if not env_file.exists():
        print(f"❌ .env file NOT found at: {env_file}")
        print("Creating template .env file...")
        env_file.write_text(TEMPLATE, encoding="utf-8")
        print(f"✅ Created .env file at: {env_file}")
        print()
    else:
        print(f"✅ Found .env file at: {env_file}")
        print()

    print("Testing config loading...")
    print()
    try:
        sys.path.insert(0, str(project_root / "src"))
        from geoattend.config import settings
    except Exception as e:
        print(f"❌ Error loading config: {e}")
        print()
        print("Make sure you're running this from the project root directory")
        return

    if settings.attendance_api_base_url:
        print(f"✅ Attendance API: {settings.attendance_api_base_url}{settings.attendance_endpoint}")
    else:
        print("❌ GEOATTEND_ATTENDANCE_API_BASE_URL is not set; only dry runs will work")
    print(f"   Geofence radius: {settings.geofence_radius_meters:g} m")
    print(
        f"   Location retries: {settings.location_retry_attempts} "
        f"(every {settings.location_retry_delay_seconds:g}s)"
    )
    print(f"   Biometric required: {settings.require_biometric}")


if __name__ == "__main__":
    main()
