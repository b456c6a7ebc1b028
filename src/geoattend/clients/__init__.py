"""Clients for remote services."""

from .attendance_api import AttendanceApiClient

__all__ = ["AttendanceApiClient"]
