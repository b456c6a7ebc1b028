"""Attendance punch orchestration."""

from .orchestrator import AttendanceOrchestrator, AttendanceReport, AttendanceState, StatusUpdate

__all__ = ["AttendanceOrchestrator", "AttendanceReport", "AttendanceState", "StatusUpdate"]
