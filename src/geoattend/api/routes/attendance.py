"""Attendance endpoints."""

from __future__ import annotations

import logging

from fastapi import APIRouter, HTTPException, status

from ...schemas.attendance import AttendanceSimulationRequest, AttendanceSimulationResponse
from ...services.attendance.simulation import simulate_attendance

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/attendance", tags=["attendance"])


@router.post("/simulate", response_model=AttendanceSimulationResponse, status_code=status.HTTP_200_OK)
async def simulate(payload: AttendanceSimulationRequest) -> AttendanceSimulationResponse:
    """Run a full attendance punch against a scripted device."""
    try:
        return await simulate_attendance(payload)
    except ValueError as exc:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)) from exc
    except Exception as exc:
        logger.exception(f"Error simulating attendance: {exc}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Failed to simulate attendance: {str(exc)}",
        ) from exc
