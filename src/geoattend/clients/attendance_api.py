"""HTTP client for the remote attendance API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import settings
from ..models.domain import AttendancePayload, SubmissionResult

logger = logging.getLogger(__name__)

DEFAULT_FAILURE_MESSAGE = "Something went wrong"


def _is_success_status(status: Any) -> bool:
    if isinstance(status, bool):
        return status
    if isinstance(status, str):
        return status.strip().lower() in {"true", "success"}
    return False


def _message_from(response: httpx.Response | None, fallback: str) -> str:
    if response is None:
        return fallback
    try:
        data = response.json()
    except ValueError:
        return fallback
    if isinstance(data, dict) and data.get("message"):
        return str(data["message"])
    return fallback


class AttendanceApiClient:
    """Posts attendance punches. Never retries: a repeat could record a duplicate."""

    def __init__(
        self,
        base_url: str | None = None,
        endpoint: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url or settings.attendance_api_base_url
        if not self.base_url:
            raise ValueError("Attendance API base URL is not configured.")
        self.endpoint = endpoint or settings.attendance_endpoint
        self.timeout = timeout if timeout is not None else settings.attendance_api_timeout_seconds
        self.transport = transport

    def _get_client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(
            base_url=self.base_url,
            timeout=httpx.Timeout(self.timeout, connect=10.0),
            headers={"Content-Type": "application/json"},
            transport=self.transport,
        )

    async def submit(self, payload: AttendancePayload) -> SubmissionResult:
        body = payload.as_json()
        logger.info(f"POST {self.base_url}{self.endpoint} for employee {payload.emp_id}")
        logger.debug(f"Attendance payload: {body}")

        async with self._get_client() as client:
            try:
                response = await client.post(self.endpoint, json=body)
                response.raise_for_status()
                data = response.json()
            except httpx.HTTPStatusError as exc:
                message = _message_from(exc.response, DEFAULT_FAILURE_MESSAGE)
                logger.warning(f"Attendance API returned {exc.response.status_code}: {message}")
                return SubmissionResult(success=False, message=message)
            except httpx.HTTPError as exc:
                logger.warning(f"Attendance API request failed: {exc}")
                return SubmissionResult(success=False, message=DEFAULT_FAILURE_MESSAGE)
            except ValueError as exc:
                logger.warning(f"Attendance API returned a non-JSON body: {exc}")
                return SubmissionResult(success=False, message=DEFAULT_FAILURE_MESSAGE)

        if not isinstance(data, dict):
            return SubmissionResult(success=False, message=DEFAULT_FAILURE_MESSAGE)

        success = _is_success_status(data.get("status"))
        message = str(data.get("message") or "")
        if success:
            return SubmissionResult(success=True, message=message or "Attendance recorded successfully.")
        return SubmissionResult(success=False, message=message or "Failed to mark attendance")
