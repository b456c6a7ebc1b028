import asyncio
import json

import httpx
import pytest

from geoattend.clients.attendance_api import AttendanceApiClient
from geoattend.config import settings
from geoattend.models.domain import AttendancePayload

PAYLOAD = AttendancePayload(emp_id=7, lat=22.5738994, lng=88.3065939, date="2025-03-14", time="09:05:07")


def _submit(handler, calls=None):
    def recording(request: httpx.Request) -> httpx.Response:
        if calls is not None:
            calls.append(request)
        return handler(request)

    client = AttendanceApiClient(
        base_url="https://attendance.example.test/app_api",
        endpoint="/employee_attendance.php",
        transport=httpx.MockTransport(recording),
    )
    return asyncio.run(client.submit(PAYLOAD))


def test_successful_submission_posts_json_payload():
    calls = []

    result = _submit(lambda request: httpx.Response(200, json={"status": True, "message": "Attendance Marked"}), calls)

    assert result.success
    assert result.message == "Attendance Marked"
    request = calls[0]
    assert request.method == "POST"
    assert request.url.path == "/app_api/employee_attendance.php"
    assert json.loads(request.content) == {
        "emp_id": 7,
        "lat": 22.5738994,
        "lng": 88.3065939,
        "date": "2025-03-14",
        "time": "09:05:07",
        "type": "in",
    }


def test_string_success_status_is_accepted():
    result = _submit(lambda request: httpx.Response(200, json={"status": "success"}))

    assert result.success
    assert result.message == "Attendance recorded successfully."


def test_rejected_submission_keeps_server_message():
    result = _submit(lambda request: httpx.Response(200, json={"status": False, "message": "Already marked today"}))

    assert not result.success
    assert result.message == "Already marked today"


def test_rejected_submission_without_message_uses_fallback():
    result = _submit(lambda request: httpx.Response(200, json={"status": False}))

    assert result.message == "Failed to mark attendance"


def test_server_error_is_not_retried():
    calls = []

    result = _submit(lambda request: httpx.Response(500, json={"message": "Database unavailable"}), calls)

    assert not result.success
    assert result.message == "Database unavailable"
    assert len(calls) == 1


def test_server_error_without_json_body():
    result = _submit(lambda request: httpx.Response(502, text="Bad Gateway"))

    assert result.message == "Something went wrong"


def test_connection_failure_reports_generic_message():
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    result = _submit(refuse)

    assert not result.success
    assert result.message == "Something went wrong"


def test_missing_base_url_is_rejected(monkeypatch):
    monkeypatch.setattr(settings, "attendance_api_base_url", None)

    with pytest.raises(ValueError):
        AttendanceApiClient()
