from fastapi.testclient import TestClient

from geoattend.main import create_app
from geoattend.models.domain import SubmissionResult
from geoattend.services.attendance import simulation

BRANCHES = [{"id": 3, "name": "Howrah", "lat": "22.5739500", "lng": "88.3066500"}]
INSIDE = {"latitude": 22.5738994, "longitude": 88.3065939}
OUTSIDE = {"latitude": 22.5919500, "longitude": 88.3066500}


def _client() -> TestClient:
    return TestClient(create_app())


def _simulate(client: TestClient, device: dict, **overrides) -> dict:
    body = {
        "emp_id": 11,
        "branches": BRANCHES,
        "device": device,
        "retry_delay_seconds": 0,
        "dry_run": True,
    }
    body.update(overrides)
    response = client.post("/api/attendance/simulate", json=body)
    assert response.status_code == 200, response.text
    return response.json()


def test_health_endpoints():
    client = _client()

    assert client.get("/api/health").json() == {"status": "ok"}
    config = client.get("/api/health/config").json()
    assert config["geofence_radius_meters"] == 100.0
    assert config["location_retry_attempts"] == 2


def test_geofence_check_inside_radius():
    response = _client().post("/api/geofence/check", json={**INSIDE, "branches": BRANCHES})

    assert response.status_code == 200
    data = response.json()
    assert data["within_radius"] is True
    assert 7.0 < data["distance_meters"] < 9.0
    assert data["nearest_branch"]["name"] == "Howrah"


def test_geofence_check_outside_radius():
    data = _client().post("/api/geofence/check", json={**OUTSIDE, "branches": BRANCHES}).json()

    assert data["within_radius"] is False
    assert data["distance_meters"] > 1_900


def test_geofence_check_requires_usable_branch():
    response = _client().post(
        "/api/geofence/check",
        json={**INSIDE, "branches": [{"id": 1, "lat": "not-a-number", "lng": "88.3"}]},
    )

    assert response.status_code == 400


def test_location_profile_for_pre_modern_device():
    data = _client().get("/api/location/profile/22").json()

    assert data["platform_version_class"] == "pre_modern"
    assert data["accuracy_preference"] is False
    assert data["timeout_ms"] == 60_000
    assert data["max_cache_age_ms"] == 900_000


def test_simulated_punch_inside_radius_succeeds():
    data = _simulate(_client(), {"coordinate": INSIDE})

    assert data["state"] == "success"
    assert data["acquisition_attempts"] == 1
    assert data["geofence"]["within_radius"] is True
    assert data["submission"]["message"] == "Dry run: attendance not sent."
    assert [update["state"] for update in data["history"]] == [
        "acquiring_location",
        "evaluating",
        "submitting",
        "success",
    ]


def test_simulated_punch_outside_radius_is_cancelled():
    data = _simulate(_client(), {"coordinate": OUTSIDE})

    assert data["state"] == "cancelled"
    assert "out_of_range" in [update["state"] for update in data["history"]]
    assert data["submission"] is None


def test_simulated_punch_gives_up_after_three_attempts():
    data = _simulate(_client(), {"coordinate": INSIDE, "failures": 9})

    assert data["state"] == "location_failed_final"
    assert data["acquisition_attempts"] == 3
    assert data["position_requests"] == 12
    assert data["alerts_shown"] == ["Location Unavailable"]


def test_simulated_punch_recovers_on_second_attempt():
    data = _simulate(_client(), {"coordinate": INSIDE, "failures": 4})

    assert data["state"] == "success"
    assert data["acquisition_attempts"] == 2


def test_simulated_punch_with_services_disabled():
    data = _simulate(_client(), {"coordinate": INSIDE, "services_enabled": False})

    assert data["state"] == "service_disabled"
    assert data["acquisition_attempts"] == 1
    assert data["alerts_shown"] == ["Location Services Required"]


def test_simulated_punch_with_permission_denied():
    data = _simulate(_client(), {"coordinate": INSIDE, "permission_result": "never_ask_again"})

    assert data["state"] == "permission_denied"
    assert data["position_requests"] == 0
    assert data["alerts_shown"] == ["Location Permission Required"]


def test_simulated_punch_with_rejected_biometric():
    data = _simulate(
        _client(),
        {"coordinate": INSIDE, "biometry_type": "Biometrics", "biometric_accepts": False},
        require_biometric=True,
    )

    assert data["state"] == "authentication_failed"
    assert data["position_requests"] == 0


def test_simulated_punch_on_ios_skips_android_checks():
    data = _simulate(_client(), {"os": "ios", "platform_version": 17, "coordinate": INSIDE})

    assert data["state"] == "success"
    assert data["position_requests"] == 1


def test_simulated_punch_without_branches_is_rejected():
    response = _client().post(
        "/api/attendance/simulate",
        json={"branches": [], "device": {"coordinate": INSIDE}, "dry_run": True},
    )

    assert response.status_code == 400


def test_simulated_punch_submits_through_attendance_client(monkeypatch):
    class FakeClient:
        payloads = []

        async def submit(self, payload):
            FakeClient.payloads.append(payload)
            return SubmissionResult(success=False, message="Attendance already marked")

    monkeypatch.setattr(simulation, "AttendanceApiClient", lambda: FakeClient())

    data = _simulate(_client(), {"coordinate": INSIDE}, dry_run=False, punch_type="out")

    assert data["state"] == "submission_failed"
    assert data["message"] == "Attendance already marked"
    assert len(FakeClient.payloads) == 1
    assert FakeClient.payloads[0].emp_id == 11
    assert FakeClient.payloads[0].type == "out"


def test_simulated_punch_without_fix_exhausts_retries():
    data = _simulate(_client(), {"coordinate": None, "services_enabled": True})

    assert data["state"] == "location_failed_final"
    assert data["acquisition_attempts"] == 3
    assert data["position_requests"] == 12
    assert data["alerts_shown"] == ["Location Unavailable"]
