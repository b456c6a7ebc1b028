import math

from conftest import BRANCH, EMPLOYEE, branch

from geoattend.models.domain import BranchLocation, Coordinate
from geoattend.services.geospatial import EARTH_RADIUS_M, distance_meters, evaluate_geofence, is_within_radius


def _equirectangular_m(p1: Coordinate, p2: Coordinate) -> float:
    mean_lat = math.radians((p1.latitude + p2.latitude) / 2)
    dx = math.radians(p2.longitude - p1.longitude) * math.cos(mean_lat)
    dy = math.radians(p2.latitude - p1.latitude)
    return EARTH_RADIUS_M * math.hypot(dx, dy)


def test_distance_between_identical_points_is_zero():
    assert distance_meters(EMPLOYEE, EMPLOYEE) == 0.0


def test_distance_between_antipodal_points_is_half_circumference():
    distance = distance_meters(Coordinate(0.0, 0.0), Coordinate(0.0, 180.0))
    assert abs(distance - math.pi * EARTH_RADIUS_M) < 1.0
    assert abs(distance - 20_015_086) < 1.0


def test_distance_matches_independent_reference():
    other = Coordinate(22.5750, 88.3070)
    distance = distance_meters(EMPLOYEE, other)

    assert abs(distance - _equirectangular_m(EMPLOYEE, other)) < 1.0
    assert 128.0 < distance < 131.0


def test_distance_is_symmetric():
    other = Coordinate(-33.8688, 151.2093)
    assert math.isclose(distance_meters(EMPLOYEE, other), distance_meters(other, EMPLOYEE))


def test_within_radius_boundary_is_inclusive():
    center = Coordinate(0.0, 0.0)
    point = Coordinate(0.0, 0.0009)
    distance = distance_meters(point, center)
    epsilon = 1e-6

    assert is_within_radius(point, center, distance)
    assert is_within_radius(point, center, distance + epsilon)
    assert not is_within_radius(point, center, distance - epsilon)


def test_employee_near_branch_is_within_default_radius():
    distance = distance_meters(EMPLOYEE, BRANCH)

    assert 7.0 <= distance <= 9.0
    assert is_within_radius(EMPLOYEE, BRANCH, 100)


def test_evaluate_geofence_matches_any_branch():
    far = Coordinate(EMPLOYEE.latitude + 0.05, EMPLOYEE.longitude)
    branches = [branch("far", far), branch("near", BRANCH)]

    result = evaluate_geofence(EMPLOYEE, branches, 100)

    assert result.within_radius
    assert result.nearest_branch.id == "near"
    assert result.distance_meters < 10


def test_evaluate_geofence_two_km_away_is_outside_every_branch():
    employee = Coordinate(BRANCH.latitude + 0.018, BRANCH.longitude)
    second = Coordinate(BRANCH.latitude - 0.001, BRANCH.longitude - 0.001)
    branches = [branch("A", BRANCH), branch("B", second)]

    assert all(not is_within_radius(employee, b.coordinate, 100) for b in branches)
    result = evaluate_geofence(employee, branches, 100)

    assert not result.within_radius
    assert result.nearest_branch.id == "A"
    assert 1_950 < result.distance_meters < 2_050


def test_evaluate_geofence_uses_branch_radius_override():
    employee = Coordinate(BRANCH.latitude + 0.0018, BRANCH.longitude)  # ~200 m north

    assert not evaluate_geofence(employee, [branch("A", BRANCH)], 100).within_radius
    assert evaluate_geofence(employee, [branch("A", BRANCH, radius=250)], 100).within_radius


def test_evaluate_geofence_without_branches():
    result = evaluate_geofence(EMPLOYEE, [], 100)

    assert not result.within_radius
    assert result.nearest_branch is None
    assert result.distance_meters == math.inf


def test_branch_from_session_record_parses_string_coordinates():
    record = {"id": 7, "name": "Salt Lake", "address": "Sector V", "lat": "22.5739500", "lng": "88.3066500"}

    parsed = BranchLocation.from_record(record)

    assert parsed.id == "7"
    assert parsed.coordinate == BRANCH
    assert parsed.radius_meters is None
