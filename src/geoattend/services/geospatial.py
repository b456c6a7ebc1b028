"""Geospatial helper functions and branch geofencing."""

from __future__ import annotations

import math
from typing import Iterable

from ..models.domain import BranchLocation, Coordinate, GeofenceResult

EARTH_RADIUS_M = 6_371_000.0
DEFAULT_RADIUS_M = 100.0


def distance_meters(p1: Coordinate, p2: Coordinate) -> float:
    """Compute distance between two coordinates using the Haversine formula."""

    phi1, phi2 = math.radians(p1.latitude), math.radians(p2.latitude)
    d_phi = math.radians(p2.latitude - p1.latitude)
    d_lambda = math.radians(p2.longitude - p1.longitude)

    a = math.sin(d_phi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(d_lambda / 2) ** 2
    # Rounding can push ``a`` a hair past 1 for antipodal points.
    a = min(1.0, max(0.0, a))
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def is_within_radius(point: Coordinate, center: Coordinate, radius_meters: float = DEFAULT_RADIUS_M) -> bool:
    """Return True if ``point`` lies within ``radius_meters`` of ``center`` (inclusive)."""

    return distance_meters(point, center) <= radius_meters


def evaluate_geofence(
    point: Coordinate,
    branches: Iterable[BranchLocation],
    radius_meters: float = DEFAULT_RADIUS_M,
) -> GeofenceResult:
    """Check ``point`` against every branch; on-site if inside any branch's radius.

    A branch's own ``radius_meters`` overrides the call-site radius. The
    reported branch is the closest matching one when on-site, otherwise the
    closest branch overall.
    """
    nearest: BranchLocation | None = None
    nearest_distance = math.inf
    matched: BranchLocation | None = None
    matched_distance = math.inf

    for branch in branches:
        distance = distance_meters(point, branch.coordinate)
        limit = branch.radius_meters if branch.radius_meters is not None else radius_meters
        if distance < nearest_distance:
            nearest, nearest_distance = branch, distance
        if distance <= limit and distance < matched_distance:
            matched, matched_distance = branch, distance

    if matched is not None:
        return GeofenceResult(within_radius=True, nearest_branch=matched, distance_meters=matched_distance)
    return GeofenceResult(within_radius=False, nearest_branch=nearest, distance_meters=nearest_distance)
