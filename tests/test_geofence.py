"""Tests for the venue distance gate."""

import pytest

from operator_client.geofence import GeofenceGate, haversine_km


def test_same_point_is_zero():
    assert haversine_km(-7.782357, 110.401167, -7.782357, 110.401167) == 0


def test_one_degree_of_latitude():
    assert haversine_km(0, 0, 1, 0) == pytest.approx(111.195, rel=1e-3)


def test_distance_is_symmetric():
    there = haversine_km(-7.78, 110.40, -6.27, 106.94)
    back = haversine_km(-6.27, 106.94, -7.78, 110.40)
    assert there == pytest.approx(back)


def test_inside_radius_enables_editing():
    gate = GeofenceGate()
    # roughly 100 m north of the venue
    result = gate.check(-7.781457, 110.401167)
    assert result.can_edit is True
    assert result.distance_km == pytest.approx(0.1, abs=0.01)


def test_outside_radius_is_view_only():
    gate = GeofenceGate()
    result = gate.check(-6.265856, 106.944008)
    assert result.can_edit is False
    assert "View-only" in result.status


def test_radius_boundary_is_inclusive():
    lat, lon = -7.79, 110.41
    gate = GeofenceGate(max_distance_km=haversine_km(lat, lon, GeofenceGate.venue_lat, GeofenceGate.venue_lon))
    assert gate.check(lat, lon).can_edit is True


def test_missing_coordinates_are_view_only():
    result = GeofenceGate().check(None, None)
    assert result.can_edit is False
    assert result.distance_km is None
