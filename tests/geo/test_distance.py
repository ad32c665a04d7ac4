"""Tests for the centralized distance utility."""

import pytest

from geo.distance import (
    EARTH_RADIUS_KM,
    EARTH_RADIUS_M,
    has_coordinates,
    haversine_distance_km,
    haversine_distance_m,
    is_within_radius,
)

WILLIAMS_LAKE = (51.6426, -121.2960)
QUESNEL = (52.9784, -122.4927)
VANCOUVER = (49.2827, -123.1207)


@pytest.mark.unit
class TestHaversineDistanceKm:
    def test_same_point_returns_zero(self) -> None:
        """Identical points are zero kilometers apart."""
        lat, lon = WILLIAMS_LAKE
        assert haversine_distance_km(lat, lon, lat, lon) == 0.0

    def test_known_distance_williams_lake_to_quesnel(self) -> None:
        """Williams Lake to Quesnel is roughly 170km as the crow flies."""
        distance = haversine_distance_km(*WILLIAMS_LAKE, *QUESNEL)
        assert 160 <= distance <= 180

    def test_known_distance_williams_lake_to_vancouver(self) -> None:
        """Williams Lake to Vancouver is just under 300 km in a straight line."""
        distance = haversine_distance_km(*WILLIAMS_LAKE, *VANCOUVER)
        assert 280 <= distance <= 305

    def test_symmetry(self) -> None:
        """Swapping the endpoints gives the same distance."""
        ab = haversine_distance_km(*WILLIAMS_LAKE, *VANCOUVER)
        ba = haversine_distance_km(*VANCOUVER, *WILLIAMS_LAKE)
        assert ab == pytest.approx(ba, rel=1e-12)

    def test_one_degree_of_latitude(self) -> None:
        """One degree along a meridian is R * pi / 180."""
        distance = haversine_distance_km(50.0, -121.0, 51.0, -121.0)
        assert distance == pytest.approx(111.195, abs=0.001)

    def test_non_negative_for_out_of_range_input(self) -> None:
        """Out-of-range degrees still produce a defined, non-negative distance."""
        distance = haversine_distance_km(95.0, 200.0, -95.0, -200.0)
        assert distance >= 0

    def test_antipodal_points(self) -> None:
        """Antipodal points are half the Earth's circumference apart."""
        distance = haversine_distance_km(0.0, 0.0, 0.0, 180.0)
        assert distance == pytest.approx(EARTH_RADIUS_KM * 3.141592653589793, rel=1e-9)


@pytest.mark.unit
class TestHaversineDistanceM:
    def test_short_distance_accuracy(self) -> None:
        """About 100m north of Williams Lake center."""
        lat, lon = WILLIAMS_LAKE
        distance = haversine_distance_m(lat, lon, lat + 0.0009, lon)
        assert 90 <= distance <= 110

    def test_units_are_consistent(self) -> None:
        """The meter result is the kilometer result times 1000."""
        km = haversine_distance_km(*WILLIAMS_LAKE, *QUESNEL)
        m = haversine_distance_m(*WILLIAMS_LAKE, *QUESNEL)
        assert m == pytest.approx(km * 1000, rel=1e-12)
        assert EARTH_RADIUS_M == EARTH_RADIUS_KM * 1000


@pytest.mark.unit
class TestIsWithinRadius:
    def test_boundary_is_inclusive(self) -> None:
        """A listing exactly at the radius is inside it."""
        assert is_within_radius(10.0, 10.0)

    def test_outside(self) -> None:
        """Just past the radius is outside."""
        assert not is_within_radius(10.01, 10.0)

    def test_zero_distance(self) -> None:
        """Zero distance is within any non-negative radius."""
        assert is_within_radius(0.0, 0.0)

    def test_missing_distance_is_never_within(self) -> None:
        """A listing with no distance is never inside a radius."""
        assert not is_within_radius(None, 1000.0)


@pytest.mark.unit
class TestHasCoordinates:
    def test_both_present(self) -> None:
        """Zero is a real coordinate."""
        assert has_coordinates(0.0, 0.0)

    @pytest.mark.parametrize("lat,lng", [(None, 1.0), (1.0, None), (None, None)])
    def test_missing(self, lat, lng) -> None:
        """Either coordinate missing means no position."""
        assert not has_coordinates(lat, lng)
