"""Unit tests for coordinate conversions and launch-site validation."""

import pytest
from numpy.testing import assert_allclose

from flightpath.errors import ConfigurationError
from flightpath.geo import (
    DEFAULT_LAUNCH_SITE,
    Coordinates,
    LaunchSite,
    destination_point,
    geographic_to_local,
    haversine_distance,
    initial_bearing,
    local_to_geographic,
)

ORIGIN = Coordinates(latitude=35.0, longitude=139.0)


class TestLocalConversion:
    """Test the flat-earth local frame."""

    def test_north_one_degree(self):
        coords = local_to_geographic(ORIGIN, 0.0, 111320.0)

        assert_allclose(coords.latitude, 36.0)
        assert coords.longitude == 139.0

    def test_east_scaled_by_latitude(self):
        equator = local_to_geographic(Coordinates(latitude=0.0, longitude=0.0), 111320.0, 0.0)
        sixty = local_to_geographic(Coordinates(latitude=60.0, longitude=0.0), 111320.0, 0.0)

        assert_allclose(equator.longitude, 1.0)
        assert_allclose(sixty.longitude, 2.0)

    def test_inverse(self):
        coords = local_to_geographic(ORIGIN, 250.0, -130.0)

        assert_allclose(geographic_to_local(ORIGIN, coords), (250.0, -130.0))

    def test_accepts_launch_site(self):
        site = LaunchSite(latitude=35.0, longitude=139.0, elevation=100.0)

        assert local_to_geographic(site, 0.0, 0.0) == ORIGIN

    def test_agrees_with_great_circle(self):
        """Over a few hundred metres the flat frame matches haversine."""
        coords = local_to_geographic(ORIGIN, 300.0, 400.0)

        assert_allclose(haversine_distance(ORIGIN, coords), 500.0, rtol=2e-3)
        assert_allclose(initial_bearing(ORIGIN, coords), 36.87, atol=0.1)


class TestGreatCircle:
    """Test spherical helpers."""

    def test_zero_distance(self):
        assert haversine_distance(ORIGIN, ORIGIN) == 0.0

    def test_degree_of_latitude(self):
        north = Coordinates(latitude=36.0, longitude=139.0)

        assert_allclose(haversine_distance(ORIGIN, north), 111195.0, rtol=1e-4)
        assert_allclose(initial_bearing(ORIGIN, north), 0.0, atol=1e-9)

    def test_bearing_east_on_equator(self):
        start = Coordinates(latitude=0.0, longitude=0.0)
        end = Coordinates(latitude=0.0, longitude=1.0)

        assert_allclose(initial_bearing(start, end), 90.0)

    def test_bearing_west_normalised(self):
        start = Coordinates(latitude=0.0, longitude=1.0)
        end = Coordinates(latitude=0.0, longitude=0.0)

        assert_allclose(initial_bearing(start, end), 270.0)

    def test_destination_point(self):
        end = destination_point(ORIGIN, 1000.0, 135.0)

        assert_allclose(haversine_distance(ORIGIN, end), 1000.0, rtol=1e-9)
        assert_allclose(initial_bearing(ORIGIN, end), 135.0, atol=1e-6)


class TestLaunchSite:
    """Test launch-site defaults and validation."""

    def test_defaults(self):
        site = LaunchSite(latitude=10.0, longitude=20.0)

        assert site.elevation == 0.0
        assert site.launch_angle == 90.0
        assert site.launch_azimuth == 0.0
        assert site.coordinates == Coordinates(latitude=10.0, longitude=20.0)

    def test_default_site_valid(self):
        DEFAULT_LAUNCH_SITE.validate()

    @pytest.mark.parametrize("kwargs,message", [
        ({"latitude": 91.0}, "latitude"),
        ({"longitude": -181.0}, "longitude"),
        ({"launch_angle": 0.0}, "launch_angle"),
        ({"launch_angle": 95.0}, "launch_angle"),
        ({"elevation": float("nan")}, "elevation"),
    ])
    def test_invalid(self, kwargs, message):
        values = {"latitude": 35.0, "longitude": 139.0, **kwargs}

        with pytest.raises(ConfigurationError, match=message):
            LaunchSite(**values).validate()
