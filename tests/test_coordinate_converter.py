"""
Unit tests for the venue coordinate transform.

Tests cover:
- Equirectangular displacement from the venue origin
- Rotation and uniform planar scale
- Vertical axis handling
- Round trips within centimeters over a venue-sized area
"""

import pytest

from spatial_core.localization.coordinate_converter import CoordinateConverter
from spatial_core.localization.geodesy import METERS_PER_DEGREE
from spatial_core.proto.spatial_position import GeoPoint, LocalPoint
from spatial_core.proto.venue import CoordinateSystem

from conftest import ORIGIN_LAT, ORIGIN_LON


def make_converter(rotation_deg: float = 0.0, scale: float = 1.0, altitude: float = 10.0) -> CoordinateConverter:
    origin = GeoPoint(latitude=ORIGIN_LAT, longitude=ORIGIN_LON, altitude=altitude)
    return CoordinateConverter(CoordinateSystem(origin=origin, rotation_deg=rotation_deg, scale=scale))


class TestGeoToLocal:
    """Tests for geographic to local conversion."""

    def test_origin_maps_to_zero(self):
        local = make_converter().geo_to_local(GeoPoint(ORIGIN_LAT, ORIGIN_LON, 10.0))

        assert local.x == pytest.approx(0.0)
        assert local.y == pytest.approx(0.0)
        assert local.z == pytest.approx(0.0)

    def test_north_displacement(self):
        local = make_converter().geo_to_local(GeoPoint(ORIGIN_LAT + 0.001, ORIGIN_LON))

        assert local.x == pytest.approx(0.0)
        assert local.y == pytest.approx(0.001 * METERS_PER_DEGREE)

    def test_east_displacement_shrinks_with_latitude(self):
        local = make_converter().geo_to_local(GeoPoint(ORIGIN_LAT, ORIGIN_LON + 0.001))

        assert 0 < local.x < 0.001 * METERS_PER_DEGREE
        assert local.y == pytest.approx(0.0)

    def test_rotation(self):
        converter = make_converter(rotation_deg=90.0)
        local = converter.geo_to_local(GeoPoint(ORIGIN_LAT + 10.0 / METERS_PER_DEGREE, ORIGIN_LON))

        assert local.x == pytest.approx(-10.0)
        assert local.y == pytest.approx(0.0, abs=1e-9)

    def test_scale_is_planar(self):
        converter = make_converter(scale=2.0)
        local = converter.geo_to_local(GeoPoint(ORIGIN_LAT + 10.0 / METERS_PER_DEGREE, ORIGIN_LON, 15.0))

        assert local.y == pytest.approx(20.0)
        assert local.z == pytest.approx(5.0)

    def test_missing_altitude_maps_to_ground(self):
        local = make_converter().geo_to_local(GeoPoint(ORIGIN_LAT, ORIGIN_LON))

        assert local.z == 0.0

    def test_altitude_override(self):
        local = make_converter().geo_to_local(GeoPoint(ORIGIN_LAT, ORIGIN_LON, 50.0), altitude=12.0)

        assert local.z == pytest.approx(2.0)


class TestLocalToGeo:
    """Tests for local to geographic conversion."""

    def test_altitude_from_origin(self):
        geo = make_converter(altitude=25.0).local_to_geo(LocalPoint(0.0, 0.0, 3.0))

        assert geo.latitude == pytest.approx(ORIGIN_LAT)
        assert geo.longitude == pytest.approx(ORIGIN_LON)
        assert geo.altitude == pytest.approx(28.0)

    def test_timestamp_carried(self):
        geo = make_converter().local_to_geo(LocalPoint(1.0, 2.0, 0.0, timestamp=42.0))

        assert geo.timestamp == 42.0


class TestRoundTrip:
    """Round trips over a 500 m area must stay within 1 cm."""

    @pytest.mark.parametrize("rotation_deg,scale", [
        (0.0, 1.0),
        (37.5, 1.0),
        (-120.0, 0.5),
        (270.0, 3.0),
    ])
    def test_local_round_trip(self, rotation_deg, scale):
        converter = make_converter(rotation_deg, scale)

        for x, y, z in [(0.0, 0.0, 0.0), (250.0, -250.0, 4.0), (-180.0, 90.0, -2.5)]:
            back = converter.geo_to_local(converter.local_to_geo(LocalPoint(x, y, z)))
            assert back.x == pytest.approx(x, abs=0.01)
            assert back.y == pytest.approx(y, abs=0.01)
            assert back.z == pytest.approx(z, abs=0.01)

    @pytest.mark.parametrize("rotation_deg,scale", [
        (0.0, 1.0),
        (15.0, 1.25),
        (-75.0, 0.8),
        (200.0, 2.0),
    ])
    @pytest.mark.parametrize("latitude,longitude,altitude", [
        (25.7612, -80.1923, 10.0),
        (25.7629, -80.1940, 14.5),
        (25.7596, -80.1906, 3.0),
        (25.7620, -80.1915, 22.0),
    ])
    def test_geo_round_trip_inside_venue(self, venue, rotation_deg, scale, latitude, longitude, altitude):
        converter = make_converter(rotation_deg, scale)
        bounds = venue.bounds
        assert bounds.south <= latitude <= bounds.north
        assert bounds.west <= longitude <= bounds.east

        back = converter.local_to_geo(converter.geo_to_local(GeoPoint(latitude, longitude, altitude)))

        assert back.latitude == pytest.approx(latitude, abs=1e-9)
        assert back.longitude == pytest.approx(longitude, abs=1e-9)
        assert back.altitude == pytest.approx(altitude, abs=1e-6)
