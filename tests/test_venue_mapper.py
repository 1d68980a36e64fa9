"""
Unit tests for the venue model and venue mapper.

Tests cover:
- Venue model parsing and validation
- Point-in-polygon ray casting
- Floor assignment by nearest elevation
- Zone lookup in model order
- Floor and zone transitions, reported once
- Behavior with no venue loaded
"""

import pytest

from spatial_core.exceptions import InvalidVenueModel, VenueNotLoaded
from spatial_core.localization.geodesy import offset_m
from spatial_core.localization.venue_mapper import VenueMapper, point_in_polygon
from spatial_core.proto.spatial_position import GeoPoint, LocalPoint
from spatial_core.proto.venue import VenueModel, Zone

SQUARE = ((0.0, 0.0), (10.0, 0.0), (10.0, 10.0), (0.0, 10.0))
L_SHAPE = ((0.0, 0.0), (10.0, 0.0), (10.0, 4.0), (4.0, 4.0), (4.0, 10.0), (0.0, 10.0))


def at(origin: GeoPoint, north_m: float, east_m: float = 0.0, altitude: float = 0.0) -> GeoPoint:
    point = offset_m(origin, north_m=north_m, east_m=east_m)
    return GeoPoint(point.latitude, point.longitude, altitude=altitude, timestamp=1.0)


def map_at(mapper: VenueMapper, geo: GeoPoint):
    return mapper.map_position(geo, [], confidence=0.8, accuracy_m=3.0)


@pytest.fixture
def mapper(venue) -> VenueMapper:
    return VenueMapper(venue)


class TestVenueModel:
    """Tests for venue parsing and validation."""

    def test_from_dict(self, venue):
        assert venue.id == "test_venue"
        assert [f.level for f in venue.floors] == [1, 2]
        assert venue.floor(1).zones[0].id == "main_bar"
        assert venue.floor(3) is None

    def test_dict_round_trip(self, venue):
        assert VenueModel.from_dict(venue.to_dict()) == venue

    def test_missing_key(self, venue_dict):
        del venue_dict["coordinateSystem"]

        with pytest.raises(InvalidVenueModel) as exc_info:
            VenueModel.from_dict(venue_dict)
        assert exc_info.value.field == "coordinateSystem"

    def test_no_floors(self, venue_dict):
        venue_dict["floors"] = []

        with pytest.raises(InvalidVenueModel):
            VenueModel.from_dict(venue_dict)

    def test_degenerate_zone(self):
        with pytest.raises(InvalidVenueModel):
            Zone(id="z", name="Z", type="bar", polygon=((0.0, 0.0), (1.0, 1.0)))

    def test_non_positive_scale(self, venue_dict):
        venue_dict["coordinateSystem"]["scale"] = 0

        with pytest.raises(InvalidVenueModel):
            VenueModel.from_dict(venue_dict)

    def test_zone_centroid(self):
        zone = Zone(id="z", name="Z", type="bar", polygon=SQUARE)

        assert zone.centroid() == (5.0, 5.0)


class TestPointInPolygon:
    """Tests for ray casting."""

    def test_inside_square(self):
        assert point_in_polygon(5.0, 5.0, SQUARE)

    def test_outside_square(self):
        assert not point_in_polygon(15.0, 5.0, SQUARE)
        assert not point_in_polygon(5.0, -1.0, SQUARE)

    def test_concave_polygon(self):
        assert point_in_polygon(2.0, 8.0, L_SHAPE)
        assert point_in_polygon(8.0, 2.0, L_SHAPE)
        assert not point_in_polygon(8.0, 8.0, L_SHAPE)

    def test_boundary_is_deterministic(self):
        first = point_in_polygon(10.0, 5.0, SQUARE)

        assert all(point_in_polygon(10.0, 5.0, SQUARE) == first for _ in range(5))


class TestFloorAndZone:
    """Tests for floor assignment and zone lookup."""

    def test_nearest_elevation(self, mapper):
        assert mapper.assign_floor(0.4) == 1
        assert mapper.assign_floor(4.0) == 2
        assert mapper.assign_floor(50.0) == 2

    def test_tie_goes_to_first_floor(self, mapper):
        assert mapper.assign_floor(2.5) == 1

    def test_missing_altitude_uses_origin(self, mapper):
        assert mapper.assign_floor(None) == 1

    def test_find_zone(self, mapper):
        assert mapper.find_zone(LocalPoint(0.0, 5.0), 1).id == "main_bar"
        assert mapper.find_zone(LocalPoint(0.0, -30.0), 1).id == "seating_area"
        assert mapper.find_zone(LocalPoint(100.0, 100.0), 1) is None
        assert mapper.find_zone(LocalPoint(0.0, 5.0), 9) is None

    def test_first_zone_wins_on_overlap(self, venue_dict):
        overlap = dict(venue_dict["floors"][0]["zones"][0], id="vip_bar", name="VIP Bar")
        venue_dict["floors"][0]["zones"].append(overlap)
        mapper = VenueMapper(VenueModel.from_dict(venue_dict))

        assert mapper.find_zone(LocalPoint(0.0, 5.0), 1).id == "main_bar"

    def test_nearby_zones(self, mapper):
        nearby = mapper.nearby_zones(LocalPoint(0.0, 0.0), 1, zone_type="bar")

        assert [zone.id for zone, _ in nearby] == ["main_bar"]
        assert nearby[0][1] == pytest.approx(5.0)

    def test_nearby_zones_radius(self, mapper):
        assert mapper.nearby_zones(LocalPoint(0.0, 0.0), 2) == []
        assert len(mapper.nearby_zones(LocalPoint(0.0, 0.0), 2, radius_m=100.0)) == 1


class TestTransitions:
    """Tests for floor/zone transition reporting."""

    def test_first_update_reports_from_none(self, mapper, origin):
        result = map_at(mapper, at(origin, 5.0))

        kinds = [(t.kind, t.old) for t in result.transitions]
        assert kinds == [("floor", None), ("zone_enter", None)]
        assert result.transitions[0].new == 1
        assert result.position.floor == 1
        assert result.position.zone_id == "main_bar"

    def test_unchanged_position_reports_nothing(self, mapper, origin):
        map_at(mapper, at(origin, 5.0))

        assert map_at(mapper, at(origin, 6.0)).transitions == []

    def test_zone_change_reports_exit_then_enter(self, mapper, origin):
        map_at(mapper, at(origin, 5.0))

        result = map_at(mapper, at(origin, -30.0))

        assert [t.kind for t in result.transitions] == ["zone_exit", "zone_enter"]
        assert result.transitions[0].old.id == "main_bar"
        assert result.transitions[1].new.id == "seating_area"

    def test_floor_change(self, mapper, origin):
        map_at(mapper, at(origin, -30.0))

        result = map_at(mapper, at(origin, -30.0, altitude=5.0))

        assert [t.kind for t in result.transitions] == ["floor", "zone_exit"]
        assert (result.transitions[0].new, result.transitions[0].old) == (2, 1)
        assert result.position.zone is None

    def test_reset_transitions(self, mapper, origin):
        map_at(mapper, at(origin, 5.0))
        mapper.reset_transitions()

        result = map_at(mapper, at(origin, 5.0))

        assert [t.kind for t in result.transitions] == ["floor", "zone_enter"]

    def test_local_position_set(self, mapper, origin):
        result = map_at(mapper, at(origin, 5.0, east_m=3.0))

        local = result.position.local_position
        assert local.x == pytest.approx(3.0, abs=0.05)
        assert local.y == pytest.approx(5.0, abs=0.05)


class TestWithoutVenue:
    """Tests for mapping with no venue loaded."""

    def test_map_position_without_venue(self, origin):
        result = map_at(VenueMapper(), origin)

        assert result.position.local_position is None
        assert result.position.floor is None
        assert result.position.zone is None
        assert result.transitions == []

    def test_conversions_raise(self, origin):
        mapper = VenueMapper()

        with pytest.raises(VenueNotLoaded):
            mapper.geo_to_local(origin)
        with pytest.raises(VenueNotLoaded):
            mapper.local_to_geo(LocalPoint(0.0, 0.0))

    def test_unload(self, mapper, origin):
        mapper.unload_venue()

        assert not mapper.is_loaded
        with pytest.raises(VenueNotLoaded):
            mapper.is_within_bounds(origin)


class TestBounds:
    """Tests for venue bounds checks."""

    def test_is_within_bounds(self, mapper, origin):
        assert mapper.is_within_bounds(origin)
        assert not mapper.is_within_bounds(GeoPoint(26.0, -80.0))

    def test_local_bounds(self, mapper):
        low, high = mapper.local_bounds()

        assert low.x < 0 < high.x
        assert low.y < 0 < high.y
