"""
Venue Mapper.

Places fused geographic positions into the active venue model: local
coordinates, floor (nearest elevation) and zone (first containing polygon in
model order). Floor and zone transitions are reported exactly once, on the
update where the assigned id changes.
"""

import logging
import math
import threading
from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from spatial_core.exceptions import VenueNotLoaded
from spatial_core.proto.spatial_position import GeoPoint, LocalPoint, PositionSource, SpatialPosition
from spatial_core.proto.venue import VenueModel, Zone
from spatial_core.localization.coordinate_converter import CoordinateConverter

logger = logging.getLogger(__name__)


def point_in_polygon(x: float, y: float, polygon: Sequence[Tuple[float, float]]) -> bool:
    """
    Even-odd ray casting test.

    Points on an edge or vertex get a fixed, repeatable answer determined by
    the half-open comparisons below.
    """
    inside = False
    n = len(polygon)
    j = n - 1
    for i in range(n):
        xi, yi = polygon[i]
        xj, yj = polygon[j]
        if (yi > y) != (yj > y):
            x_cross = (xj - xi) * (y - yi) / (yj - yi) + xi
            if x < x_cross:
                inside = not inside
        j = i
    return inside


@dataclass(frozen=True)
class Transition:
    """
    Floor or zone change.

    kind is 'floor', 'zone_exit' or 'zone_enter'. For floors, new/old are
    levels; for zones, new/old are Zone objects (exit carries old, enter new).
    """

    kind: str
    new: object = None
    old: object = None


@dataclass
class MappingResult:
    position: SpatialPosition
    transitions: List[Transition] = field(default_factory=list)


class VenueMapper:
    """
    Venue-aware position mapping.

    Usage:
        mapper = VenueMapper()
        mapper.load_venue(venue)
        result = mapper.map_position(geo, sources, confidence=0.8, accuracy_m=3.0)
        for t in result.transitions:
            ...

    Without a venue, map_position still returns a SpatialPosition with
    local_position and floor set to None; geo_to_local/local_to_geo raise
    VenueNotLoaded.
    """

    def __init__(self, venue: Optional[VenueModel] = None):
        self._lock = threading.Lock()
        self.venue: Optional[VenueModel] = None
        self._converter: Optional[CoordinateConverter] = None
        self._current_floor: Optional[int] = None
        self._current_zone: Optional[Zone] = None
        if venue is not None:
            self.load_venue(venue)

    @property
    def is_loaded(self) -> bool:
        return self.venue is not None

    def load_venue(self, venue: VenueModel):
        """Activate a venue model and clear transition state."""
        with self._lock:
            self.venue = venue
            self._converter = CoordinateConverter(venue.coordinate_system)
            self._current_floor = None
            self._current_zone = None
        logger.info("Venue loaded: %s (%d floors)", venue.name, len(venue.floors))

    def unload_venue(self):
        with self._lock:
            self.venue = None
            self._converter = None
            self._current_floor = None
            self._current_zone = None

    def reset_transitions(self):
        """Forget the last floor/zone so the next update reports from None."""
        with self._lock:
            self._current_floor = None
            self._current_zone = None

    def _require_converter(self) -> CoordinateConverter:
        if self._converter is None:
            raise VenueNotLoaded("No venue model is loaded")
        return self._converter

    def geo_to_local(self, point: GeoPoint) -> LocalPoint:
        """
        Raises:
            VenueNotLoaded: if no venue model is active
        """
        return self._require_converter().geo_to_local(point)

    def local_to_geo(self, point: LocalPoint) -> GeoPoint:
        """
        Raises:
            VenueNotLoaded: if no venue model is active
        """
        return self._require_converter().local_to_geo(point)

    def assign_floor(self, altitude: Optional[float]) -> int:
        """
        Nearest floor by absolute elevation difference; first floor wins ties.

        Missing altitude uses the venue origin altitude.
        """
        venue = self.venue
        if venue is None:
            raise VenueNotLoaded("No venue model is loaded")
        if altitude is None:
            altitude = venue.coordinate_system.origin.altitude or 0.0

        best = venue.floors[0]
        best_diff = abs(altitude - best.elevation)
        for floor in venue.floors[1:]:
            diff = abs(altitude - floor.elevation)
            if diff < best_diff:
                best, best_diff = floor, diff
        return best.level

    def find_zone(self, local: LocalPoint, floor_level: int) -> Optional[Zone]:
        """First zone on the floor (model order) whose polygon contains the point."""
        if self.venue is None:
            raise VenueNotLoaded("No venue model is loaded")
        floor = self.venue.floor(floor_level)
        if floor is None:
            return None
        for zone in floor.zones:
            if point_in_polygon(local.x, local.y, zone.polygon):
                return zone
        return None

    def map_position(
        self,
        geo: GeoPoint,
        sources: Sequence[PositionSource],
        confidence: float,
        accuracy_m: float,
        timestamp: Optional[float] = None,
    ) -> MappingResult:
        """
        Build a SpatialPosition and detect floor/zone transitions.

        Args:
            geo: Fused geographic position
            sources: Sources used for the fusion
            confidence: Fusion confidence [0, 1]
            accuracy_m: Fused accuracy estimate
            timestamp: Position time (defaults to geo.timestamp)

        Returns:
            MappingResult with the position and any transitions
        """
        ts = timestamp if timestamp is not None else geo.timestamp
        with self._lock:
            if self.venue is None:
                position = SpatialPosition(
                    global_position=geo,
                    local_position=None,
                    floor=None,
                    zone=None,
                    confidence=confidence,
                    sources=list(sources),
                    accuracy_m=accuracy_m,
                    timestamp=ts,
                )
                return MappingResult(position=position)

            local = self._converter.geo_to_local(geo)
            floor = self.assign_floor(geo.altitude)
            zone = self.find_zone(local, floor)

            transitions: List[Transition] = []
            if floor != self._current_floor:
                transitions.append(Transition('floor', new=floor, old=self._current_floor))
                self._current_floor = floor

            old_zone_id = self._current_zone.id if self._current_zone is not None else None
            new_zone_id = zone.id if zone is not None else None
            if new_zone_id != old_zone_id:
                if self._current_zone is not None:
                    transitions.append(Transition('zone_exit', old=self._current_zone))
                if zone is not None:
                    transitions.append(Transition('zone_enter', new=zone, old=self._current_zone))
                self._current_zone = zone

            position = SpatialPosition(
                global_position=geo,
                local_position=local,
                floor=floor,
                zone=zone,
                confidence=confidence,
                sources=list(sources),
                accuracy_m=accuracy_m,
                timestamp=ts,
            )
            return MappingResult(position=position, transitions=transitions)

    def nearby_zones(self, local: LocalPoint, floor_level: int, zone_type: str = 'bar',
                     radius_m: float = 50.0) -> List[Tuple[Zone, float]]:
        """
        Zones of a type whose centroid lies within radius, nearest first.

        Returns:
            List of (zone, distance_m) sorted by distance
        """
        if self.venue is None:
            raise VenueNotLoaded("No venue model is loaded")
        floor = self.venue.floor(floor_level)
        if floor is None:
            return []
        nearby = []
        for zone in floor.zones:
            if zone.type != zone_type:
                continue
            cx, cy = zone.centroid()
            distance = math.hypot(local.x - cx, local.y - cy)
            if distance <= radius_m:
                nearby.append((zone, distance))
        nearby.sort(key=lambda item: item[1])
        return nearby

    def local_bounds(self) -> Tuple[LocalPoint, LocalPoint]:
        """Venue bounds as (south-west, north-east) local corners."""
        converter = self._require_converter()
        bounds = self.venue.bounds
        low = converter.geo_to_local(
            GeoPoint(bounds.south, bounds.west), altitude=bounds.min_altitude)
        high = converter.geo_to_local(
            GeoPoint(bounds.north, bounds.east), altitude=bounds.max_altitude)
        return low, high

    def is_within_bounds(self, geo: GeoPoint) -> bool:
        if self.venue is None:
            raise VenueNotLoaded("No venue model is loaded")
        return self.venue.bounds.contains(geo.latitude, geo.longitude)
