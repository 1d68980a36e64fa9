"""
Venue model: floors, zones, obstacles and the local coordinate system.

Loaded from JSON-shaped dicts (camelCase keys as exported by venue tooling).
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from spatial_core.exceptions import InvalidVenueModel
from spatial_core.proto.spatial_position import GeoPoint, LocalPoint


@dataclass(frozen=True)
class GeoBounds:
    north: float
    south: float
    east: float
    west: float
    max_altitude: Optional[float] = None
    min_altitude: Optional[float] = None

    def contains(self, latitude: float, longitude: float) -> bool:
        return self.south <= latitude <= self.north and self.west <= longitude <= self.east

    @classmethod
    def from_dict(cls, data: dict) -> 'GeoBounds':
        return cls(
            north=float(data['north']),
            south=float(data['south']),
            east=float(data['east']),
            west=float(data['west']),
            max_altitude=data.get('maxAltitude'),
            min_altitude=data.get('minAltitude'),
        )

    def to_dict(self) -> dict:
        return {
            'north': self.north,
            'south': self.south,
            'east': self.east,
            'west': self.west,
            'maxAltitude': self.max_altitude,
            'minAltitude': self.min_altitude,
        }


@dataclass(frozen=True)
class CoordinateSystem:
    """
    Local frame definition.

    Attributes:
        origin: Geographic origin of the local frame
        rotation_deg: Rotation of the local axes, degrees from north
        scale: Local units per meter (uniform, planar)
    """

    origin: GeoPoint
    rotation_deg: float = 0.0
    scale: float = 1.0

    def __post_init__(self):
        if self.scale <= 0:
            raise InvalidVenueModel(f"Scale must be positive: {self.scale}", field='coordinateSystem.scale')


@dataclass(frozen=True)
class Zone:
    """Named polygon on a floor. Polygon vertices are local (x, y) meters."""

    id: str
    name: str
    type: str
    polygon: Tuple[Tuple[float, float], ...]
    properties: Dict[str, Any] = field(default_factory=dict, compare=False, hash=False)

    def __post_init__(self):
        if len(self.polygon) < 3:
            raise InvalidVenueModel(
                f"Zone {self.id} needs at least 3 vertices, got {len(self.polygon)}",
                field=f"zones.{self.id}.polygon",
            )

    def centroid(self) -> Tuple[float, float]:
        """Vertex average (matches how service zones are located)."""
        n = len(self.polygon)
        return (sum(p[0] for p in self.polygon) / n, sum(p[1] for p in self.polygon) / n)


@dataclass(frozen=True)
class Obstacle:
    id: str
    type: str
    polygon: Tuple[Tuple[float, float], ...]
    height: float


@dataclass(frozen=True)
class ReferencePoint:
    """Surveyed point known in both frames."""

    id: str
    geo_location: GeoPoint
    local_coordinate: LocalPoint
    type: str
    confidence: float


@dataclass
class FloorModel:
    level: int
    name: str
    elevation: float
    zones: List[Zone] = field(default_factory=list)
    obstacles: List[Obstacle] = field(default_factory=list)
    bounds: Optional[GeoBounds] = None


@dataclass
class VenueModel:
    """
    Complete venue description.

    Floors are kept in model order; zone lookup relies on that order.
    """

    id: str
    name: str
    bounds: GeoBounds
    coordinate_system: CoordinateSystem
    floors: List[FloorModel]
    reference_points: List[ReferencePoint] = field(default_factory=list)

    def __post_init__(self):
        if not self.floors:
            raise InvalidVenueModel(f"Venue {self.id} has no floors", field='floors')

    def floor(self, level: int) -> Optional[FloorModel]:
        for floor in self.floors:
            if floor.level == level:
                return floor
        return None

    @classmethod
    def from_dict(cls, data: dict) -> 'VenueModel':
        """
        Build and validate a venue from its JSON form.

        Raises:
            InvalidVenueModel: on missing keys or invalid geometry
        """
        try:
            cs = data['coordinateSystem']
            coordinate_system = CoordinateSystem(
                origin=_geo_from_dict(cs['origin']),
                rotation_deg=float(cs.get('rotation', 0.0)),
                scale=float(cs.get('scale', 1.0)),
            )
            floors = [_floor_from_dict(f) for f in data['floors']]
            reference_points = [
                ReferencePoint(
                    id=rp['id'],
                    geo_location=_geo_from_dict(rp['geoLocation']),
                    local_coordinate=LocalPoint(
                        x=float(rp['localCoordinate']['x']),
                        y=float(rp['localCoordinate']['y']),
                        z=float(rp['localCoordinate'].get('z', 0.0)),
                    ),
                    type=rp.get('type', 'gps_anchor'),
                    confidence=float(rp.get('confidence', 1.0)),
                )
                for rp in data.get('referencePoints', [])
            ]
            return cls(
                id=data['id'],
                name=data.get('name', data['id']),
                bounds=GeoBounds.from_dict(data['bounds']),
                coordinate_system=coordinate_system,
                floors=floors,
                reference_points=reference_points,
            )
        except KeyError as e:
            raise InvalidVenueModel(f"Venue model missing key: {e}", field=str(e.args[0])) from e

    def to_dict(self) -> dict:
        """Convert back to the JSON form accepted by from_dict."""
        cs = self.coordinate_system
        return {
            'id': self.id,
            'name': self.name,
            'bounds': self.bounds.to_dict(),
            'coordinateSystem': {
                'origin': cs.origin.to_dict(),
                'rotation': cs.rotation_deg,
                'scale': cs.scale,
            },
            'floors': [
                {
                    'level': f.level,
                    'name': f.name,
                    'elevation': f.elevation,
                    'bounds': f.bounds.to_dict() if f.bounds else None,
                    'zones': [
                        {
                            'id': z.id,
                            'name': z.name,
                            'type': z.type,
                            'polygon': [{'x': x, 'y': y} for x, y in z.polygon],
                            'properties': dict(z.properties),
                        }
                        for z in f.zones
                    ],
                    'obstacles': [
                        {
                            'id': o.id,
                            'type': o.type,
                            'polygon': [{'x': x, 'y': y} for x, y in o.polygon],
                            'height': o.height,
                        }
                        for o in f.obstacles
                    ],
                }
                for f in self.floors
            ],
            'referencePoints': [
                {
                    'id': rp.id,
                    'geoLocation': rp.geo_location.to_dict(),
                    'localCoordinate': {
                        'x': rp.local_coordinate.x,
                        'y': rp.local_coordinate.y,
                        'z': rp.local_coordinate.z,
                    },
                    'type': rp.type,
                    'confidence': rp.confidence,
                }
                for rp in self.reference_points
            ],
        }


def _geo_from_dict(data: dict) -> GeoPoint:
    return GeoPoint(
        latitude=float(data['latitude']),
        longitude=float(data['longitude']),
        altitude=float(data.get('altitude', 0.0)),
        accuracy=data.get('accuracy'),
        timestamp=float(data.get('timestamp', 0.0)),
    )


def _polygon_from_list(points: list) -> Tuple[Tuple[float, float], ...]:
    return tuple((float(p['x']), float(p['y'])) for p in points)


def _floor_from_dict(data: dict) -> FloorModel:
    bounds = data.get('bounds')
    return FloorModel(
        level=int(data['level']),
        name=data.get('name', f"Floor {data['level']}"),
        elevation=float(data['elevation']),
        zones=[
            Zone(
                id=z['id'],
                name=z.get('name', z['id']),
                type=z.get('type', 'walkway'),
                polygon=_polygon_from_list(z['polygon']),
                properties=dict(z.get('properties', {})),
            )
            for z in data.get('zones', [])
        ],
        obstacles=[
            Obstacle(
                id=o['id'],
                type=o.get('type', 'equipment'),
                polygon=_polygon_from_list(o['polygon']),
                height=float(o.get('height', 0.0)),
            )
            for o in data.get('obstacles', [])
        ],
        bounds=GeoBounds.from_dict(bounds) if bounds else None,
    )
