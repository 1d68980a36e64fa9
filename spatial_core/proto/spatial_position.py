"""
Position types shared by fusion, mapping and routing.

GeoPoint is WGS84 degrees; LocalPoint is meters in the venue frame.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from spatial_core.proto.venue import Zone


class SourceKind(str, Enum):
    """Origin of a position estimate."""

    SATELLITE = 'satellite'
    INERTIAL = 'inertial'
    MESH = 'mesh'
    VISUAL = 'visual'
    DEAD_RECKONING = 'dead_reckoning'


@dataclass(frozen=True)
class GeoPoint:
    """Geographic point. altitude/accuracy in meters, timestamp in seconds."""

    latitude: float
    longitude: float
    altitude: Optional[float] = None
    accuracy: Optional[float] = None
    timestamp: float = 0.0

    def to_dict(self) -> dict:
        return {
            'latitude': self.latitude,
            'longitude': self.longitude,
            'altitude': self.altitude,
            'accuracy': self.accuracy,
            'timestamp': self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: dict) -> 'GeoPoint':
        return cls(
            latitude=float(data['latitude']),
            longitude=float(data['longitude']),
            altitude=data.get('altitude'),
            accuracy=data.get('accuracy'),
            timestamp=float(data.get('timestamp', 0.0)),
        )


@dataclass(frozen=True)
class LocalPoint:
    """Point in the venue frame: x east-ish, y north-ish, z up, meters."""

    x: float
    y: float
    z: float = 0.0
    timestamp: float = 0.0

    def as_tuple(self):
        return (self.x, self.y, self.z)


@dataclass(frozen=True)
class PositionSource:
    """
    One contribution to a fused position.

    Attributes:
        kind: SourceKind of the estimate
        weight: Non-negative trust weight
        accuracy: Non-negative accuracy radius in meters
        timestamp: Seconds
        position: Geographic estimate carried by this source, if any
        local_position: Local-frame estimate (inertial and mesh sources)
    """

    kind: SourceKind
    weight: float
    accuracy: float
    timestamp: float
    position: Optional[GeoPoint] = None
    local_position: Optional[LocalPoint] = None

    def __post_init__(self):
        if self.weight < 0:
            raise ValueError(f"Source weight cannot be negative: {self.weight}")
        if self.accuracy < 0:
            raise ValueError(f"Source accuracy cannot be negative: {self.accuracy}")


@dataclass(frozen=True)
class SpatialPosition:
    """
    Immutable snapshot of the device position.

    Attributes:
        global_position: Fused geographic position
        local_position: Venue-frame position (None without a venue model)
        floor: Floor level (None without a venue model)
        zone: Containing zone on that floor, if any
        confidence: Fusion confidence in [0, 1]
        sources: Sources that went into this position
        accuracy_m: Weighted accuracy estimate
        timestamp: Seconds
    """

    global_position: GeoPoint
    local_position: Optional[LocalPoint]
    floor: Optional[int]
    zone: Optional['Zone']
    confidence: float
    sources: List[PositionSource] = field(default_factory=list)
    accuracy_m: float = 10.0
    timestamp: float = 0.0

    def __post_init__(self):
        if not 0.0 <= self.confidence <= 1.0:
            raise ValueError(f"Confidence must be in [0,1]: {self.confidence}")

    @property
    def zone_id(self) -> Optional[str]:
        return self.zone.id if self.zone is not None else None

    def to_dict(self) -> dict:
        """Convert to dictionary for serialization."""
        local = self.local_position
        return {
            'global_position': self.global_position.to_dict(),
            'local_position': None if local is None else {'x': local.x, 'y': local.y, 'z': local.z},
            'floor': self.floor,
            'zone': self.zone_id,
            'confidence': self.confidence,
            'sources': [s.kind.value for s in self.sources],
            'accuracy_m': self.accuracy_m,
            'timestamp': self.timestamp,
        }
