"""
Mesh node records as tracked by the node registry and persisted between sessions.
"""

from dataclasses import dataclass, field, asdict
from enum import Enum
from typing import Optional

from spatial_core.proto.spatial_position import LocalPoint


class NodeType(str, Enum):
    MOBILE = 'mobile'
    BAR_STATION = 'bar_station'
    ACCESS_POINT = 'access_point'
    BEACON_HUB = 'beacon_hub'


class NodeStatus(str, Enum):
    ONLINE = 'online'
    OFFLINE = 'offline'
    DEGRADED = 'degraded'


@dataclass(frozen=True)
class NodeCapabilities:
    can_triangulate: bool = False
    has_gps: bool = False
    has_uwb: bool = False
    has_ble: bool = False
    has_wifi: bool = False
    can_process_orders: bool = False
    is_bar_station: bool = False
    is_phone_beacon: bool = False

    _RECORD_KEYS = {
        'can_triangulate': 'canTriangulate',
        'has_gps': 'hasGPS',
        'has_uwb': 'hasUWB',
        'has_ble': 'hasBLE',
        'has_wifi': 'hasWiFi',
        'can_process_orders': 'canProcessOrders',
        'is_bar_station': 'isBarStation',
        'is_phone_beacon': 'isPhoneBeacon',
    }

    def to_record(self) -> dict:
        return {self._RECORD_KEYS[k]: v for k, v in asdict(self).items()}

    @classmethod
    def from_record(cls, record: dict) -> 'NodeCapabilities':
        return cls(**{
            attr: bool(record.get(key, False))
            for attr, key in cls._RECORD_KEYS.items()
        })


@dataclass
class MeshNode:
    """
    Known node in the venue mesh.

    Attributes:
        id: Unique node id
        type: NodeType
        position: Local-frame position in meters
        capabilities: NodeCapabilities flags
        last_seen: Seconds of the last heartbeat
        signal_strength: dBm (negative, closer to 0 is stronger)
        status: NodeStatus
        battery_level: Optional percentage
    """

    id: str
    type: NodeType
    position: LocalPoint
    capabilities: NodeCapabilities = field(default_factory=NodeCapabilities)
    last_seen: float = 0.0
    signal_strength: float = -70.0
    status: NodeStatus = NodeStatus.ONLINE
    battery_level: Optional[float] = None

    @property
    def is_fixed_infrastructure(self) -> bool:
        """Service and fixed nodes never expire automatically."""
        return self.capabilities.is_bar_station or self.type in (NodeType.BAR_STATION, NodeType.ACCESS_POINT)

    def to_record(self) -> dict:
        """Persisted record form."""
        return {
            'id': self.id,
            'type': self.type.value,
            'position': {'x': self.position.x, 'y': self.position.y, 'z': self.position.z},
            'capabilities': self.capabilities.to_record(),
            'lastSeen': self.last_seen,
            'signalStrength': self.signal_strength,
            'status': self.status.value,
            'batteryLevel': self.battery_level,
        }

    @classmethod
    def from_record(cls, record: dict) -> 'MeshNode':
        pos = record['position']
        return cls(
            id=record['id'],
            type=NodeType(record['type']),
            position=LocalPoint(x=float(pos['x']), y=float(pos['y']), z=float(pos.get('z', 0.0))),
            capabilities=NodeCapabilities.from_record(record.get('capabilities', {})),
            last_seen=float(record['lastSeen']),
            signal_strength=float(record.get('signalStrength', -70.0)),
            status=NodeStatus(record.get('status', 'online')),
            battery_level=record.get('batteryLevel'),
        )
