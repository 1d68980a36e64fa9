"""
Order routing types: service points, orders and route assignments.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from spatial_core.proto.spatial_position import GeoPoint


class RouteReason(str, Enum):
    """Deciding factor for a route assignment."""

    ONLY_OPTION = 'only option'
    CLOSEST = 'closest'
    FASTEST = 'fastest'
    LOWER_WORKLOAD = 'lower workload'
    BEST_OVERALL = 'best overall option'


@dataclass
class ServicePoint:
    """
    Fixed location that fulfills orders (a bar).

    current_load is mutated only by the routing optimizer. It may exceed
    capacity; capacity only scales the load penalty.

    Attributes:
        id: Unique service point id
        name: Display name
        position: Geographic position
        capacity: Nominal concurrent order capacity (> 0)
        current_load: Active orders (>= 0)
        staff_count: Staff on duty (>= 1)
        is_active: Whether the point accepts orders
        deck_level: Deck on a vessel venue (optional)
        zone: Venue zone id the point sits in (optional)
        specialties: Free-form tags
    """

    id: str
    name: str
    position: GeoPoint
    capacity: int
    current_load: int = 0
    staff_count: int = 1
    is_active: bool = True
    deck_level: Optional[int] = None
    zone: Optional[str] = None
    specialties: Tuple[str, ...] = ()

    def __post_init__(self):
        if self.capacity <= 0:
            raise ValueError(f"Capacity must be positive: {self.capacity}")
        if self.current_load < 0:
            raise ValueError(f"Load cannot be negative: {self.current_load}")
        if self.staff_count < 1:
            raise ValueError(f"Staff count must be at least 1: {self.staff_count}")

    @property
    def utilization_pct(self) -> float:
        return (self.current_load / self.capacity) * 100.0

    @classmethod
    def from_dict(cls, data: dict) -> 'ServicePoint':
        return cls(
            id=data['id'],
            name=data.get('name', data['id']),
            position=GeoPoint.from_dict(data['position']),
            capacity=int(data['capacity']),
            current_load=int(data.get('currentLoad', 0)),
            staff_count=int(data.get('staffCount', 1)),
            is_active=bool(data.get('isActive', True)),
            deck_level=data.get('deckLevel'),
            zone=data.get('zone'),
            specialties=tuple(data.get('specialties', ())),
        )


@dataclass(frozen=True)
class Order:
    """Delivery order. The customer is at current_position, else origin."""

    id: str
    origin: GeoPoint
    current_position: Optional[GeoPoint] = None

    @property
    def customer_position(self) -> GeoPoint:
        return self.current_position if self.current_position is not None else self.origin


@dataclass(frozen=True)
class AlternativeRoute:
    service_point_id: str
    name: str
    distance_m: float
    estimated_time_s: int
    reason: str


@dataclass(frozen=True)
class RouteAssignment:
    """
    Result of routing one order.

    Attributes:
        reason: Deciding factor code
        reason_detail: Human-readable explanation, e.g. "Closest bar (60m closer)"
        confidence: [0, 100]
    """

    order_id: str
    service_point_id: str
    service_point_name: str
    distance_m: float
    estimated_delivery_time_s: int
    reason: RouteReason
    reason_detail: str
    confidence: float
    customer_position: GeoPoint
    score: float = 0.0
    alternatives: List[AlternativeRoute] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            'order_id': self.order_id,
            'service_point_id': self.service_point_id,
            'service_point_name': self.service_point_name,
            'distance_m': self.distance_m,
            'estimated_delivery_time_s': self.estimated_delivery_time_s,
            'reason': self.reason.value,
            'reason_detail': self.reason_detail,
            'confidence': self.confidence,
            'score': self.score,
            'customer_position': self.customer_position.to_dict(),
            'alternatives': [
                {
                    'service_point_id': a.service_point_id,
                    'name': a.name,
                    'distance_m': a.distance_m,
                    'estimated_time_s': a.estimated_time_s,
                    'reason': a.reason,
                }
                for a in self.alternatives
            ],
        }
