"""
Routing Optimizer.

Assigns a delivery order to the best service point by estimated delivery time
and a weighted score over distance, workload, staffing and availability.

Load accounting:
- current_load of a point is read and written only under that point's lock
- candidate scoring works on a per-point snapshot, no global lock
- the load increment is the last step of a successful route; failures never
  touch load
- complete_order() releases the slot once per order id
"""

import logging
import math
import threading
from dataclasses import dataclass
from typing import Callable, Dict, List, Optional, Sequence, Set

from spatial_core.exceptions import NoServicePointAvailable
from spatial_core.proto.routing import (
    AlternativeRoute, Order, RouteAssignment, RouteReason, ServicePoint,
)
from spatial_core.proto.spatial_position import GeoPoint
from spatial_core.localization.geodesy import distance_m
from spatial_core.metrics import MetricsCollector, get_metrics

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to nearest integer with halves rounding up (2.5 -> 3, -2.5 -> -2)."""
    return int(math.floor(value + 0.5))


@dataclass
class RoutingConfig:
    """
    Configuration for the routing optimizer.

    Attributes:
        max_delivery_distance_m: Candidates further away are discarded
        load_balancing_enabled: Include the load penalty in the score
        ship_mode_enabled: Add deck traversal time between decks
        walking_speed_m_s: Courier walking speed
        base_prep_s: Preparation time with no queued orders
        prep_per_order_s: Additional preparation time per queued order
        deck_traversal_s: Time per deck of vertical travel
        sea_level_offset_m: Altitude of the lowest deck reference
        deck_height_m: Height of one deck
        staff_speedup: Delivery time reduction per extra staff member
        min_staff_multiplier: Floor for the staff multiplier
        load_penalty: Score penalty at full capacity
        staff_bonus: Score bonus per staff member
        inactive_penalty: Score penalty for inactive points
        closest_advantage_m: Distance lead that makes "closest" the reason
        fastest_advantage_s: Time lead that makes "fastest" the reason
        max_alternatives: Alternatives reported per assignment
    """

    max_delivery_distance_m: float = 100.0
    load_balancing_enabled: bool = True
    ship_mode_enabled: bool = False
    walking_speed_m_s: float = 1.4
    base_prep_s: float = 60.0
    prep_per_order_s: float = 30.0
    deck_traversal_s: float = 45.0
    sea_level_offset_m: float = 15.0
    deck_height_m: float = 3.5
    staff_speedup: float = 0.1
    min_staff_multiplier: float = 0.5
    load_penalty: float = 30.0
    staff_bonus: float = 5.0
    inactive_penalty: float = 50.0
    closest_advantage_m: float = 20.0
    fastest_advantage_s: float = 60.0
    max_alternatives: int = 3


@dataclass(frozen=True)
class CandidateAnalysis:
    """Per-candidate evaluation against a snapshot of the point's state."""

    point: ServicePoint
    load: int
    distance_m: float
    delivery_time_s: int
    score: float


class RoutingOptimizer:
    """
    Order-to-service-point router.

    Usage:
        optimizer = RoutingOptimizer(RoutingConfig(), service_points=create_default_service_points())
        assignment = optimizer.route(order)
        ...
        optimizer.complete_order(order.id)

    Callbacks (optional, exceptions are logged and counted):
        on_order_routed(assignment)
        on_load_changed(point_id, new_load)
    """

    def __init__(
        self,
        config: Optional[RoutingConfig] = None,
        service_points: Optional[Sequence[ServicePoint]] = None,
        metrics: Optional[MetricsCollector] = None,
        on_order_routed: Optional[Callable[[RouteAssignment], None]] = None,
        on_load_changed: Optional[Callable[[str, int], None]] = None,
    ):
        self.config = config or RoutingConfig()
        self.metrics = metrics or get_metrics()
        self.on_order_routed = on_order_routed
        self.on_load_changed = on_load_changed

        self._registry_lock = threading.Lock()
        self._points: Dict[str, ServicePoint] = {}
        self._point_locks: Dict[str, threading.Lock] = {}
        self._assignments: Dict[str, RouteAssignment] = {}
        self._assigned_points: Dict[str, ServicePoint] = {}
        self._completed: Set[str] = set()

        for point in service_points or ():
            self.add_service_point(point)

    # ------------------------------------------------------------------
    # Service point management
    # ------------------------------------------------------------------

    def add_service_point(self, point: ServicePoint):
        """Add or replace a service point (replacement keeps registry order)."""
        with self._registry_lock:
            self._points[point.id] = point
            self._point_locks.setdefault(point.id, threading.Lock())
        logger.info("Service point added: %s (%s)", point.name, point.zone)

    def remove_service_point(self, point_id: str) -> Optional[ServicePoint]:
        with self._registry_lock:
            point = self._points.pop(point_id, None)
        if point is not None:
            logger.info("Service point removed: %s", point_id)
        return point

    def update_service_point(self, point_id: str, **changes) -> ServicePoint:
        """
        Update fields of a service point (is_active, staff_count, current_load, ...).

        Raises:
            KeyError: unknown point id
            AttributeError: unknown field name
        """
        point = self.get_service_point(point_id)
        if point is None:
            raise KeyError(point_id)
        with self._lock_for(point_id):
            for name, value in changes.items():
                if not hasattr(point, name):
                    raise AttributeError(f"ServicePoint has no field '{name}'")
                setattr(point, name, value)
            if point.current_load < 0:
                point.current_load = 0
            load = point.current_load
        self._notify_load(point_id, load)
        return point

    def get_service_point(self, point_id: str) -> Optional[ServicePoint]:
        with self._registry_lock:
            return self._points.get(point_id)

    def service_points(self) -> List[ServicePoint]:
        """Service points in registry order."""
        with self._registry_lock:
            return list(self._points.values())

    def load_layout(self, points: Sequence[ServicePoint], ship_mode: Optional[bool] = None):
        """Replace all service points, optionally switching ship mode."""
        with self._registry_lock:
            self._points.clear()
            for point in points:
                self._points[point.id] = point
                self._point_locks.setdefault(point.id, threading.Lock())
        if ship_mode is not None:
            self.config.ship_mode_enabled = ship_mode
        logger.info("Loaded layout with %d service point(s), ship mode %s",
                    len(points), self.config.ship_mode_enabled)

    def _lock_for(self, point_id: str) -> threading.Lock:
        with self._registry_lock:
            return self._point_locks.setdefault(point_id, threading.Lock())

    # ------------------------------------------------------------------
    # Estimation
    # ------------------------------------------------------------------

    def estimate_customer_deck(self, position: GeoPoint) -> Optional[int]:
        """Deck from altitude; None outside ship mode or without altitude."""
        if not self.config.ship_mode_enabled or position.altitude is None:
            return None
        cfg = self.config
        return round_half_up((position.altitude - cfg.sea_level_offset_m) / cfg.deck_height_m)

    def estimate_delivery_time(self, point: ServicePoint, load: int, distance: float,
                               customer_deck: Optional[int] = None) -> int:
        """
        (walk + prep) x staff multiplier, rounded to whole seconds.

        walk = distance / speed (+ deck traversal between decks in ship mode)
        prep = base + per_order x load
        multiplier = max(min, 1 - speedup x (staff - 1))
        """
        cfg = self.config
        walk = distance / cfg.walking_speed_m_s
        if (cfg.ship_mode_enabled and customer_deck is not None
                and point.deck_level is not None and customer_deck != point.deck_level):
            walk += abs(customer_deck - point.deck_level) * cfg.deck_traversal_s
        prep = cfg.base_prep_s + cfg.prep_per_order_s * load
        multiplier = max(cfg.min_staff_multiplier, 1.0 - cfg.staff_speedup * (point.staff_count - 1))
        return round_half_up((walk + prep) * multiplier)

    def score(self, point: ServicePoint, load: int, distance: float, delivery_time: float) -> float:
        """Higher is better, floored at 0."""
        cfg = self.config
        value = 100.0
        value -= distance / 10.0
        if cfg.load_balancing_enabled:
            value -= cfg.load_penalty * (load / point.capacity)
        value += cfg.staff_bonus * point.staff_count
        value -= delivery_time / 10.0
        if not point.is_active:
            value -= cfg.inactive_penalty
        return max(0.0, value)

    def analyze(self, customer: GeoPoint, points: Sequence[ServicePoint]) -> List[CandidateAnalysis]:
        """Evaluate every point against a snapshot of its load."""
        customer_deck = self.estimate_customer_deck(customer)
        analyses = []
        for point in points:
            with self._lock_for(point.id):
                load = point.current_load
            distance = distance_m(customer, point.position)
            delivery_time = self.estimate_delivery_time(point, load, distance, customer_deck)
            analyses.append(CandidateAnalysis(
                point=point,
                load=load,
                distance_m=distance,
                delivery_time_s=delivery_time,
                score=self.score(point, load, distance, delivery_time),
            ))
        return analyses

    # ------------------------------------------------------------------
    # Routing
    # ------------------------------------------------------------------

    def route(self, order: Order, candidates: Optional[Sequence[ServicePoint]] = None) -> RouteAssignment:
        """
        Assign an order to the best active service point in range.

        Args:
            order: Order to route (customer at current_position, else origin)
            candidates: Points to consider (default: all registered points)

        Returns:
            RouteAssignment

        Raises:
            NoServicePointAvailable: no active candidate within max distance
        """
        cfg = self.config
        customer = order.customer_position
        points = list(candidates) if candidates is not None else self.service_points()
        active = [p for p in points if p.is_active]

        viable = [a for a in self.analyze(customer, active) if a.distance_m <= cfg.max_delivery_distance_m]
        if not viable:
            self.metrics.increment_drop('no_service_point')
            logger.warning("Order %s: no active service point within %.0fm",
                           order.id, cfg.max_delivery_distance_m)
            raise NoServicePointAvailable(
                f"No active service point within {cfg.max_delivery_distance_m:.0f}m",
                order_id=order.id,
                max_distance_m=cfg.max_delivery_distance_m,
            )

        viable.sort(key=lambda a: a.score, reverse=True)
        best = viable[0]
        reason, detail = self._reason(viable)
        confidence = self._confidence(viable)
        alternatives = [
            AlternativeRoute(
                service_point_id=a.point.id,
                name=a.point.name,
                distance_m=a.distance_m,
                estimated_time_s=a.delivery_time_s,
                reason=f"Distance: {a.distance_m:.0f}m, Load: {a.load}",
            )
            for a in viable[1:1 + cfg.max_alternatives]
        ]

        assignment = RouteAssignment(
            order_id=order.id,
            service_point_id=best.point.id,
            service_point_name=best.point.name,
            distance_m=best.distance_m,
            estimated_delivery_time_s=best.delivery_time_s,
            reason=reason,
            reason_detail=detail,
            confidence=confidence,
            customer_position=customer,
            score=best.score,
            alternatives=alternatives,
        )

        with self._registry_lock:
            previous = self._assigned_points.get(order.id)
            reroute = previous is not None and order.id not in self._completed
        if reroute:
            self._release(previous)

        with self._lock_for(best.point.id):
            best.point.current_load += 1
            new_load = best.point.current_load
        with self._registry_lock:
            self._assignments[order.id] = assignment
            self._assigned_points[order.id] = best.point
            self._completed.discard(order.id)

        self.metrics.increment('orders_routed')
        self.metrics.record_histogram('delivery_time_s', best.delivery_time_s)
        logger.info("Order %s routed to %s (%.0fm, %ds, %s)", order.id, best.point.name,
                    best.distance_m, best.delivery_time_s, reason.value)

        self._notify_load(best.point.id, new_load)
        self._notify(self.on_order_routed, assignment)
        return assignment

    def _reason(self, viable: Sequence[CandidateAnalysis]):
        cfg = self.config
        best = viable[0]
        if len(viable) == 1:
            return RouteReason.ONLY_OPTION, "Only available bar"

        second = viable[1]
        distance_advantage = second.distance_m - best.distance_m
        time_advantage = second.delivery_time_s - best.delivery_time_s
        if distance_advantage > cfg.closest_advantage_m:
            return RouteReason.CLOSEST, f"Closest bar ({distance_advantage:.0f}m closer)"
        if time_advantage > cfg.fastest_advantage_s:
            return RouteReason.FASTEST, f"Fastest delivery ({round_half_up(time_advantage / 60)}min faster)"
        if best.load < second.load:
            return RouteReason.LOWER_WORKLOAD, f"Lower workload ({second.load - best.load} fewer orders)"
        return RouteReason.BEST_OVERALL, "Best overall option"

    @staticmethod
    def _confidence(viable: Sequence[CandidateAnalysis]) -> float:
        if len(viable) == 1:
            return 100.0
        gap = viable[0].score - viable[1].score
        return min(100.0, max(50.0, 50.0 + gap))

    def complete_order(self, order_id: str) -> bool:
        """
        Release the load slot taken by an order.

        Idempotent: a second call for the same order id does nothing.

        Returns:
            True if a slot was released by this call
        """
        with self._registry_lock:
            assignment = self._assignments.get(order_id)
            if assignment is None or order_id in self._completed:
                return False
            self._completed.add(order_id)
            point = self._assigned_points[order_id]

        released = self._release(point)
        self.metrics.increment('orders_completed')
        logger.info("Order %s completed at %s", order_id, assignment.service_point_name)
        return released

    def _release(self, point: ServicePoint) -> bool:
        # Candidates passed to route() need not be registered
        point_id = point.id
        with self._lock_for(point_id):
            if point.current_load <= 0:
                return False
            point.current_load -= 1
            new_load = point.current_load
        self._notify_load(point_id, new_load)
        return True

    def get_assignment(self, order_id: str) -> Optional[RouteAssignment]:
        with self._registry_lock:
            return self._assignments.get(order_id)

    def is_completed(self, order_id: str) -> bool:
        with self._registry_lock:
            return order_id in self._completed

    def routing_stats(self) -> dict:
        """
        Routing statistics.

        Returns:
            Dict with total_orders, active_orders, utilization (point id ->
            percent of capacity), average_distance_m, average_delivery_time_s
        """
        with self._registry_lock:
            assignments = list(self._assignments.values())
            completed = set(self._completed)
        total = len(assignments)
        return {
            'total_orders': total,
            'active_orders': sum(1 for a in assignments if a.order_id not in completed),
            'utilization': {p.id: p.utilization_pct for p in self.service_points()},
            'average_distance_m': math.fsum(a.distance_m for a in assignments) / total if total else 0.0,
            'average_delivery_time_s': (
                math.fsum(a.estimated_delivery_time_s for a in assignments) / total if total else 0.0
            ),
        }

    # ------------------------------------------------------------------
    # Notifications
    # ------------------------------------------------------------------

    def _notify_load(self, point_id: str, load: int):
        self._notify(self.on_load_changed, point_id, load)

    def _notify(self, callback: Optional[Callable], *args):
        if callback is None:
            return
        try:
            callback(*args)
        except Exception:
            self.metrics.increment_drop('callback_error')
            logger.exception("Routing callback %s failed", getattr(callback, '__name__', callback))
