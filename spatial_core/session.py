"""
Tracking Session.

Composes the positioning components into one session:

    RawReading -> ReadingQualityGate -> (inertial correction)
               -> SourceFusionArbiter (+ inertial, mesh) -> VenueMapper
               -> SpatialPosition -> callbacks

Reading ingestion, motion integration and environment classification are
independent entry points. Fusion and mapping run as one serialized stage
guarded by the pipeline lock. stop() bumps a generation counter so passes
that started before the stop discard their result.
"""

import logging
import threading
from collections import deque
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FutureTimeout
from dataclasses import dataclass, replace
from typing import Callable, Deque, List, Optional, Sequence

from spatial_core.config import TrackingConfig
from spatial_core.exceptions import NoFix, PermissionDenied
from spatial_core.proto.environment import EnvironmentClassification
from spatial_core.proto.readings import InertialState, MotionSample, RawReading, SmoothedReading
from spatial_core.proto.routing import Order, RouteAssignment, ServicePoint
from spatial_core.proto.spatial_position import GeoPoint, PositionSource, SourceKind, SpatialPosition
from spatial_core.proto.venue import VenueModel
from spatial_core.localization.reading_filter import ReadingFilterConfig, ReadingQualityGate
from spatial_core.localization.inertial_integrator import InertialIntegrator
from spatial_core.localization.venue_mapper import VenueMapper
from spatial_core.localization.environment_classifier import EnvironmentClassifier
from spatial_core.localization.source_fusion import SourceFusionArbiter
from spatial_core.domain.node_registry import NodeRegistry
from spatial_core.domain.routing_optimizer import RoutingConfig, RoutingOptimizer
from spatial_core.domain.service_layouts import create_default_service_points
from spatial_core.io.node_store import JsonNodeStore
from spatial_core.io.scheduler import CancellationToken, Scheduler
from spatial_core.metrics import MetricsCollector, get_metrics

logger = logging.getLogger(__name__)


@dataclass
class SessionCallbacks:
    """
    Optional subscriber callbacks.

    A callback that raises is logged and counted; it never stops the session.
    """

    on_position_update: Optional[Callable[[SpatialPosition], None]] = None
    on_floor_change: Optional[Callable[[int, Optional[int]], None]] = None
    on_zone_enter: Optional[Callable] = None
    on_zone_exit: Optional[Callable] = None
    on_accuracy_improved: Optional[Callable[[float, float], None]] = None
    on_ship_mode_detected: Optional[Callable[[EnvironmentClassification], None]] = None
    on_bar_load_changed: Optional[Callable[[str, int], None]] = None
    on_order_routed: Optional[Callable[[RouteAssignment], None]] = None
    on_location_error: Optional[Callable[[str], None]] = None
    on_indoor_mode_change: Optional[Callable[[bool], None]] = None


class TrackingSession:
    """
    Positioning and routing session.

    Usage:
        session = TrackingSession(TrackingConfig(), callbacks, venue=venue)
        session.start()
        session.ingest_reading(reading)
        session.ingest_motion(sample)
        assignment = session.route_order("order-1")
        session.stop()

    Components can be injected for testing; by default they are built from
    the configuration.
    """

    INITIAL_ACCURACY_M = 10.0

    def __init__(
        self,
        config: Optional[TrackingConfig] = None,
        callbacks: Optional[SessionCallbacks] = None,
        venue: Optional[VenueModel] = None,
        permission_check: Optional[Callable[[], bool]] = None,
        registry: Optional[NodeRegistry] = None,
        optimizer: Optional[RoutingOptimizer] = None,
        classifier: Optional[EnvironmentClassifier] = None,
        metrics: Optional[MetricsCollector] = None,
    ):
        self.config = config or TrackingConfig()
        self.callbacks = callbacks or SessionCallbacks()
        self.permission_check = permission_check
        self.metrics = metrics or get_metrics()

        cfg = self.config
        self.gate = ReadingQualityGate(
            ReadingFilterConfig(
                max_accuracy_threshold_m=cfg.max_accuracy_threshold_m,
                max_jump_distance_m=cfg.max_jump_distance_m,
                max_plausible_speed_m_s=cfg.max_plausible_speed_m_s,
            ),
            metrics=self.metrics,
        )
        self.integrator = InertialIntegrator(metrics=self.metrics)
        self.mapper = VenueMapper(venue)
        self.arbiter = SourceFusionArbiter(metrics=self.metrics)
        self.classifier = classifier or EnvironmentClassifier()
        self.registry = registry or NodeRegistry(cfg.max_node_age_s, metrics=self.metrics)
        self.optimizer = optimizer or RoutingOptimizer(
            RoutingConfig(
                max_delivery_distance_m=cfg.max_delivery_distance_m,
                load_balancing_enabled=cfg.load_balancing_enabled,
                ship_mode_enabled=cfg.ship_mode_enabled,
            ),
            service_points=create_default_service_points(),
            metrics=self.metrics,
        )
        self.optimizer.on_order_routed = lambda assignment: self._emit('on_order_routed', assignment)
        self.optimizer.on_load_changed = lambda point_id, load: self._emit('on_bar_load_changed', point_id, load)

        self._state_lock = threading.Lock()
        self._pipeline_lock = threading.Lock()
        self._executor = ThreadPoolExecutor(max_workers=1, thread_name_prefix='collaborator')
        self._tokens: List[CancellationToken] = []
        self._generation = 0
        self._active = False
        self._ship_mode = cfg.ship_mode_enabled
        self._reset_session_state()

    def _reset_session_state(self):
        self._last_smoothed: Optional[SmoothedReading] = None
        self._last_motion_ts: Optional[float] = None
        self._inertial_anchored = False
        self._current: Optional[SpatialPosition] = None
        self._history: Deque[SpatialPosition] = deque(maxlen=self.config.history_size)
        self._last_fusion_ts: Optional[float] = None
        self._overall_accuracy = self.INITIAL_ACCURACY_M
        self._indoor = False

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def is_active(self) -> bool:
        return self._active

    @property
    def ship_mode(self) -> bool:
        return self._ship_mode

    def start(self):
        """
        Begin tracking from the initial state.

        Raises:
            PermissionDenied: the permission check refused location access
        """
        if self.permission_check is not None and not self.permission_check():
            logger.warning("Location permission denied, session not started")
            raise PermissionDenied("Location permission denied")
        with self._state_lock:
            self._generation += 1
            self._reset_components()
            self._active = True
        logger.info("Tracking session started (generation %d)", self._generation)

    def stop(self):
        """
        Stop tracking and discard all session state.

        Safe while updates are in flight; their results are dropped.
        """
        with self._state_lock:
            self._generation += 1
            self._active = False
            tokens, self._tokens = self._tokens, []
            self._reset_components()
        for token in tokens:
            token.cancel()
        logger.info("Tracking session stopped")

    def close(self):
        """Stop and release the collaborator worker."""
        self.stop()
        self._executor.shutdown(wait=False)

    def _reset_components(self):
        self.gate.reset()
        self.integrator.reset()
        self.arbiter.reset()
        self.mapper.reset_transitions()
        self._reset_session_state()

    def attach(self, scheduler: Scheduler,
               fix_provider: Optional[Callable[[], RawReading]] = None) -> List[CancellationToken]:
        """
        Drive periodic work from a scheduler.

        Schedules fusion ticks every min_update_interval, node expiry every
        discovery_interval and, with a fix provider, environment checks every
        environment_check_interval. stop() cancels them.
        """
        cfg = self.config
        tokens = [
            scheduler.every(max(cfg.min_update_interval_s, 0.05), self.tick),
            scheduler.every(cfg.discovery_interval_s, self.expire_nodes),
        ]
        if fix_provider is not None:
            tokens.append(scheduler.every(
                cfg.environment_check_interval_s,
                lambda now: self.refresh_environment(fix_provider),
            ))
        with self._state_lock:
            self._tokens.extend(tokens)
        return tokens

    # ------------------------------------------------------------------
    # Inputs
    # ------------------------------------------------------------------

    def ingest_reading(self, reading: RawReading) -> Optional[SpatialPosition]:
        """
        Process one satellite reading.

        Returns:
            New SpatialPosition if a fusion pass ran, else None (rejected,
            throttled or inactive)
        """
        if not self._active:
            logger.debug("Reading ignored: session not active")
            return None
        generation = self._generation

        smoothed = self.gate.ingest(reading)
        if smoothed is None:
            self._emit('on_location_error', f"Reading rejected: {self.gate.last_rejection_reason}")
            return None

        with self._state_lock:
            if generation != self._generation:
                return None
            self._last_smoothed = smoothed
            last_fusion = self._last_fusion_ts

        if self.mapper.is_loaded:
            fix = GeoPoint(smoothed.latitude, smoothed.longitude, smoothed.altitude,
                           smoothed.accuracy, smoothed.timestamp)
            local = self.mapper.geo_to_local(fix)
            if not self._inertial_anchored:
                # Dead reckoning starts at the first fix, not the venue origin
                self.integrator.reset(position=local.as_tuple())
                self._inertial_anchored = True
            self.integrator.correct_with_fix(local.as_tuple(), smoothed.accuracy, smoothed.timestamp)

        if last_fusion is not None and reading.timestamp - last_fusion < self.config.min_update_interval_s:
            self.metrics.increment('fusion_throttled')
            return None

        return self._run_pipeline(reading.timestamp, generation)

    def ingest_motion(self, sample: MotionSample) -> Optional[InertialState]:
        """
        Integrate one motion sample.

        The first sample only starts the clock. Returns the inertial state.
        """
        if not self._active:
            return None
        with self._state_lock:
            previous, self._last_motion_ts = self._last_motion_ts, sample.timestamp
        if previous is None:
            return None
        return self.integrator.integrate(
            sample.acceleration,
            sample.orientation,
            sample.timestamp - previous,
            timestamp=sample.timestamp,
            rotation_rate=sample.rotation_rate,
        )

    def tick(self, now: float) -> Optional[SpatialPosition]:
        """Scheduler-driven fusion pass at time now."""
        if not self._active:
            return None
        return self._run_pipeline(now, self._generation)

    # ------------------------------------------------------------------
    # Fusion + mapping stage
    # ------------------------------------------------------------------

    def _collect_sources(self, now: float) -> List[PositionSource]:
        sources: List[PositionSource] = []

        smoothed = self._last_smoothed
        if smoothed is not None:
            if now - smoothed.timestamp <= self.config.reading_window_s:
                accuracy = smoothed.accuracy if smoothed.accuracy is not None else self.INITIAL_ACCURACY_M
                sources.append(PositionSource(
                    kind=SourceKind.SATELLITE,
                    weight=self.arbiter.satellite_weight(smoothed.accuracy, self._ship_mode),
                    accuracy=accuracy,
                    timestamp=smoothed.timestamp,
                    position=GeoPoint(smoothed.latitude, smoothed.longitude, smoothed.altitude,
                                      smoothed.accuracy, smoothed.timestamp),
                ))
            else:
                self.metrics.increment_drop('stale_fix')

        if self.mapper.is_loaded:
            # Inertial only counts while motion samples keep arriving
            last_motion = self._last_motion_ts
            if (self._inertial_anchored and last_motion is not None
                    and now - last_motion <= self.config.reading_window_s):
                sources.append(self._with_geo(self.integrator.position_source(now)))
            mesh = self.registry.mesh_estimate(now, weight=self.arbiter.config.mesh_weight)
            if mesh is not None:
                sources.append(self._with_geo(mesh))
        return sources

    def _with_geo(self, source: PositionSource) -> PositionSource:
        geo = self.mapper.local_to_geo(source.local_position)
        return replace(source, position=replace(geo, accuracy=source.accuracy))

    def _run_pipeline(self, now: float, generation: int) -> Optional[SpatialPosition]:
        events = []
        with self._pipeline_lock:
            if generation != self._generation:
                self.metrics.increment_drop('session_stopped')
                return None

            result = self.arbiter.fuse(self._collect_sources(now))
            if result.indoor != self._indoor:
                self._indoor = result.indoor
                events.append(('on_indoor_mode_change', result.indoor))

            if result.held or result.position is None:
                current = self._current
            else:
                mapping = self.mapper.map_position(
                    result.position, result.sources, result.confidence, result.accuracy_m, timestamp=now)
                current = mapping.position

                with self._state_lock:
                    if generation != self._generation:
                        self.metrics.increment_drop('session_stopped')
                        return None
                    self._current = current
                    self._history.append(current)
                    self._last_fusion_ts = now
                    old_accuracy = self._overall_accuracy
                    self._overall_accuracy = result.accuracy_m

                self.metrics.increment('position_updates')
                for transition in mapping.transitions:
                    if transition.kind == 'floor':
                        events.append(('on_floor_change', transition.new, transition.old))
                    elif transition.kind == 'zone_exit':
                        events.append(('on_zone_exit', transition.old))
                    else:
                        events.append(('on_zone_enter', transition.new))
                if result.accuracy_m < old_accuracy and result.accuracy_m < self.config.target_accuracy_m:
                    events.append(('on_accuracy_improved', result.accuracy_m, old_accuracy))
                events.append(('on_position_update', current))

        for name, *args in events:
            self._emit(name, *args)
        return current

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def current_position(self) -> Optional[SpatialPosition]:
        """Latest position, or None while no fix is known."""
        with self._state_lock:
            return self._current

    def position_staleness(self, now: float) -> Optional[float]:
        """Seconds since the latest position, or None while no fix is known."""
        with self._state_lock:
            if self._current is None:
                return None
            return max(0.0, now - self._current.timestamp)

    def history(self) -> List[SpatialPosition]:
        with self._state_lock:
            return list(self._history)

    def quality_metrics(self) -> dict:
        return self.gate.quality_metrics()

    # ------------------------------------------------------------------
    # Venue and mesh
    # ------------------------------------------------------------------

    def load_venue(self, venue: VenueModel):
        self.mapper.load_venue(venue)
        with self._state_lock:
            self._inertial_anchored = False

    def expire_nodes(self, now: float) -> List[str]:
        return self.registry.expire(now)

    def load_nodes(self, store: JsonNodeStore, now: float) -> int:
        """Restore persisted mesh nodes, skipping stale records."""
        return self.registry.load_records(store.load(), now)

    def save_nodes(self, store: JsonNodeStore):
        store.save(self.registry.to_records())

    # ------------------------------------------------------------------
    # Environment
    # ------------------------------------------------------------------

    def set_ship_mode(self, enabled: bool):
        self._ship_mode = enabled
        self.optimizer.config.ship_mode_enabled = enabled
        logger.info("Ship mode %s", "enabled" if enabled else "disabled")

    def classify_environment(self, fix: Optional[RawReading] = None) -> EnvironmentClassification:
        """
        Classify the environment around a fix (default: last accepted reading).

        Enables ship mode when the result says the device is aboard a vessel.

        Raises:
            NoFix: no fix given and none accepted yet
        """
        if fix is None:
            fix = self.gate.last_accepted
            if fix is None:
                raise NoFix("No accepted reading to classify")
        result = self.classifier.classify(fix)
        if result.on_vessel and not self._ship_mode:
            self.set_ship_mode(True)
            self._emit('on_ship_mode_detected', result)
        return result

    def refresh_environment(self, fix_provider: Callable[[], RawReading],
                            timeout_s: Optional[float] = None) -> Optional[EnvironmentClassification]:
        """
        Fetch a fix from a collaborator and classify it.

        Failures and timeouts are reported through on_location_error.

        Returns:
            Classification, or None when the collaborator failed
        """
        timeout = timeout_s if timeout_s is not None else self.config.collaborator_timeout_s
        future = self._executor.submit(fix_provider)
        try:
            fix = future.result(timeout=timeout)
        except FutureTimeout:
            future.cancel()
            self.metrics.increment_drop('collaborator_timeout')
            self._emit('on_location_error', f"Fix provider timed out after {timeout:.1f}s")
            return None
        except Exception as e:
            self.metrics.increment_drop('collaborator_timeout')
            logger.warning("Fix provider failed: %s", e)
            self._emit('on_location_error', f"Fix provider failed: {e}")
            return None
        return self.classify_environment(fix)

    # ------------------------------------------------------------------
    # Routing
    # ------------------------------------------------------------------

    def route_order(self, order_id: str, candidates: Optional[Sequence[ServicePoint]] = None) -> RouteAssignment:
        """
        Route an order placed at the current position.

        Raises:
            NoFix: no position is known yet
            NoServicePointAvailable: nothing in range
        """
        position = self.current_position()
        if position is None:
            raise NoFix(f"Cannot route order {order_id}: position unknown")
        return self.optimizer.route(Order(id=order_id, origin=position.global_position), candidates)

    def complete_order(self, order_id: str) -> bool:
        return self.optimizer.complete_order(order_id)

    # ------------------------------------------------------------------
    # Callbacks
    # ------------------------------------------------------------------

    def _emit(self, name: str, *args):
        callback = getattr(self.callbacks, name)
        if callback is None:
            return
        try:
            callback(*args)
        except Exception:
            self.metrics.increment_drop('callback_error')
            logger.exception("Callback %s failed", name)
