"""
Inertial Integrator (dead reckoning).

Integrates device acceleration into velocity and position in the venue local
frame using semi-implicit Euler with velocity damping. Drift is pulled back
toward external fixes by correct_with_fix().
"""

import logging
import math
import threading
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

import numpy as np

from spatial_core.proto.readings import InertialState, OrientationSample
from spatial_core.proto.spatial_position import LocalPoint, PositionSource, SourceKind
from spatial_core.metrics import MetricsCollector, get_metrics

logger = logging.getLogger(__name__)


@dataclass
class InertialConfig:
    """
    Configuration for the inertial integrator.

    Attributes:
        gravity_m_s2: Gravity as reported by the accelerometer at rest (x, y, z)
        max_dt_s: Intervals above this are treated as stale and skipped
        velocity_damping: Velocity multiplier applied after every step
        confidence_decay: Confidence lost per integration step
        min_confidence: Floor for decayed confidence
        max_confidence: Cap for corrected confidence
        initial_confidence: Confidence at start and after reset
        correction_gain: Fraction of the drift applied per correction
        correction_reference_m: Accuracy at which the full gain applies
        correction_boost: Confidence gained per correction
        default_correction_factor: Factor used when fix accuracy is unknown
        base_accuracy_m: Source accuracy right after a correction
        accuracy_grace_s: Accuracy stays at base for this long
        accuracy_growth_s: Seconds per additional meter after the grace period
        max_accuracy_m: Cap on reported source accuracy
    """

    gravity_m_s2: Tuple[float, float, float] = (0.0, 0.0, -9.81)
    max_dt_s: float = 0.1
    velocity_damping: float = 0.98
    confidence_decay: float = 0.001
    min_confidence: float = 0.1
    max_confidence: float = 0.9
    initial_confidence: float = 0.5
    correction_gain: float = 0.1
    correction_reference_m: float = 10.0
    correction_boost: float = 0.1
    default_correction_factor: float = 0.5
    base_accuracy_m: float = 0.5
    accuracy_grace_s: float = 60.0
    accuracy_growth_s: float = 60.0
    max_accuracy_m: float = 10.0


def euler_to_quaternion(roll_deg: float, pitch_deg: float, yaw_deg: float) -> Tuple[float, float, float, float]:
    """
    ZYX Euler angles (degrees) to unit quaternion (w, x, y, z).

    Rotation is yaw about Z, then pitch about Y, then roll about X.
    """
    cr = math.cos(math.radians(roll_deg) * 0.5)
    sr = math.sin(math.radians(roll_deg) * 0.5)
    cp = math.cos(math.radians(pitch_deg) * 0.5)
    sp = math.sin(math.radians(pitch_deg) * 0.5)
    cy = math.cos(math.radians(yaw_deg) * 0.5)
    sy = math.sin(math.radians(yaw_deg) * 0.5)

    return (
        cr * cp * cy + sr * sp * sy,
        sr * cp * cy - cr * sp * sy,
        cr * sp * cy + sr * cp * sy,
        cr * cp * sy - sr * sp * cy,
    )


class InertialIntegrator:
    """
    Dead-reckoning integrator.

    Usage:
        integrator = InertialIntegrator()
        state = integrator.integrate((0.2, 0.0, -9.81), OrientationSample(0, 0, 90), 0.02)
        integrator.correct_with_fix((1.0, 2.0, 0.0), accuracy=5.0)
        source = integrator.position_source(now)

    Notes:
        - integrate() with dt <= 0 or dt > max_dt_s leaves state untouched
        - Confidence decays every step and is restored by corrections
    """

    def __init__(self, config: Optional[InertialConfig] = None,
                 metrics: Optional[MetricsCollector] = None):
        self.config = config or InertialConfig()
        self.metrics = metrics or get_metrics()
        self._gravity = np.array(self.config.gravity_m_s2, dtype=float)
        self._lock = threading.Lock()
        self._reset_state()

    def _reset_state(self):
        self._position = np.zeros(3)
        self._velocity = np.zeros(3)
        self._orientation = (1.0, 0.0, 0.0, 0.0)
        self._angular_velocity = np.zeros(3)
        self._timestamp = 0.0
        self._last_correction: Optional[float] = None
        self._confidence = self.config.initial_confidence

    def integrate(
        self,
        acceleration: Sequence[float],
        orientation: OrientationSample,
        dt: float,
        timestamp: Optional[float] = None,
        rotation_rate: Optional[Sequence[float]] = None,
    ) -> InertialState:
        """
        Advance the dead-reckoning state by one sample.

        Args:
            acceleration: Device acceleration (x, y, z) m/s², gravity included
            orientation: Attitude sample in degrees
            dt: Seconds since the previous sample
            timestamp: Sample time (defaults to previous timestamp + dt)
            rotation_rate: Optional angular velocity (x, y, z) rad/s

        Returns:
            Current InertialState (unchanged if the sample was skipped)
        """
        with self._lock:
            if dt <= 0 or dt > self.config.max_dt_s:
                self.metrics.increment_drop('stale_motion_sample')
                logger.debug("Skipping motion sample with dt=%.4f", dt)
                return self._snapshot()

            linear = np.asarray(acceleration, dtype=float) - self._gravity

            self._velocity = self._velocity + linear * dt
            self._position = self._position + self._velocity * dt
            self._velocity = self._velocity * self.config.velocity_damping

            self._orientation = euler_to_quaternion(orientation.roll, orientation.pitch, orientation.yaw)
            if rotation_rate is not None:
                self._angular_velocity = np.asarray(rotation_rate, dtype=float)

            self._timestamp = timestamp if timestamp is not None else self._timestamp + dt
            self._confidence = max(self.config.min_confidence,
                                   self._confidence - self.config.confidence_decay)

            self.metrics.increment('motion_samples')
            return self._snapshot()

    def correct_with_fix(self, external_position: Sequence[float], accuracy: Optional[float],
                         timestamp: Optional[float] = None) -> float:
        """
        Pull the internal position toward an external fix.

        Args:
            external_position: Fix in the local frame (x, y, z)
            accuracy: Fix accuracy in meters (None or <= 0 uses the default factor)
            timestamp: Time of the fix; restarts the accuracy growth clock

        Returns:
            Magnitude of the horizontal drift before correction (m)
        """
        cfg = self.config
        with self._lock:
            drift = np.asarray(external_position, dtype=float) - self._position
            if accuracy is not None and accuracy > 0:
                factor = min(1.0, cfg.correction_reference_m / accuracy)
            else:
                factor = cfg.default_correction_factor

            self._position = self._position + drift * factor * cfg.correction_gain
            self._confidence = min(cfg.max_confidence, self._confidence + cfg.correction_boost)
            self._last_correction = timestamp if timestamp is not None else self._timestamp

            drift_m = float(np.linalg.norm(drift[:2]))
            self.metrics.record_histogram('inertial_drift_m', drift_m)
            logger.debug("Inertial drift corrected: %.2fm (factor %.2f)", drift_m, factor)
            return drift_m

    def position_source(self, now: float) -> PositionSource:
        """
        Current dead-reckoning estimate as a fusion source.

        Accuracy is base_accuracy_m for accuracy_grace_s after the last
        correction (or start), then grows by one meter per accuracy_growth_s,
        capped at max_accuracy_m. Weight is the current confidence.
        """
        cfg = self.config
        with self._lock:
            reference = self._last_correction if self._last_correction is not None else self._timestamp
            age = max(0.0, now - reference)
            accuracy = cfg.base_accuracy_m
            if age > cfg.accuracy_grace_s:
                accuracy += (age - cfg.accuracy_grace_s) / cfg.accuracy_growth_s
            x, y, z = (float(v) for v in self._position)
            return PositionSource(
                kind=SourceKind.INERTIAL,
                weight=self._confidence,
                accuracy=min(accuracy, cfg.max_accuracy_m),
                timestamp=self._timestamp,
                local_position=LocalPoint(x=x, y=y, z=z, timestamp=self._timestamp),
            )

    @property
    def state(self) -> InertialState:
        with self._lock:
            return self._snapshot()

    def _snapshot(self) -> InertialState:
        return InertialState(
            position=tuple(float(v) for v in self._position),
            velocity=tuple(float(v) for v in self._velocity),
            orientation=self._orientation,
            angular_velocity=tuple(float(v) for v in self._angular_velocity),
            timestamp=self._timestamp,
            confidence=self._confidence,
        )

    def reset(self, position: Optional[Sequence[float]] = None):
        """Return to the initial state, optionally seeding the position."""
        with self._lock:
            self._reset_state()
            if position is not None:
                self._position = np.asarray(position, dtype=float)
        logger.debug("Inertial integrator reset")
