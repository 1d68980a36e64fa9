"""
Reading Quality Gate and Smoother.

Satellite fixes pass three stages:
1. Quality gate: reject poor accuracy and physically implausible jumps
2. Scalar Kalman filter per axis (latitude, longitude)
3. Linearly weighted moving average over the last few Kalman outputs

Rejections never raise. They are counted under a drop reason and exposed via
last_rejection_reason so the session can report them.
"""

import logging
import threading
from collections import deque
from dataclasses import dataclass
from typing import Deque, Dict, Optional, Tuple

import numpy as np

from spatial_core.proto.readings import RawReading, SmoothedReading
from spatial_core.localization.geodesy import haversine_m
from spatial_core.metrics import MetricsCollector, get_metrics

logger = logging.getLogger(__name__)


@dataclass
class ReadingFilterConfig:
    """
    Configuration for the reading quality gate.

    Attributes:
        max_accuracy_threshold_m: Reject readings with accuracy above this (m)
        max_jump_distance_m: Minimum allowed displacement between accepted readings (m)
        max_plausible_speed_m_s: Allowance grows with elapsed time at this speed
        history_size: Accepted readings kept for consistency checks
        smoothing_window: Points in the weighted moving average
        process_noise: Kalman Q (per second)
        measurement_noise: Kalman R
        initial_error: Kalman P0
        consistency_bonus: Maximum confidence boost from history consistency
        default_confidence: Confidence base when accuracy is unknown
    """

    max_accuracy_threshold_m: float = 15.0
    max_jump_distance_m: float = 100.0
    max_plausible_speed_m_s: float = 50.0
    history_size: int = 20
    smoothing_window: int = 5
    process_noise: float = 3.0
    measurement_noise: float = 10.0
    initial_error: float = 100.0
    consistency_bonus: float = 0.3
    default_confidence: float = 0.5


@dataclass
class FilterState:
    """Scalar Kalman state shared by both axes."""

    q: float
    r: float
    p: float
    k: float = 0.0
    latitude: float = 0.0
    longitude: float = 0.0
    initialized: bool = False


class ScalarKalmanFilter:
    """
    1-D Kalman filter applied independently to latitude and longitude.

    Both axes share one error covariance, so the gain is identical per step:
        P += Q * dt
        K = P / (P + R)
        est += K * (z - est)
        P = (1 - K) * P

    The first measurement initializes the estimate without touching P.
    """

    def __init__(self, process_noise: float = 3.0, measurement_noise: float = 10.0,
                 initial_error: float = 100.0):
        self._q = process_noise
        self._r = measurement_noise
        self._p0 = initial_error
        self.state = FilterState(q=process_noise, r=measurement_noise, p=initial_error)

    def update(self, latitude: float, longitude: float, dt: float) -> Tuple[float, float]:
        """
        Fold one measurement into the estimate.

        Args:
            latitude: Measured latitude (deg)
            longitude: Measured longitude (deg)
            dt: Seconds since the previous measurement (negative treated as 0)

        Returns:
            (latitude, longitude) estimate
        """
        s = self.state
        if not s.initialized:
            s.latitude = latitude
            s.longitude = longitude
            s.initialized = True
            return (s.latitude, s.longitude)

        s.p += s.q * max(0.0, dt)
        s.k = s.p / (s.p + s.r)
        s.latitude += s.k * (latitude - s.latitude)
        s.longitude += s.k * (longitude - s.longitude)
        s.p = (1.0 - s.k) * s.p
        return (s.latitude, s.longitude)

    def reset(self):
        self.state = FilterState(q=self._q, r=self._r, p=self._p0)


class WeightedMovingAverage:
    """Moving average with linear recency weights 1..n (newest heaviest)."""

    def __init__(self, window: int = 5):
        if window < 1:
            raise ValueError(f"Window must be at least 1: {window}")
        self.window = window
        self._points: Deque[Tuple[float, float]] = deque(maxlen=window)

    def add(self, latitude: float, longitude: float) -> Tuple[float, float]:
        """Append a point and return the current weighted average."""
        self._points.append((latitude, longitude))
        return self.average()

    def average(self) -> Optional[Tuple[float, float]]:
        if not self._points:
            return None
        points = np.array(self._points)
        weights = np.arange(1, len(points) + 1, dtype=float)
        lat, lon = weights @ points / weights.sum()
        return (float(lat), float(lon))

    def __len__(self):
        return len(self._points)

    def reset(self):
        self._points.clear()


class ReadingQualityGate:
    """
    Quality gate and smoother for raw satellite readings.

    Usage:
        gate = ReadingQualityGate(ReadingFilterConfig())
        smoothed = gate.ingest(reading)
        if smoothed is None:
            print(gate.last_rejection_reason)

    Thread-safe: ingest/reset/quality_metrics serialize on an internal lock.
    """

    def __init__(self, config: Optional[ReadingFilterConfig] = None,
                 metrics: Optional[MetricsCollector] = None):
        self.config = config or ReadingFilterConfig()
        self.metrics = metrics or get_metrics()
        self._lock = threading.Lock()
        self._reset_state()

    def _reset_state(self):
        cfg = self.config
        self.kalman = ScalarKalmanFilter(cfg.process_noise, cfg.measurement_noise, cfg.initial_error)
        self.smoother = WeightedMovingAverage(cfg.smoothing_window)
        self._history: Deque[RawReading] = deque(maxlen=cfg.history_size)
        self._last_accepted: Optional[RawReading] = None
        self._total = 0
        self._accepted = 0
        self._consecutive_rejections = 0
        self.last_rejection_reason: Optional[str] = None

    @property
    def last_accepted(self) -> Optional[RawReading]:
        """Most recent accepted raw reading."""
        return self._last_accepted

    def ingest(self, reading: RawReading) -> Optional[SmoothedReading]:
        """
        Gate, filter and smooth a reading.

        Args:
            reading: Raw satellite reading

        Returns:
            SmoothedReading if accepted, None if rejected
        """
        with self._lock:
            self._total += 1
            self.metrics.increment('readings_in')

            reason = self._rejection_reason(reading)
            if reason is not None:
                self._consecutive_rejections += 1
                self.last_rejection_reason = reason
                self.metrics.increment_drop(reason)
                logger.debug("Reading rejected (%s): accuracy=%s consecutive=%d",
                             reason, reading.accuracy, self._consecutive_rejections)
                return None

            dt = 0.0
            if self._last_accepted is not None:
                dt = reading.timestamp - self._last_accepted.timestamp

            self._consecutive_rejections = 0
            self.last_rejection_reason = None
            self._accepted += 1
            self._last_accepted = reading
            self._history.append(reading)

            k_lat, k_lon = self.kalman.update(reading.latitude, reading.longitude, dt)
            s_lat, s_lon = self.smoother.add(k_lat, k_lon)
            confidence = self._confidence(reading)

            self.metrics.increment('readings_accepted')
            self.metrics.record_histogram('reading_confidence', confidence)

            return SmoothedReading(
                latitude=s_lat,
                longitude=s_lon,
                timestamp=reading.timestamp,
                confidence=confidence,
                kalman_latitude=k_lat,
                kalman_longitude=k_lon,
                altitude=reading.altitude,
                accuracy=reading.accuracy,
                speed=reading.speed,
                heading=reading.heading,
            )

    def _rejection_reason(self, reading: RawReading) -> Optional[str]:
        cfg = self.config
        if reading.accuracy is not None and reading.accuracy > cfg.max_accuracy_threshold_m:
            return 'poor_accuracy'

        last = self._last_accepted
        if last is not None:
            distance = haversine_m(last.latitude, last.longitude, reading.latitude, reading.longitude)
            elapsed = max(0.0, reading.timestamp - last.timestamp)
            allowance = max(cfg.max_jump_distance_m, elapsed * cfg.max_plausible_speed_m_s)
            if distance > allowance:
                return 'implausible_jump'
        return None

    def _confidence(self, reading: RawReading) -> float:
        cfg = self.config
        if reading.accuracy is None:
            confidence = cfg.default_confidence
        else:
            confidence = min(1.0, max(0.0, 1.0 - reading.accuracy / cfg.max_accuracy_threshold_m))
        confidence += self.history_consistency() * cfg.consistency_bonus
        return min(1.0, confidence)

    def history_consistency(self) -> float:
        """
        Consistency of recent motion in [0, 1].

        Uses the variance of the two consecutive distances between the last three
        accepted readings: max(0, 1 - variance / 100). Fewer than three readings
        gives 0.
        """
        if len(self._history) < 3:
            return 0.0
        recent = list(self._history)[-3:]
        distances = [
            haversine_m(a.latitude, a.longitude, b.latitude, b.longitude)
            for a, b in zip(recent, recent[1:])
        ]
        variance = float(np.var(distances))
        return max(0.0, 1.0 - variance / 100.0)

    def quality_metrics(self) -> Dict[str, float]:
        """
        Running quality statistics.

        Returns:
            Dict with total_readings, accepted_readings, quality_ratio,
            consecutive_rejections, history_size
        """
        with self._lock:
            return {
                'total_readings': self._total,
                'accepted_readings': self._accepted,
                'quality_ratio': self._accepted / self._total if self._total else 0.0,
                'consecutive_rejections': self._consecutive_rejections,
                'history_size': len(self._history),
            }

    def reset(self):
        """Discard all filter state and counters."""
        with self._lock:
            self._reset_state()
        logger.debug("Reading gate reset")
