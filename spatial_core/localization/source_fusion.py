"""
Source Fusion Arbiter.

Merges position sources into one geographic position by weighted centroid.
No source kind is privileged: each contributes in proportion to its declared
weight scaled by an accuracy factor max(0, 1 - accuracy / 10).

Sums use math.fsum so the result does not depend on source order.
"""

import logging
import math
import threading
from dataclasses import dataclass, field
from typing import List, Optional, Sequence

from spatial_core.proto.spatial_position import GeoPoint, PositionSource, SourceKind
from spatial_core.metrics import MetricsCollector, get_metrics

logger = logging.getLogger(__name__)


@dataclass
class FusionConfig:
    """
    Configuration for source fusion.

    Attributes:
        accuracy_scale_m: Accuracy at which a source's factor reaches zero
        default_accuracy_m: Fused accuracy reported when no weight is available
        satellite_base_weight: Weight of a satellite fix
        satellite_good_accuracy_m: Fixes better than this get the accuracy bonus
        satellite_accuracy_bonus: Weight added for good accuracy
        satellite_indoor_factor: Weight multiplier while indoors
        satellite_vessel_bonus: Weight added in ship mode
        indoor_accuracy_m: Fused accuracy above this counts as poor satellite
        mesh_weight: Weight assigned to mesh estimates
    """

    accuracy_scale_m: float = 10.0
    default_accuracy_m: float = 10.0
    satellite_base_weight: float = 0.5
    satellite_good_accuracy_m: float = 5.0
    satellite_accuracy_bonus: float = 0.3
    satellite_indoor_factor: float = 0.3
    satellite_vessel_bonus: float = 0.2
    indoor_accuracy_m: float = 15.0
    mesh_weight: float = 0.7


@dataclass
class FusionResult:
    """
    Output of one fusion pass.

    Attributes:
        position: Merged position, or the held last position (None if never known)
        confidence: [0, 1]
        accuracy_m: Weight-averaged source accuracy
        sources: Sources considered
        held: True when position was carried over rather than computed
        indoor: Indoor mode after this pass
    """

    position: Optional[GeoPoint]
    confidence: float
    accuracy_m: float
    sources: List[PositionSource] = field(default_factory=list)
    held: bool = False
    indoor: bool = False


class SourceFusionArbiter:
    """
    Weighted-centroid fusion of position sources.

    Usage:
        arbiter = SourceFusionArbiter()
        result = arbiter.fuse([satellite_source, inertial_source])
        if result.position is not None:
            ...

    Sources that carry no geographic position still count toward confidence
    and accuracy but not toward the centroid.
    """

    def __init__(self, config: Optional[FusionConfig] = None,
                 metrics: Optional[MetricsCollector] = None):
        self.config = config or FusionConfig()
        self.metrics = metrics or get_metrics()
        self._lock = threading.Lock()
        self.last_position: Optional[GeoPoint] = None
        self.indoor = False

    def accuracy_factor(self, accuracy: float) -> float:
        return max(0.0, 1.0 - accuracy / self.config.accuracy_scale_m)

    def satellite_weight(self, accuracy: Optional[float], ship_mode: bool = False) -> float:
        """
        Declared weight of a satellite fix.

        0.5 base, +0.3 for accuracy under 5 m, x0.3 while indoors,
        +0.2 in ship mode, capped at 1.
        """
        cfg = self.config
        weight = cfg.satellite_base_weight
        if accuracy is not None and accuracy < cfg.satellite_good_accuracy_m:
            weight += cfg.satellite_accuracy_bonus
        if self.indoor:
            weight *= cfg.satellite_indoor_factor
        if ship_mode:
            weight += cfg.satellite_vessel_bonus
        return min(1.0, weight)

    def confidence(self, sources: Sequence[PositionSource]) -> float:
        """sum(weight * accuracy_factor) / sum(weight); 0 for no weight."""
        total = math.fsum(s.weight for s in sources)
        if total <= 0:
            return 0.0
        weighted = math.fsum(s.weight * self.accuracy_factor(s.accuracy) for s in sources)
        return min(1.0, max(0.0, weighted / total))

    def fused_accuracy(self, sources: Sequence[PositionSource]) -> float:
        total = math.fsum(s.weight for s in sources)
        if total <= 0:
            return self.config.default_accuracy_m
        return math.fsum(s.accuracy * s.weight for s in sources) / total

    def fuse(self, sources: Sequence[PositionSource]) -> FusionResult:
        """
        Fuse sources into a position.

        Args:
            sources: Position sources (any order)

        Returns:
            FusionResult; with no usable weight the last position is held
        """
        sources = list(sources)
        with self._lock:
            self.metrics.increment('fusion_passes')
            if not sources:
                return FusionResult(
                    position=self.last_position,
                    confidence=0.0,
                    accuracy_m=self.config.default_accuracy_m,
                    held=True,
                    indoor=self.indoor,
                )

            confidence = self.confidence(sources)
            accuracy = self.fused_accuracy(sources)
            position = self._centroid(sources)
            held = position is None
            if held:
                position = self.last_position
            else:
                self.last_position = position

            self.indoor = self._detect_indoor(sources, accuracy)
            self.metrics.record_histogram('fusion_confidence', confidence)
            return FusionResult(
                position=position,
                confidence=confidence,
                accuracy_m=accuracy,
                sources=sources,
                held=held,
                indoor=self.indoor,
            )

    def _centroid(self, sources: Sequence[PositionSource]) -> Optional[GeoPoint]:
        weighted = [
            (s.weight * self.accuracy_factor(s.accuracy), s)
            for s in sources
            if s.position is not None
        ]
        weighted = [(w, s) for w, s in weighted if w > 0]
        total = math.fsum(w for w, _ in weighted)
        if total <= 0:
            return None

        lat = math.fsum(w * s.position.latitude for w, s in weighted) / total
        lon = math.fsum(w * s.position.longitude for w, s in weighted) / total

        with_alt = [(w, s.position.altitude) for w, s in weighted if s.position.altitude is not None]
        altitude = None
        if with_alt:
            alt_total = math.fsum(w for w, _ in with_alt)
            altitude = math.fsum(w * a for w, a in with_alt) / alt_total

        timestamp = max(s.timestamp for _, s in weighted)
        return GeoPoint(latitude=lat, longitude=lon, altitude=altitude,
                        accuracy=self.fused_accuracy(sources), timestamp=timestamp)

    def _detect_indoor(self, sources: Sequence[PositionSource], accuracy: float) -> bool:
        """Poor or absent satellite while mesh or inertial sources are present."""
        kinds = {s.kind for s in sources}
        poor_satellite = SourceKind.SATELLITE not in kinds or accuracy > self.config.indoor_accuracy_m
        indoor_signals = bool(kinds & {SourceKind.MESH, SourceKind.INERTIAL})
        return poor_satellite and indoor_signals

    def reset(self):
        with self._lock:
            self.last_position = None
            self.indoor = False
