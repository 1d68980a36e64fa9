"""
Environment Classifier.

Decides from a single geographic fix whether the device is aboard a vessel:
near a cataloged cruise port, at sea (far from any coastline), or showing the
elevated-and-unsteady fix pattern of a ship deck.
"""

import logging
import math
import threading
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple, Union

from spatial_core.proto.environment import EnvironmentClassification, SeaState
from spatial_core.proto.readings import RawReading
from spatial_core.proto.spatial_position import GeoPoint
from spatial_core.localization.geodesy import haversine_m
from spatial_core.localization.maritime_catalog import COASTLINES, CRUISE_PORTS, MaritimeArea

logger = logging.getLogger(__name__)


@dataclass
class EnvironmentConfig:
    """
    Classification thresholds.

    Attributes:
        at_sea_distance_m: Residual distance from land above which the fix is at sea
        open_water_distance_m: Residual distance that counts as open water for motion
        deck_altitude_min_m: Lower bound (exclusive) of the deck altitude band
        deck_altitude_max_m: Upper bound (exclusive) of the deck altitude band
        unsteady_accuracy_m: Accuracy above this suggests vessel motion
        calm_accuracy_m: Accuracy below this means calm sea
        moderate_accuracy_m: Accuracy below this means moderate sea
        good_accuracy_m: Accuracy below this adds confidence
        poor_accuracy_m: Accuracy above this removes confidence
    """

    at_sea_distance_m: float = 5000.0
    open_water_distance_m: float = 1000.0
    deck_altitude_min_m: float = 8.0
    deck_altitude_max_m: float = 100.0
    unsteady_accuracy_m: float = 3.0
    calm_accuracy_m: float = 5.0
    moderate_accuracy_m: float = 15.0
    good_accuracy_m: float = 10.0
    poor_accuracy_m: float = 20.0
    port_confidence: float = 90.0
    sea_confidence: float = 75.0
    motion_confidence: float = 60.0
    accuracy_adjustment: float = 10.0
    rough_sea_bonus: float = 15.0
    calm_sea_bonus: float = 5.0


class EnvironmentClassifier:
    """
    Vessel / at-sea / in-port classifier.

    Usage:
        classifier = EnvironmentClassifier()
        result = classifier.classify(reading)
        if result.on_vessel:
            session.set_ship_mode(True)
    """

    def __init__(
        self,
        config: Optional[EnvironmentConfig] = None,
        ports: Sequence[MaritimeArea] = CRUISE_PORTS,
        coastlines: Sequence[MaritimeArea] = COASTLINES,
    ):
        self.config = config or EnvironmentConfig()
        self.ports = tuple(ports)
        self.coastlines = tuple(coastlines)
        self._lock = threading.Lock()
        self.last_result: Optional[EnvironmentClassification] = None

    def nearest_port(self, latitude: float, longitude: float) -> Tuple[Optional[str], float]:
        """
        Closest port whose area contains the point.

        Returns:
            (port name, distance_m), or (None, inf) when outside every area
        """
        best_name = None
        best_distance = math.inf
        for port in self.ports:
            distance = haversine_m(latitude, longitude, port.lat, port.lng)
            if distance <= port.radius and distance < best_distance:
                best_name, best_distance = port.name, distance
        return best_name, best_distance

    def distance_from_land(self, latitude: float, longitude: float) -> float:
        """Minimum over coastlines of max(0, distance - radius), in meters."""
        return min(
            (max(0.0, haversine_m(latitude, longitude, c.lat, c.lng) - c.radius) for c in self.coastlines),
            default=math.inf,
        )

    def sea_state(self, accuracy: Optional[float]) -> SeaState:
        if accuracy is None:
            return SeaState.MODERATE
        if accuracy < self.config.calm_accuracy_m:
            return SeaState.CALM
        if accuracy < self.config.moderate_accuracy_m:
            return SeaState.MODERATE
        return SeaState.ROUGH

    def vessel_motion(self, altitude: Optional[float], accuracy: Optional[float],
                      distance_from_land_m: float) -> bool:
        cfg = self.config
        if altitude is None or not cfg.deck_altitude_min_m < altitude < cfg.deck_altitude_max_m:
            return False
        unsteady = accuracy is not None and accuracy > cfg.unsteady_accuracy_m
        return unsteady or distance_from_land_m > cfg.open_water_distance_m

    def classify(self, fix: Union[RawReading, GeoPoint]) -> EnvironmentClassification:
        """
        Classify the environment around a geographic fix.

        Args:
            fix: RawReading or GeoPoint (altitude/accuracy optional)

        Returns:
            EnvironmentClassification
        """
        cfg = self.config
        accuracy = fix.accuracy
        port_name, _ = self.nearest_port(fix.latitude, fix.longitude)
        near_port = port_name is not None
        land_distance = self.distance_from_land(fix.latitude, fix.longitude)
        at_sea = land_distance > cfg.at_sea_distance_m
        sea_state = self.sea_state(accuracy)
        motion = self.vessel_motion(fix.altitude, accuracy, land_distance)

        if near_port:
            confidence = cfg.port_confidence
            reason = f"Near {port_name}"
        elif at_sea:
            confidence = cfg.sea_confidence
            reason = f"At sea ({land_distance / 1000:.1f}km from land)"
        elif motion:
            confidence = cfg.motion_confidence
            reason = "Ship motion detected"
        else:
            confidence = 0.0
            reason = "No ship environment detected"

        if accuracy is not None:
            if accuracy < cfg.good_accuracy_m:
                confidence += cfg.accuracy_adjustment
            elif accuracy > cfg.poor_accuracy_m:
                confidence -= cfg.accuracy_adjustment

        if sea_state == SeaState.ROUGH:
            confidence += cfg.rough_sea_bonus
        elif sea_state == SeaState.CALM:
            confidence += cfg.calm_sea_bonus

        result = EnvironmentClassification(
            on_vessel=near_port or at_sea or motion,
            at_sea=at_sea,
            near_port=near_port,
            confidence=max(0.0, min(100.0, confidence)),
            distance_from_land_m=land_distance,
            sea_state=sea_state,
            ship_motion_detected=motion,
            reason=reason,
            nearest_port=port_name,
        )
        with self._lock:
            self.last_result = result
        logger.debug("Environment: %s (confidence %.0f)", reason, result.confidence)
        return result

    @staticmethod
    def default_result(reason: str) -> EnvironmentClassification:
        """Negative result used when classification could not run."""
        return EnvironmentClassification(
            on_vessel=False,
            at_sea=False,
            near_port=False,
            confidence=0.0,
            distance_from_land_m=0.0,
            sea_state=SeaState.CALM,
            ship_motion_detected=False,
            reason=reason,
        )
