"""
Environment classification result (vessel / at sea / in port).
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional


class SeaState(str, Enum):
    CALM = 'calm'
    MODERATE = 'moderate'
    ROUGH = 'rough'


@dataclass(frozen=True)
class EnvironmentClassification:
    """
    Attributes:
        on_vessel: near_port OR at_sea OR ship_motion_detected
        at_sea: Residual distance from land above the at-sea cutoff
        near_port: Fix lies within a cataloged port area
        confidence: [0, 100]
        distance_from_land_m: Residual distance to the nearest coastline
        sea_state: Inferred from fix accuracy
        ship_motion_detected: Altitude/accuracy vessel-motion heuristic
        reason: Deciding signal, human readable
        nearest_port: Name of the port when near_port
    """

    on_vessel: bool
    at_sea: bool
    near_port: bool
    confidence: float
    distance_from_land_m: float
    sea_state: SeaState
    ship_motion_detected: bool
    reason: str
    nearest_port: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            'on_vessel': self.on_vessel,
            'at_sea': self.at_sea,
            'near_port': self.near_port,
            'confidence': self.confidence,
            'distance_from_land_m': self.distance_from_land_m,
            'sea_state': self.sea_state.value,
            'ship_motion_detected': self.ship_motion_detected,
            'reason': self.reason,
            'nearest_port': self.nearest_port,
        }
