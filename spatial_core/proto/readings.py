"""
Raw sensor readings as delivered by the platform.

Timestamps are seconds (float, epoch or monotonic) and non-decreasing per source.
"""

from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass(frozen=True)
class RawReading:
    """
    Single satellite position fix.

    Attributes:
        latitude: Degrees, [-90, 90]
        longitude: Degrees, [-180, 180]
        timestamp: Seconds
        altitude: Meters above sea level (optional)
        accuracy: Horizontal accuracy radius in meters (optional)
        speed: Ground speed in m/s (optional)
        heading: Course over ground in degrees (optional)
        hdop/vdop/pdop: Dilution of precision (optional, informational)
    """

    latitude: float
    longitude: float
    timestamp: float
    altitude: Optional[float] = None
    accuracy: Optional[float] = None
    speed: Optional[float] = None
    heading: Optional[float] = None
    hdop: Optional[float] = None
    vdop: Optional[float] = None
    pdop: Optional[float] = None

    def __post_init__(self):
        if not -90.0 <= self.latitude <= 90.0:
            raise ValueError(f"Latitude out of range: {self.latitude}")
        if not -180.0 <= self.longitude <= 180.0:
            raise ValueError(f"Longitude out of range: {self.longitude}")
        if self.accuracy is not None and self.accuracy < 0:
            raise ValueError(f"Accuracy cannot be negative: {self.accuracy}")

    @classmethod
    def from_dict(cls, data: dict) -> 'RawReading':
        """Build from a replay record; missing optional keys become None."""
        return cls(
            latitude=float(data['latitude']),
            longitude=float(data['longitude']),
            timestamp=float(data['timestamp']),
            altitude=data.get('altitude'),
            accuracy=data.get('accuracy'),
            speed=data.get('speed'),
            heading=data.get('heading'),
            hdop=data.get('hdop'),
            vdop=data.get('vdop'),
            pdop=data.get('pdop'),
        )


@dataclass
class SmoothedReading:
    """
    Accepted reading after Kalman filtering and moving-average smoothing.

    latitude/longitude are the smoothed values; kalman_latitude/kalman_longitude
    keep the intermediate filter output. Other fields pass through from the raw
    reading.
    """

    latitude: float
    longitude: float
    timestamp: float
    confidence: float
    kalman_latitude: float
    kalman_longitude: float
    altitude: Optional[float] = None
    accuracy: Optional[float] = None
    speed: Optional[float] = None
    heading: Optional[float] = None


@dataclass(frozen=True)
class OrientationSample:
    """Device attitude in degrees."""

    roll: float
    pitch: float
    yaw: float


@dataclass(frozen=True)
class MotionSample:
    """
    Accelerometer sample with attitude.

    acceleration is device-reported (x, y, z) in m/s², gravity included.
    """

    acceleration: Tuple[float, float, float]
    orientation: OrientationSample
    timestamp: float
    rotation_rate: Optional[Tuple[float, float, float]] = None


@dataclass(frozen=True)
class InertialState:
    """
    Dead-reckoning state in the venue local frame.

    Attributes:
        position: (x, y, z) meters
        velocity: (vx, vy, vz) m/s
        orientation: Unit quaternion (w, x, y, z)
        angular_velocity: (x, y, z) rad/s
        timestamp: Seconds of the last integration step
        confidence: [0.1, 0.9] once running, 0.5 initially
    """

    position: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    velocity: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    orientation: Tuple[float, float, float, float] = (1.0, 0.0, 0.0, 0.0)
    angular_velocity: Tuple[float, float, float] = (0.0, 0.0, 0.0)
    timestamp: float = 0.0
    confidence: float = 0.5
