"""
Pytest configuration and shared fixtures for spatial_core tests.

Provides a small two-floor venue around a Miami origin, readings and
geographic points at known offsets, and isolated metrics collectors.
"""

import sys
import copy
from pathlib import Path
from typing import Optional

import pytest

# Add project root to path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from spatial_core.localization.geodesy import offset_m
from spatial_core.metrics import MetricsCollector, reset_metrics
from spatial_core.proto.readings import RawReading
from spatial_core.proto.spatial_position import GeoPoint
from spatial_core.proto.venue import VenueModel

ORIGIN_LAT = 25.7612
ORIGIN_LON = -80.1923


# =============================================================================
# Metrics Fixtures
# =============================================================================


@pytest.fixture(autouse=True)
def fresh_global_metrics():
    """Give every test its own process-wide metrics collector."""
    reset_metrics()
    yield
    reset_metrics()


@pytest.fixture
def metrics() -> MetricsCollector:
    """Isolated metrics collector to pass into components."""
    return MetricsCollector()


# =============================================================================
# Venue Fixtures
# =============================================================================


@pytest.fixture
def venue_dict() -> dict:
    """
    Two-floor venue in host JSON form.

    Floor 1 (elevation 0) holds main_bar (-20..20 x 0..10) and
    seating_area (-30..30 x -50..-10). Floor 2 (elevation 5) holds pool_bar.
    Local frame: x east, y north, origin at (25.7612, -80.1923, 0).
    """
    return copy.deepcopy({
        "id": "test_venue",
        "name": "Test Venue",
        "bounds": {"north": 25.7630, "south": 25.7595, "east": -80.1905, "west": -80.1941},
        "coordinateSystem": {
            "origin": {"latitude": ORIGIN_LAT, "longitude": ORIGIN_LON, "altitude": 0.0},
            "rotation": 0.0,
            "scale": 1.0,
        },
        "floors": [
            {
                "level": 1,
                "name": "Main Floor",
                "elevation": 0.0,
                "zones": [
                    {
                        "id": "main_bar",
                        "name": "Main Bar",
                        "type": "bar",
                        "polygon": [{"x": -20, "y": 0}, {"x": 20, "y": 0},
                                    {"x": 20, "y": 10}, {"x": -20, "y": 10}],
                    },
                    {
                        "id": "seating_area",
                        "name": "Seating Area",
                        "type": "seating",
                        "polygon": [{"x": -30, "y": -50}, {"x": 30, "y": -50},
                                    {"x": 30, "y": -10}, {"x": -30, "y": -10}],
                    },
                ],
                "obstacles": [],
            },
            {
                "level": 2,
                "name": "Pool Deck",
                "elevation": 5.0,
                "zones": [
                    {
                        "id": "pool_bar",
                        "name": "Pool Bar",
                        "type": "bar",
                        "polygon": [{"x": 40, "y": 40}, {"x": 60, "y": 40},
                                    {"x": 60, "y": 55}, {"x": 40, "y": 55}],
                    },
                ],
            },
        ],
    })


@pytest.fixture
def venue(venue_dict: dict) -> VenueModel:
    return VenueModel.from_dict(venue_dict)


# =============================================================================
# Position Fixtures
# =============================================================================


@pytest.fixture
def origin() -> GeoPoint:
    """Venue origin as a GeoPoint."""
    return GeoPoint(latitude=ORIGIN_LAT, longitude=ORIGIN_LON, altitude=0.0)


# =============================================================================
# Helper Functions
# =============================================================================


def make_reading(north_m: float = 0.0, east_m: float = 0.0, timestamp: float = 0.0,
                 accuracy: Optional[float] = 5.0, altitude: Optional[float] = None) -> RawReading:
    """
    Raw reading displaced from the venue origin.

    Args:
        north_m: Meters north of origin.
        east_m: Meters east of origin.
        timestamp: Reading time in seconds.
        accuracy: Reported accuracy in meters (None for unknown).
        altitude: Reported altitude.

    Returns:
        RawReading at the offset point.
    """
    point = offset_m(GeoPoint(ORIGIN_LAT, ORIGIN_LON), north_m=north_m, east_m=east_m)
    return RawReading(
        latitude=point.latitude,
        longitude=point.longitude,
        timestamp=timestamp,
        altitude=altitude,
        accuracy=accuracy,
    )
