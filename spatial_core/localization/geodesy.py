"""
Great-circle and small-area distance helpers.
"""

import math

from spatial_core.proto.spatial_position import GeoPoint

EARTH_RADIUS_M = 6371000.0

# Equirectangular meters per degree of latitude
METERS_PER_DEGREE = 111320.0


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in meters between two lat/lon pairs (degrees)."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (math.sin(d_lat / 2) ** 2
         + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2)
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_M * c


def distance_m(a: GeoPoint, b: GeoPoint) -> float:
    """Great-circle distance between two GeoPoints, altitude ignored."""
    return haversine_m(a.latitude, a.longitude, b.latitude, b.longitude)


def offset_m(origin: GeoPoint, north_m: float, east_m: float) -> GeoPoint:
    """
    Point displaced from origin by north/east meters along the sphere.

    Exact for pure north/south offsets; east offsets follow the parallel.
    """
    d_lat = math.degrees(north_m / EARTH_RADIUS_M)
    d_lon = math.degrees(east_m / (EARTH_RADIUS_M * math.cos(math.radians(origin.latitude))))
    return GeoPoint(
        latitude=origin.latitude + d_lat,
        longitude=origin.longitude + d_lon,
        altitude=origin.altitude,
        accuracy=origin.accuracy,
        timestamp=origin.timestamp,
    )
