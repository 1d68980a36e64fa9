"""
Venue coordinate transform.

Converts between WGS84 geographic points and the venue local frame using an
equirectangular displacement from the venue origin followed by a planar
rotation and uniform scale. The vertical axis maps 1:1 from altitude delta.

Accurate at venue scale (hundreds of meters); not a geodesic projection.
"""

import math
from typing import Optional

import numpy as np

from spatial_core.proto.spatial_position import GeoPoint, LocalPoint
from spatial_core.proto.venue import CoordinateSystem
from spatial_core.localization.geodesy import METERS_PER_DEGREE


class CoordinateConverter:
    """
    Geo <-> local converter for one venue coordinate system.

    Usage:
        converter = CoordinateConverter(venue.coordinate_system)
        local = converter.geo_to_local(GeoPoint(25.7613, -80.1923, 25.0))
        geo = converter.local_to_geo(local)
    """

    def __init__(self, coordinate_system: CoordinateSystem):
        self.coordinate_system = coordinate_system
        origin = coordinate_system.origin
        self._origin_lat = origin.latitude
        self._origin_lon = origin.longitude
        self._origin_alt = origin.altitude if origin.altitude is not None else 0.0
        self._meters_per_deg_lon = METERS_PER_DEGREE * math.cos(math.radians(origin.latitude))

        theta = math.radians(coordinate_system.rotation_deg)
        scale = coordinate_system.scale
        rotation = np.array([
            [math.cos(theta), -math.sin(theta)],
            [math.sin(theta), math.cos(theta)],
        ])
        self.forward_matrix = rotation * scale
        self.inverse_matrix = rotation.T / scale

    def geo_to_local(self, point: GeoPoint, altitude: Optional[float] = None) -> LocalPoint:
        """
        Convert a geographic point to the local frame.

        Args:
            point: Geographic point
            altitude: Overrides point.altitude; missing altitude maps to z = 0

        Returns:
            LocalPoint in meters (scaled local units)
        """
        alt = altitude if altitude is not None else point.altitude
        east = (point.longitude - self._origin_lon) * self._meters_per_deg_lon
        north = (point.latitude - self._origin_lat) * METERS_PER_DEGREE
        x, y = self.forward_matrix @ np.array([east, north])
        z = (alt - self._origin_alt) if alt is not None else 0.0
        return LocalPoint(x=float(x), y=float(y), z=float(z), timestamp=point.timestamp)

    def local_to_geo(self, point: LocalPoint) -> GeoPoint:
        """Convert a local-frame point back to a geographic point."""
        east, north = self.inverse_matrix @ np.array([point.x, point.y])
        return GeoPoint(
            latitude=self._origin_lat + float(north) / METERS_PER_DEGREE,
            longitude=self._origin_lon + float(east) / self._meters_per_deg_lon,
            altitude=self._origin_alt + point.z,
            timestamp=point.timestamp,
        )
