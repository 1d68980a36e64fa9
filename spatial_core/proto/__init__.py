"""
Data types shared across spatial_core components.
"""

from .readings import RawReading, SmoothedReading, OrientationSample, MotionSample, InertialState
from .spatial_position import GeoPoint, LocalPoint, SourceKind, PositionSource, SpatialPosition
from .venue import GeoBounds, CoordinateSystem, Zone, Obstacle, ReferencePoint, FloorModel, VenueModel
from .routing import RouteReason, ServicePoint, Order, AlternativeRoute, RouteAssignment
from .mesh_node import NodeType, NodeStatus, NodeCapabilities, MeshNode
from .environment import SeaState, EnvironmentClassification

__all__ = [
    'RawReading', 'SmoothedReading', 'OrientationSample', 'MotionSample', 'InertialState',
    'GeoPoint', 'LocalPoint', 'SourceKind', 'PositionSource', 'SpatialPosition',
    'GeoBounds', 'CoordinateSystem', 'Zone', 'Obstacle', 'ReferencePoint', 'FloorModel', 'VenueModel',
    'RouteReason', 'ServicePoint', 'Order', 'AlternativeRoute', 'RouteAssignment',
    'NodeType', 'NodeStatus', 'NodeCapabilities', 'MeshNode',
    'SeaState', 'EnvironmentClassification',
]
