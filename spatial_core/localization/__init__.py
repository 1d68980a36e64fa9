"""
Localization Module: reading filtering, dead reckoning, venue mapping, fusion.

Key classes:
- ReadingQualityGate: Accuracy/jump gate, scalar Kalman filter, weighted smoothing
- InertialIntegrator: Dead reckoning with drift correction from external fixes
- CoordinateConverter: Geo <-> venue local frame
- VenueMapper: Floor and zone assignment with transition detection
- EnvironmentClassifier: Vessel / at-sea / in-port classification
- SourceFusionArbiter: Weighted-centroid fusion of position sources
"""

from .geodesy import haversine_m, distance_m, offset_m, EARTH_RADIUS_M, METERS_PER_DEGREE
from .reading_filter import (
    ReadingQualityGate,
    ReadingFilterConfig,
    ScalarKalmanFilter,
    WeightedMovingAverage,
)
from .inertial_integrator import InertialIntegrator, InertialConfig, euler_to_quaternion
from .coordinate_converter import CoordinateConverter
from .venue_mapper import VenueMapper, MappingResult, Transition, point_in_polygon
from .environment_classifier import EnvironmentClassifier, EnvironmentConfig
from .source_fusion import SourceFusionArbiter, FusionConfig, FusionResult

__all__ = [
    'haversine_m',
    'distance_m',
    'offset_m',
    'EARTH_RADIUS_M',
    'METERS_PER_DEGREE',
    'ReadingQualityGate',
    'ReadingFilterConfig',
    'ScalarKalmanFilter',
    'WeightedMovingAverage',
    'InertialIntegrator',
    'InertialConfig',
    'euler_to_quaternion',
    'CoordinateConverter',
    'VenueMapper',
    'MappingResult',
    'Transition',
    'point_in_polygon',
    'EnvironmentClassifier',
    'EnvironmentConfig',
    'SourceFusionArbiter',
    'FusionConfig',
    'FusionResult',
]
