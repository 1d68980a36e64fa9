"""
Domain Module: mesh node registry and order routing.

Implements:
- Node expiry and nearest-node queries
- Mesh position estimate from known nodes
- Order-to-service-point routing with load accounting
"""

from .node_registry import NodeRegistry, distance_3d, signal_reliability
from .routing_optimizer import RoutingOptimizer, RoutingConfig, CandidateAnalysis, round_half_up
from .service_layouts import create_default_service_points, create_cruise_service_points

__all__ = [
    'NodeRegistry',
    'distance_3d',
    'signal_reliability',
    'RoutingOptimizer',
    'RoutingConfig',
    'CandidateAnalysis',
    'round_half_up',
    'create_default_service_points',
    'create_cruise_service_points',
]
