"""
Venue Spatial Core.

Positioning and order routing for venues where satellite fixes are degraded:
indoor spaces, cruise ships at sea or in port.

Package structure:
- proto: Readings, positions, venue model, routing and mesh node types
- localization: Reading filter, inertial integrator, coordinate transform,
  venue mapper, environment classifier, source fusion
- domain: Node registry, routing optimizer
- io: Tick scheduler, node store, venue loader
- metrics: Counters, drop reasons, histograms
- session: Tracking session that composes the components
"""

__version__ = "0.2.0"
__author__ = "Venue Spatial Team"
