"""
I/O Module: tick scheduling and file persistence.

- Scheduler, ManualTickSource, IntervalTickSource, CancellationToken
- JsonNodeStore for node records
- load_venue / save_venue for venue models
"""

from .scheduler import Scheduler, ManualTickSource, IntervalTickSource, CancellationToken
from .node_store import JsonNodeStore
from .venue_loader import load_venue, save_venue

__all__ = [
    'Scheduler',
    'ManualTickSource',
    'IntervalTickSource',
    'CancellationToken',
    'JsonNodeStore',
    'load_venue',
    'save_venue',
]
