"""
Metrics: counters, drop reasons, histograms.

Usage:
    from spatial_core.metrics import get_metrics

    metrics = get_metrics()
    metrics.increment('readings_in')
    metrics.increment_drop('poor_accuracy')
    metrics.record_histogram('fusion_confidence', 0.8)

Components accept an explicit collector; the process-wide one is only the default.
"""

import threading

from .counters import MetricsCollector, CounterSnapshot

_global_metrics = None
_global_lock = threading.Lock()


def get_metrics() -> MetricsCollector:
    """Process-wide default metrics collector."""
    global _global_metrics
    with _global_lock:
        if _global_metrics is None:
            _global_metrics = MetricsCollector()
        return _global_metrics


def reset_metrics():
    """Replace the default collector with a fresh one (for testing)."""
    global _global_metrics
    with _global_lock:
        _global_metrics = MetricsCollector()


__all__ = ['MetricsCollector', 'CounterSnapshot', 'get_metrics', 'reset_metrics']
