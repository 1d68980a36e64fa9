"""
Metrics counters and histograms for the tracking pipeline.

Thread-safe counters for:
- Reading counts (received, accepted, smoothed)
- Rejection reasons (poor_accuracy, implausible_jump, stale_fix, ...)
- Routing outcomes (routed, completed, unroutable)
- Timing and quality histograms (fusion confidence, delivery time)

Every rejected reading or failed routing attempt is counted under a reason code.
"""

import logging
import threading
import time
from typing import Dict, List, Optional
from dataclasses import dataclass
from collections import defaultdict
import statistics

logger = logging.getLogger(__name__)


@dataclass
class CounterSnapshot:
    """Point-in-time copy of the collector state."""

    timestamp: float
    counters: Dict[str, int]
    drop_reasons: Dict[str, int]
    histograms: Dict[str, List[float]]

    def total_dropped(self) -> int:
        """Total items dropped across all reasons."""
        return sum(self.drop_reasons.values())

    def drop_rate(self, total_items: int) -> float:
        """Drop rate as a percentage of total_items."""
        if total_items == 0:
            return 0.0
        return (self.total_dropped() / total_items) * 100.0


class MetricsCollector:
    """
    Thread-safe metrics collection.

    Usage:
        collector = MetricsCollector()
        collector.increment('readings_in')
        collector.increment_drop('poor_accuracy')
        collector.record_histogram('fusion_confidence', 0.82)

        snapshot = collector.snapshot()
        print(f"Total dropped: {snapshot.total_dropped()}")
    """

    DROP_REASONS = {
        'poor_accuracy': 'Reported accuracy above threshold',
        'implausible_jump': 'Displacement exceeds plausible travel',
        'stale_fix': 'Satellite fix older than the reading window',
        'stale_motion_sample': 'Motion sample interval outside (0, 0.1] s',
        'no_service_point': 'No active service point within range',
        'callback_error': 'Subscriber callback raised',
        'collaborator_timeout': 'External collaborator timed out or failed',
        'session_stopped': 'Result discarded because the session stopped',
    }

    def __init__(self):
        """Initialize metrics collector."""
        self._lock = threading.Lock()
        self._counters: Dict[str, int] = defaultdict(int)
        self._drop_reasons: Dict[str, int] = defaultdict(int)
        self._histograms: Dict[str, List[float]] = defaultdict(list)
        self._start_time = time.time()

        self._init_standard_counters()

    def _init_standard_counters(self):
        """Initialize standard counter keys so reports are consistent."""
        standard_counters = [
            'readings_in',
            'readings_accepted',
            'motion_samples',
            'fusion_passes',
            'position_updates',
            'orders_routed',
            'orders_completed',
            'nodes_expired',
        ]

        with self._lock:
            for counter in standard_counters:
                if counter not in self._counters:
                    self._counters[counter] = 0

            for reason in self.DROP_REASONS:
                if reason not in self._drop_reasons:
                    self._drop_reasons[reason] = 0

    def increment(self, counter_name: str, value: int = 1):
        """
        Increment a counter by value.

        Args:
            counter_name: Name of counter to increment
            value: Amount to increment (default 1)
        """
        with self._lock:
            self._counters[counter_name] += value

    def increment_drop(self, reason: str, value: int = 1):
        """
        Increment drop counter for a specific reason.

        Args:
            reason: Drop reason code (should be in DROP_REASONS)
            value: Amount to increment (default 1)
        """
        if reason not in self.DROP_REASONS:
            logger.warning("Unknown drop reason '%s'", reason)

        with self._lock:
            self._drop_reasons[reason] += value
            self._counters['items_dropped'] += value

    def get_counter(self, counter_name: str) -> int:
        """Current value of a counter (0 if never touched)."""
        with self._lock:
            return self._counters.get(counter_name, 0)

    def get_drop_count(self, reason: str) -> int:
        """Current count for a drop reason."""
        with self._lock:
            return self._drop_reasons.get(reason, 0)

    def record_histogram(self, histogram_name: str, value: float, max_samples: int = 10000):
        """
        Record a value in a histogram.

        Args:
            histogram_name: Name of histogram
            value: Value to record
            max_samples: Maximum samples to keep before halving
        """
        with self._lock:
            samples = self._histograms[histogram_name]
            samples.append(value)

            if len(samples) > max_samples:
                self._histograms[histogram_name] = samples[-max_samples // 2:]

    def get_histogram_stats(self, histogram_name: str) -> Optional[Dict[str, float]]:
        """
        Get statistics for a histogram.

        Returns:
            Dict with count, min, max, mean, median, p95, p99;
            None if the histogram is empty
        """
        with self._lock:
            samples = self._histograms.get(histogram_name, [])

            if not samples:
                return None

            sorted_samples = sorted(samples)
            count = len(sorted_samples)

            return {
                'count': count,
                'min': sorted_samples[0],
                'max': sorted_samples[-1],
                'mean': statistics.mean(sorted_samples),
                'median': statistics.median(sorted_samples),
                'p95': sorted_samples[int(count * 0.95)] if count > 1 else sorted_samples[0],
                'p99': sorted_samples[int(count * 0.99)] if count > 1 else sorted_samples[0],
            }

    def snapshot(self) -> CounterSnapshot:
        """Copy of all metrics at this instant."""
        with self._lock:
            return CounterSnapshot(
                timestamp=time.time(),
                counters=dict(self._counters),
                drop_reasons=dict(self._drop_reasons),
                histograms={k: list(v) for k, v in self._histograms.items()},
            )

    def reset(self):
        """Reset all metrics."""
        with self._lock:
            self._counters.clear()
            self._drop_reasons.clear()
            self._histograms.clear()
            self._start_time = time.time()
        self._init_standard_counters()

    def get_uptime(self) -> float:
        """Seconds since initialization or last reset."""
        return time.time() - self._start_time

    def format_summary(self) -> str:
        """Human-readable metrics summary."""
        snapshot = self.snapshot()
        lines = [
            "=" * 70,
            f"  METRICS SUMMARY (uptime: {self.get_uptime():.1f}s)",
            "=" * 70,
            "",
            "COUNTERS:",
        ]
        for name, value in sorted(snapshot.counters.items()):
            lines.append(f"  {name:30s}: {value:8d}")

        total_dropped = snapshot.total_dropped()
        if total_dropped > 0:
            lines.append("")
            lines.append("DROP REASONS:")
            for reason, count in sorted(snapshot.drop_reasons.items()):
                if count > 0:
                    pct = (count / total_dropped) * 100
                    lines.append(f"  {reason:30s}: {count:8d} ({pct:5.1f}%)")

        if snapshot.histograms:
            lines.append("")
            lines.append("HISTOGRAMS:")
            for name in sorted(snapshot.histograms.keys()):
                stats = self.get_histogram_stats(name)
                if stats:
                    lines.append(f"  {name}:")
                    lines.append(f"    count={stats['count']}, mean={stats['mean']:.3f}, "
                                 f"p95={stats['p95']:.3f}, p99={stats['p99']:.3f}")

        lines.append("=" * 70)
        return "\n".join(lines)

    def print_summary(self):
        """Print human-readable metrics summary."""
        print("\n" + self.format_summary() + "\n")
