"""
Unit tests for metrics module.

Tests cover:
- Counter increment (single-threaded and multi-threaded)
- Drop reason tracking
- Histogram recording and statistics
- Snapshot and reset functionality
- Thread safety
"""

import logging
import threading
import time

import pytest

from spatial_core.metrics import MetricsCollector, get_metrics, reset_metrics
from spatial_core.metrics.counters import CounterSnapshot


class TestMetricsCollectorBasic:
    """Tests for basic metrics collector functionality."""

    def test_initialization(self):
        """Test that metrics collector initializes correctly."""
        collector = MetricsCollector()

        # Standard counters should be initialized to 0
        assert collector.get_counter('readings_in') == 0
        assert collector.get_counter('orders_routed') == 0

        # Unknown counter should return 0
        assert collector.get_counter('unknown_counter') == 0

    def test_increment_counter(self):
        """Test incrementing a counter."""
        collector = MetricsCollector()

        collector.increment('readings_in')
        assert collector.get_counter('readings_in') == 1

        collector.increment('readings_in', 5)
        assert collector.get_counter('readings_in') == 6

    def test_increment_drop_with_valid_reason(self):
        """Test incrementing drop counter with valid reason."""
        collector = MetricsCollector()

        collector.increment_drop('poor_accuracy')
        assert collector.get_counter('items_dropped') == 1
        assert collector.get_drop_count('poor_accuracy') == 1

        snapshot = collector.snapshot()
        assert snapshot.drop_reasons['poor_accuracy'] == 1

    def test_increment_drop_unknown_reason(self, caplog):
        """Test incrementing drop counter with unknown reason logs warning."""
        collector = MetricsCollector()

        with caplog.at_level(logging.WARNING):
            collector.increment_drop('unknown_reason')

        assert 'unknown_reason' in caplog.text

        # Should still be counted
        assert collector.get_counter('items_dropped') == 1

    def test_multiple_drop_reasons(self):
        """Test tracking multiple drop reasons."""
        collector = MetricsCollector()

        collector.increment_drop('poor_accuracy', 3)
        collector.increment_drop('implausible_jump', 5)
        collector.increment_drop('stale_fix', 2)

        snapshot = collector.snapshot()

        assert snapshot.drop_reasons['poor_accuracy'] == 3
        assert snapshot.drop_reasons['implausible_jump'] == 5
        assert snapshot.drop_reasons['stale_fix'] == 2
        assert snapshot.total_dropped() == 10


class TestHistograms:
    """Tests for histogram functionality."""

    def test_record_histogram(self):
        """Test recording values in histogram."""
        collector = MetricsCollector()

        collector.record_histogram('fusion_confidence', 0.5)
        collector.record_histogram('fusion_confidence', 0.7)
        collector.record_histogram('fusion_confidence', 0.9)

        stats = collector.get_histogram_stats('fusion_confidence')

        assert stats is not None
        assert stats['count'] == 3
        assert stats['mean'] == pytest.approx(0.7)
        assert stats['min'] == 0.5
        assert stats['max'] == 0.9

    def test_histogram_empty(self):
        """Test getting stats for empty histogram."""
        collector = MetricsCollector()

        assert collector.get_histogram_stats('nonexistent') is None

    def test_histogram_percentiles(self):
        """Test histogram percentile calculations."""
        collector = MetricsCollector()

        for i in range(100):
            collector.record_histogram('test', float(i))

        stats = collector.get_histogram_stats('test')

        assert stats['count'] == 100
        assert stats['min'] == 0.0
        assert stats['max'] == 99.0
        assert 49 < stats['median'] < 51
        assert 94 < stats['p95'] < 96
        assert 98 < stats['p99'] < 100

    def test_histogram_max_samples_bounded(self):
        """Test that histograms are bounded to prevent memory growth."""
        collector = MetricsCollector()

        for i in range(15000):
            collector.record_histogram('test', float(i), max_samples=1000)

        snapshot = collector.snapshot()

        # Trimmed to half of max_samples whenever the bound is crossed
        assert len(snapshot.histograms['test']) <= 1000


class TestSnapshot:
    """Tests for snapshot functionality."""

    def test_snapshot_creates_copy(self):
        """Test that snapshot creates independent copy."""
        collector = MetricsCollector()

        collector.increment('readings_in', 10)
        snapshot1 = collector.snapshot()

        collector.increment('readings_in', 5)
        snapshot2 = collector.snapshot()

        assert snapshot1.counters['readings_in'] == 10
        assert snapshot2.counters['readings_in'] == 15

    def test_snapshot_timestamp(self):
        """Test snapshot includes timestamp."""
        collector = MetricsCollector()

        before = time.time()
        snapshot = collector.snapshot()
        after = time.time()

        assert isinstance(snapshot, CounterSnapshot)
        assert before <= snapshot.timestamp <= after

    def test_snapshot_drop_rate(self):
        """Test snapshot drop rate calculation."""
        collector = MetricsCollector()

        collector.increment('readings_in', 100)
        collector.increment_drop('poor_accuracy', 5)
        collector.increment_drop('implausible_jump', 3)

        snapshot = collector.snapshot()

        assert snapshot.drop_rate(100) == pytest.approx(8.0)
        assert snapshot.drop_rate(0) == 0.0


class TestReset:
    """Tests for reset functionality."""

    def test_reset_clears_counters(self):
        """Test that reset clears all counters."""
        collector = MetricsCollector()

        collector.increment('readings_in', 100)
        collector.increment_drop('poor_accuracy', 5)
        collector.record_histogram('fusion_confidence', 0.4)

        collector.reset()

        assert collector.get_counter('readings_in') == 0
        assert collector.get_counter('items_dropped') == 0

        snapshot = collector.snapshot()
        assert snapshot.total_dropped() == 0
        assert not snapshot.histograms

    def test_reset_reinitializes_standard_counters(self):
        """Test that reset reinitializes standard counters to 0."""
        collector = MetricsCollector()

        collector.increment('readings_in', 100)
        collector.reset()

        assert 'readings_in' in collector.snapshot().counters


class TestThreadSafety:
    """Tests for thread-safe operations."""

    def test_concurrent_increment(self):
        """Test that concurrent increments are thread-safe."""
        collector = MetricsCollector()
        num_threads = 10
        increments_per_thread = 1000

        def worker():
            for _ in range(increments_per_thread):
                collector.increment('readings_in')

        threads = [threading.Thread(target=worker) for _ in range(num_threads)]

        for t in threads:
            t.start()
        for t in threads:
            t.join()

        expected = num_threads * increments_per_thread
        actual = collector.get_counter('readings_in')

        assert actual == expected, f"Expected {expected}, got {actual}"

    def test_concurrent_drop_reasons(self):
        """Test that concurrent drop reason increments are thread-safe."""
        collector = MetricsCollector()
        num_threads = 5
        increments_per_thread = 200
        reasons = ['poor_accuracy', 'implausible_jump', 'callback_error']

        def worker(reason: str):
            for _ in range(increments_per_thread):
                collector.increment_drop(reason)

        threads = [
            threading.Thread(target=worker, args=(reason,))
            for reason in reasons
            for _ in range(num_threads)
        ]

        for t in threads:
            t.start()
        for t in threads:
            t.join()

        snapshot = collector.snapshot()

        expected = num_threads * increments_per_thread
        for reason in reasons:
            assert snapshot.drop_reasons[reason] == expected
        assert collector.get_counter('items_dropped') == expected * len(reasons)


class TestGlobalSingleton:
    """Tests for global metrics singleton."""

    def test_get_metrics_returns_same_instance(self):
        """Test that get_metrics() returns the same instance."""
        assert get_metrics() is get_metrics()

    def test_global_metrics_persists_data(self):
        """Test that global metrics persists data across calls."""
        get_metrics().increment('test_counter', 42)

        assert get_metrics().get_counter('test_counter') == 42

    def test_reset_metrics_creates_new_instance(self):
        """Test that reset_metrics() creates fresh instance."""
        metrics1 = get_metrics()
        metrics1.increment('test_counter', 100)

        reset_metrics()

        metrics2 = get_metrics()
        assert metrics2 is not metrics1
        assert metrics2.get_counter('test_counter') == 0


class TestDropReasonCodes:
    """Tests for standard drop reason codes."""

    def test_all_standard_drop_reasons_defined(self):
        """Test that all standard drop reasons are defined."""
        expected_reasons = [
            'poor_accuracy',
            'implausible_jump',
            'stale_fix',
            'stale_motion_sample',
            'no_service_point',
            'callback_error',
            'collaborator_timeout',
            'session_stopped',
        ]

        for reason in expected_reasons:
            assert reason in MetricsCollector.DROP_REASONS

    def test_drop_reasons_initialized_to_zero(self):
        """Test that all drop reasons are initialized to 0."""
        collector = MetricsCollector()
        snapshot = collector.snapshot()

        for reason in collector.DROP_REASONS:
            assert snapshot.drop_reasons[reason] == 0


class TestSummary:
    """Tests for summary formatting."""

    def test_uptime_increases(self):
        collector = MetricsCollector()

        uptime1 = collector.get_uptime()
        time.sleep(0.05)

        assert collector.get_uptime() > uptime1

    def test_print_summary_no_crash(self, capsys):
        """Test that print_summary doesn't crash with various data."""
        collector = MetricsCollector()

        collector.increment('readings_in', 100)
        collector.increment_drop('poor_accuracy', 5)
        collector.record_histogram('fusion_confidence', 0.8)

        collector.print_summary()

        captured = capsys.readouterr()
        assert 'METRICS SUMMARY' in captured.out
        assert 'readings_in' in captured.out
        assert 'poor_accuracy' in captured.out
        assert 'fusion_confidence' in captured.out
