"""
Unit tests for the source fusion arbiter.

Tests cover:
- Satellite weight rules
- Confidence and fused accuracy
- Weighted centroid, order independence, altitude handling
- Holding the last position when no weight is available
- Indoor mode detection
"""

import pytest

from spatial_core.localization.source_fusion import FusionConfig, SourceFusionArbiter
from spatial_core.proto.spatial_position import GeoPoint, LocalPoint, PositionSource, SourceKind


@pytest.fixture
def arbiter(metrics) -> SourceFusionArbiter:
    return SourceFusionArbiter(FusionConfig(), metrics=metrics)


def source(kind=SourceKind.SATELLITE, weight=1.0, accuracy=0.0, lat=10.0, lon=20.0,
           altitude=None, timestamp=1.0) -> PositionSource:
    return PositionSource(
        kind=kind,
        weight=weight,
        accuracy=accuracy,
        timestamp=timestamp,
        position=GeoPoint(lat, lon, altitude=altitude, timestamp=timestamp),
    )


def local_only(kind=SourceKind.MESH, accuracy=2.0) -> PositionSource:
    return PositionSource(kind=kind, weight=0.7, accuracy=accuracy, timestamp=1.0,
                          local_position=LocalPoint(1.0, 2.0))


class TestSatelliteWeight:
    """Tests for satellite weight rules."""

    @pytest.mark.parametrize("accuracy,ship_mode,expected", [
        (None, False, 0.5),
        (8.0, False, 0.5),
        (3.0, False, 0.8),
        (8.0, True, 0.7),
        (3.0, True, 1.0),
    ])
    def test_weight(self, arbiter, accuracy, ship_mode, expected):
        assert arbiter.satellite_weight(accuracy, ship_mode) == pytest.approx(expected)

    def test_indoor_penalty(self, arbiter):
        arbiter.fuse([local_only()])

        assert arbiter.indoor
        assert arbiter.satellite_weight(3.0) == pytest.approx(0.24)


class TestConfidenceAndAccuracy:
    """Tests for confidence and fused accuracy."""

    def test_accuracy_factor(self, arbiter):
        assert arbiter.accuracy_factor(0.0) == 1.0
        assert arbiter.accuracy_factor(5.0) == pytest.approx(0.5)
        assert arbiter.accuracy_factor(12.0) == 0.0

    def test_confidence(self, arbiter):
        sources = [source(weight=0.8, accuracy=3.0), source(weight=0.2, accuracy=8.0)]

        # (0.8 * 0.7 + 0.2 * 0.2) / 1.0
        assert arbiter.confidence(sources) == pytest.approx(0.6)

    def test_confidence_without_weight(self, arbiter):
        assert arbiter.confidence([source(weight=0.0)]) == 0.0

    def test_fused_accuracy(self, arbiter):
        sources = [source(weight=1.0, accuracy=0.0), source(weight=1.0, accuracy=5.0)]

        assert arbiter.fused_accuracy(sources) == pytest.approx(2.5)


class TestFuse:
    """Tests for the weighted centroid."""

    def test_weighted_centroid(self, arbiter):
        result = arbiter.fuse([
            source(weight=1.0, accuracy=0.0, lat=10.0, lon=20.0),
            source(weight=1.0, accuracy=5.0, lat=11.0, lon=21.0),
        ])

        # effective weights 1.0 and 0.5
        assert not result.held
        assert result.position.latitude == pytest.approx(10.0 + 1.0 / 3.0)
        assert result.position.longitude == pytest.approx(20.0 + 1.0 / 3.0)
        assert result.accuracy_m == pytest.approx(2.5)

    def test_order_independent(self, metrics):
        sources = [
            source(weight=0.8, accuracy=3.0, lat=25.7612, lon=-80.1923, timestamp=1.0),
            source(SourceKind.INERTIAL, weight=0.6, accuracy=0.5, lat=25.7613, lon=-80.1921, timestamp=3.0),
            source(SourceKind.MESH, weight=0.7, accuracy=4.0, lat=25.7611, lon=-80.1925, timestamp=2.0),
        ]

        forward = SourceFusionArbiter(metrics=metrics).fuse(sources)
        backward = SourceFusionArbiter(metrics=metrics).fuse(list(reversed(sources)))

        assert forward.position == backward.position
        assert forward.confidence == backward.confidence
        assert forward.accuracy_m == backward.accuracy_m
        assert forward.position.timestamp == 3.0

    def test_altitude_from_sources_that_have_one(self, arbiter):
        result = arbiter.fuse([
            source(weight=1.0, altitude=30.0),
            source(weight=1.0, lat=11.0, altitude=None),
        ])

        assert result.position.altitude == pytest.approx(30.0)

    def test_no_altitude(self, arbiter):
        assert arbiter.fuse([source()]).position.altitude is None

    def test_empty_before_any_fix(self, arbiter):
        result = arbiter.fuse([])

        assert result.held
        assert result.position is None
        assert result.confidence == 0.0
        assert result.accuracy_m == 10.0

    def test_empty_holds_last_position(self, arbiter):
        first = arbiter.fuse([source(lat=12.0)])

        result = arbiter.fuse([])

        assert result.held
        assert result.position == first.position

    def test_zero_effective_weight_holds_last_position(self, arbiter):
        first = arbiter.fuse([source(lat=12.0)])

        result = arbiter.fuse([source(lat=50.0, accuracy=10.0)])

        assert result.held
        assert result.position == first.position
        assert result.confidence == 0.0

    def test_local_only_sources_count_toward_confidence(self, arbiter):
        result = arbiter.fuse([source(accuracy=0.0), local_only(accuracy=5.0)])

        assert result.position.latitude == pytest.approx(10.0)
        assert result.confidence < 1.0

    def test_fusion_passes_counted(self, arbiter, metrics):
        arbiter.fuse([])
        arbiter.fuse([source()])

        assert metrics.get_counter('fusion_passes') == 2


class TestIndoorMode:
    """Tests for indoor detection."""

    def test_mesh_without_satellite(self, arbiter):
        assert arbiter.fuse([local_only()]).indoor

    def test_poor_satellite_with_inertial(self, arbiter):
        result = arbiter.fuse([
            source(weight=0.5, accuracy=20.0),
            source(SourceKind.INERTIAL, weight=0.5, accuracy=12.0),
        ])

        assert result.indoor

    def test_good_satellite_with_inertial(self, arbiter):
        result = arbiter.fuse([
            source(weight=0.8, accuracy=3.0),
            source(SourceKind.INERTIAL, weight=0.6, accuracy=0.5),
        ])

        assert not result.indoor

    def test_satellite_only_is_outdoor(self, arbiter):
        assert not arbiter.fuse([source(accuracy=14.0)]).indoor

    def test_reset(self, arbiter):
        arbiter.fuse([local_only()])
        arbiter.reset()

        assert not arbiter.indoor
        assert arbiter.last_position is None


class TestPositionSource:
    """Tests for source validation."""

    def test_negative_weight_rejected(self):
        with pytest.raises(ValueError):
            source(weight=-0.1)

    def test_negative_accuracy_rejected(self):
        with pytest.raises(ValueError):
            source(accuracy=-1.0)
