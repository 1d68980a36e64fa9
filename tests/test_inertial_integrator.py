"""
Unit tests for the inertial integrator.

Tests cover:
- Gravity removal, semi-implicit Euler step and damping
- Stale sample handling
- Confidence decay and correction boost
- Drift correction toward external fixes
- Position source accuracy growth
"""

import math

import pytest

from spatial_core.localization.inertial_integrator import (
    InertialConfig,
    InertialIntegrator,
    euler_to_quaternion,
)
from spatial_core.proto.readings import OrientationSample
from spatial_core.proto.spatial_position import SourceKind

LEVEL = OrientationSample(roll=0.0, pitch=0.0, yaw=0.0)
AT_REST = (0.0, 0.0, -9.81)


@pytest.fixture
def integrator(metrics) -> InertialIntegrator:
    return InertialIntegrator(InertialConfig(), metrics=metrics)


class TestIntegration:
    """Tests for the integration step."""

    def test_at_rest_stays_put(self, integrator):
        for i in range(10):
            state = integrator.integrate(AT_REST, LEVEL, 0.05, timestamp=i * 0.05)

        assert state.position == pytest.approx((0.0, 0.0, 0.0))
        assert state.velocity == pytest.approx((0.0, 0.0, 0.0))

    def test_single_step(self, integrator):
        state = integrator.integrate((1.0, 0.0, -9.81), LEVEL, 0.1, timestamp=1.0)

        # v = 0.1, p = v * dt = 0.01, then v damped to 0.098
        assert state.position[0] == pytest.approx(0.01)
        assert state.velocity[0] == pytest.approx(0.098)
        assert state.timestamp == 1.0

    def test_timestamp_defaults_to_previous_plus_dt(self, integrator):
        integrator.integrate(AT_REST, LEVEL, 0.05)
        state = integrator.integrate(AT_REST, LEVEL, 0.05)

        assert state.timestamp == pytest.approx(0.1)

    @pytest.mark.parametrize("dt", [0.0, -0.01, 0.2])
    def test_stale_sample_skipped(self, integrator, metrics, dt):
        state = integrator.integrate((5.0, 5.0, 0.0), LEVEL, dt)

        assert state.position == (0.0, 0.0, 0.0)
        assert state.confidence == 0.5
        assert metrics.get_drop_count('stale_motion_sample') == 1

    def test_dt_at_limit_accepted(self, integrator, metrics):
        integrator.integrate(AT_REST, LEVEL, 0.1)

        assert metrics.get_counter('motion_samples') == 1

    def test_confidence_decays_to_floor(self, integrator):
        state = integrator.integrate(AT_REST, LEVEL, 0.05)
        assert state.confidence == pytest.approx(0.499)

        for _ in range(1000):
            state = integrator.integrate(AT_REST, LEVEL, 0.05)
        assert state.confidence == pytest.approx(0.1)

    def test_orientation_stored_as_quaternion(self, integrator):
        state = integrator.integrate(AT_REST, OrientationSample(0.0, 0.0, 90.0), 0.05)

        w, x, y, z = state.orientation
        assert w == pytest.approx(math.sqrt(0.5))
        assert z == pytest.approx(math.sqrt(0.5))

    def test_rotation_rate_recorded(self, integrator):
        state = integrator.integrate(AT_REST, LEVEL, 0.05, rotation_rate=(0.1, 0.2, 0.3))

        assert state.angular_velocity == pytest.approx((0.1, 0.2, 0.3))


class TestEulerToQuaternion:
    """Tests for attitude conversion."""

    def test_identity(self):
        assert euler_to_quaternion(0.0, 0.0, 0.0) == pytest.approx((1.0, 0.0, 0.0, 0.0))

    def test_unit_norm(self):
        q = euler_to_quaternion(30.0, -20.0, 135.0)

        assert sum(c * c for c in q) == pytest.approx(1.0)


class TestCorrection:
    """Tests for drift correction."""

    def test_accurate_fix_applies_full_gain(self, integrator):
        drift = integrator.correct_with_fix((10.0, 0.0, 0.0), accuracy=5.0)

        assert drift == pytest.approx(10.0)
        assert integrator.state.position[0] == pytest.approx(1.0)

    def test_poor_fix_applies_scaled_gain(self, integrator):
        integrator.correct_with_fix((10.0, 0.0, 0.0), accuracy=20.0)

        # factor = 10 / 20 = 0.5
        assert integrator.state.position[0] == pytest.approx(0.5)

    def test_unknown_accuracy_uses_default_factor(self, integrator):
        integrator.correct_with_fix((10.0, 0.0, 0.0), accuracy=None)

        assert integrator.state.position[0] == pytest.approx(0.5)

    def test_drift_is_horizontal(self, integrator):
        drift = integrator.correct_with_fix((3.0, 4.0, 100.0), accuracy=5.0)

        assert drift == pytest.approx(5.0)

    def test_correction_boosts_confidence_to_cap(self, integrator):
        for _ in range(10):
            integrator.correct_with_fix((0.0, 0.0, 0.0), accuracy=5.0)

        assert integrator.state.confidence == pytest.approx(0.9)


class TestPositionSource:
    """Tests for the fusion source view."""

    def test_fresh_source(self, integrator):
        integrator.correct_with_fix((0.0, 0.0, 0.0), accuracy=5.0, timestamp=100.0)

        source = integrator.position_source(now=130.0)

        assert source.kind == SourceKind.INERTIAL
        assert source.accuracy == pytest.approx(0.5)
        assert source.weight == pytest.approx(0.6)
        assert source.position is None
        assert source.local_position is not None

    def test_accuracy_grows_after_grace_period(self, integrator):
        integrator.correct_with_fix((0.0, 0.0, 0.0), accuracy=5.0, timestamp=0.0)

        assert integrator.position_source(now=180.0).accuracy == pytest.approx(2.5)
        assert integrator.position_source(now=10000.0).accuracy == pytest.approx(10.0)


class TestReset:
    """Tests for reset."""

    def test_reset_with_seed_position(self, integrator):
        integrator.integrate((2.0, 0.0, -9.81), LEVEL, 0.1)

        integrator.reset(position=(5.0, 6.0, 0.0))

        state = integrator.state
        assert state.position == (5.0, 6.0, 0.0)
        assert state.velocity == (0.0, 0.0, 0.0)
        assert state.confidence == 0.5
