"""
Unit tests for tracking configuration.
"""

import pytest

from spatial_core.config import TrackingConfig, create_default_config, create_vessel_config
from spatial_core.exceptions import ConfigError


class TestTrackingConfig:
    """Tests for defaults, validation and host option parsing."""

    def test_defaults(self):
        config = create_default_config()

        assert config.max_accuracy_threshold_m == 15.0
        assert config.max_jump_distance_m == 100.0
        assert config.min_update_interval_s == pytest.approx(0.5)
        assert config.max_node_age_s == pytest.approx(30.0)
        assert config.discovery_interval_s == pytest.approx(10.0)
        assert not config.ship_mode_enabled

    def test_vessel_config(self):
        assert create_vessel_config().ship_mode_enabled

    def test_from_host_options(self):
        config = TrackingConfig.from_dict({
            'maxAccuracyThreshold': 20,
            'minUpdateInterval': 250,
            'shipModeEnabled': True,
            'history_size': 10,
        })

        assert config.max_accuracy_threshold_m == 20
        assert config.min_update_interval_s == pytest.approx(0.25)
        assert config.ship_mode_enabled
        assert config.history_size == 10

    def test_unknown_option(self):
        with pytest.raises(ConfigError):
            TrackingConfig.from_dict({'maxAccuracy': 20})

    @pytest.mark.parametrize("field_name,value", [
        ('max_accuracy_threshold_m', 0),
        ('max_delivery_distance_m', -1),
        ('min_update_interval_ms', -5),
        ('history_size', 0),
    ])
    def test_invalid_values(self, field_name, value):
        with pytest.raises(ConfigError):
            TrackingConfig(**{field_name: value})

    def test_zero_update_interval_allowed(self):
        assert TrackingConfig(min_update_interval_ms=0).min_update_interval_s == 0.0

    def test_to_dict(self):
        data = TrackingConfig().to_dict()

        assert data['target_accuracy_m'] == 1.0
        assert TrackingConfig(**data) == TrackingConfig()
