"""
Tracking session configuration.

Options are accepted in the camelCase form used by host applications
(maxAccuracyThreshold, minUpdateInterval, ...) or as dataclass field names.
"""

from dataclasses import dataclass, fields, asdict
from typing import Dict

from spatial_core.exceptions import ConfigError

# Host option name -> field name
_HOST_KEYS: Dict[str, str] = {
    'maxAccuracyThreshold': 'max_accuracy_threshold_m',
    'maxJumpDistance': 'max_jump_distance_m',
    'maxPlausibleSpeed': 'max_plausible_speed_m_s',
    'minUpdateInterval': 'min_update_interval_ms',
    'targetAccuracy': 'target_accuracy_m',
    'maxDeliveryDistance': 'max_delivery_distance_m',
    'loadBalancingEnabled': 'load_balancing_enabled',
    'shipModeEnabled': 'ship_mode_enabled',
    'discoveryInterval': 'discovery_interval_ms',
    'maxNodeAge': 'max_node_age_ms',
    'readingWindow': 'reading_window_s',
    'historySize': 'history_size',
    'collaboratorTimeout': 'collaborator_timeout_s',
    'environmentCheckInterval': 'environment_check_interval_s',
}


@dataclass
class TrackingConfig:
    """
    Configuration for a tracking session.

    Attributes:
        max_accuracy_threshold_m: Readings with worse accuracy are rejected
        max_jump_distance_m: Minimum jump allowance between accepted readings
        max_plausible_speed_m_s: Speed used to scale the jump allowance by elapsed time
        min_update_interval_ms: Minimum spacing of fusion passes
        target_accuracy_m: Accuracy-improved events fire only below this
        max_delivery_distance_m: Service points further away are not candidates
        load_balancing_enabled: Include the load penalty in routing scores
        ship_mode_enabled: Start in vessel mode (deck penalty, satellite bonus)
        discovery_interval_ms: Node registry expiry sweep interval
        max_node_age_ms: Nodes unseen for longer are expired
        reading_window_s: Satellite fixes older than this are not fused
        history_size: Number of SpatialPosition snapshots retained
        collaborator_timeout_s: Timeout for host collaborator calls
        environment_check_interval_s: Period of environment re-classification
    """

    max_accuracy_threshold_m: float = 15.0
    max_jump_distance_m: float = 100.0
    max_plausible_speed_m_s: float = 50.0
    min_update_interval_ms: float = 500.0
    target_accuracy_m: float = 1.0
    max_delivery_distance_m: float = 100.0
    load_balancing_enabled: bool = True
    ship_mode_enabled: bool = False
    discovery_interval_ms: float = 10000.0
    max_node_age_ms: float = 30000.0
    reading_window_s: float = 5.0
    history_size: int = 100
    collaborator_timeout_s: float = 5.0
    environment_check_interval_s: float = 30.0

    def __post_init__(self):
        for name in ('max_accuracy_threshold_m', 'max_jump_distance_m', 'max_plausible_speed_m_s',
                     'max_delivery_distance_m', 'max_node_age_ms', 'reading_window_s',
                     'collaborator_timeout_s', 'environment_check_interval_s',
                     'discovery_interval_ms', 'target_accuracy_m'):
            if getattr(self, name) <= 0:
                raise ConfigError(f"{name} must be positive: {getattr(self, name)}")
        if self.min_update_interval_ms < 0:
            raise ConfigError(f"min_update_interval_ms cannot be negative: {self.min_update_interval_ms}")
        if self.history_size < 1:
            raise ConfigError(f"history_size must be at least 1: {self.history_size}")

    @property
    def min_update_interval_s(self) -> float:
        return self.min_update_interval_ms / 1000.0

    @property
    def max_node_age_s(self) -> float:
        return self.max_node_age_ms / 1000.0

    @property
    def discovery_interval_s(self) -> float:
        return self.discovery_interval_ms / 1000.0

    @classmethod
    def from_dict(cls, options: dict) -> 'TrackingConfig':
        """
        Build from host options.

        Raises:
            ConfigError: on unknown option names or invalid values
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in options.items():
            name = _HOST_KEYS.get(key, key)
            if name not in known:
                raise ConfigError(f"Unknown tracking option: {key}")
            kwargs[name] = value
        return cls(**kwargs)

    def to_dict(self) -> dict:
        return asdict(self)


def create_default_config() -> TrackingConfig:
    """Default configuration for venue tracking on land."""
    return TrackingConfig()


def create_vessel_config() -> TrackingConfig:
    """Configuration for tracking aboard a vessel."""
    return TrackingConfig(ship_mode_enabled=True)
