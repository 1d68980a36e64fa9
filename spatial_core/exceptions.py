"""Exception hierarchy for spatial_core."""

from typing import Optional


class SpatialCoreError(Exception):
    """Base exception for all spatial_core errors."""


class ConfigError(SpatialCoreError):
    """Configuration value is missing or out of range."""


class PermissionDenied(SpatialCoreError):
    """Location permission was refused when starting a tracking session."""


class NoFix(SpatialCoreError):
    """No position is known yet, so the requested operation cannot run."""


class VenueNotLoaded(SpatialCoreError):
    """A local-frame operation was requested before a venue model was loaded."""


class InvalidVenueModel(SpatialCoreError):
    """Venue model failed validation.

    Attributes:
        field: Dotted path of the offending field, if known.
    """

    def __init__(self, message: str, *, field: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field


class NoServicePointAvailable(SpatialCoreError):
    """No active service point lies within the maximum delivery distance.

    Attributes:
        order_id: Order that could not be routed.
        max_distance_m: Distance limit that was applied.
    """

    def __init__(
        self,
        message: str,
        *,
        order_id: Optional[str] = None,
        max_distance_m: Optional[float] = None,
    ) -> None:
        super().__init__(message)
        self.order_id = order_id
        self.max_distance_m = max_distance_m


class CollaboratorError(SpatialCoreError):
    """An external collaborator (fix provider, node store) failed or timed out."""
