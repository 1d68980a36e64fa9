"""
Venue model loading from JSON files.
"""

import json
import logging
from pathlib import Path
from typing import Union

from spatial_core.exceptions import InvalidVenueModel
from spatial_core.proto.venue import VenueModel

logger = logging.getLogger(__name__)


def load_venue(path: Union[str, Path]) -> VenueModel:
    """
    Load and validate a venue model.

    Raises:
        InvalidVenueModel: unreadable file, bad JSON or invalid model
    """
    path = Path(path)
    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        raise InvalidVenueModel(f"Cannot read venue file {path}: {e}") from e
    venue = VenueModel.from_dict(data)
    logger.info("Loaded venue %s from %s", venue.id, path)
    return venue


def save_venue(venue: VenueModel, path: Union[str, Path]):
    with open(path, 'w', encoding='utf-8') as f:
        json.dump(venue.to_dict(), f, indent=2)
