"""
Built-in service point layouts: a land venue and a cruise ship.
"""

from typing import List

from spatial_core.proto.routing import ServicePoint

VENUE_SERVICE_POINTS = [
    {
        'id': 'main_bar_001', 'name': 'Main Bar', 'zone': 'main_bar',
        'position': {'latitude': 25.7612, 'longitude': -80.1923},
        'capacity': 20, 'staffCount': 3,
        'specialties': ['cocktails', 'beer', 'wine', 'spirits'],
    },
    {
        'id': 'pool_bar_001', 'name': 'Pool Bar', 'zone': 'pool_area',
        'position': {'latitude': 25.7615, 'longitude': -80.1920},
        'capacity': 15, 'staffCount': 2,
        'specialties': ['beer', 'cocktails', 'frozen_drinks'],
    },
    {
        'id': 'sports_bar_001', 'name': 'Sports Bar', 'zone': 'entertainment',
        'position': {'latitude': 25.7610, 'longitude': -80.1925},
        'capacity': 12, 'staffCount': 2,
        'specialties': ['beer', 'wings', 'spirits'],
    },
]

CRUISE_SERVICE_POINTS = [
    {
        'id': 'deck5_main_bar', 'name': 'Deck 5 Main Bar', 'zone': 'main_dining',
        'position': {'latitude': 25.7612, 'longitude': -80.1923},
        'capacity': 25, 'staffCount': 4, 'deckLevel': 5,
        'specialties': ['cocktails', 'wine', 'beer', 'spirits'],
    },
    {
        'id': 'deck9_pool_bar', 'name': 'Deck 9 Pool Bar', 'zone': 'pool_deck',
        'position': {'latitude': 25.7615, 'longitude': -80.1920},
        'capacity': 20, 'staffCount': 3, 'deckLevel': 9,
        'specialties': ['frozen_drinks', 'beer', 'cocktails'],
    },
    {
        'id': 'deck12_sky_bar', 'name': 'Deck 12 Sky Bar', 'zone': 'sky_deck',
        'position': {'latitude': 25.7608, 'longitude': -80.1918},
        'capacity': 15, 'staffCount': 2, 'deckLevel': 12,
        'specialties': ['premium_cocktails', 'wine', 'champagne'],
    },
    {
        'id': 'deck7_sports_bar', 'name': 'Deck 7 Sports Bar', 'zone': 'entertainment',
        'position': {'latitude': 25.7610, 'longitude': -80.1925},
        'capacity': 18, 'staffCount': 3, 'deckLevel': 7,
        'specialties': ['beer', 'spirits', 'pub_food'],
    },
]


def create_default_service_points() -> List[ServicePoint]:
    """Fresh service points for a land venue."""
    return [ServicePoint.from_dict(d) for d in VENUE_SERVICE_POINTS]


def create_cruise_service_points() -> List[ServicePoint]:
    """Fresh service points for a cruise ship, one per deck bar."""
    return [ServicePoint.from_dict(d) for d in CRUISE_SERVICE_POINTS]
