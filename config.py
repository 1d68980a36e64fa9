"""
Replay tool configuration.
"""

# Logging
LOGGING_CONFIG = {
    "level": "INFO",
    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
}

# Replay input and output
REPLAY_CONFIG = {
    "print_interval": 10,             # print every Nth position update
    "enable_console_print": True,
    "node_store_path": None,          # JSON file with mesh node records, optional
}

# Session overrides (host keys, see TrackingConfig.from_dict)
SESSION_CONFIG = {
    "maxAccuracyThreshold": 15,
    "minUpdateInterval": 500,
    "targetAccuracy": 1.0,
    "maxDeliveryDistance": 100,
}

# Sample venue used when no venue file is given
SAMPLE_VENUE = {
    "id": "miami_sample_venue",
    "name": "Miami Sample Venue",
    "bounds": {
        "north": 25.7630,
        "south": 25.7595,
        "east": -80.1905,
        "west": -80.1941,
    },
    "coordinateSystem": {
        "origin": {"latitude": 25.7612, "longitude": -80.1923, "altitude": 0.0},
        "rotation": 0.0,
        "scale": 1.0,
    },
    "floors": [
        {
            "level": 1,
            "name": "Main Floor",
            "elevation": 0.0,
            "zones": [
                {
                    "id": "main_bar",
                    "name": "Main Bar",
                    "type": "bar",
                    "polygon": [
                        {"x": -20, "y": 0}, {"x": 20, "y": 0},
                        {"x": 20, "y": 10}, {"x": -20, "y": 10},
                    ],
                },
                {
                    "id": "seating_area",
                    "name": "Seating Area",
                    "type": "seating",
                    "polygon": [
                        {"x": -30, "y": -50}, {"x": 30, "y": -50},
                        {"x": 30, "y": -10}, {"x": -30, "y": -10},
                    ],
                },
            ],
            "obstacles": [
                {
                    "id": "central_pillar",
                    "type": "pillar",
                    "polygon": [
                        {"x": -1, "y": -1}, {"x": 1, "y": -1},
                        {"x": 1, "y": 1}, {"x": -1, "y": 1},
                    ],
                    "height": 4.0,
                },
            ],
        },
        {
            "level": 2,
            "name": "Pool Deck",
            "elevation": 5.0,
            "zones": [
                {
                    "id": "pool_bar",
                    "name": "Pool Bar",
                    "type": "bar",
                    "polygon": [
                        {"x": 40, "y": 40}, {"x": 60, "y": 40},
                        {"x": 60, "y": 55}, {"x": 40, "y": 55},
                    ],
                },
            ],
        },
    ],
    "referencePoints": [
        {
            "id": "origin_anchor",
            "geoLocation": {"latitude": 25.7612, "longitude": -80.1923, "altitude": 0.0},
            "localCoordinate": {"x": 0, "y": 0, "z": 0},
            "type": "gps_anchor",
        },
    ],
}
