"""
Tracking replay tool.

Feeds a recorded JSON-lines stream of satellite readings and motion samples
through a TrackingSession and prints positions, transitions and a metrics
summary. Each line is one record:

    {"type": "reading", "latitude": 25.7612, "longitude": -80.1923,
     "accuracy": 4.0, "timestamp": 12.5}
    {"type": "motion", "acceleration": [0.1, 0.0, -9.81],
     "orientation": {"roll": 0, "pitch": 0, "yaw": 90}, "timestamp": 12.52}
    {"type": "order", "id": "order-1", "timestamp": 13.0}
"""

import json
import logging
import argparse
from typing import Iterator, Optional

import config
from spatial_core.config import TrackingConfig
from spatial_core.exceptions import NoFix, NoServicePointAvailable, SpatialCoreError
from spatial_core.io.node_store import JsonNodeStore
from spatial_core.io.venue_loader import load_venue
from spatial_core.metrics import get_metrics
from spatial_core.proto.readings import MotionSample, OrientationSample, RawReading
from spatial_core.proto.spatial_position import SpatialPosition
from spatial_core.proto.venue import VenueModel
from spatial_core.session import SessionCallbacks, TrackingSession

logging.basicConfig(
    level=getattr(logging, config.LOGGING_CONFIG["level"]),
    format=config.LOGGING_CONFIG["format"]
)
logger = logging.getLogger(__name__)


def read_records(path: str) -> Iterator[dict]:
    """Yield records from a JSON-lines file, skipping blank lines."""
    with open(path, 'r', encoding='utf-8') as f:
        for line_no, line in enumerate(f, 1):
            line = line.strip()
            if not line:
                continue
            try:
                yield json.loads(line)
            except json.JSONDecodeError as e:
                logger.warning(f"Line {line_no}: invalid JSON ({e})")


def motion_from_record(record: dict) -> MotionSample:
    orientation = record.get("orientation", {})
    rotation_rate = record.get("rotationRate")
    return MotionSample(
        acceleration=tuple(float(v) for v in record["acceleration"]),
        orientation=OrientationSample(
            roll=float(orientation.get("roll", 0.0)),
            pitch=float(orientation.get("pitch", 0.0)),
            yaw=float(orientation.get("yaw", 0.0)),
        ),
        timestamp=float(record["timestamp"]),
        rotation_rate=tuple(float(v) for v in rotation_rate) if rotation_rate else None,
    )


class ReplayRunner:
    """Drives one TrackingSession from recorded input."""

    def __init__(self, tracking_config: TrackingConfig, venue: Optional[VenueModel]):
        self.update_count = 0
        self.print_interval = config.REPLAY_CONFIG["print_interval"]
        callbacks = SessionCallbacks(
            on_position_update=self._on_position,
            on_floor_change=lambda new, old: print(f"[replay] floor {old} -> {new}"),
            on_zone_enter=lambda zone: print(f"[replay] entered {zone.name}"),
            on_zone_exit=lambda zone: print(f"[replay] left {zone.name}"),
            on_accuracy_improved=lambda new, old: print(f"[replay] accuracy {old:.1f}m -> {new:.1f}m"),
            on_ship_mode_detected=lambda result: print(f"[replay] ship mode: {result.reason}"),
            on_order_routed=lambda a: print(f"[replay] {a.order_id} -> {a.service_point_name} ({a.reason_detail})"),
            on_location_error=lambda message: logger.warning(message),
            on_indoor_mode_change=lambda indoor: print(f"[replay] indoor mode {'on' if indoor else 'off'}"),
        )
        self.session = TrackingSession(tracking_config, callbacks, venue=venue)

    def _on_position(self, position: SpatialPosition):
        self.update_count += 1
        if config.REPLAY_CONFIG["enable_console_print"] and self.update_count % self.print_interval == 0:
            geo = position.global_position
            print(f"[replay] #{self.update_count} ({geo.latitude:.6f}, {geo.longitude:.6f}) "
                  f"floor={position.floor} zone={position.zone_id} "
                  f"acc={position.accuracy_m:.1f}m conf={position.confidence:.2f}")

    def run(self, path: str, store: Optional[JsonNodeStore] = None):
        self.session.start()
        records = 0
        try:
            for record in read_records(path):
                records += 1
                if store is not None and records == 1:
                    self.session.load_nodes(store, float(record.get("timestamp", 0.0)))
                self._dispatch(record)
        finally:
            if store is not None:
                self.session.save_nodes(store)
            self.session.close()
        logger.info(f"Replayed {records} records, {self.update_count} position updates")

    def _dispatch(self, record: dict):
        kind = record.get("type", "reading")
        try:
            if kind == "reading":
                self.session.ingest_reading(RawReading.from_dict(record))
            elif kind == "motion":
                self.session.ingest_motion(motion_from_record(record))
            elif kind == "tick":
                self.session.tick(float(record["timestamp"]))
            elif kind == "order":
                self.session.route_order(record["id"])
            elif kind == "complete":
                self.session.complete_order(record["id"])
            else:
                logger.warning(f"Unknown record type: {kind}")
        except (NoFix, NoServicePointAvailable) as e:
            print(f"[replay] order not routed: {e}")
        except (KeyError, ValueError) as e:
            logger.warning(f"Malformed {kind} record: {e}")


def main():
    parser = argparse.ArgumentParser(description='Tracking session replay')
    parser.add_argument('input', type=str,
                        help='JSON-lines file of readings and motion samples')
    parser.add_argument('--venue', '-v', type=str, default=None,
                        help='Venue model JSON (default: built-in sample venue)')
    parser.add_argument('--nodes', '-n', type=str, default=config.REPLAY_CONFIG["node_store_path"],
                        help='Mesh node record file')
    parser.add_argument('--ship-mode', action='store_true',
                        help='Start in ship mode')
    parser.add_argument('--debug', '-d', action='store_true',
                        help='Enable debug logging')

    args = parser.parse_args()

    if args.debug:
        logging.getLogger().setLevel(logging.DEBUG)

    try:
        options = dict(config.SESSION_CONFIG)
        if args.ship_mode:
            options["shipModeEnabled"] = True
        tracking_config = TrackingConfig.from_dict(options)
        venue = load_venue(args.venue) if args.venue else VenueModel.from_dict(config.SAMPLE_VENUE)
    except SpatialCoreError as e:
        logger.error(f"Startup failed: {e}")
        raise SystemExit(1)

    runner = ReplayRunner(tracking_config, venue)
    store = JsonNodeStore(args.nodes) if args.nodes else None
    runner.run(args.input, store)

    print()
    print(get_metrics().format_summary())


if __name__ == "__main__":
    main()
