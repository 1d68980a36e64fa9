"""
Node Registry and Proximity Index.

Keeps the known mesh nodes of a venue, expires nodes that stopped reporting,
answers nearest-node queries by linear scan, and derives a coarse mesh
position estimate from the signal-weighted centroid of nearby nodes.
"""

import logging
import math
import threading
from typing import Callable, Dict, Iterable, List, Optional

from spatial_core.proto.mesh_node import MeshNode, NodeStatus
from spatial_core.proto.spatial_position import LocalPoint, PositionSource, SourceKind
from spatial_core.metrics import MetricsCollector, get_metrics

logger = logging.getLogger(__name__)


def distance_3d(a: LocalPoint, b: LocalPoint) -> float:
    return math.sqrt((a.x - b.x) ** 2 + (a.y - b.y) ** 2 + (a.z - b.z) ** 2)


def signal_reliability(signal_strength_dbm: float) -> float:
    """Link reliability in [0, 1] from RSSI: 1 - |dBm| / 100."""
    return max(0.0, min(1.0, 1.0 - abs(signal_strength_dbm) / 100.0))


class NodeRegistry:
    """
    Registry of mesh nodes in insertion order.

    Usage:
        registry = NodeRegistry(max_node_age_s=30.0)
        registry.upsert(node)
        lost = registry.expire(now)
        bar = registry.nearest(position, 50.0, lambda n: n.capabilities.is_bar_station)

    Notes:
        - Updating an existing node keeps its original iteration position
        - Fixed infrastructure (service stations) never expires automatically
        - nearest() keeps the first node found at the minimum distance
    """

    def __init__(self, max_node_age_s: float = 30.0, min_mesh_nodes: int = 3,
                 metrics: Optional[MetricsCollector] = None):
        self.max_node_age_s = max_node_age_s
        self.min_mesh_nodes = min_mesh_nodes
        self.metrics = metrics or get_metrics()
        self._lock = threading.Lock()
        self._nodes: Dict[str, MeshNode] = {}

    def __len__(self):
        with self._lock:
            return len(self._nodes)

    def __contains__(self, node_id: str) -> bool:
        with self._lock:
            return node_id in self._nodes

    def upsert(self, node: MeshNode) -> bool:
        """
        Insert or replace a node.

        Returns:
            True if the node was new
        """
        with self._lock:
            is_new = node.id not in self._nodes
            self._nodes[node.id] = node
        if is_new:
            logger.info("Node discovered: %s (%s)", node.id, node.type.value)
        return is_new

    def remove(self, node_id: str) -> Optional[MeshNode]:
        with self._lock:
            return self._nodes.pop(node_id, None)

    def get(self, node_id: str) -> Optional[MeshNode]:
        with self._lock:
            return self._nodes.get(node_id)

    def nodes(self) -> List[MeshNode]:
        """Snapshot of all nodes in registry order."""
        with self._lock:
            return list(self._nodes.values())

    def service_nodes(self) -> List[MeshNode]:
        return [n for n in self.nodes() if n.capabilities.is_bar_station]

    def expire(self, now: float) -> List[str]:
        """
        Remove nodes not seen for longer than max_node_age_s.

        Args:
            now: Current time in seconds

        Returns:
            Ids of removed nodes, in registry order
        """
        with self._lock:
            removed = [
                node_id for node_id, node in self._nodes.items()
                if now - node.last_seen > self.max_node_age_s and not node.is_fixed_infrastructure
            ]
            for node_id in removed:
                del self._nodes[node_id]

        if removed:
            self.metrics.increment('nodes_expired', len(removed))
            logger.info("Expired %d stale node(s): %s", len(removed), ", ".join(removed))
        return removed

    def nearest(
        self,
        position: LocalPoint,
        max_distance_m: float,
        predicate: Optional[Callable[[MeshNode], bool]] = None,
    ) -> Optional[MeshNode]:
        """
        Closest node strictly within max_distance_m that satisfies predicate.

        Linear scan in registry order using 3-D Euclidean distance.
        """
        best: Optional[MeshNode] = None
        best_distance = max_distance_m
        for node in self.nodes():
            if predicate is not None and not predicate(node):
                continue
            distance = distance_3d(position, node.position)
            if distance < best_distance:
                best, best_distance = node, distance
        return best

    def nearest_service_node(self, position: LocalPoint, max_distance_m: float = 50.0) -> Optional[MeshNode]:
        """Closest online service station."""
        return self.nearest(
            position,
            max_distance_m,
            lambda n: n.capabilities.is_bar_station and n.status == NodeStatus.ONLINE,
        )

    def mesh_estimate(self, now: float, weight: float = 0.7) -> Optional[PositionSource]:
        """
        Signal-weighted centroid of online triangulation-capable nodes.

        Only nodes seen within max_node_age_s take part. Accuracy is
        10 m x (1 - mean reliability), at least 1 m.

        Returns:
            Mesh PositionSource in the local frame, or None with fewer than
            min_mesh_nodes usable nodes
        """
        usable = [
            n for n in self.nodes()
            if n.status == NodeStatus.ONLINE
            and n.capabilities.can_triangulate
            and now - n.last_seen <= self.max_node_age_s
        ]
        weights = [signal_reliability(n.signal_strength) for n in usable]
        total = math.fsum(weights)
        if len(usable) < self.min_mesh_nodes or total <= 0:
            return None

        x = math.fsum(w * n.position.x for w, n in zip(weights, usable)) / total
        y = math.fsum(w * n.position.y for w, n in zip(weights, usable)) / total
        z = math.fsum(w * n.position.z for w, n in zip(weights, usable)) / total
        accuracy = max(1.0, 10.0 * (1.0 - total / len(usable)))
        return PositionSource(
            kind=SourceKind.MESH,
            weight=weight,
            accuracy=accuracy,
            timestamp=now,
            local_position=LocalPoint(x=x, y=y, z=z, timestamp=now),
        )

    def to_records(self) -> List[dict]:
        """Node records in registry order, for persistence."""
        return [n.to_record() for n in self.nodes()]

    def load_records(self, records: Iterable[dict], now: float) -> int:
        """
        Restore nodes from persisted records.

        Records older than max_node_age_s are discarded, fixed infrastructure
        included.

        Returns:
            Number of nodes loaded
        """
        loaded = 0
        for record in records:
            node = MeshNode.from_record(record)
            if now - node.last_seen > self.max_node_age_s:
                logger.debug("Discarding stale node record %s", node.id)
                continue
            self.upsert(node)
            loaded += 1
        logger.info("Loaded %d node record(s)", loaded)
        return loaded

    def network_health(self) -> Dict[str, float]:
        """
        Summary of the mesh.

        Returns:
            Dict with total_nodes, online_nodes, service_nodes,
            average_signal_strength (dBm, 0 when empty), network_coverage
        """
        nodes = self.nodes()
        online = [n for n in nodes if n.status == NodeStatus.ONLINE]
        avg_signal = math.fsum(n.signal_strength for n in nodes) / len(nodes) if nodes else 0.0
        return {
            'total_nodes': len(nodes),
            'online_nodes': len(online),
            'service_nodes': sum(1 for n in nodes if n.capabilities.is_bar_station),
            'average_signal_strength': avg_signal,
            'network_coverage': len(online) / max(1, len(nodes)),
        }

    def clear(self):
        with self._lock:
            self._nodes.clear()
