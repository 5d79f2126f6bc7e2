"""Distance-threshold clustering of 3D points.

The grouping is a single forward pass over the point indices rather than a
union-find. A cluster only absorbs a point when, at the moment that point is
examined, some current member lies within the threshold. The outcome
therefore depends on input order and is not guaranteed to match the full
transitive closure of the "within threshold" relation.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Sequence

from .config import ClusterConfig
from .telemetry import TelemetryPublisher
from .types import Cluster

LOGGER = logging.getLogger(__name__)


def squared_distance(a: Sequence[float], b: Sequence[float]) -> float:
    dx = b[0] - a[0]
    dy = b[1] - a[1]
    dz = b[2] - a[2]
    return dx * dx + dy * dy + dz * dz


def cluster_points(points: Sequence[Sequence[float]], max_distance: float) -> List[Cluster]:
    """Group points whose chained pairwise distances stay within ``max_distance``.

    An index that already belongs to one cluster can be absorbed by a later
    one, which then becomes its mapping. The earlier cluster is still
    reported while any other index maps to it, so the same point may appear
    in more than one returned cluster. The threshold is squared before use;
    a negative ``max_distance`` behaves like its absolute value.
    """

    for point in points:
        if len(point) != 3:
            raise ValueError(f"expected a 3D point, got {point!r}")

    threshold = max_distance * max_distance
    # each member list is shared by every index mapped to it
    mapping: Dict[int, List[int]] = {}
    count = len(points)

    for x in range(count):
        members = mapping.get(x)
        if members is None:
            members = mapping[x] = [x]
        present = set(members)

        for y in range(count):
            if x == y or y in present:
                continue
            candidate = points[y]
            if not any(squared_distance(points[i], candidate) <= threshold for i in members):
                continue
            members.append(y)
            present.add(y)
            mapping[y] = members

    unique: Dict[int, List[int]] = {}
    for members in mapping.values():
        unique.setdefault(id(members), members)
    return [Cluster(members, points) for members in unique.values()]


class ProximityClusterer:
    """Cluster points with a configured distance threshold."""

    def __init__(
        self,
        config: Optional[ClusterConfig] = None,
        *,
        telemetry: Optional[TelemetryPublisher] = None,
    ) -> None:
        self.config = config or ClusterConfig()
        self._telemetry = telemetry

    def cluster(
        self,
        points: Sequence[Sequence[float]],
        max_distance: Optional[float] = None,
    ) -> List[Cluster]:
        if max_distance is None:
            max_distance = self.config.max_distance
        clusters = cluster_points(points, max_distance)
        LOGGER.debug("Clustered %d points into %d clusters", len(points), len(clusters))
        if self._telemetry is not None:
            self._telemetry.publish("cluster.finished", points=len(points), clusters=len(clusters))
        return clusters

    def attach_telemetry(self, telemetry: Optional[TelemetryPublisher]) -> None:
        self._telemetry = telemetry


__all__ = ["ProximityClusterer", "cluster_points", "squared_distance"]
