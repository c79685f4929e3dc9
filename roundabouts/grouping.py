"""
Purpose: Merge roundabout ways into logical junctions.
What it does:

A big roundabout is often drawn in OSM as several connected ways. Ways
that share a node (directly, or through a chain of other ways) are the
same physical junction, so they are unioned into one JunctionGroup.

Output:
- JunctionGroups: Dict[group_id, List[MapWay]], group ids 0..n-1 in order
  of each group's first way

Rule: Grouping is connectivity only. No geometry, no distances.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional

from .models import JunctionGroups, MapFeature, MapWay

logger = logging.getLogger(__name__)


def roundabout_ways(features: Iterable[MapFeature]) -> List[MapWay]:
    return [f for f in features if isinstance(f, MapWay) and f.is_roundabout]


def group_junctions(
    features: Iterable[MapFeature],
    *,
    log: Optional[logging.Logger] = None,
) -> JunctionGroups:
    """
    Partition roundabout ways into groups of transitively node-sharing ways.

    Union-find over way indices; node ids point at the first way seen
    with that node. The resulting partition does not depend on input order.
    Ways without nodes cannot be placed and are skipped.
    """
    log = log or logger
    ways: List[MapWay] = []
    for way in roundabout_ways(features):
        if not way.nodes:
            log.warning(f"Skipping roundabout way {way.id}: no node ids")
            continue
        ways.append(way)

    parent = list(range(len(ways)))

    def find(x: int) -> int:
        while parent[x] != x:
            parent[x] = parent[parent[x]]
            x = parent[x]
        return x

    def union(a: int, b: int) -> None:
        ra, rb = find(a), find(b)
        if ra != rb:
            # keep the smaller index as root so group ids follow input order
            if rb < ra:
                ra, rb = rb, ra
            parent[rb] = ra

    node_owner: Dict[int, int] = {}
    for index, way in enumerate(ways):
        for node_id in way.nodes:
            owner = node_owner.setdefault(node_id, index)
            if owner != index:
                union(owner, index)

    # Relabel roots as 0..n-1
    group_ids: Dict[int, int] = {}
    groups: JunctionGroups = {}
    for index, way in enumerate(ways):
        root = find(index)
        gid = group_ids.setdefault(root, len(group_ids))
        groups.setdefault(gid, []).append(way)

    return groups
