"""
Purpose: The counting "orchestrator" (single entry point).
What it does:

Coordinates the pipeline end-to-end:

- splits the route into padded regions (segmenter.py)

- fetches roundabout ways + nodes for every region (overpass.batching)

- removes features returned by more than one region (dedup.py)

- merges connected ways into logical junctions (grouping.py)

- keeps the junctions whose centroid lies on the route (proximity.py)

Typical public call:

- RoundaboutCounter(query).count(polyline) -> int

Rule: count() always returns an integer >= 0. Upstream failures lower the
count (see CountResult.diagnostic); only a polyline with fewer than two
points is rejected, before any network access.
"""

from __future__ import annotations

import logging
import time
from typing import Callable, Optional

from overpass.batching import BatchQuery, fetch_features
from overpass.cache import CachingOverpassClient
from overpass.client import OverpassClient

from .dedup import deduplicate_features, node_positions
from .grouping import group_junctions
from .models import CountResult, Polyline
from .policy import CountingPolicy, default_policy
from .proximity import count_groups_on_route
from .segmenter import compute_segment_bboxes, validate_polyline

logger = logging.getLogger(__name__)


class RoundaboutCounter:
    """
    Counts the distinct roundabouts a driving route passes through.
    """
    def __init__(
        self,
        query: Optional[BatchQuery] = None,
        policy: Optional[CountingPolicy] = None,
        *,
        sleep: Callable[[float], None] = time.sleep,
        log: Optional[logging.Logger] = None,
    ):
        self.policy = policy or default_policy()
        self.policy.validate()
        # Default client remembers answers, so re-counting a route costs no extra queries
        self.query = query or CachingOverpassClient(OverpassClient(policy=self.policy).query_bboxes)
        self.sleep = sleep
        self.log = log or logger

    def count(self, polyline: Polyline) -> int:
        return self.count_detailed(polyline).count

    def count_detailed(self, polyline: Polyline) -> CountResult:
        validate_polyline(polyline)
        route = [tuple(p[:2]) for p in polyline]  # (lon, lat); drops GeoJSON altitude
        self.log.info(f"[Route] {len(route)} coordinate points")

        # 1) Regions
        bboxes = compute_segment_bboxes(
            route,
            max_segments=self.policy.max_segments,
            padding_deg=self.policy.bbox_padding_deg,
        )

        # 2) Fetch, degrading on failures
        fetched = fetch_features(
            bboxes,
            self.query,
            policy=self.policy,
            sleep=self.sleep,
            log=self.log,
        )

        # 3) Same way can appear in overlapping bboxes
        features = deduplicate_features(fetched.features)
        positions = node_positions(features)

        # 4) Merge multi-way roundabouts
        groups = group_junctions(features, log=self.log)
        self.log.info(f"[Overpass] {len(groups)} roundabout groups in bboxes (before proximity filter)")

        # 5) Only roundabouts whose centroid is on the route
        near = count_groups_on_route(groups, positions, route, self.policy)
        self.log.info(f"[Result] {near} roundabouts actually on route (filtered from {len(groups)})")

        result = CountResult(
            count=near,
            regions_total=fetched.boxes_total,
            regions_failed=fetched.boxes_failed,
            groups_in_regions=len(groups),
        )
        if result.degraded:
            self.log.warning(f"[Result] Degraded count: {result.diagnostic}")
        return result


def count_roundabouts(
    polyline: Polyline,
    *,
    query: Optional[BatchQuery] = None,
    policy: Optional[CountingPolicy] = None,
) -> int:
    """
    Convenience wrapper: polyline in, integer out.
    """
    return RoundaboutCounter(query, policy).count(polyline)
