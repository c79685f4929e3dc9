"""
Purpose: Decide whether a junction actually lies on the route.
What it does:

A bounding box around a route slice also contains roundabouts on nearby
streets the route never uses. Each JunctionGroup is reduced to a centroid
and kept only if that centroid is within the threshold of the polyline.

Two passes:
- coarse: sampled segment midpoints + haversine; can only accept
- fine: every segment, envelope rejection then planar point-to-segment
  distance converted to meters; exhaustive

Distances must be strictly below the threshold to count.
"""

from __future__ import annotations

import math
from typing import Dict, Iterable, Optional

from .geometry import degrees_to_meters, distance_to_segment, haversine_m
from .models import LatLon, MapWay, Polyline
from .policy import CountingPolicy, default_policy


def group_centroid(ways: Iterable[MapWay], positions: Dict[int, LatLon]) -> Optional[LatLon]:
    """
    Mean (lat, lon) over every node reference of the group's ways that has a
    known position. None when no node resolves; such groups are dropped.
    """
    sum_lat = 0.0
    sum_lon = 0.0
    count = 0
    for way in ways:
        for node_id in way.nodes:
            pos = positions.get(node_id)
            if pos is None:
                continue
            sum_lat += pos[0]
            sum_lon += pos[1]
            count += 1

    if count == 0:
        return None
    return (sum_lat / count, sum_lon / count)


def _coarse_pass(
    centroid: LatLon,
    route: Polyline,
    max_dist_m: float,
    policy: CountingPolicy,
) -> bool:
    c_lat, c_lon = centroid
    step = max(1, math.floor(len(route) / policy.coarse_max_samples))
    window = policy.coarse_axis_window_deg
    last = len(route) - 1

    for i in range(0, last, step):
        j = min(i + step, last)
        lon1, lat1 = route[i]
        lon2, lat2 = route[j]
        mid_lat = (lat1 + lat2) / 2
        mid_lon = (lon1 + lon2) / 2

        if abs(c_lat - mid_lat) > window or abs(c_lon - mid_lon) > window:
            continue

        if haversine_m(c_lat, c_lon, mid_lat, mid_lon) < max_dist_m:
            return True
    return False


def _fine_pass(
    centroid: LatLon,
    route: Polyline,
    max_dist_m: float,
    policy: CountingPolicy,
) -> bool:
    c_lat, c_lon = centroid
    pad = policy.segment_envelope_padding_deg

    for i in range(len(route) - 1):
        lon1, lat1 = route[i]
        lon2, lat2 = route[i + 1]

        if c_lat < min(lat1, lat2) - pad or c_lat > max(lat1, lat2) + pad:
            continue
        if c_lon < min(lon1, lon2) - pad or c_lon > max(lon1, lon2) + pad:
            continue

        flat_dist = distance_to_segment(c_lon, c_lat, lon1, lat1, lon2, lat2)
        if degrees_to_meters(flat_dist, c_lat) < max_dist_m:
            return True
    return False


def is_near_route(
    centroid: LatLon,
    route: Polyline,
    max_dist_m: Optional[float] = None,
    policy: Optional[CountingPolicy] = None,
) -> bool:
    """
    True when centroid (lat, lon) is strictly closer than max_dist_m to the
    (lon, lat) route polyline.
    """
    policy = policy or default_policy()
    if max_dist_m is None:
        max_dist_m = policy.proximity_threshold_m

    if len(route) < 2:
        return False

    if _coarse_pass(centroid, route, max_dist_m, policy):
        return True
    return _fine_pass(centroid, route, max_dist_m, policy)


def count_groups_on_route(
    groups: Dict[int, list],
    positions: Dict[int, LatLon],
    route: Polyline,
    policy: Optional[CountingPolicy] = None,
) -> int:
    policy = policy or default_policy()
    near = 0
    for ways in groups.values():
        centroid = group_centroid(ways, positions)
        if centroid is None:
            continue
        if is_near_route(centroid, route, policy.proximity_threshold_m, policy):
            near += 1
    return near
