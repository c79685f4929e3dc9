"""
Roundabouts domain package.

Public API:
- Domain models: BoundingBox, MapNode, MapWay, CountResult
- Policy: CountingPolicy, default_policy
- Pure pipeline stages: compute_segment_bboxes, deduplicate_features,
  group_junctions, is_near_route

The network-facing entry point lives in roundabouts.counter
(RoundaboutCounter, count_roundabouts) so this package can be imported by
overpass without a cycle.
"""
from .models import BoundingBox, MapNode, MapWay, CountResult, LonLat, LatLon
from .policy import CountingPolicy, default_policy
from .segmenter import compute_segment_bboxes, split_polyline
from .dedup import deduplicate_features, node_positions
from .grouping import group_junctions
from .proximity import group_centroid, is_near_route

__all__ = ["BoundingBox",
           "MapNode",
             "MapWay",
               "CountResult",
               "LonLat",
               "LatLon",
               "CountingPolicy",
               "default_policy",
               "compute_segment_bboxes",
               "split_polyline",
               "deduplicate_features",
               "node_positions",
               "group_junctions",
               "group_centroid",
               "is_near_route",
               ]
