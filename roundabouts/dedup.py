"""
Purpose: Collapse features returned by overlapping regions.
Adjacent boxes overlap, so the same way (and its nodes) usually comes back
more than once. Identity is (kind, id); the first occurrence wins.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Tuple

from .models import LatLon, MapFeature, MapNode


def deduplicate_features(features: Iterable[MapFeature]) -> List[MapFeature]:
    unique: Dict[Tuple[str, int], MapFeature] = {}
    for feature in features:
        if feature.key not in unique:
            unique[feature.key] = feature
    return list(unique.values())


def node_positions(features: Iterable[MapFeature]) -> Dict[int, LatLon]:
    """node id -> (lat, lon) for every node feature that carries a position"""
    positions: Dict[int, LatLon] = {}
    for feature in features:
        if isinstance(feature, MapNode) and feature.has_position:
            positions[feature.id] = (feature.lat, feature.lon)
    return positions
