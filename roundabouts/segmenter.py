"""
Purpose: Split a route into queryable regions.
What it does:

- cuts the polyline into at most max_segments consecutive chunks
- each chunk starts on the last point of the previous one, so adjacent
  boxes always touch and no junction falls between two regions
- pads each chunk's coordinate extrema into a BoundingBox

Rule: Segmentation does not talk to Overpass; it only forms regions.
"""

from __future__ import annotations

import math
from typing import List, Sequence

from .models import BoundingBox, LonLat, Polyline


def validate_polyline(coords: Polyline) -> None:
    if coords is None or len(coords) < 2:
        raise ValueError("A route polyline needs at least two coordinates.")


def split_polyline(coords: Polyline, max_segments: int = 12) -> List[List[LonLat]]:
    """
    Split route coordinates into overlapping chunks.

    Chunk size is ceil(len / max_segments); chunk k+1 starts with the last
    point of chunk k. No chunk is emitted for the final point alone since it
    is already the tail of the previous chunk.
    """
    validate_polyline(coords)
    if max_segments < 1:
        raise ValueError("max_segments must be >= 1")

    points = [tuple(p[:2]) for p in coords]
    segment_size = max(1, math.ceil(len(points) / max_segments))

    chunks: List[List[LonLat]] = []
    for start in range(0, len(points) - 1, segment_size):
        chunks.append(points[start:start + segment_size + 1])  # overlap 1 point
    return chunks


def bbox_for_points(points: Sequence[LonLat], padding_deg: float) -> BoundingBox:
    lons = [lon for lon, _ in points]
    lats = [lat for _, lat in points]
    return BoundingBox(
        south=min(lats) - padding_deg,
        north=max(lats) + padding_deg,
        west=min(lons) - padding_deg,
        east=max(lons) + padding_deg,
    )


def compute_segment_bboxes(
    coords: Polyline,
    max_segments: int = 12,
    padding_deg: float = 0.003,
) -> List[BoundingBox]:
    """
    One padded bounding box per route chunk, in route order.
    """
    return [bbox_for_points(chunk, padding_deg) for chunk in split_polyline(coords, max_segments)]
