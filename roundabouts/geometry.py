"""
Purpose: Geometry helpers for the proximity filter.
Pure math only: great-circle distance and point-to-segment distance.
"""

import math

EARTH_RADIUS_M = 6371000

# meters per degree of longitude at the equator, used for the planar fine pass
METERS_PER_DEGREE = 111320


def haversine_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in meters between two (lat, lon) points."""
    d_lat = math.radians(lat2 - lat1)
    d_lon = math.radians(lon2 - lon1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1)) * math.cos(math.radians(lat2)) * math.sin(d_lon / 2) ** 2
    )
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def distance_to_segment(px: float, py: float, ax: float, ay: float, bx: float, by: float) -> float:
    """
    Minimum planar distance from point P to segment AB, in the input units.

    The projection parameter is clamped to [0, 1] so the closest point is
    always on the segment. A zero-length segment degrades to point distance.
    """
    dx = bx - ax
    dy = by - ay
    length_sq = dx * dx + dy * dy
    if length_sq == 0:
        return math.hypot(px - ax, py - ay)

    t = ((px - ax) * dx + (py - ay) * dy) / length_sq
    t = max(0.0, min(1.0, t))
    return math.hypot(px - (ax + t * dx), py - (ay + t * dy))


def degrees_to_meters(distance_deg: float, latitude: float) -> float:
    """Latitude-corrected conversion of a small planar degree distance to meters."""
    return distance_deg * METERS_PER_DEGREE * math.cos(math.radians(latitude))
