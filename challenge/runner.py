"""
Purpose: One challenge run, city to city.
What it does:

- geocodes the start and end city (pausing between lookups, Nominatim
  allows 1 request per second)
- refuses two names resolving to the same place
- asks OSRM for the driving route
- counts roundabouts along it and scores the result

Rule: No HTTP serving and no leaderboard storage here; callers own those.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from roundabouts.counter import RoundaboutCounter
from routing.geocoder import NominatimGeocoder
from routing.osrm_client import OSRMClient

from .scoring import distance_km, roundabout_ratio

# Nominatim rate limit, with a little margin
GEOCODE_PAUSE_S = 1.1

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ChallengeResult:
    start: str
    end: str
    roundabouts: int
    distance_km: int
    ratio: float
    # regions the counter could not fetch; > 0 means the count may be low
    regions_failed: int = 0


def run_challenge(
    start_city: str,
    end_city: str,
    *,
    geocoder: Optional[NominatimGeocoder] = None,
    osrm: Optional[OSRMClient] = None,
    counter: Optional[RoundaboutCounter] = None,
    sleep: Callable[[float], None] = time.sleep,
) -> ChallengeResult:
    geocoder = geocoder or NominatimGeocoder()
    osrm = osrm or OSRMClient(profile="driving")
    counter = counter or RoundaboutCounter(sleep=sleep)

    start = geocoder.geocode(start_city)
    sleep(GEOCODE_PAUSE_S)
    end = geocoder.geocode(end_city)

    if start.display_name == end.display_name:
        raise ValueError("Start and end cities must be different.")

    route = osrm.compute_route([start.lat_lon, end.lat_lon])
    counted = counter.count_detailed(route.geometry)

    km = distance_km(route.distance_m)
    logger.info(f"[Challenge] {start.display_name} -> {end.display_name}: {counted.count} roundabouts, {km} km")

    return ChallengeResult(
        start=start.display_name,
        end=end.display_name,
        roundabouts=counted.count,
        distance_km=km,
        ratio=roundabout_ratio(counted.count, km),
        regions_failed=counted.regions_failed,
    )
