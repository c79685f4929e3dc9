"""
Purpose: Turn a roundabout count into the challenge score.
Score = roundabouts per 100 km of route, one decimal.
"""

import math


def _round_half_up(value: float, decimals: int = 0) -> float:
    factor = 10 ** decimals
    return math.floor(value * factor + 0.5) / factor


def distance_km(distance_m: float) -> int:
    """Route length in whole kilometers."""
    return int(_round_half_up(distance_m / 1000))


def roundabout_ratio(roundabouts: int, km: int) -> float:
    """Roundabouts per 100 km; 0 for a route shorter than half a kilometer."""
    if km <= 0:
        return 0.0
    return _round_half_up(roundabouts / km * 100, 1)
