"""
Challenge package: city-to-city roundabout challenge built on top of
roundabouts.counter and the routing collaborators.

Public API:
- run_challenge
- ChallengeResult
- distance_km, roundabout_ratio
"""

from .runner import run_challenge, ChallengeResult
from .scoring import distance_km, roundabout_ratio

__all__ = [
    "run_challenge",
    "ChallengeResult",
    "distance_km",
    "roundabout_ratio",
]
