"""
Purpose: Domain models for the Roundabouts capability.
What it does:
- Defines core data structures:
- BoundingBox (south/north/west/east degree bounds of one route slice)
- MapNode / MapWay (features returned by the spatial-data service)
- CountResult (roundabout count + degradation diagnostics)

Defines the coordinate aliases shared by every module:
- LonLat = (longitude, latitude), the order used by route geometries
- LatLon = (latitude, longitude), the order used internally for centroids

Rule: No HTTP calls, no counting logic. Models only.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple, Union

LonLat = Tuple[float, float]
LatLon = Tuple[float, float]

# ordered route geometry, longitude first
Polyline = Sequence[LonLat]

NODE = "node"
WAY = "way"

# junction tag values that mark a way as part of a roundabout
ROUNDABOUT_JUNCTION_VALUES = ("roundabout", "circular")


@dataclass(frozen=True)
class BoundingBox:
    """
    A rectangular lat/lon region used to scope one spatial query.
    """
    south: float
    north: float
    west: float
    east: float

    def to_overpass(self) -> str:
        """Overpass wants bbox filters in the order south,west,north,east"""
        return f"{self.south},{self.west},{self.north},{self.east}"

    def rounded(self, precision: int = 4) -> Tuple[float, float, float, float]:
        return (
            round(self.south, precision),
            round(self.north, precision),
            round(self.west, precision),
            round(self.east, precision),
        )


@dataclass(frozen=True)
class MapNode:
    """
    A point feature. lat/lon can be missing when the service returns a bare
    node reference; such a node still has an identity but no position.
    """
    id: int
    lat: Optional[float] = None
    lon: Optional[float] = None

    kind = NODE

    @property
    def key(self) -> Tuple[str, int]:
        return (NODE, self.id)

    @property
    def has_position(self) -> bool:
        return self.lat is not None and self.lon is not None


@dataclass(frozen=True)
class MapWay:
    """
    A path feature: ordered node ids plus its tag mapping.
    """
    id: int
    nodes: Tuple[int, ...] = ()
    tags: Dict[str, str] = field(default_factory=dict, hash=False, compare=False)

    kind = WAY

    @property
    def key(self) -> Tuple[str, int]:
        return (WAY, self.id)

    @property
    def is_roundabout(self) -> bool:
        return self.tags.get("junction") in ROUNDABOUT_JUNCTION_VALUES


MapFeature = Union[MapNode, MapWay]

# group id -> member ways
JunctionGroups = Dict[int, List[MapWay]]


@dataclass(frozen=True)
class CountResult:
    """
    Output of one counting run.

    count is the only number challenge scoring needs; the region fields let
    callers tell a clean 0 from a 0 caused by upstream failures.
    """
    count: int
    regions_total: int = 0
    regions_failed: int = 0
    groups_in_regions: int = 0

    @property
    def degraded(self) -> bool:
        return self.regions_failed > 0

    @property
    def diagnostic(self) -> Optional[str]:
        if not self.degraded:
            return None
        return f"{self.regions_failed} of {self.regions_total} regions failed"
