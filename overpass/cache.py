from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from roundabouts.models import BoundingBox, MapFeature

from .batching import BatchQuery

BatchKey = Tuple[Tuple[float, float, float, float], ...]


class CachingOverpassClient:
    """
    Wraps a batch query callable (e.g. OverpassClient.query_bboxes) and
    remembers successful answers, keyed by the boxes rounded to `precision`
    decimals (~11m at 4). The same route asked twice costs one set of calls.

    Failures are not cached; the exception goes straight back to the
    batch orchestrator so its retry logic still runs.
    """
    def __init__(self, query: BatchQuery, precision: int = 4, max_entries: int = 256):
        self.query = query
        self.precision = precision
        self.max_entries = max_entries
        self._cache: Dict[BatchKey, List[MapFeature]] = {}

    def key_for(self, bboxes: Sequence[BoundingBox]) -> BatchKey:
        return tuple(b.rounded(self.precision) for b in bboxes)

    def __call__(self, bboxes: List[BoundingBox]) -> List[MapFeature]:
        key = self.key_for(bboxes)
        if key in self._cache:
            return list(self._cache[key])

        features = self.query(bboxes)

        # Oldest entry goes first once full (dicts keep insertion order)
        if len(self._cache) >= self.max_entries:
            self._cache.pop(next(iter(self._cache)))
        self._cache[key] = list(features)
        return list(features)

    def clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)
