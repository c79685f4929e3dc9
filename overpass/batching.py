"""
Purpose: Drive the Overpass client over every route region.
What it does:

- sends the regions in batches of policy.batch_size, one after another
- waits policy.batch_delay_s between batches (public instance rate limit)
- when a batch fails, retries each of its boxes alone, each retry preceded
  by policy.retry_delay_s
- a box whose retry also fails is dropped and counted in boxes_failed

Rule: fetch_features never raises for upstream trouble. Missing data shows
up as fewer features and a non-zero boxes_failed, not as an exception.
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional, Sequence

from roundabouts.models import BoundingBox, MapFeature
from roundabouts.policy import CountingPolicy, default_policy
from .errors import OverpassError

# ---- Types you plug into from overpass.client ----
# Anything that runs one query for a list of boxes and returns features,
# e.g. OverpassClient.query_bboxes or a CachingOverpassClient.
BatchQuery = Callable[[List[BoundingBox]], List[MapFeature]]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FetchResult:
    """
    Everything the regions returned, duplicates included.
    """
    features: List[MapFeature] = field(default_factory=list)
    boxes_total: int = 0
    boxes_failed: int = 0


def fetch_features(
    bboxes: Sequence[BoundingBox],
    query: BatchQuery,
    *,
    policy: Optional[CountingPolicy] = None,
    sleep: Callable[[float], None] = time.sleep,
    log: Optional[logging.Logger] = None,
) -> FetchResult:
    """
    Query all boxes and accumulate the returned features.

    Parameters
    ----------
    bboxes:
        Route regions in route order (see roundabouts.segmenter).
    query:
        Batch query callable. OverpassError and the builtin TimeoutError
        count as a failed batch. OverpassClient maps every transport,
        status, charset and body problem onto one of those.
    policy:
        batch_size, batch_delay_s and retry_delay_s come from here.
    sleep:
        Injected so tests do not wait.
    log:
        Logger for batch/retry failures. Defaults to this module's logger.
    """
    policy = policy or default_policy()
    log = log or logger

    features: List[MapFeature] = []
    failed = 0
    batch_size = policy.batch_size

    for start in range(0, len(bboxes), batch_size):
        batch = list(bboxes[start:start + batch_size])
        batch_number = start // batch_size + 1

        try:
            features.extend(query(batch))
        except (OverpassError, TimeoutError) as exc:
            log.error(f"[Overpass] Batch {batch_number} failed: {exc}")
            # Retry once, one box at a time
            for single in batch:
                sleep(policy.retry_delay_s)
                try:
                    features.extend(query([single]))
                except (OverpassError, TimeoutError) as retry_exc:
                    failed += 1
                    log.error(f"[Overpass] Single bbox retry also failed: {retry_exc}")

        # Delay between batches to avoid rate limits
        if start + batch_size < len(bboxes):
            sleep(policy.batch_delay_s)

    return FetchResult(features=features, boxes_total=len(bboxes), boxes_failed=failed)
