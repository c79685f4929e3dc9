"""
Purpose: Central configuration for roundabout counting (single source of truth).
What it does:

Stores all tunable thresholds/caps:

MAX_SEGMENTS = 12 (route slices, one bounding box each)

BBOX_PADDING_DEG = 0.003 (~300m around each slice)

BATCH_SIZE = 12, BATCH_DELAY = 2s, RETRY_DELAY = 5s

REQUEST_TIMEOUT = 120s (absolute, per HTTP call)

PROXIMITY_THRESHOLD_M = 50

Rule: No logic here, just parameters so you can tune without rewriting code.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CountingPolicy:
    """
    Central configuration for the counting pipeline.

    Notes:
    - the Overpass public instance rate limits per IP, so batches are sent
      one after another with batch_delay_s in between.
    - query_timeout_s / query_maxsize_bytes go into the query header and are
      enforced server side; request_timeout_s is enforced client side.
    """

    # --- Region segmentation ---
    max_segments: int = 12
    bbox_padding_deg: float = 0.003  # ~300m

    # --- Batching / retries ---
    batch_size: int = 12
    batch_delay_s: float = 2.0
    # Longer delay for rate-limited single-box retries
    retry_delay_s: float = 5.0

    # --- Overpass request limits ---
    request_timeout_s: float = 120
    query_timeout_s: int = 90
    query_maxsize_bytes: int = 10485760

    # --- Proximity filter ---
    proximity_threshold_m: float = 50.0
    # Coarse pass looks at no more than this many sampled segments.
    coarse_max_samples: int = 500
    # Coarse pass skips a sample when the centroid is further than this on either axis.
    coarse_axis_window_deg: float = 0.05
    # Fine pass envelope around each segment (~100m)
    segment_envelope_padding_deg: float = 0.001

    def validate(self) -> None:
        """
        Basic sanity checks. Call once at startup if you want.
        """
        if self.max_segments < 1:
            raise ValueError("max_segments must be >= 1")

        if self.bbox_padding_deg < 0:
            raise ValueError("bbox_padding_deg must be >= 0")

        if self.batch_size < 1:
            raise ValueError("batch_size must be >= 1")

        if self.batch_delay_s < 0 or self.retry_delay_s < 0:
            raise ValueError("delays must be >= 0")

        if self.request_timeout_s <= 0 or self.query_timeout_s <= 0:
            raise ValueError("timeouts must be > 0")

        if self.query_maxsize_bytes <= 0:
            raise ValueError("query_maxsize_bytes must be > 0")

        if self.proximity_threshold_m <= 0:
            raise ValueError("proximity_threshold_m must be > 0")

        if self.coarse_max_samples < 1:
            raise ValueError("coarse_max_samples must be >= 1")

        if self.coarse_axis_window_deg <= 0 or self.segment_envelope_padding_deg < 0:
            raise ValueError("coarse_axis_window_deg must be > 0 and segment_envelope_padding_deg >= 0")


def default_policy() -> CountingPolicy:
    """
    Convenience factory for the default policy.
    """
    p = CountingPolicy()
    p.validate()
    return p


def gentle_policy() -> CountingPolicy:
    """
    Example: slower pacing for a shared public Overpass instance that keeps
    answering 429. Fewer, bigger boxes and longer pauses.
    """
    p = CountingPolicy(
        max_segments=8,
        batch_size=4,
        batch_delay_s=5.0,
        retry_delay_s=10.0,
    )
    p.validate()
    return p
