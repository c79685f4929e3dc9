#Purpose: The Overpass "adapter/client".
#Sole responsibility: talk to the Overpass API via HTTP and return normalized features.
#Encapsulates Overpass-specific details:
#query language (bbox order south,west,north,east, union + recurse down)
#form-encoded POST with a single "data" field
#absolute timeout and error mapping
#parsing the JSON elements into MapNode / MapWay
#It does not retry. Retry policy lives in overpass.batching.


from dotenv import load_dotenv
import json
import logging
import os
import time
from typing import Any, Callable, List, Optional, Sequence
import requests

from roundabouts.models import BoundingBox, MapFeature, MapNode, MapWay, NODE, WAY
from roundabouts.policy import CountingPolicy, default_policy
from .errors import ParseError, QueryTimeoutError, ServiceError

# Example in .env:
# OVERPASS_URL=https://overpass-api.de/api/interpreter
load_dotenv()
OVERPASS_URL = os.getenv("OVERPASS_URL", "https://overpass-api.de/api/interpreter")
USER_AGENT = os.getenv("HTTP_USER_AGENT", "GiratoireChallenge/1.0")

# How much of an error body ends up in logs / ServiceError
ERROR_BODY_LIMIT = 200

logger = logging.getLogger(__name__)


def build_roundabout_query(
    bboxes: Sequence[BoundingBox],
    *,
    timeout_s: int = 90,
    maxsize_bytes: int = 10485760,
) -> str:
    """
    One Overpass QL query for the union of all boxes:
    every junction=roundabout|circular way, its body, then its nodes.
    """
    filters = "\n".join(
        f'  way["junction"="roundabout"]({b.to_overpass()});\n'
        f'  way["junction"="circular"]({b.to_overpass()});'
        for b in bboxes
    )
    return (
        f"[out:json][timeout:{timeout_s}][maxsize:{maxsize_bytes}];\n"
        f"(\n{filters}\n);\n"
        "out body;\n>;\nout skel qt;"
    )


def parse_elements(payload: Any) -> List[MapFeature]:
    """
    Convert an Overpass JSON document into MapNode / MapWay values.

    Elements of other types (relations) are ignored. Anything that is not
    shaped like an Overpass response raises ParseError.
    """
    if not isinstance(payload, dict) or not isinstance(payload.get("elements"), list):
        raise ParseError("Overpass response has no 'elements' list")

    features: List[MapFeature] = []
    for element in payload["elements"]:
        if not isinstance(element, dict):
            raise ParseError(f"Unexpected element: {element!r}")

        element_id = element.get("id")
        if not isinstance(element_id, int) or isinstance(element_id, bool):
            raise ParseError(f"Element without integer id: {element!r}")

        kind = element.get("type")
        try:
            if kind == NODE:
                lat = element.get("lat")
                lon = element.get("lon")
                features.append(
                    MapNode(
                        id=element_id,
                        lat=float(lat) if lat is not None else None,
                        lon=float(lon) if lon is not None else None,
                    )
                )
            elif kind == WAY:
                features.append(
                    MapWay(
                        id=element_id,
                        nodes=tuple(int(n) for n in element.get("nodes") or ()),
                        tags=dict(element.get("tags") or {}),
                    )
                )
        except (TypeError, ValueError) as exc:
            raise ParseError(f"Malformed {kind} {element_id}: {exc}") from exc

    return features


class OverpassClient:
    """
    Overpass Adapter / Client

    Sole responsibility:
    - Build the bbox union query
    - POST it with an absolute deadline
    - Return normalized MapFeature values
    """
    def __init__(self, url: Optional[str] = None, policy: Optional[CountingPolicy] = None,
                 user_agent: Optional[str] = None, clock: Callable[[], float] = time.monotonic):
        self.url = url or OVERPASS_URL
        self.policy = policy or default_policy()
        self.timeout = self.policy.request_timeout_s  # absolute, from request start to last byte
        self.user_agent = user_agent or USER_AGENT
        self.clock = clock

        if not self.url:
            raise ValueError("Overpass URL not set. Please set OVERPASS_URL in the .env file.")

    def build_query(self, bboxes: Sequence[BoundingBox]) -> str:
        return build_roundabout_query(
            bboxes,
            timeout_s=self.policy.query_timeout_s,
            maxsize_bytes=self.policy.query_maxsize_bytes,
        )

    def query_bboxes(self, bboxes: Sequence[BoundingBox]) -> List[MapFeature]:
        """
        Run one combined query for a batch of boxes.

        Raises:
            ServiceError: non-2xx status or transport failure
            ParseError: body is not a valid Overpass JSON document
            QueryTimeoutError: no complete response within self.timeout seconds
        """
        if not bboxes:
            raise ValueError("At least one bounding box is required.")

        query = self.build_query(bboxes)
        logger.info(f"[Overpass] Querying {len(bboxes)} bbox segments (query length: {len(query)})")

        deadline = self.clock() + self.timeout
        try:
            response = requests.post(
                self.url,
                data={"data": query},
                headers={"User-Agent": self.user_agent},
                timeout=self.timeout,
                stream=True,
            )
        except requests.Timeout as exc:
            raise QueryTimeoutError(f"Overpass request timed out after {self.timeout}s") from exc
        except requests.RequestException as exc:
            raise ServiceError(None, str(exc)) from exc

        try:
            text = self._read_body(response, deadline)
        finally:
            response.close()

        if not response.ok:
            body = text[:ERROR_BODY_LIMIT]
            logger.error(f"[Overpass] HTTP error: {response.status_code} {body}")
            raise ServiceError(response.status_code, body)

        try:
            payload = json.loads(text)
        except (ValueError, RecursionError) as exc:
            raise ParseError(f"Overpass returned invalid JSON: {exc}") from exc

        return parse_elements(payload)

    def __call__(self, bboxes: Sequence[BoundingBox]) -> List[MapFeature]:
        return self.query_bboxes(bboxes)

    #----------------
    # Internal helpers
    #----------------
    def _read_body(self, response: Any, deadline: float) -> str:
        """Read the streamed body, giving up once the absolute deadline passes."""
        chunks: List[bytes] = []
        try:
            for chunk in response.iter_content(chunk_size=64 * 1024):
                if self.clock() > deadline:
                    raise QueryTimeoutError(f"Overpass response exceeded {self.timeout}s")
                if chunk:
                    chunks.append(chunk)
        except requests.Timeout as exc:
            raise QueryTimeoutError(f"Overpass response timed out after {self.timeout}s") from exc
        except requests.RequestException as exc:
            raise ServiceError(None, str(exc)) from exc

        raw = b"".join(chunks)
        try:
            return raw.decode(response.encoding or "utf-8", errors="replace")
        except LookupError:
            # unknown charset in the Content-Type header; Overpass JSON is utf-8
            return raw.decode("utf-8", errors="replace")
