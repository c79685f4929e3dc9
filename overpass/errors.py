"""
Error taxonomy for the Overpass adapter.

The batch orchestrator treats every OverpassError the same way (retry the
boxes one by one, then drop what still fails), so callers only need the
base class. The subclasses exist for logs and tests.
"""

from typing import Optional


class OverpassError(Exception):
    """Base class for Overpass client errors."""
    pass


class ServiceError(OverpassError):
    """Non-success HTTP status, or the request never got a response."""

    def __init__(self, status_code: Optional[int], body: str = ""):
        self.status_code = status_code
        self.body = body
        if status_code is None:
            super().__init__(f"Overpass API unreachable: {body}")
        else:
            super().__init__(f"Overpass API HTTP {status_code}")


class ParseError(OverpassError):
    """Response body is not the JSON document Overpass should return."""
    pass


class QueryTimeoutError(OverpassError, TimeoutError):
    """The call went past its absolute deadline."""
    pass
