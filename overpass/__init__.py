#Marks overpass as a package.
#Re-exports the public API (OverpassClient, fetch_features, errors) so other
#modules import from overpass without knowing internal file names.
#No business logic.

from .client import OverpassClient, build_roundabout_query, parse_elements
from .batching import BatchQuery, FetchResult, fetch_features
from .cache import CachingOverpassClient
from .errors import OverpassError, ParseError, QueryTimeoutError, ServiceError

__all__ = [
    "OverpassClient",
    "build_roundabout_query",
    "parse_elements",
    "BatchQuery",
    "FetchResult",
    "fetch_features",
    "CachingOverpassClient",
    "OverpassError",
    "ParseError",
    "QueryTimeoutError",
    "ServiceError",
]
