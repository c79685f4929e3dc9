#Marks routing as a package.
#Re-exports the routing collaborators (OSRMClient, NominatimGeocoder) so other
#modules import from routing without knowing internal file names.
#No business logic.

from .osrm_client import OSRMClient, OSRMError, RouteResult
from .geocoder import NominatimGeocoder, GeocodingError, Place

__all__ = [
           "OSRMClient",
           "OSRMError",
             "RouteResult",
             "NominatimGeocoder",
             "GeocodingError",
             "Place",
             ]
