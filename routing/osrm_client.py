#Purpose: The OSRM "adapter/client".
#Sole responsibility: talk to OSRM via HTTP and return the driving route.
#Encapsulates OSRM-specific details:
#coordinate formatting (lon,lat)
#URL construction (/route/v1/{profile}/...)
#timeouts and error handling
#parsing response JSON into RouteResult
#It should not contain roundabout counting or scoring.


from dotenv import load_dotenv
from dataclasses import dataclass
import os
from typing import List, Tuple, Optional
import requests

# Read OSRM base URL from environment
# Example in .env:
# OSRM_BASE_URL=http://router.project-osrm.org
load_dotenv()
BASE_URL = os.getenv("OSRM_BASE_URL", "https://router.project-osrm.org")
USER_AGENT = os.getenv("HTTP_USER_AGENT", "GiratoireChallenge/1.0")

# Internal coordinate type: (lat, lon)
LatLon = Tuple[float, float]

class OSRMError(Exception):
    """Custom exception for OSRM client errors."""
    pass


@dataclass(frozen=True)
class RouteResult:
    """
    The route the roundabout counter walks along.
    geometry is GeoJSON order: (lon, lat) pairs.
    """
    geometry: List[Tuple[float, float]]
    distance_m: float
    duration_s: float


class OSRMClient:
    """
    OSRM Adapter / Client

    Sole responsibility:
    - Talk to OSRM via HTTP
    - Convert internal (lat, lon) → OSRM (lon,lat)
    - Return normalized outputs

    """
    def __init__(self, profile: str = "driving", timeout: int = 30, base_url: Optional[str] = None):
        self.base_url = base_url or BASE_URL
        self.timeout = timeout #the time to wait for a response from OSRM before giving up
        self.profile = profile #the mode of transportation (driving, walking, cycling)

        if not self.base_url:
            raise ValueError("OSRM base URL not set. Please set OSRM_BASE_URL in the .env file.")

    #----------------
    # Internal helper methods for coordinate formatting
    #----------------
    def format_coordinates(self, coords: List[LatLon]) -> str:
        """Convert list of (lat, lon) to OSRM format 'lon,lat;lon,lat;...'"""
        return ';'.join([f"{lon},{lat}" for lat, lon in coords])

    #----------------
    # Public methods
    #----------------
    def compute_route(self, coordinates: List[LatLon]) -> RouteResult:
        """
        calls the OSRM /route endpoint with the given coordinates and
        returns the full geometry with distance and duration

        Returns:
            RouteResult(
                geometry=[(lon, lat), ...],
                distance_m=float, # in meters
                duration_s=float, # in seconds
            )
        """
        if len(coordinates) < 2:
            raise ValueError("At least two coordinates are required to compute a route.")

        url = f"{self.base_url}/route/v1/{self.profile}/{self.format_coordinates(coordinates)}"

        try:
            response = requests.get(
                url,
                params={
                    "overview": "full", # full geometry, the counter needs every point
                    "geometries": "geojson",
                },
                headers={"User-Agent": USER_AGENT},
                timeout=self.timeout,
            )
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise OSRMError(f"OSRM request failed: {exc}") from exc

        #validating OSRM response
        if data.get("code") != "Ok" or not data.get("routes"):
            raise OSRMError(f"OSRM error: {data.get('message', 'Unable to compute a route')}")

        route = data["routes"][0] #take the first route (OSRM may return alternatives)

        #Normalize output to internal format
        return RouteResult(
            geometry=[(float(lon), float(lat)) for lon, lat in route["geometry"]["coordinates"]],
            distance_m=float(route["distance"]),
            duration_s=float(route["duration"]),
        )
