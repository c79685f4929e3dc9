#Purpose: City name -> coordinates, through Nominatim.
#One lookup per call. Nominatim's usage policy allows 1 request per second,
#callers pace consecutive lookups (see challenge.runner).

from dotenv import load_dotenv
from dataclasses import dataclass
import os
from typing import Optional
import requests

load_dotenv()
NOMINATIM_URL = os.getenv("NOMINATIM_URL", "https://nominatim.openstreetmap.org")
USER_AGENT = os.getenv("HTTP_USER_AGENT", "GiratoireChallenge/1.0")


class GeocodingError(Exception):
    """Nominatim did not return a usable place."""
    pass


@dataclass(frozen=True)
class Place:
    lat: float
    lon: float
    display_name: str  # first part of Nominatim's display_name, e.g. "Rennes"

    @property
    def lat_lon(self):
        return (self.lat, self.lon)


class NominatimGeocoder:
    def __init__(self, base_url: Optional[str] = None, country_codes: str = "fr", timeout: int = 10):
        self.base_url = base_url or NOMINATIM_URL
        self.country_codes = country_codes
        self.timeout = timeout

    def geocode(self, city_name: str) -> Place:
        """Best match for city_name, restricted to self.country_codes."""
        if not city_name or not city_name.strip():
            raise ValueError("A city name is required.")

        try:
            response = requests.get(
                f"{self.base_url}/search",
                params={
                    "q": city_name,
                    "format": "json",
                    "limit": 1,
                    "countrycodes": self.country_codes,
                },
                headers={"User-Agent": USER_AGENT},
                timeout=self.timeout,
            )
            data = response.json()
        except (requests.RequestException, ValueError) as exc:
            raise GeocodingError(f"Nominatim request failed: {exc}") from exc

        if not data:
            raise GeocodingError(f"City not found: {city_name}")

        best = data[0]
        return Place(
            lat=float(best["lat"]),
            lon=float(best["lon"]),
            display_name=best["display_name"].split(",")[0],
        )
