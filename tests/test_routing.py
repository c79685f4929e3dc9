import pytest
import requests

from routing import geocoder as geocoder_module
from routing import osrm_client as osrm_module
from routing.geocoder import GeocodingError, NominatimGeocoder
from routing.osrm_client import OSRMClient, OSRMError


class FakeJSONResponse:
    def __init__(self, payload):
        self.payload = payload

    def json(self):
        return self.payload


@pytest.fixture
def fake_get(monkeypatch):
    calls = []
    state = {"payload": None, "error": None}

    def get(url, **kwargs):
        calls.append((url, kwargs))
        if state["error"] is not None:
            raise state["error"]
        return FakeJSONResponse(state["payload"])

    monkeypatch.setattr(requests, "get", get)
    return calls, state


def test_compute_route_returns_lon_lat_geometry(fake_get):
    calls, state = fake_get
    state["payload"] = {
        "code": "Ok",
        "routes": [{
            "distance": 112345.6,
            "duration": 4321.0,
            "geometry": {"type": "LineString", "coordinates": [[-1.68, 48.11], [-1.6, 47.9], [-1.55, 47.21]]},
        }],
    }

    route = OSRMClient(base_url="http://osrm.test").compute_route([(48.11, -1.68), (47.21, -1.55)])

    url, kwargs = calls[0]
    # OSRM wants lon,lat
    assert url == "http://osrm.test/route/v1/driving/-1.68,48.11;-1.55,47.21"
    assert kwargs["params"] == {"overview": "full", "geometries": "geojson"}
    assert route.geometry[0] == (-1.68, 48.11)
    assert len(route.geometry) == 3
    assert route.distance_m == 112345.6
    assert route.duration_s == 4321.0


def test_compute_route_error_code(fake_get):
    _, state = fake_get
    state["payload"] = {"code": "NoRoute", "message": "Impossible route between points"}

    with pytest.raises(OSRMError):
        OSRMClient(base_url="http://osrm.test").compute_route([(48.11, -1.68), (47.21, -1.55)])


def test_compute_route_transport_failure(fake_get):
    _, state = fake_get
    state["error"] = requests.ConnectionError("down")

    with pytest.raises(OSRMError):
        OSRMClient(base_url="http://osrm.test").compute_route([(48.11, -1.68), (47.21, -1.55)])


def test_compute_route_needs_two_points():
    with pytest.raises(ValueError):
        OSRMClient(base_url="http://osrm.test").compute_route([(48.11, -1.68)])


def test_geocode_takes_first_part_of_display_name(fake_get):
    calls, state = fake_get
    state["payload"] = [{"lat": "48.1113387", "lon": "-1.6800198", "display_name": "Rennes, Ille-et-Vilaine, Bretagne, France"}]

    place = NominatimGeocoder(base_url="http://nominatim.test").geocode("Rennes")

    url, kwargs = calls[0]
    assert url == "http://nominatim.test/search"
    assert kwargs["params"]["q"] == "Rennes"
    assert kwargs["params"]["countrycodes"] == "fr"
    assert place.display_name == "Rennes"
    assert place.lat_lon == (48.1113387, -1.6800198)


def test_geocode_not_found(fake_get):
    _, state = fake_get
    state["payload"] = []

    with pytest.raises(GeocodingError):
        NominatimGeocoder(base_url="http://nominatim.test").geocode("Atlantis")


def test_geocode_blank_name():
    with pytest.raises(ValueError):
        NominatimGeocoder(base_url="http://nominatim.test").geocode("   ")


def test_modules_read_urls_from_environment():
    assert osrm_module.BASE_URL
    assert geocoder_module.NOMINATIM_URL
