import pytest

from roundabouts.models import MapNode, MapWay
from roundabouts.policy import CountingPolicy
from overpass.errors import ServiceError


class FakeOverpass:
    """
    Stands in for OverpassClient.query_bboxes.
    Returns the same elements for every call unless told to fail.
    """
    def __init__(self, features, fail_when=None):
        self.features = list(features)
        self.fail_when = fail_when or (lambda bboxes, call_index: False)
        self.calls = []

    def __call__(self, bboxes):
        call_index = len(self.calls)
        self.calls.append(list(bboxes))
        if self.fail_when(bboxes, call_index):
            raise ServiceError(429, "rate_limited")
        return list(self.features)


class RecordingSleep:
    def __init__(self):
        self.calls = []

    def __call__(self, seconds):
        self.calls.append(seconds)


def roundabout(way_id, nodes, value="roundabout"):
    return MapWay(id=way_id, nodes=tuple(nodes), tags={"junction": value, "highway": "primary"})


@pytest.fixture
def fake_overpass():
    return FakeOverpass


@pytest.fixture
def recording_sleep():
    return RecordingSleep()


@pytest.fixture
def make_roundabout():
    return roundabout


@pytest.fixture
def straight_route():
    # 4 points heading east along latitude 48.0, (lon, lat) like OSRM geometries
    return [(2.00, 48.0), (2.01, 48.0), (2.02, 48.0), (2.03, 48.0)]


@pytest.fixture
def route_features():
    """
    One roundabout drawn as two ways sharing nodes 1 and 3, centred on the
    route's second point, and one roundabout ~2km north of the route.
    """
    return [
        roundabout(100, [1, 2, 3]),
        roundabout(101, [3, 4, 1]),
        MapNode(1, 48.0001, 2.0100),
        MapNode(2, 48.0000, 2.0101),
        MapNode(3, 47.9999, 2.0100),
        MapNode(4, 48.0000, 2.0099),
        roundabout(200, [10, 11, 12, 10], value="circular"),
        MapNode(10, 48.0200, 2.0150),
        MapNode(11, 48.0201, 2.0151),
        MapNode(12, 48.0199, 2.0151),
    ]


@pytest.fixture
def fast_policy():
    return CountingPolicy(batch_delay_s=0, retry_delay_s=0)
