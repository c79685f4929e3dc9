import pytest

from roundabouts.models import MapNode
from roundabouts.policy import CountingPolicy
from roundabouts.dedup import node_positions
from roundabouts.grouping import group_junctions
from roundabouts.proximity import count_groups_on_route, group_centroid, is_near_route

# 1 km north of latitude 48.0, in degrees, using the haversine earth radius
ONE_KM_LAT_DEG = 1000 / 111194.93


def test_centroid_on_segment_midpoint_is_accepted():
    route = [(2.00, 48.0), (2.02, 48.0)]
    assert is_near_route((48.0, 2.01), route, 50)


def test_centroid_1km_perpendicular_is_rejected():
    route = [(2.00, 48.0), (2.02, 48.0)]
    assert not is_near_route((48.0 + ONE_KM_LAT_DEG, 2.01), route, 50)


def test_centroid_near_vertex_between_sampled_midpoints_is_accepted():
    # Far from every segment midpoint, so only the fine pass can accept it
    route = [(2.00, 48.0), (2.02, 48.0), (2.04, 48.0)]
    assert is_near_route((48.0001, 2.02), route, 50)


def test_threshold_is_exclusive():
    # Vertical segment crossing the equator: cos(0) == 1 and 2**-10 deg is
    # exact in binary, so the fine pass distance is exactly 108.7109375 m.
    # The segment midpoint is 0.5 deg away, out of the coarse window.
    route = [(0.0, -0.5), (0.0, 1.5)]
    centroid = (0.0, 2 ** -10)
    boundary_m = 2 ** -10 * 111320

    assert boundary_m == 108.7109375
    assert not is_near_route(centroid, route, boundary_m)
    assert is_near_route(centroid, route, boundary_m + 0.01)


def test_long_route_uses_sampling_but_still_finds_junction():
    # 2000 points ~11m apart; coarse pass only looks at every 4th segment
    route = [(2.0 + i * 0.0001, 48.0) for i in range(2000)]
    assert is_near_route((48.0002, 2.12345), route, 50)
    assert not is_near_route((48.01, 2.12345), route, 50)


def test_default_threshold_comes_from_policy():
    route = [(2.00, 48.0), (2.02, 48.0)]
    centroid = (48.0 + 200 / 111194.93, 2.01)  # ~200m off the route

    assert not is_near_route(centroid, route)
    assert is_near_route(centroid, route, policy=CountingPolicy(proximity_threshold_m=500))


def test_group_centroid_averages_resolvable_node_references(make_roundabout):
    ways = [make_roundabout(1, [1, 2]), make_roundabout(2, [2, 3])]
    positions = {1: (48.0, 2.0), 2: (48.2, 2.2)}  # node 3 unknown

    lat, lon = group_centroid(ways, positions)

    # node 2 is referenced twice and counts twice
    assert lat == pytest.approx((48.0 + 48.2 + 48.2) / 3)
    assert lon == pytest.approx((2.0 + 2.2 + 2.2) / 3)


def test_group_centroid_none_without_positions(make_roundabout):
    assert group_centroid([make_roundabout(1, [1, 2])], {}) is None


def test_count_groups_on_route(straight_route, route_features, make_roundabout):
    features = route_features + [make_roundabout(300, [50, 51])]  # no node positions at all
    groups = group_junctions(features)
    positions = node_positions(features)

    assert len(groups) == 3
    assert count_groups_on_route(groups, positions, straight_route) == 1
