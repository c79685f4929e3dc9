import pytest

from roundabouts.segmenter import bbox_for_points, compute_segment_bboxes, split_polyline


def _line(n):
    return [(2.0 + i * 0.001, 48.0 + i * 0.0005) for i in range(n)]


@pytest.mark.parametrize("length, max_segments", [(2, 12), (13, 12), (100, 12), (1000, 12), (37, 5), (5, 1)])
def test_split_never_exceeds_max_segments(length, max_segments):
    chunks = split_polyline(_line(length), max_segments)
    assert 1 <= len(chunks) <= max_segments


@pytest.mark.parametrize("length, max_segments", [(2, 12), (13, 12), (100, 12), (1001, 12), (37, 5)])
def test_chunks_reconstruct_route(length, max_segments):
    points = _line(length)
    chunks = split_polyline(points, max_segments)

    rebuilt = list(chunks[0])
    for previous, chunk in zip(chunks, chunks[1:]):
        # each chunk starts where the previous one ended
        assert chunk[0] == previous[-1]
        rebuilt.extend(chunk[1:])

    assert rebuilt == points


def test_no_trailing_single_point_chunk():
    # 13 points / 12 segments -> chunk size 2; the last point is already
    # the tail of the previous chunk
    chunks = split_polyline(_line(13), 12)
    assert all(len(chunk) >= 2 for chunk in chunks)


def test_bbox_is_padded_extrema():
    box = bbox_for_points([(2.0, 48.0), (2.5, 47.5), (2.2, 48.2)], padding_deg=0.003)
    assert box.south == pytest.approx(47.497)
    assert box.north == pytest.approx(48.203)
    assert box.west == pytest.approx(1.997)
    assert box.east == pytest.approx(2.503)


def test_compute_segment_bboxes_one_box_per_chunk():
    points = _line(50)
    boxes = compute_segment_bboxes(points, max_segments=12, padding_deg=0.003)
    chunks = split_polyline(points, 12)

    assert len(boxes) == len(chunks)
    # every route point lies inside the box of its chunk
    for box, chunk in zip(boxes, chunks):
        for lon, lat in chunk:
            assert box.south < lat < box.north
            assert box.west < lon < box.east


def test_overpass_bbox_order():
    box = bbox_for_points([(2.0, 48.0), (2.1, 48.1)], padding_deg=0.0)
    assert box.to_overpass() == "48.0,2.0,48.1,2.1"


@pytest.mark.parametrize("points", [[], [(2.0, 48.0)], None])
def test_short_polyline_is_rejected(points):
    with pytest.raises(ValueError):
        split_polyline(points, 12)


def test_altitude_is_dropped_from_chunks():
    chunks = split_polyline([(2.0, 48.0, 30.0), (2.1, 48.1, 32.5)], 12)
    assert chunks == [[(2.0, 48.0), (2.1, 48.1)]]
