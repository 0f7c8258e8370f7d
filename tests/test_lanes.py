"""Tests for lane descriptors, lane matching and gauge compatibility."""

import pytest

from track.constants import HEX, Gauge, gauges_connect
from track.errors import TrackLayoutError
from track.lanes import DEFAULT_LANES, Lanes, decode_lane_spec, lane_match, validate_lanes


def test_single_lane_matches_single_lane():
    assert lane_match((1, 0), (1, 0))


@pytest.mark.parametrize("count", [2, 3, 4])
def test_lane_matches_only_mirrored_index(count):
    for index in range(count):
        for other in range(count):
            assert lane_match((count, index), (count, other)) == (other == count - index - 1)


def test_lane_count_mismatch():
    assert not lane_match((1, 0), (2, 0))
    assert not lane_match((2, 1), (1, 0))


def test_missing_lanes_never_match():
    assert not lane_match(None, (1, 0))
    assert not lane_match((1, 0), None)


def test_decode_lane_spec():
    assert decode_lane_spec(None) == DEFAULT_LANES == Lanes(1, 0)
    assert decode_lane_spec(2.1) == Lanes(2, 1)
    assert decode_lane_spec("3.2") == Lanes(3, 2)
    assert decode_lane_spec(2) == Lanes(2, 0)


def test_validate_lanes_rejects_out_of_range():
    with pytest.raises(TrackLayoutError):
        validate_lanes(1, 1)
    with pytest.raises(TrackLayoutError):
        validate_lanes(2, -1)
    with pytest.raises(TrackLayoutError):
        validate_lanes(0, 0)


def test_gauges_connect():
    assert gauges_connect(Gauge.BROAD, Gauge.BROAD)
    assert gauges_connect(Gauge.BROAD, Gauge.DUAL)
    assert gauges_connect(Gauge.NARROW, Gauge.NARROW)
    assert gauges_connect(Gauge.DUAL, Gauge.NARROW)
    assert not gauges_connect(Gauge.BROAD, Gauge.NARROW)
    assert not gauges_connect(Gauge.NARROW, Gauge.BROAD)


def test_hex_geometry():
    assert HEX.invert(0) == 3
    assert HEX.invert(4) == 1
    assert HEX.rotate(5, 2) == 1
    assert HEX.rotate(2, 6) == 2
