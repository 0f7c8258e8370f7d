"""
Lane descriptors for path ends.

A path end that carries several parallel tracks is described by how many
tracks meet there and which of them the path occupies. Tiles meet mirrored,
so lane ``i`` on one face touches lane ``n - i - 1`` on the neighboring face.
"""
from __future__ import annotations

from typing import NamedTuple, Optional, Union

from track.constants import SINGLE_LANE
from track.errors import TrackLayoutError


class Lanes(NamedTuple):
    count: int
    index: int


def validate_lanes(count: int, index: int) -> Lanes:
    """
    Build a lane descriptor, checking ``0 <= index < count``.

    Args:
        count: Number of parallel tracks at the end
        index: Track occupied by the path

    Returns:
        Validated Lanes

    Raises:
        TrackLayoutError: If the count or index is out of range
    """
    count, index = int(count), int(index)
    if count < 1:
        raise TrackLayoutError(f"Lane count must be at least 1, got {count}")
    if not 0 <= index < count:
        raise TrackLayoutError(f"Lane index {index} outside 0..{count - 1}")
    return Lanes(count, index)


DEFAULT_LANES = Lanes(*SINGLE_LANE)


def decode_lane_spec(lane_spec: Optional[Union[float, str]]) -> Lanes:
    """
    Decode a compact lane spec such as ``2.1`` into ``Lanes(2, 1)``.

    The integer part is the lane count and the first decimal digit the index.
    A missing spec means a single lane.
    """
    if lane_spec is None:
        return DEFAULT_LANES
    text = str(lane_spec)
    whole, _, fraction = text.partition('.')
    index = int(fraction[0]) if fraction else 0
    return validate_lanes(int(whole), index)


def lane_match(lanes0: Optional[Lanes], lanes1: Optional[Lanes]) -> bool:
    """
    Check whether two facing path ends on adjacent tiles line up.

    Args:
        lanes0: Lanes at the exit of the first path
        lanes1: Lanes at the facing exit of the second path

    Returns:
        True if both are present, have the same count and mirrored indexes
    """
    if lanes0 is None or lanes1 is None:
        return False
    return lanes1[0] == lanes0[0] and lanes1[1] == lanes0[0] - lanes0[1] - 1
