"""Track network of hex tiles: parts, paths and the walk that connects them."""

from track.ability import Ability, AbilityOwner
from track.constants import GAUGE_MATCHES, HEX, Gauge, HexGeometry, gauges_connect
from track.errors import BoardLoadError, TrackLayoutError
from track.lanes import DEFAULT_LANES, Lanes, decode_lane_spec, lane_match, validate_lanes
from track.parts import City, Edge, Junction, Node, Offboard, Part, Town
from track.path import Path
from track.routes import chain_hexes, chain_stops, is_contiguous, reachable_paths, route_chains
from track.walk import Adjacency, EnumerateAll, EnumerateChains, RestrictedTo, WalkMode, select, walk

__all__ = [
    "Ability",
    "AbilityOwner",
    "GAUGE_MATCHES",
    "HEX",
    "Gauge",
    "HexGeometry",
    "gauges_connect",
    "BoardLoadError",
    "TrackLayoutError",
    "DEFAULT_LANES",
    "Lanes",
    "decode_lane_spec",
    "lane_match",
    "validate_lanes",
    "City",
    "Edge",
    "Junction",
    "Node",
    "Offboard",
    "Part",
    "Town",
    "Path",
    "chain_hexes",
    "chain_stops",
    "is_contiguous",
    "reachable_paths",
    "route_chains",
    "Adjacency",
    "EnumerateAll",
    "EnumerateChains",
    "RestrictedTo",
    "WalkMode",
    "select",
    "walk",
]
