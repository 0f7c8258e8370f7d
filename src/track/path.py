"""
Track segments on a tile.

A Path joins two parts of one tile. On construction it sorts its ends into
edges, stops and at most one junction, records which lane it occupies at every
edge it exits through, and classifies itself (single lane, straight, gentle
curve). Traversal is delegated to ``track.walk``.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Union

from track.constants import GAUGE_MATCHES, GENTLE_CURVE_DIFFERENCES, HEX, STRAIGHT_DIFFERENCE, Gauge
from track.errors import TrackLayoutError
from track.lanes import DEFAULT_LANES, Lanes, decode_lane_spec, validate_lanes
from track.parts import City, Junction, Offboard, Part, Town
from track.walk import Adjacency, WalkMode
from track.walk import select as select_paths
from track.walk import walk as walk_paths

if TYPE_CHECKING:
    from board import Hex, Tile

# Lanes at the A and B ends of a path
PathLanes = Tuple[Lanes, Lanes]

DEFAULT_PATH_LANES: PathLanes = (DEFAULT_LANES, DEFAULT_LANES)


class Path:
    def __init__(
        self,
        a: Part,
        b: Part,
        terminal: Optional[Union[bool, int]] = None,
        lanes: Sequence[Sequence[int]] = DEFAULT_PATH_LANES,
        track: Union[Gauge, str] = Gauge.BROAD,
    ) -> None:
        """
        Build a path between two parts and classify it.

        :param a: Part at the A end.
        :param b: Part at the B end.
        :param terminal: Marks a stub that cannot be extended past its stop.
        :param lanes: (count, index) for the A end and the B end.
        :param track: Gauge of the track.
        :raises TrackLayoutError: If the lanes are invalid or both ends are junctions.
        """
        if not isinstance(a, Part) or not isinstance(b, Part):
            raise TrackLayoutError(f"Path ends must be parts, got {a!r} and {b!r}")
        if len(lanes) != 2:
            raise TrackLayoutError(f"A path has two lane descriptors, got {len(lanes)}")

        self.a: Part = a
        self.b: Part = b
        self.terminal = terminal
        self.lanes: PathLanes = (validate_lanes(*lanes[0]), validate_lanes(*lanes[1]))
        self.track: Gauge = Gauge(track)

        self.edges: List[Part] = []
        self.stops: List[Part] = []
        self.nodes: List[Part] = []
        self.exit_lanes: Dict[int, Lanes] = {}
        self.city: Optional[City] = None
        self.town: Optional[Town] = None
        self.offboard: Optional[Offboard] = None
        self.junction: Optional[Junction] = None

        self.tile: Optional[Tile] = None
        self.index: int = 0
        # Preferred exit carried over from the path this one was rotated from
        self._turned_exit: Optional[float] = None

        self._separate_parts()

        self.single: bool = self.lanes[0].count == 1 and self.lanes[1].count == 1
        self.node: bool = bool(self.nodes)
        self.exits: List[int] = [edge.num for edge in self.edges]  # type: ignore[attr-defined]
        self._classify()

    @staticmethod
    def make_lanes(
        a: Part,
        b: Part,
        terminal: Optional[Union[bool, int]] = None,
        lanes: Optional[int] = None,
        a_lane: Optional[Union[float, str]] = None,
        b_lane: Optional[Union[float, str]] = None,
        track: Optional[Union[Gauge, str]] = None,
    ) -> List[Path]:
        """
        Build the paths for one track definition.

        With ``lanes=n`` one path per lane is built. Lane ``i`` sits at
        ``(n, i)`` on the A end; between two edges the B end is mirrored to
        ``(n, n - i - 1)``, otherwise it matches the A end. Without ``lanes``
        a single path is built from the compact ``a_lane``/``b_lane`` specs.

        Args:
            a: Part at the A end
            b: Part at the B end
            terminal: Terminal flag for every built path
            lanes: Number of parallel lanes
            a_lane: Compact lane spec for the A end (e.g. 2.1)
            b_lane: Compact lane spec for the B end
            track: Gauge, broad when omitted

        Returns:
            The built paths
        """
        track = track or Gauge.BROAD
        if not lanes:
            return [Path(a, b, terminal=terminal,
                         lanes=(decode_lane_spec(a_lane), decode_lane_spec(b_lane)),
                         track=track)]

        paths: List[Path] = []
        for index in range(lanes):
            a_lanes = (lanes, index)
            if a.is_edge() and b.is_edge():
                b_lanes = (lanes, lanes - index - 1)
            else:
                b_lanes = a_lanes
            paths.append(Path(a, b, terminal=terminal, lanes=(a_lanes, b_lanes), track=track))
        return paths

    def bind(self, tile: Tile, index: int) -> None:
        """Attach the path to its tile and refresh tile-dependent geometry."""
        self.tile = tile
        self.index = index
        self._classify()

    @property
    def hex(self) -> Optional[Hex]:
        return self.tile.hex if self.tile is not None else None

    def is_terminal(self) -> bool:
        return bool(self.terminal)

    def is_single(self) -> bool:
        return self.single

    def is_node(self) -> bool:
        return self.node

    def is_straight(self) -> bool:
        return self.straight

    def is_gentle_curve(self) -> bool:
        return self.gentle_curve

    def tracks_match(self, other: Union[Gauge, str]) -> bool:
        """Whether this path's gauge accepts ``other``."""
        return Gauge(other) in GAUGE_MATCHES[self.track]

    def __le__(self, other: Path) -> bool:
        """
        True when ``other`` covers this path: every resolved end of this path
        has a compatible end on ``other`` and ``other``'s gauge is accepted.
        """
        other_ends = other.ends
        return all(any(end <= o for o in other_ends) for end in self.ends) \
            and self.tracks_match(other.track)

    def walk(
        self,
        mode: Optional[WalkMode] = None,
        skip: Optional[int] = None,
        jskip: Optional[Junction] = None,
        visited: Optional[Iterable[Path]] = None,
        adjacency: Optional[Adjacency] = None,
    ) -> Iterator:
        return walk_paths(self, mode=mode, skip=skip, jskip=jskip, visited=visited, adjacency=adjacency)

    def select(self, paths: Iterable[Path], adjacency: Optional[Adjacency] = None) -> List[Path]:
        return select_paths(self, paths, adjacency=adjacency)

    def rotate(self, ticks: int) -> Path:
        """
        Return this path turned by ``ticks`` sixths of a turn.

        Edges are renumbered and the stop's preferred exit is turned with
        them, so the rotated path keeps its shape. Stops and junctions are
        shared with this path. The rotated path is not bound to a tile.
        """
        path = Path(self.a.rotate(ticks), self.b.rotate(ticks),
                    terminal=self.terminal, lanes=self.lanes, track=self.track)
        path.index = self.index
        if self.node_edge is not None:
            path._turned_exit = (self.node_edge + ticks) % HEX.edges
            path._classify()
        return path

    def __repr__(self) -> str:
        name = self.hex.name if self.hex is not None else None
        if self.single:
            return f"<Path: hex: {name}, exit: {self.exits}, track: {self.track.value}>"
        return f"<Path: hex: {name}, exit: {self.exits}, lanes: {tuple(self.lanes[0])} {tuple(self.lanes[1])}>"

    def _separate_parts(self) -> None:
        for end, (part, lanes) in enumerate(zip((self.a, self.b), self.lanes)):
            if part.is_edge():
                self.edges.append(part)
                self.exit_lanes[part.num] = lanes  # type: ignore[attr-defined]
            elif part.is_offboard():
                self.offboard = part  # type: ignore[assignment]
                self.stops.append(part)
                self.nodes.append(part)
            elif part.is_city():
                self.city = part  # type: ignore[assignment]
                self.stops.append(part)
                self.nodes.append(part)
            elif part.is_junction():
                if self.junction is not None:
                    raise TrackLayoutError("A path can have at most one junction end")
                self.junction = part  # type: ignore[assignment]
            elif part.is_town():
                self.town = part  # type: ignore[assignment]
                self.stops.append(part)
                self.nodes.append(part)
            else:
                raise TrackLayoutError(f"Unknown part at end {'AB'[end]}: {part!r}")
            part.lanes = lanes

    def _classify(self) -> None:
        self.ends: List[Part] = self._resolve_ends()
        self.node_edge: Optional[float] = self._node_edge()
        self.a_num: Optional[float] = self._end_num(self.a)
        self.b_num: Optional[float] = self._end_num(self.b)

        if self.a_num is None or self.b_num is None:
            self.straight = False
            self.gentle_curve = False
        else:
            difference = abs(self.a_num - self.b_num)
            self.straight = difference == STRAIGHT_DIFFERENCE
            self.gentle_curve = difference in GENTLE_CURVE_DIFFERENCES

    def _resolve_ends(self) -> List[Part]:
        # A junction end stands for the non-junction ends of the other paths meeting there
        ends: List[Part] = []
        for part in (self.a, self.b):
            if not part.is_junction():
                ends.append(part)
                continue
            for path in part.paths:  # type: ignore[attr-defined]
                if path is self:
                    continue
                ends.extend(p for p in (path.a, path.b) if not p.is_junction())
        return ends

    def _node_edge(self) -> Optional[float]:
        if len(self.nodes) != 1:
            return None
        node = self.nodes[0]
        if self.tile is not None:
            return self.tile.preferred_exit(node)
        if self._turned_exit is not None:
            return self._turned_exit
        return node.loc  # type: ignore[attr-defined]

    def _end_num(self, part: Part) -> Optional[float]:
        if part.is_edge():
            return part.num  # type: ignore[attr-defined]
        return self.node_edge
