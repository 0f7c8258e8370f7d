"""Hexes, tiles and the board that joins them."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from track.constants import HEX, HexGeometry
from track.errors import TrackLayoutError
from track.parts import Edge, Junction, Node, Part
from track.path import Path

logger = logging.getLogger(__name__)

# Axial (q, r) offset of the neighbor across each edge; edge e and e + 3 are opposite
DIRECTIONS: List[Tuple[int, int]] = [(0, 1), (-1, 1), (-1, 0), (0, -1), (1, -1), (1, 0)]


class Tile:
    def __init__(self, name: str, paths: Sequence[Path], color: str = 'white', rotation: int = 0) -> None:
        """
        Initialize a tile from its paths.

        :param name: Tile name, e.g. '57'.
        :param paths: Paths printed on the tile.
        :param color: Tile color (yellow, green, ...).
        :param rotation: Ticks the layout is turned from its printed position.
        """
        self.name: str = name
        self.color: str = color
        self.rotation: int = rotation
        self.paths: List[Path] = list(paths)
        self.hex: Optional[Hex] = None

        self._paths_at: Dict[int, List[Path]] = {}
        for path in self.paths:
            for edge in path.exits:
                self._paths_at.setdefault(edge, []).append(path)
            if path.junction is not None:
                path.junction.add_path(path)

        self._preferred_exits: Dict[Node, Optional[float]] = {
            node: self._compute_preferred_exit(node) for node in self.nodes
        }

        for index, path in enumerate(self.paths):
            path.bind(self, index)

    @property
    def nodes(self) -> List[Node]:
        nodes: List[Node] = []
        for path in self.paths:
            for node in path.nodes:
                if node not in nodes:
                    nodes.append(node)  # type: ignore[arg-type]
        return nodes

    @property
    def junctions(self) -> List[Junction]:
        junctions: List[Junction] = []
        for path in self.paths:
            if path.junction is not None and path.junction not in junctions:
                junctions.append(path.junction)
        return junctions

    def paths_at(self, edge: int) -> List[Path]:
        """Paths leaving the tile through ``edge``."""
        return list(self._paths_at.get(edge, []))

    def preferred_exit(self, node: Part) -> Optional[float]:
        """
        Exit number a stop is drawn next to.

        :param node: A city, town or offboard on this tile.
        :return: The node's ``loc``, else its only connected edge, else None.
        """
        if node in self._preferred_exits:
            return self._preferred_exits[node]
        return getattr(node, 'loc', None)

    def _compute_preferred_exit(self, node: Node) -> Optional[float]:
        if node.loc is not None:
            return node.loc
        exits = {edge for path in self.paths if node in path.nodes for edge in path.exits}
        if len(exits) == 1:
            return exits.pop()
        return None

    def rotate(self, ticks: int) -> Tile:
        """
        Return a copy of the tile turned by ``ticks``.

        Every part is copied, so the copy shares no junction or stop with this tile.
        """
        copies: Dict[Part, Part] = {}

        def turned(part: Part) -> Part:
            if part not in copies:
                if isinstance(part, Edge):
                    copies[part] = part.rotate(ticks)
                else:
                    copy = part.copy()
                    if isinstance(copy, Node) and copy.loc is not None:
                        copy.loc = (copy.loc + ticks) % HEX.edges
                    copies[part] = copy
            return copies[part]

        paths = [
            Path(turned(path.a), turned(path.b), terminal=path.terminal, lanes=path.lanes, track=path.track)
            for path in self.paths
        ]
        return Tile(self.name, paths, color=self.color, rotation=(self.rotation + ticks) % HEX.edges)

    def __repr__(self) -> str:
        return f"<Tile: {self.name}, rotation: {self.rotation}>"


@dataclass(eq=False)
class Hex:
    name: str
    q: int
    r: int
    tile: Optional[Tile] = None
    board: Optional[Board] = field(default=None, repr=False)

    @property
    def coordinates(self) -> Tuple[int, int]:
        return self.q, self.r


class Board:
    """
    The hex map. It answers the adjacency questions asked while walking track:
    which hex lies across an edge, which edge faces it, and which paths enter
    a hex through an edge.
    """

    def __init__(self, geometry: HexGeometry = HEX) -> None:
        if geometry.edges != len(DIRECTIONS):
            raise TrackLayoutError(f"Board supports {len(DIRECTIONS)}-edge hexes, got {geometry.edges}")
        self.geometry: HexGeometry = geometry
        self.hexes: Dict[str, Hex] = {}
        self._by_coordinates: Dict[Tuple[int, int], Hex] = {}

    def add_hex(self, name: str, q: int, r: int) -> Hex:
        if name in self.hexes:
            raise TrackLayoutError(f"Duplicate hex {name}")
        if (q, r) in self._by_coordinates:
            raise TrackLayoutError(f"Hex {name} overlaps {self._by_coordinates[(q, r)].name} at {(q, r)}")
        hex_ = Hex(name, q, r, board=self)
        self.hexes[name] = hex_
        self._by_coordinates[(q, r)] = hex_
        return hex_

    def hex_by_name(self, name: str) -> Hex:
        return self.hexes[name]

    def neighbor(self, hex: Hex, edge: int) -> Optional[Hex]:
        dq, dr = DIRECTIONS[edge % self.geometry.edges]
        return self._by_coordinates.get((hex.q + dq, hex.r + dr))

    def neighbors(self, hex: Hex) -> Dict[int, Hex]:
        found: Dict[int, Hex] = {}
        for edge in range(self.geometry.edges):
            other = self.neighbor(hex, edge)
            if other is not None:
                found[edge] = other
        return found

    def invert(self, edge: int) -> int:
        return self.geometry.invert(edge)

    def paths_entering(self, hex: Hex, edge: int) -> List[Path]:
        if hex.tile is None:
            return []
        return hex.tile.paths_at(edge)

    def place(self, hex_name: str, tile: Tile, rotation: int = 0) -> Tile:
        """
        Lay a copy of ``tile`` on a hex, turned by ``rotation``.

        Any tile already on the hex is taken off.

        :param hex_name: Name of the hex.
        :param tile: Tile to lay; it is copied, so one definition can be laid many times.
        :param rotation: Ticks to turn the tile.
        :return: The tile now on the hex.
        """
        hex_ = self.hexes[hex_name]
        placed = tile.rotate(rotation)

        if hex_.tile is not None:
            logger.debug("Replacing tile %s on %s", hex_.tile.name, hex_name)
            hex_.tile.hex = None
        placed.hex = hex_
        hex_.tile = placed
        logger.debug("Placed tile %s on %s with rotation %d", placed.name, hex_name, placed.rotation)
        return placed

    @property
    def tiles(self) -> List[Tile]:
        return [hex_.tile for hex_ in self.hexes.values() if hex_.tile is not None]

    def paths(self) -> Iterator[Path]:
        for tile in self.tiles:
            yield from tile.paths
