"""
Parts of a tile that a path can end at.

Every part is exactly one of: an edge of the hex, a city, a town, an offboard
location or a junction. Parts belong to their tile; paths only reference them.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, List, Optional

from track.constants import HEX
from track.lanes import Lanes

if TYPE_CHECKING:
    from track.path import Path


@dataclass(eq=False)
class Part:
    # Assigned by the owning path when it is built
    lanes: Optional[Lanes] = field(default=None, init=False, repr=False)

    def is_edge(self) -> bool:
        return False

    def is_city(self) -> bool:
        return False

    def is_town(self) -> bool:
        return False

    def is_offboard(self) -> bool:
        return False

    def is_junction(self) -> bool:
        return False

    def is_node(self) -> bool:
        """A node is a stop a route can visit: city, town or offboard."""
        return self.is_city() or self.is_town() or self.is_offboard()

    def rotate(self, ticks: int) -> Part:
        return self

    def copy(self) -> Part:
        return type(self)()

    def __le__(self, other: Part) -> bool:
        """True when this part can be replaced by ``other`` on an upgrade."""
        return type(self) is type(other)


@dataclass(eq=False)
class Edge(Part):
    num: int = 0

    def is_edge(self) -> bool:
        return True

    def rotate(self, ticks: int) -> Edge:
        return Edge(HEX.rotate(self.num, ticks))

    def copy(self) -> Edge:
        return Edge(self.num)

    def __le__(self, other: Part) -> bool:
        return other.is_edge() and self.num == other.num  # type: ignore[attr-defined]


@dataclass(eq=False)
class Node(Part):
    """
    A stop on a tile.

    Attributes:
        index: Position among the tile's stops of the same kind
        loc: Preferred exit the stop is drawn next to, if set by the tile
    """

    index: int = 0
    loc: Optional[float] = None

    def is_node(self) -> bool:
        return True

    def copy(self) -> Node:
        return type(self)(index=self.index, loc=self.loc)


@dataclass(eq=False)
class City(Node):
    def is_city(self) -> bool:
        return True


@dataclass(eq=False)
class Town(Node):
    def is_town(self) -> bool:
        return True


@dataclass(eq=False)
class Offboard(Node):
    def is_offboard(self) -> bool:
        return True


@dataclass(eq=False)
class Junction(Part):
    """A splice point joining several paths without being a stop."""

    paths: List[Path] = field(default_factory=list, repr=False)

    def is_junction(self) -> bool:
        return True

    def add_path(self, path: Path) -> None:
        if path not in self.paths:
            self.paths.append(path)
