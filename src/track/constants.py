"""
Common constants for track layout and traversal.

This module defines the track gauges and which gauges can share a connection,
the default lane descriptor for single-track path ends, and the hex geometry
used by rotation and edge inversion.
"""
from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import Dict, FrozenSet, Tuple


class Gauge(enum.Enum):
    BROAD = 'broad'
    NARROW = 'narrow'
    DUAL = 'dual'


# Gauges a path of the given gauge accepts on the other side of a connection
GAUGE_MATCHES: Dict[Gauge, FrozenSet[Gauge]] = {
    Gauge.BROAD: frozenset({Gauge.BROAD, Gauge.DUAL}),
    Gauge.NARROW: frozenset({Gauge.NARROW, Gauge.DUAL}),
    Gauge.DUAL: frozenset({Gauge.DUAL}),
}

# (lane count, lane index) of an end carrying a single track
SINGLE_LANE: Tuple[int, int] = (1, 0)


@dataclass(frozen=True)
class HexGeometry:
    """
    Geometry of a hex tile.

    Edges are numbered 0..edges-1 going around the hex, so the edge facing
    edge ``e`` is ``(e + edges // 2) % edges``.

    Attributes:
        edges: Number of tile edges
    """

    edges: int = 6

    @property
    def opposite(self) -> int:
        return self.edges // 2

    def invert(self, edge: int) -> int:
        """
        Edge number on the neighboring hex that touches ``edge``.

        Args:
            edge: Edge number on this hex

        Returns:
            The facing edge number
        """
        return (edge + self.opposite) % self.edges

    def rotate(self, edge: int, ticks: int) -> int:
        return (edge + ticks) % self.edges


HEX = HexGeometry()

# Exit-number differences of a straight and of a gentle curve. The half steps
# appear when one end is a node drawn between two edges.
STRAIGHT_DIFFERENCE: float = 3
GENTLE_CURVE_DIFFERENCES: FrozenSet[float] = frozenset({2, 4, 2.5, 3.5})


def gauges_connect(first: Gauge, second: Gauge) -> bool:
    """Whether track of the two gauges can be joined (they share a gauge)."""
    return second in GAUGE_MATCHES[first] or first in GAUGE_MATCHES[second]
