"""Stop-to-stop graph of a board's track, for connectivity queries."""
from __future__ import annotations

from typing import TYPE_CHECKING, Iterable, Tuple

import networkx as nx

from track.parts import Part
from track.path import Path
from track.routes import chain_hexes, route_chains

if TYPE_CHECKING:
    from board import Board

# (hex name, stop kind, stop index)
StopKey = Tuple[str, str, int]


def stop_key(path: Path, stop: Part) -> StopKey:
    hex_name = path.hex.name if path.hex is not None else ''
    return hex_name, type(stop).__name__.lower(), getattr(stop, 'index', 0)


def build_track_graph(board: Board) -> nx.MultiGraph:
    """
    Build a MultiGraph whose nodes are the stops on the board and whose edges
    are the chains of track joining them.

    Each edge carries ``length`` (number of paths in the chain) and ``hexes``
    (hexes the chain runs through). A chain found from both of its ends is
    added once.
    """
    graph = nx.MultiGraph()

    for path in board.paths():
        for stop in path.stops:
            graph.add_node(stop_key(path, stop), hex=path.hex.name if path.hex else None,
                           kind=type(stop).__name__.lower())

    for path in board.paths():
        if not path.nodes:
            continue
        for chain in route_chains(path):
            _add_chain(graph, chain)

    return graph


def _add_chain(graph: nx.MultiGraph, chain: Tuple[Path, ...]) -> None:
    first, last = chain[0], chain[-1]
    key = frozenset(id(path) for path in chain)

    if len(chain) == 1:
        ends = [(first, first.nodes[0]), (first, first.nodes[1])]
    else:
        start = first.nodes[0]
        ends = [(first, start)] + [(last, node) for node in last.nodes if node is not start][:1]
        if len(ends) < 2:
            return

    (path_u, u), (path_v, v) = ends
    graph.add_edge(stop_key(path_u, u), stop_key(path_v, v), key=key,
                   length=len(chain), hexes=chain_hexes(chain))


def stops_connected(graph: nx.MultiGraph, source_hex: str, target_hex: str) -> bool:
    """
    Check whether any stop on one hex is joined by track to any stop on another.

    :param graph: Graph from build_track_graph.
    :param source_hex: Name of the first hex.
    :param target_hex: Name of the second hex.
    :return: True if a connecting route exists.
    """
    sources = _stops_on(graph, source_hex)
    targets = _stops_on(graph, target_hex)
    return any(nx.has_path(graph, s, t) for s in sources for t in targets)


def _stops_on(graph: nx.MultiGraph, hex_name: str) -> Iterable[StopKey]:
    return [node for node, data in graph.nodes(data=True) if data.get('hex') == hex_name]
