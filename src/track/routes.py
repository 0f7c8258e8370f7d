"""
Route utilities built on the track walk.

These helpers answer the questions route checks ask of a tile layout: is a
claimed set of paths one connected piece of track, which paths can be reached
from a path, and which chains of paths run from a path to a stop.
"""
from __future__ import annotations

from typing import Iterable, List, Optional, Sequence

from track.parts import Junction, Part
from track.path import Path
from track.walk import Adjacency, Chain, EnumerateChains, select


def is_contiguous(paths: Sequence[Path], adjacency: Optional[Adjacency] = None) -> bool:
    """
    Check whether claimed paths form one connected piece of track.

    The walk starts from the first claimed path and may only use claimed paths,
    so the order of the rest does not matter.

    Args:
        paths: Paths a route claims to use
        adjacency: Hex lookup, defaults to the board of the first path

    Returns:
        True if every claimed path is reached; False for an empty claim
    """
    if not paths:
        return False
    claimed = list(dict.fromkeys(paths))
    return len(select(claimed[0], claimed, adjacency=adjacency)) == len(claimed)


def reachable_paths(
    path: Path,
    skip: Optional[int] = None,
    jskip: Optional[Junction] = None,
    adjacency: Optional[Adjacency] = None,
) -> List[Path]:
    """
    List every path joined to ``path``, each once, in walk order.

    Args:
        path: Path to start from
        skip: Edge of ``path`` not to leave through
        jskip: Junction not to pass through from ``path``
        adjacency: Hex lookup, defaults to the board of ``path``

    Returns:
        Reachable paths, starting with ``path`` itself
    """
    seen: List[Path] = []
    found = set()
    for reached, _ in path.walk(skip=skip, jskip=jskip, adjacency=adjacency):
        if reached not in found:
            found.add(reached)
            seen.append(reached)
    return seen


def route_chains(path: Path, adjacency: Optional[Adjacency] = None) -> List[Chain]:
    """Every chain of paths from ``path`` that ends at a stop."""
    return list(path.walk(EnumerateChains(), adjacency=adjacency))


def chain_stops(chain: Iterable[Path]) -> List[Part]:
    """Stops along a chain, each once, in the order they are met."""
    stops: List[Part] = []
    for path in chain:
        for stop in path.stops:
            if stop not in stops:
                stops.append(stop)
    return stops


def chain_hexes(chain: Iterable[Path]) -> List[str]:
    """Names of the hexes a chain runs through, consecutive repeats removed."""
    names: List[str] = []
    for path in chain:
        hex_ = path.hex
        if hex_ is not None and (not names or names[-1] != hex_.name):
            names.append(hex_.name)
    return names
