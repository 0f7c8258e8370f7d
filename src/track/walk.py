"""
Traversal of the track network.

``walk`` explores every path reachable from an origin path, crossing tile
edges where the facing lanes line up and splicing through junctions. It runs
on an explicit work stack, so the depth of the network does not touch the
interpreter's recursion limit, and it is a generator: the caller decides how
much of the walk to drain.

Three modes share the same exploration:

- EnumerateAll: yield ``(path, visited)`` for every step.
- EnumerateChains: yield each chain of paths, ending at a stop, that starts
  at the origin.
- RestrictedTo: like EnumerateAll, but only step into paths of a fixed
  candidate collection.

``visited`` holds the paths on the way from the origin to the current step,
so a walk never loops back onto its own trail, while independent branches may
still reach the same path.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import (
    TYPE_CHECKING,
    Any,
    Collection,
    FrozenSet,
    Iterable,
    Iterator,
    List,
    Optional,
    Protocol,
    Sequence,
    Tuple,
    Union,
)

from track.constants import gauges_connect
from track.lanes import lane_match

if TYPE_CHECKING:
    from track.parts import Junction
    from track.path import Path

logger = logging.getLogger(__name__)

Chain = Tuple["Path", ...]


class Adjacency(Protocol):
    """Read-only view of which hexes touch and which paths enter them."""

    def neighbor(self, hex: Any, edge: int) -> Optional[Any]: ...

    def invert(self, edge: int) -> int: ...

    def paths_entering(self, hex: Any, edge: int) -> Sequence[Path]: ...


@dataclass(frozen=True)
class EnumerateAll:
    def admits(self, path: Path) -> bool:
        return True

    def visit(self, chain: Chain, path: Path, visited: FrozenSet[Path]) -> Optional[Any]:
        return path, visited


@dataclass(frozen=True)
class EnumerateChains:
    """
    Yield chains of paths anchored at the origin.

    A chain is reported when its last path holds a stop. The origin alone is
    reported only when both of its ends are stops.

    Attributes:
        chain: Paths already on the chain before the origin
    """

    chain: Chain = ()

    def admits(self, path: Path) -> bool:
        return True

    def visit(self, chain: Chain, path: Path, visited: FrozenSet[Path]) -> Optional[Any]:
        stop = len(path.nodes) == 2 if not chain else bool(path.nodes)
        return chain + (path,) if stop else None


@dataclass(frozen=True)
class RestrictedTo:
    """
    Only step into paths contained in ``on``.

    ``on`` may be any collection; for a mapping, its keys are the candidates.
    The origin is always visited.
    """

    on: Collection[Path]

    def admits(self, path: Path) -> bool:
        return path in self.on

    def visit(self, chain: Chain, path: Path, visited: FrozenSet[Path]) -> Optional[Any]:
        return path, visited


WalkMode = Union[EnumerateAll, EnumerateChains, RestrictedTo]


@dataclass(frozen=True)
class _Step:
    path: Path
    skip: Optional[int]
    jskip: Optional[Junction]
    visited: FrozenSet[Path]
    chain: Chain


def walk(
    origin: Path,
    mode: Optional[WalkMode] = None,
    skip: Optional[int] = None,
    jskip: Optional[Junction] = None,
    visited: Optional[Iterable[Path]] = None,
    adjacency: Optional[Adjacency] = None,
) -> Iterator[Any]:
    """
    Explore the track network depth first from ``origin``.

    Track only joins track it shares a gauge with, in either direction, so
    dual meets broad and narrow here even though ``Path.tracks_match`` is
    directional.

    Args:
        origin: Path to start from
        mode: EnumerateAll (default), EnumerateChains or RestrictedTo
        skip: Edge number of ``origin`` the walk arrived through; not left again
        jskip: Junction the walk arrived through; not re-entered
        visited: Paths already on the trail; never stepped into
        adjacency: Hex lookup, defaults to the board of the origin's hex

    Yields:
        ``(path, visited)`` pairs, or chains in EnumerateChains mode
    """
    mode = mode if mode is not None else EnumerateAll()
    chain: Chain = mode.chain if isinstance(mode, EnumerateChains) else ()
    stack: List[_Step] = [_Step(origin, skip, jskip, frozenset(visited or ()), chain)]

    while stack:
        step = stack.pop()
        path = step.path
        if path in step.visited:
            continue

        trail = step.visited | {path}
        result = mode.visit(step.chain, path, trail)
        if result is not None:
            yield result

        extended = step.chain + (path,)
        following = [
            _Step(next_path, next_skip, next_jskip, trail, extended)
            for next_path, next_skip, next_jskip in _fan_out(path, step, mode, adjacency)
        ]
        # Reversed so the first neighbor is explored first
        stack.extend(reversed(following))


def _fan_out(
    path: Path,
    step: _Step,
    mode: WalkMode,
    adjacency: Optional[Adjacency],
) -> Iterator[Tuple[Path, Optional[int], Optional[Junction]]]:
    junction = path.junction
    if junction is not None and junction is not step.jskip:
        for other in junction.paths:
            if not mode.admits(other):
                continue
            if not gauges_connect(path.track, other.track):
                continue
            yield other, None, junction

    hex_ = path.hex
    if hex_ is None:
        return
    lookup = adjacency if adjacency is not None else hex_.board
    if lookup is None:
        return

    for edge in path.exits:
        if edge == step.skip:
            continue
        neighbor = lookup.neighbor(hex_, edge)
        if neighbor is None:
            continue

        facing_edge = lookup.invert(edge)
        for other in lookup.paths_entering(neighbor, facing_edge):
            if not mode.admits(other):
                continue
            if not lane_match(path.exit_lanes.get(edge), other.exit_lanes.get(facing_edge)):
                continue
            if not gauges_connect(path.track, other.track):
                continue
            yield other, facing_edge, None


def select(origin: Path, paths: Iterable[Path], adjacency: Optional[Adjacency] = None) -> List[Path]:
    """
    Keep the claimed paths that are actually joined to ``origin``.

    Args:
        origin: Path the claimed route starts from
        paths: Paths the route claims to use
        adjacency: Hex lookup, defaults to the board of the origin's hex

    Returns:
        The reachable claimed paths, in their original order
    """
    confirmed = {path: False for path in paths}
    for path, _ in walk(origin, RestrictedTo(confirmed), adjacency=adjacency):
        if path in confirmed:
            confirmed[path] = True

    selected = [path for path, hit in confirmed.items() if hit]
    logger.debug("Selected %d of %d claimed paths from %r", len(selected), len(confirmed), origin)
    return selected
