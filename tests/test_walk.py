"""Tests for walking the track network and selecting claimed paths."""

from dataclasses import dataclass

import pytest

from board import Board, Tile
from track.parts import City, Edge, Junction, Town
from track.path import Path
from track.walk import EnumerateAll, EnumerateChains, RestrictedTo, select, walk


def column(*tiles):
    """Lay tiles on hexes (0, 0), (0, 1), ... so edge 0 of each faces edge 3 of the next."""
    board = Board()
    placed = []
    for r, tile in enumerate(tiles):
        name = f"H{r}"
        board.add_hex(name, 0, r)
        placed.append(board.place(name, tile))
    return board, placed


def straight(**kwargs):
    return Tile("9", [Path(Edge(0), Edge(3), **kwargs)])


def city_tile(edge):
    return Tile("c", [Path(City(), Edge(edge))])


def reached(path, **kwargs):
    return [p for p, _ in walk(path, **kwargs)]


def test_walk_yields_origin_first_with_visited():
    _, (tile,) = column(straight())
    origin = tile.paths[0]
    ((path, visited),) = list(walk(origin))
    assert path is origin
    assert visited == frozenset({origin})


def test_single_lanes_on_adjacent_tiles_connect():
    _, (first, second) = column(straight(), straight())
    assert reached(first.paths[0]) == [first.paths[0], second.paths[0]]


def test_lane_count_mismatch_blocks_walk():
    _, (first, second) = column(straight(), straight(lanes=((2, 0), (2, 0))))
    assert reached(first.paths[0]) == [first.paths[0]]


def test_multi_lane_tiles_connect_mirrored_lanes():
    double = Tile("L2", Path.make_lanes(Edge(0), Edge(3), lanes=2))
    _, (first, second) = column(double, double)
    lane0, lane1 = first.paths
    # Lane 0 leaves through edge 0 as (2, 0) and meets the neighbor's lane entering as (2, 1)
    assert lane0.exit_lanes[0] == (2, 0)
    assert second.paths[0].exit_lanes[3] == (2, 1)
    assert reached(lane0) == [lane0, second.paths[0]]
    assert reached(lane1) == [lane1, second.paths[1]]


def test_gauge_mismatch_blocks_walk():
    _, (first, _) = column(straight(), straight(track="narrow"))
    assert reached(first.paths[0]) == [first.paths[0]]


def test_dual_gauge_joins_broad():
    _, (first, second) = column(straight(), straight(track="dual"))
    assert reached(first.paths[0]) == [first.paths[0], second.paths[0]]


def test_gauge_rule_is_symmetric_on_walks():
    _, (dual, narrow) = column(straight(track="dual"), straight(track="narrow"))
    assert not dual.paths[0].tracks_match("narrow")
    assert reached(dual.paths[0]) == [dual.paths[0], narrow.paths[0]]
    assert reached(narrow.paths[0]) == [narrow.paths[0], dual.paths[0]]


def test_skip_prevents_leaving_through_arrival_edge():
    _, (first, middle, last) = column(straight(), straight(), straight())
    assert reached(middle.paths[0], skip=3) == [middle.paths[0], last.paths[0]]
    assert reached(middle.paths[0], skip=0) == [middle.paths[0], first.paths[0]]


def test_walk_without_placement_stays_on_tile():
    tile = Tile("9", [Path(Edge(0), Edge(3))])
    assert reached(tile.paths[0]) == [tile.paths[0]]


def junction_tile():
    junction = Junction()
    return Tile("X", [Path(Edge(0), junction), Path(junction, Edge(2)), Path(junction, Edge(4))])


def test_junction_fans_out_to_other_paths():
    _, (tile,) = column(junction_tile())
    first, second, third = tile.paths
    assert reached(first) == [first, second, third]


def test_jskip_blocks_reentering_junction():
    _, (tile,) = column(junction_tile())
    first = tile.paths[0]
    assert reached(first, jskip=first.junction) == [first]


def test_loop_through_two_junctions_yields_origin_once():
    def looped():
        junction = Junction()
        return Tile("LJ", [
            Path(Edge(0), junction, lanes=((2, 0), (2, 0))),
            Path(Edge(0), junction, lanes=((2, 1), (2, 1))),
            Path(Edge(3), junction, lanes=((2, 0), (2, 0))),
            Path(Edge(3), junction, lanes=((2, 1), (2, 1))),
        ])

    _, (first, second) = column(looped(), looped())
    origin = first.paths[0]
    steps = reached(origin)

    assert steps.count(origin) == 1
    assert set(steps) >= {first.paths[0], first.paths[1], second.paths[2], second.paths[3]}


def test_visited_paths_are_not_entered():
    _, (first, second) = column(straight(), straight())
    assert reached(first.paths[0], visited=[second.paths[0]]) == [first.paths[0]]


def test_walk_is_lazy():
    _, tiles = column(*(straight() for _ in range(5)))
    steps = walk(tiles[0].paths[0])
    assert next(steps)[0] is tiles[0].paths[0]
    assert next(steps)[0] is tiles[1].paths[0]


def test_long_track_does_not_recurse():
    _, tiles = column(*(straight() for _ in range(1500)))
    assert len(reached(tiles[0].paths[0])) == 1500


def test_chain_through_connector_ends_at_city():
    _, (a, b, c) = column(city_tile(0), straight(), city_tile(3))
    chains = list(walk(a.paths[0], EnumerateChains()))
    assert chains == [(a.paths[0], b.paths[0], c.paths[0])]


def test_chain_of_one_needs_two_stops():
    tile = Tile("ct", [Path(City(), Town())])
    assert list(walk(tile.paths[0], EnumerateChains())) == [(tile.paths[0],)]

    lone = Tile("c", [Path(City(), Edge(0))])
    assert list(walk(lone.paths[0], EnumerateChains())) == []


def test_chain_with_prefix_stops_at_any_node():
    _, (a, b, c) = column(city_tile(0), straight(), city_tile(3))
    prefix = (a.paths[0],)
    chains = list(walk(b.paths[0], EnumerateChains(prefix), skip=3, visited=prefix))
    assert chains == [(a.paths[0], b.paths[0], c.paths[0])]


def test_restricted_walk_only_enters_candidates():
    _, (first, second, third) = column(straight(), straight(), straight())
    on = {first.paths[0]: False, third.paths[0]: False}
    assert reached(first.paths[0], mode=RestrictedTo(on)) == [first.paths[0]]

    on[second.paths[0]] = False
    assert reached(first.paths[0], mode=RestrictedTo(on)) == [p for tile in (first, second, third) for p in tile.paths]


def test_default_mode_is_enumerate_all():
    _, (first, second) = column(straight(), straight())
    assert reached(first.paths[0], mode=EnumerateAll()) == reached(first.paths[0])


def test_path_walk_delegates():
    _, (first, second) = column(straight(), straight())
    assert [p for p, _ in first.paths[0].walk()] == [first.paths[0], second.paths[0]]


def test_select_keeps_connected_claims():
    board, (a, b, c) = column(city_tile(0), straight(), city_tile(3))
    board.add_hex("Z", 5, 5)
    stray = board.place("Z", straight()).paths[0]

    claimed = [a.paths[0], b.paths[0], c.paths[0], stray]
    assert select(a.paths[0], claimed) == [a.paths[0], b.paths[0], c.paths[0]]
    assert a.paths[0].select([a.paths[0], c.paths[0]]) == [a.paths[0]]


def test_select_is_idempotent_and_a_subset():
    _, tiles = column(city_tile(0), straight(), straight(track="narrow"), city_tile(3))
    origin = tiles[0].paths[0]
    claimed = [p for tile in tiles for p in tile.paths]

    once = select(origin, claimed)
    assert set(once) <= set(claimed)
    assert select(origin, once) == once
    assert once == [tiles[0].paths[0], tiles[1].paths[0]]


def test_select_excludes_origin_not_claimed():
    _, (a, b) = column(straight(), straight())
    assert select(a.paths[0], [b.paths[0]]) == [b.paths[0]]


@dataclass(eq=False)
class FakeHex:
    name: str


class FakeAdjacency:
    """Two hexes joined across edge 0 / edge 3, without a Board."""

    def __init__(self, tiles):
        self.tiles = tiles
        self.links = {("h0", 0): "h1", ("h1", 3): "h0"}

    def neighbor(self, hex, edge):
        name = self.links.get((hex.name, edge))
        return self.tiles[name].hex if name else None

    def invert(self, edge):
        return (edge + 3) % 6

    def paths_entering(self, hex, edge):
        return self.tiles[hex.name].paths_at(edge)


def test_walk_with_injected_adjacency():
    tiles = {"h0": straight(), "h1": straight()}
    for name, tile in tiles.items():
        tile.hex = FakeHex(name)
    adjacency = FakeAdjacency(tiles)

    origin = tiles["h0"].paths[0]
    assert reached(origin, adjacency=adjacency) == [origin, tiles["h1"].paths[0]]
    assert select(origin, [tiles["h1"].paths[0]], adjacency=adjacency) == [tiles["h1"].paths[0]]


@pytest.mark.parametrize("mode", [EnumerateAll(), RestrictedTo(set())])
def test_origin_always_visited(mode):
    tile = Tile("t", [Path(Town(), Edge(0))])
    assert [p for p, _ in walk(tile.paths[0], mode)] == [tile.paths[0]]
