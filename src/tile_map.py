"""Map loading utilities: tile definitions (JSON) and hex layouts (CSV)."""
from __future__ import annotations

import argparse
import json
import logging
import re
from pathlib import Path as FilePath
from typing import Any, Dict, List, Optional

import pandas as pd

from board import Board, Tile
from track.errors import BoardLoadError, TrackLayoutError
from track.graph import build_track_graph
from track.parts import City, Edge, Junction, Node, Offboard, Part, Town
from track.path import Path
from track.routes import chain_hexes, reachable_paths, route_chains

logger = logging.getLogger(__name__)

# "0".."5" edge, "c0" city, "t1" town, "o0" offboard, "j" junction
PART_TOKEN = re.compile(r'^(?:(?P<edge>\d)|(?P<kind>[cto])(?P<index>\d+)|(?P<junction>j))$')

NODE_KINDS = {'c': ('cities', City), 't': ('towns', Town), 'o': ('offboards', Offboard)}

HEX_COLUMNS = ('Hex', 'Q', 'R')


def build_tile(name: str, definition: Dict[str, Any]) -> Tile:
    """
    Build a tile from its JSON definition.

    A city or town wired to more than one edge has no single preferred exit;
    give it a ``loc`` or its paths are classified neither straight nor curved.

    :param name: Tile name.
    :param definition: Mapping with 'paths' and optional 'cities', 'towns',
        'offboards', 'junction' and 'color'.
    :return: The tile in its printed orientation.
    :raises BoardLoadError: If a path refers to a part the tile does not have.
    """
    nodes: Dict[str, Node] = {}
    for prefix, (key, kind) in NODE_KINDS.items():
        for index, spec in enumerate(definition.get(key, [])):
            nodes[f"{prefix}{index}"] = kind(index=index, loc=(spec or {}).get('loc'))
    junction: Optional[Junction] = Junction() if definition.get('junction') else None
    edges: Dict[int, Edge] = {}

    def part_for(token: Any) -> Part:
        match = PART_TOKEN.match(str(token))
        if match is None:
            raise BoardLoadError(f"Tile {name}: bad part token {token!r}")
        if match.group('edge') is not None:
            num = int(match.group('edge'))
            return edges.setdefault(num, Edge(num))
        if match.group('junction') is not None:
            if junction is None:
                raise BoardLoadError(f"Tile {name}: path uses a junction the tile does not declare")
            return junction
        part = nodes.get(f"{match.group('kind')}{match.group('index')}")
        if part is None:
            raise BoardLoadError(f"Tile {name}: unknown stop {token!r}")
        return part

    paths: List[Path] = []
    for spec in definition.get('paths', []):
        try:
            paths.extend(Path.make_lanes(
                part_for(spec['a']),
                part_for(spec['b']),
                terminal=spec.get('terminal'),
                lanes=spec.get('lanes'),
                a_lane=spec.get('a_lane'),
                b_lane=spec.get('b_lane'),
                track=spec.get('track'),
            ))
        except KeyError as e:
            raise BoardLoadError(f"Tile {name}: path is missing end {e}") from e
        except TrackLayoutError as e:
            raise BoardLoadError(f"Tile {name}: {e}") from e

    return Tile(name, paths, color=definition.get('color', 'white'))


class TileMap:
    def __init__(self) -> None:
        """Initialize an empty map."""
        self.board = Board()
        self.tiles: Dict[str, Tile] = {}

    def load_tiles(self, tiles_file: str | FilePath) -> None:
        """
        Load tile definitions.

        :param tiles_file: JSON file mapping tile names to definitions.
        """
        with FilePath(tiles_file).open('r', encoding='utf-8') as f:
            definitions = json.load(f)
        if not isinstance(definitions, dict):
            raise BoardLoadError(f"{tiles_file}: expected an object of tile definitions")

        for name, definition in definitions.items():
            self.tiles[str(name)] = build_tile(str(name), definition)
        logger.debug("Loaded %d tile definitions from %s", len(definitions), tiles_file)

    def load_hexes(self, hexes_file: str | FilePath) -> None:
        """
        Load the hex layout and lay the listed tiles.

        :param hexes_file: CSV with columns Hex, Q, R and optional Tile, Rotation.
        :raises BoardLoadError: On missing columns or unknown tiles.
        """
        # All text, so tile names like '57' or '09' are kept as written
        hexes = pd.read_csv(hexes_file, dtype=str)
        missing = [column for column in HEX_COLUMNS if column not in hexes.columns]
        if missing:
            raise BoardLoadError(f"{hexes_file}: missing columns {', '.join(missing)}")

        placements = []
        for _, row in hexes.iterrows():
            try:
                self.board.add_hex(row['Hex'], int(row['Q']), int(row['R']))
            except (ValueError, TypeError) as e:
                raise BoardLoadError(f"{hexes_file}: bad hex row {row['Hex']}: {e}") from e
            tile_name = row.get('Tile')
            if tile_name is not None and not pd.isna(tile_name):
                rotation = row.get('Rotation')
                rotation = 0 if rotation is None or pd.isna(rotation) else int(rotation)
                placements.append((row['Hex'], str(tile_name), rotation))

        for hex_name, tile_name, rotation in placements:
            if tile_name not in self.tiles:
                raise BoardLoadError(f"Hex {hex_name}: unknown tile {tile_name}")
            self.board.place(hex_name, self.tiles[tile_name], rotation)

    def load_board(self, tiles_file: str | FilePath, hexes_file: str | FilePath) -> Board:
        self.load_tiles(tiles_file)
        self.load_hexes(hexes_file)
        return self.board

    def get_board(self) -> Board:
        return self.board


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Inspect the track network of a hex map")
    parser.add_argument("--tiles", default="map/tiles.json", help="Tile definitions (JSON)")
    parser.add_argument("--hexes", default="map/hexes.csv", help="Hex layout (CSV)")
    parser.add_argument("--hex", default=None, help="Hex to start walking from")
    parser.add_argument("--path", type=int, default=0, help="Index of the path on that hex")
    parser.add_argument("--chains", action="store_true", help="List chains from the path to stops")
    return parser.parse_args(argv)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)

    tile_map = TileMap()
    board = tile_map.load_board(args.tiles, args.hexes)
    graph = build_track_graph(board)

    print(f"Hexes: {len(board.hexes)}")
    print(f"Tiles laid: {len(board.tiles)}")
    print(f"Paths: {sum(1 for _ in board.paths())}")
    print(f"Stops: {graph.number_of_nodes()}")
    print(f"Stop connections: {graph.number_of_edges()}")

    if args.hex is None:
        return

    tile = board.hex_by_name(args.hex).tile
    if tile is None or args.path >= len(tile.paths):
        print(f"No path {args.path} on {args.hex}")
        return

    start = tile.paths[args.path]
    reached = reachable_paths(start)
    print(f"\nFrom {start!r}: {len(reached)} paths reachable")
    for path in reached:
        print(f"  {path!r}")

    if args.chains:
        print("\nChains:")
        for chain in route_chains(start):
            print(f"  {' -> '.join(chain_hexes(chain))} ({len(chain)} paths)")


if __name__ == "__main__":
    main()
