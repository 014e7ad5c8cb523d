"""Tile map assembly.

Generation phases for one map (all randomness from one MersenneTwister):
    * Build a partition tree covering the whole map.
    * Place one inset room per leaf and carve corridors between sibling subtrees.
    * Walk the tree once, painting rooms and corridor segments as FLOOR.
    * Paint the border ring as WALL.
    * One wall inflation pass: every unpainted 8-neighbour of a painted tile
      becomes WALL (clipped to the map bounds).
    * Back-fill: coordinates the single pass could not reach become WALL.

Public contract:
    TileMap(MapConfig(...)) OR TileMap(seed=..., size=(W, H), min_room_size=(w, h), max_room_size=(w, h))
    Attributes: size, seed, tiles (read-only {Point: Tile}), min_room_size, max_room_size,
    rooms, corridors, metrics, config
    Rendering: '0' FLOOR, '1' WALL, 'x' unpainted; one line per row.
"""
from __future__ import annotations

import dataclasses
import time
from types import MappingProxyType
from typing import Dict, List, Mapping, Optional, Tuple

from ..logging_utils import get_logger
from .config import MapConfig
from .geometry import NEIGHBOURS_8, UNPAINTED, Point, Rect, Size, Tile
from .metrics import init_metrics
from .partition import PartitionNode, build
from .rand import MersenneTwister
from .rooms import place_rooms
from .traversal import NodeIterator

log = get_logger("bspmap.mapgen")


class TileMap:
    def __init__(
        self,
        config: MapConfig | None = None,
        *,
        seed: int | None = None,
        size: Tuple[int, int] | None = None,
        min_room_size: Tuple[int, int] | None = None,
        max_room_size: Tuple[int, int] | None = None,
    ):
        # Overrides land on a copy; the caller's config is never touched.
        overrides = {}
        if seed is not None:
            overrides["seed"] = seed
        if size is not None:
            overrides["width"], overrides["height"] = size[0], size[1]
        if min_room_size is not None:
            overrides["min_room_width"], overrides["min_room_height"] = min_room_size[0], min_room_size[1]
        if max_room_size is not None:
            overrides["max_room_width"], overrides["max_room_height"] = max_room_size[0], max_room_size[1]
        config = dataclasses.replace(config or MapConfig(), **overrides).validate().with_seed()
        self.config = config
        self.seed: int = config.seed
        self.size: Size = config.size
        self.min_room_size: Size = config.min_room_size
        self.max_room_size: Size = config.max_room_size
        self.metrics: Dict[str, int] = init_metrics()
        self.rooms: List[Rect] = []
        self.corridors: List[Rect] = []
        self._tiles: Dict[Point, Tile] = {}
        self._generate()
        self.tiles: Mapping[Point, Tile] = MappingProxyType(self._tiles)

    @property
    def width(self) -> int:
        return self.size.width

    @property
    def height(self) -> int:
        return self.size.height

    # ------------------------------------------------------------------
    # Generation Pipeline
    # ------------------------------------------------------------------
    def _generate(self):
        start = time.perf_counter()
        rng = MersenneTwister(self.seed)
        root = PartitionNode(Point(0, 0), self.size)
        build(root, rng, self.min_room_size, self.max_room_size)
        place_rooms(root, rng)
        self._paint_tree(root)
        self._paint_border()
        self._inflate_walls()
        self._backfill()
        self.metrics["tree_depth"] = root.depth()
        self.metrics["runtime_ms"] = int((time.perf_counter() - start) * 1000)
        self._collect_counts()
        if log.enabled("debug"):
            log.bind(seed=self.seed).debug(event="map_generated", width=self.width, height=self.height, **self.metrics)

    def _paint_tree(self, root: PartitionNode):
        for node in NodeIterator(root):
            self.metrics["nodes"] += 1
            if node.is_leaf():
                self.metrics["leaves"] += 1
                if node.room is not None:
                    self.rooms.append(node.room)
                    self._paint(node.room, Tile.FLOOR)
            for segment in node.corridors:
                self.corridors.append(segment)
                self._paint(segment, Tile.FLOOR)

    def _paint(self, area: Rect, tile: Tile):
        for cell in area.cells():
            self._tiles[cell] = tile

    def _paint_border(self):
        w, h = self.size
        for y in range(h):
            self._tiles[Point(0, y)] = Tile.WALL
            self._tiles[Point(w - 1, y)] = Tile.WALL
        for x in range(w):
            self._tiles[Point(x, 0)] = Tile.WALL
            self._tiles[Point(x, h - 1)] = Tile.WALL

    def _inflate_walls(self):
        # Single pass over a snapshot; newly added walls do not inflate further.
        w, h = self.size
        walls = set()
        for cell in list(self._tiles):
            for dx, dy in NEIGHBOURS_8:
                nx, ny = cell.x + dx, cell.y + dy
                if 0 <= nx < w and 0 <= ny < h:
                    neighbour = Point(nx, ny)
                    if neighbour not in self._tiles:
                        walls.add(neighbour)
        for cell in walls:
            self._tiles[cell] = Tile.WALL
        self.metrics["tiles_inflated"] = len(walls)

    def _backfill(self):
        filled = 0
        for y in range(self.height):
            for x in range(self.width):
                cell = Point(x, y)
                if cell not in self._tiles:
                    self._tiles[cell] = Tile.WALL
                    filled += 1
        self.metrics["tiles_backfilled"] = filled

    def _collect_counts(self):
        self.metrics["rooms"] = len(self.rooms)
        self.metrics["corridor_segments"] = len(self.corridors)
        floor = sum(1 for t in self._tiles.values() if t is Tile.FLOOR)
        self.metrics["tiles_floor"] = floor
        self.metrics["tiles_wall"] = len(self._tiles) - floor

    # ------------------------------------------------------------------
    # Read access
    # ------------------------------------------------------------------
    def get(self, x: int, y: int) -> Optional[Tile]:
        return self._tiles.get(Point(x, y))

    def rows(self) -> List[str]:
        return render_rows(self.tiles, self.size)

    def render(self) -> str:
        return "\n".join(self.rows())

    def __str__(self):
        return self.render()

    def __repr__(self):
        return f"<TileMap {self.width}x{self.height} seed={self.seed}>"


def render_rows(tiles: Mapping[Point, Tile], size: Size) -> List[str]:
    """One string per row; unpainted coordinates render as ``x``."""
    width, height = size
    rows = []
    for y in range(height):
        line = []
        for x in range(width):
            tile = tiles.get(Point(x, y))
            line.append(tile.value if tile is not None else UNPAINTED)
        rows.append("".join(line))
    return rows


__all__ = ["TileMap", "render_rows"]
