"""Structural checks over a finished TileMap (diagnostics and tests)."""
from __future__ import annotations

from collections import deque
from typing import Dict, List, Set

from .geometry import Point, Tile


def border_breaches(tilemap) -> List[Point]:
    w, h = tilemap.size
    ring = [Point(x, y) for x in range(w) for y in (0, h - 1)]
    ring += [Point(x, y) for y in range(h) for x in (0, w - 1)]
    return sorted({p for p in ring if tilemap.tiles.get(p) is not Tile.WALL})


def unpainted(tilemap) -> List[Point]:
    w, h = tilemap.size
    return [Point(x, y) for y in range(h) for x in range(w) if Point(x, y) not in tilemap.tiles]


def reachable_floor(tilemap, start: Point) -> Set[Point]:
    """Orthogonally connected FLOOR tiles reachable from ``start``."""
    tiles = tilemap.tiles
    if tiles.get(start) is not Tile.FLOOR:
        return set()
    seen = {start}
    queue = deque([start])
    while queue:
        x, y = queue.popleft()
        for dx, dy in ((1, 0), (-1, 0), (0, 1), (0, -1)):
            nxt = Point(x + dx, y + dy)
            if nxt not in seen and tiles.get(nxt) is Tile.FLOOR:
                seen.add(nxt)
                queue.append(nxt)
    return seen


def unreachable_rooms(tilemap) -> List[int]:
    """Indices of rooms not connected by floor to the first room."""
    if not tilemap.rooms:
        return []
    reach = reachable_floor(tilemap, tilemap.rooms[0].position)
    return [i for i, room in enumerate(tilemap.rooms) if room.position not in reach]


def analyze(tilemap) -> Dict[str, object]:
    return {
        "border_breaches": border_breaches(tilemap),
        "unpainted": unpainted(tilemap),
        "unreachable_rooms": unreachable_rooms(tilemap),
    }


__all__ = ["analyze", "border_breaches", "unpainted", "reachable_floor", "unreachable_rooms"]
