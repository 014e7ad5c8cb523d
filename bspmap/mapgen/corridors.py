"""Corridor carving between two rooms.

A corridor runs between one interior point of each room (never on a room's
outer ring). Segments are 1 tile wide. Each segment starts on the tile it
leaves from and stops one tile short of the tile it heads for, so a horizontal
segment spans ``|dx|`` tiles and a vertical one ``|dy|`` tiles; the end point
itself is room floor, which closes the path.

All eight sign/elbow branches consume the same draws in the same order.
"""
from __future__ import annotations

from typing import List

from .geometry import Point, Rect, rect
from .rand import MersenneTwister


def interior_point(room: Rect, rng: MersenneTwister) -> Point:
    x = rng.range(room.x + 1, room.x2 - 2)
    y = rng.range(room.y + 1, room.y2 - 2)
    return Point(x, y)


def carve_corridor(room_a: Rect, room_b: Rect, rng: MersenneTwister) -> List[Rect]:
    """Return the segments connecting ``room_a`` to ``room_b`` (empty if the points coincide)."""
    start = interior_point(room_a, rng)
    end = interior_point(room_b, rng)
    x1, y1 = start
    x2, y2 = end
    dx = x2 - x1
    dy = y2 - y1

    if dx == 0 and dy == 0:
        return []
    if dy == 0:
        if dx > 0:
            return [rect(x1, y1, dx, 1)]
        return [rect(x2 + 1, y1, -dx, 1)]
    if dx == 0:
        if dy > 0:
            return [rect(x1, y1, 1, dy)]
        return [rect(x1, y2 + 1, 1, -dy)]

    # True: run along x first and turn at the end point's column
    bend_near_end = rng.range(0, 1) == 1

    if dx > 0 and dy > 0:
        if bend_near_end:
            return [rect(x1, y1, dx, 1), rect(x2, y1, 1, dy)]
        return [rect(x1, y1, 1, dy), rect(x1, y2, dx, 1)]
    if dx > 0 and dy < 0:
        if bend_near_end:
            return [rect(x1, y1, dx, 1), rect(x2, y2 + 1, 1, -dy)]
        return [rect(x1, y2 + 1, 1, -dy), rect(x1, y2, dx, 1)]
    if dx < 0 and dy > 0:
        if bend_near_end:
            return [rect(x2 + 1, y1, -dx, 1), rect(x2, y1, 1, dy)]
        return [rect(x1, y1, 1, dy), rect(x2 + 1, y2, -dx, 1)]
    # dx < 0 and dy < 0
    if bend_near_end:
        return [rect(x2 + 1, y1, -dx, 1), rect(x2, y2 + 1, 1, -dy)]
    return [rect(x1, y2 + 1, 1, -dy), rect(x2 + 1, y2, -dx, 1)]


__all__ = ["carve_corridor", "interior_point"]
