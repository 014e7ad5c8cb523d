from __future__ import annotations

from typing import Optional

from .corridors import carve_corridor
from .errors import GenerationError
from .geometry import Point, Rect, Size
from .partition import PartitionNode
from .rand import MersenneTwister

MIN_ROOM_EDGE = 3


def place_rooms(node: PartitionNode, rng: MersenneTwister) -> None:
    """Fill every leaf with a room (post-order) and connect sibling subtrees.

    Children are handled before their parent so that a parent can pick a
    representative room from each side and carve a corridor between them.
    """
    if node.left is not None:
        place_rooms(node.left, rng)
    if node.right is not None:
        place_rooms(node.right, rng)

    if node.is_leaf():
        node.room = _room_for_leaf(node, rng)
        return

    left_room = representative_room(node.left, rng)
    right_room = representative_room(node.right, rng)
    if left_room is not None and right_room is not None:
        node.corridors = carve_corridor(left_room, right_room, rng)


def _room_for_leaf(node: PartitionNode, rng: MersenneTwister) -> Rect:
    width, height = node.size
    if width < MIN_ROOM_EDGE + 2 or height < MIN_ROOM_EDGE + 2:
        raise GenerationError(f"{node!r} is too small to host an inset room")
    room_w = rng.range(MIN_ROOM_EDGE, width - 2)
    room_h = rng.range(MIN_ROOM_EDGE, height - 2)
    off_x = rng.range(1, width - room_w - 1)
    off_y = rng.range(1, height - room_h - 1)
    return Rect(Point(node.position.x + off_x, node.position.y + off_y), Size(room_w, room_h))


def representative_room(node: Optional[PartitionNode], rng: MersenneTwister) -> Optional[Rect]:
    """Room a subtree exposes to its parent; a coin flip decides between two sides."""
    if node is None:
        return None
    if node.is_leaf():
        return node.room
    left_room = representative_room(node.left, rng)
    right_room = representative_room(node.right, rng)
    if left_room is not None and right_room is not None:
        return left_room if rng.range(0, 1) == 1 else right_room
    return left_room if left_room is not None else right_room


__all__ = ["place_rooms", "representative_room", "MIN_ROOM_EDGE"]
