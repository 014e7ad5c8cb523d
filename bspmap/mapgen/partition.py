"""Binary space partition tree: node type, split rule and recursive build."""
from __future__ import annotations

from typing import List, Optional

from .geometry import Point, Rect, Size
from .rand import MersenneTwister

# Aspect ratio (percent) above which the long side is always cut
SPLIT_RATIO_PERCENT = 125


class PartitionNode:
    """A rectangular region of the map.

    Owns either no children or exactly two. Only leaves carry a room; only
    internal nodes carry corridor segments (set once both children resolved
    a representative room).
    """

    __slots__ = ("region", "left", "right", "room", "corridors")

    def __init__(self, position: Point, size: Size):
        self.region = Rect(position, size)
        self.left: Optional[PartitionNode] = None
        self.right: Optional[PartitionNode] = None
        self.room: Optional[Rect] = None
        self.corridors: List[Rect] = []

    @property
    def position(self) -> Point:
        return self.region.position

    @property
    def size(self) -> Size:
        return self.region.size

    def is_leaf(self) -> bool:
        return self.left is None and self.right is None

    def depth(self) -> int:
        if self.is_leaf():
            return 1
        return 1 + max(self.left.depth(), self.right.depth())

    def __repr__(self):
        kind = "leaf" if self.is_leaf() else "node"
        return f"<PartitionNode {kind} {tuple(self.position)} {tuple(self.size)}>"


def split(node: PartitionNode, rng: MersenneTwister, min_room: Size, max_room: Size) -> bool:
    """Split ``node`` in two. Returns False (node stays a leaf) when refused."""
    if not node.is_leaf():
        return False
    width, height = node.size
    if width > height and width * 100 // height >= SPLIT_RATIO_PERCENT:
        horizontal = False
    elif height > width and height * 100 // width >= SPLIT_RATIO_PERCENT:
        horizontal = True
    else:
        horizontal = rng.range(0, 1) == 1

    x, y = node.position
    if horizontal:
        offset = rng.range(min_room.height, max_room.height)
        if height - offset < min_room.height:
            return False
        node.left = PartitionNode(Point(x, y), Size(width, offset))
        node.right = PartitionNode(Point(x, y + offset), Size(width, height - offset))
    else:
        offset = rng.range(min_room.width, max_room.width)
        if width - offset < min_room.width:
            return False
        node.left = PartitionNode(Point(x, y), Size(offset, height))
        node.right = PartitionNode(Point(x + offset, y), Size(width - offset, height))
    return True


def build(node: PartitionNode, rng: MersenneTwister, min_room: Size, max_room: Size) -> PartitionNode:
    if node.is_leaf() and split(node, rng, min_room, max_room):
        build(node.left, rng, min_room, max_room)
        build(node.right, rng, min_room, max_room)
    return node


__all__ = ["PartitionNode", "split", "build", "SPLIT_RATIO_PERCENT"]
