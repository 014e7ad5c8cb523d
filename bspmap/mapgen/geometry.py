"""Grid geometry primitives shared by every generation phase."""
from __future__ import annotations

from enum import Enum
from typing import Iterator, NamedTuple, Tuple


class Tile(Enum):
    FLOOR = "0"
    WALL = "1"


# Render code for a coordinate that was never painted
UNPAINTED = "x"


class Point(NamedTuple):
    x: int
    y: int


class Size(NamedTuple):
    width: int
    height: int


class Rect(NamedTuple):
    """Axis-aligned rectangle used for partition regions, rooms and corridor segments."""

    position: Point
    size: Size

    @property
    def x(self) -> int:
        return self.position.x

    @property
    def y(self) -> int:
        return self.position.y

    @property
    def width(self) -> int:
        return self.size.width

    @property
    def height(self) -> int:
        return self.size.height

    @property
    def x2(self) -> int:
        return self.position.x + self.size.width

    @property
    def y2(self) -> int:
        return self.position.y + self.size.height

    def intersects(self, other: "Rect") -> bool:
        x_overlap = self.x2 > other.x and other.x2 > self.x
        y_overlap = self.y2 > other.y and other.y2 > self.y
        return x_overlap and y_overlap

    def contains(self, other: "Rect") -> bool:
        return self.x <= other.x and self.y <= other.y and other.x2 <= self.x2 and other.y2 <= self.y2

    def cells(self) -> Iterator[Point]:
        for ix in range(self.x, self.x2):
            for iy in range(self.y, self.y2):
                yield Point(ix, iy)

    def as_dict(self):
        return {"x": self.x, "y": self.y, "width": self.width, "height": self.height}


def rect(x: int, y: int, width: int, height: int) -> Rect:
    return Rect(Point(x, y), Size(width, height))


NEIGHBOURS_8: Tuple[Tuple[int, int], ...] = (
    (1, 0),
    (1, 1),
    (0, 1),
    (-1, 1),
    (-1, 0),
    (-1, -1),
    (0, -1),
    (1, -1),
)

__all__ = ["Tile", "UNPAINTED", "Point", "Size", "Rect", "rect", "NEIGHBOURS_8"]
