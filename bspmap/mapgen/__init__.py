"""Public map generation package interface."""

from .config import MapConfig  # noqa: F401
from .errors import GenerationError, MapConfigError  # noqa: F401
from .geometry import UNPAINTED, Point, Rect, Size, Tile  # noqa: F401
from .rand import MersenneTwister  # noqa: F401
from .tilemap import TileMap, render_rows  # noqa: F401

FLOOR = Tile.FLOOR
WALL = Tile.WALL

__all__ = [
    "TileMap",
    "MapConfig",
    "MapConfigError",
    "GenerationError",
    "MersenneTwister",
    "Point",
    "Size",
    "Rect",
    "Tile",
    "FLOOR",
    "WALL",
    "UNPAINTED",
    "render_rows",
]
