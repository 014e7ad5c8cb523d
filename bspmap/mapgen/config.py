import random
from dataclasses import dataclass, replace
from typing import Optional

from .errors import MapConfigError
from .geometry import Size

MIN_MAP_SIZE = 20
MIN_ROOM_BOUND = 6
SEED_LIMIT = 2**32


@dataclass
class MapConfig:
    width: int = 40
    height: int = 40
    seed: Optional[int] = None
    min_room_width: int = 6
    min_room_height: int = 6
    max_room_width: int = 10
    max_room_height: int = 10

    @property
    def size(self) -> Size:
        return Size(self.width, self.height)

    @property
    def min_room_size(self) -> Size:
        return Size(self.min_room_width, self.min_room_height)

    @property
    def max_room_size(self) -> Size:
        return Size(self.max_room_width, self.max_room_height)

    def key(self):
        return (
            self.seed,
            self.width,
            self.height,
            self.min_room_width,
            self.min_room_height,
            self.max_room_width,
            self.max_room_height,
        )

    def with_seed(self) -> "MapConfig":
        """Copy with a concrete seed, drawn at random when unset."""
        if self.seed is not None:
            return self
        return replace(self, seed=random.randint(0, SEED_LIMIT - 1))

    def validate(self) -> "MapConfig":
        """Check every parameter rule, raising MapConfigError on the first violation."""
        if self.width < MIN_MAP_SIZE or self.height < MIN_MAP_SIZE:
            raise MapConfigError(
                "size",
                f"Map size must be at least {MIN_MAP_SIZE}x{MIN_MAP_SIZE} (got {self.width}x{self.height}).",
            )
        if self.min_room_width < MIN_ROOM_BOUND or self.min_room_height < MIN_ROOM_BOUND:
            raise MapConfigError(
                "min_room",
                f"Minimum room size must be at least {MIN_ROOM_BOUND}x{MIN_ROOM_BOUND} "
                f"(got {self.min_room_width}x{self.min_room_height}).",
            )
        if self.min_room_width >= self.max_room_width:
            raise MapConfigError("min_room", "Minimum room width must be less than maximum room width.")
        if self.min_room_height >= self.max_room_height:
            raise MapConfigError("min_room", "Minimum room height must be less than maximum room height.")
        if self.max_room_width >= self.width:
            raise MapConfigError("max_room", "Maximum room width must be less than map width.")
        if self.max_room_height >= self.height:
            raise MapConfigError("max_room", "Maximum room height must be less than map height.")
        if self.seed is not None and not (0 <= self.seed < SEED_LIMIT):
            raise MapConfigError("seed", f"Seed must be an unsigned 32-bit integer (got {self.seed}).")
        return self


__all__ = ["MapConfig", "MIN_MAP_SIZE", "MIN_ROOM_BOUND", "SEED_LIMIT"]
