from __future__ import annotations

from enum import Enum
from typing import Tuple


Position = Tuple[int, int]


class Orientation(Enum):
    """Compass heading of the rover.

    Members are declared in clockwise order, so turning right advances one
    step in declaration order and turning left retreats one step (mod 4).
    """

    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    def rotate_right(self) -> "Orientation":
        return Orientation((self.value + 1) % 4)

    def rotate_left(self) -> "Orientation":
        return Orientation((self.value + 3) % 4)

    def displacement(self) -> Position:
        """Unit (dx, dy) applied by a forward move."""
        return _DISPLACEMENTS[self.value]

    @classmethod
    def parse(cls, name: str) -> "Orientation":
        """Parse a heading name such as ``"north"`` or a single letter ``"N"``."""
        key = str(name).strip().upper()
        for member in cls:
            if key == member.name or key == member.name[0]:
                return member
        raise ValueError(f"Unknown orientation: {name!r}")

    def __str__(self) -> str:
        return self.name


# Indexed by Orientation.value.
_DISPLACEMENTS: Tuple[Position, ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))
