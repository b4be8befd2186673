"""Grid coordinates used by the planner."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from math import hypot


class Direction(str, Enum):
    NORTH = "NORTH"
    NORTHEAST = "NORTHEAST"
    EAST = "EAST"
    SOUTHEAST = "SOUTHEAST"
    SOUTH = "SOUTH"
    SOUTHWEST = "SOUTHWEST"
    WEST = "WEST"
    NORTHWEST = "NORTHWEST"


# Indexed by (dy + 1, dx + 1); y grows southward like the simulation grid.
_DIRECTIONS: tuple[tuple[Direction | None, ...], ...] = (
    (Direction.NORTHWEST, Direction.NORTH, Direction.NORTHEAST),
    (Direction.WEST, None, Direction.EAST),
    (Direction.SOUTHWEST, Direction.SOUTH, Direction.SOUTHEAST),
)


@dataclass(frozen=True)
class Position:
    x: int
    y: int

    def distance_to(self, other: Position) -> float:
        return hypot(other.x - self.x, other.y - self.y)

    def direction_to(self, other: Position) -> Direction | None:
        """Compass direction to an adjacent cell, or None if not adjacent."""
        dx = other.x - self.x
        dy = other.y - self.y
        if abs(dx) > 1 or abs(dy) > 1:
            return None
        return _DIRECTIONS[dy + 1][dx + 1]

    def as_tuple(self) -> tuple[int, int]:
        return (self.x, self.y)

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"
