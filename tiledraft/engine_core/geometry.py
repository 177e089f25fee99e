"""
Grid Geometry - Positions, directions and adjacency.

Coordinates: x grows East, y grows South. (0, 0) is the top-left cell.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class Direction(Enum):
    """Cardinal directions."""
    N = "N"
    E = "E"
    S = "S"
    W = "W"

    @property
    def opposite(self) -> Direction:
        return _OPPOSITES[self]

    @property
    def offset(self) -> tuple[int, int]:
        return _OFFSETS[self]


_OPPOSITES = {
    Direction.N: Direction.S,
    Direction.S: Direction.N,
    Direction.E: Direction.W,
    Direction.W: Direction.E,
}

_OFFSETS = {
    Direction.N: (0, -1),
    Direction.S: (0, 1),
    Direction.E: (1, 0),
    Direction.W: (-1, 0),
}


@dataclass(frozen=True)
class Position:
    """A grid cell. Equality and hashing by value."""
    x: int
    y: int

    def __str__(self) -> str:
        return f"({self.x}, {self.y})"


def in_bounds(pos: Position, width: int, height: int) -> bool:
    return 0 <= pos.x < width and 0 <= pos.y < height


def adjacent_position(pos: Position, direction: Direction, width: int, height: int) -> Position | None:
    """Neighbor of `pos` in `direction`, or None if it falls off the grid."""
    dx, dy = direction.offset
    target = Position(pos.x + dx, pos.y + dy)
    if not in_bounds(target, width, height):
        return None
    return target


def direction_between(a: Position, b: Position) -> Direction | None:
    """Direction from a to b if they are orthogonal neighbors, else None."""
    dx = b.x - a.x
    dy = b.y - a.y
    if abs(dx) + abs(dy) != 1:
        return None
    for direction, offset in _OFFSETS.items():
        if offset == (dx, dy):
            return direction
    return None


def is_adjacent(a: Position, b: Position) -> bool:
    return abs(a.x - b.x) + abs(a.y - b.y) == 1
