"""
Door Rotation - Orientation of placed tiles.

Templates define doors in their own orientation. A placed tile carries a
rotation (0, 90, 180 or 270 degrees clockwise) that is applied to the
template doors to find the real passable edges.

One 90 degree clockwise step moves every face one place around:
the new North face shows what was on the West face, East shows old
North, South shows old East and West shows old South.
"""

from __future__ import annotations

from ..catalog.templates import Doors
from .geometry import Direction


VALID_ROTATIONS = (0, 90, 180, 270)

# Rotation that turns the template South door to face back along the path
# the player walked in on, keyed by the direction of travel.
_ENTRY_ROTATIONS = {
    Direction.N: 0,
    Direction.E: 90,
    Direction.S: 180,
    Direction.W: 270,
}


def rotate_doors(doors: Doors, rotation: int) -> Doors:
    """Rotate door flags clockwise by `rotation` degrees (multiple of 90)."""
    if rotation % 90 != 0:
        raise ValueError(f"Rotation must be a multiple of 90, got {rotation}")
    result = doors
    for _ in range((rotation // 90) % 4):
        result = Doors(n=result.w, e=result.n, s=result.e, w=result.s)
    return result


def rotation_for_entry(direction: Direction) -> int:
    """
    Rotation for a tile placed by walking in `direction`.

    The tile's template South door ends up facing direction.opposite,
    i.e. toward the cell the player came from.
    """
    return _ENTRY_ROTATIONS[direction]


def door_facing(doors: Doors, rotation: int, direction: Direction) -> bool:
    """Is there a door on the `direction` edge once `rotation` is applied?"""
    return rotate_doors(doors, rotation).get(direction)
