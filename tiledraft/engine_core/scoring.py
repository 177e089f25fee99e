"""
Scoring - Static victory points from the grid.

Recomputed on demand. Per-color rules count tiles across the whole grid
at evaluation time, so placing an orange tile raises the value of every
"VP per orange" tile already on the board.

Passive and quest VP are not derivable from the grid; the session adds
its passive-VP accumulator on top of this.
"""

from __future__ import annotations
from collections import Counter
from typing import Iterable

from ..catalog.templates import TileColor
from .state import PlacedTile


def color_counts(tiles: Iterable[PlacedTile]) -> Counter[TileColor]:
    """Count placed non-starter tiles by color."""
    return Counter(
        tile.template.color for tile in tiles if not tile.template.is_starter
    )


def base_victory_points(tiles: Iterable[PlacedTile]) -> int:
    """Flat VP plus per-color VP for every placed non-starter tile."""
    tiles = list(tiles)
    counts = color_counts(tiles)
    total = 0
    for tile in tiles:
        template = tile.template
        if template.is_starter or template.vp_logic is None:
            continue
        total += template.vp_logic.flat
        for color, vp_per_tile in template.vp_logic.per_color.items():
            total += counts[color] * vp_per_tile
    return total
