"""
Drafting - Random tile choices for unexplored cells.

Options are drawn uniformly at random with replacement from the deck, so
the same template can appear more than once in a single draft.
"""

from __future__ import annotations
import random
from typing import Sequence

from ..catalog.templates import TileTemplate


def draw_options(deck: Sequence[TileTemplate], rng: random.Random, count: int = 3) -> list[TileTemplate]:
    """Draw `count` independent uniform picks from `deck`."""
    if not deck:
        raise ValueError("Cannot draft from an empty deck")
    return [rng.choice(deck) for _ in range(count)]


def reroll_cost(reroll_number: int) -> int:
    """Energy cost of the Nth reroll (1-indexed) in one draft."""
    return reroll_number


def is_affordable(template: TileTemplate, workers: int) -> bool:
    return template.cost <= workers


def any_affordable(options: Sequence[TileTemplate], workers: int) -> bool:
    return any(is_affordable(option, workers) for option in options)
