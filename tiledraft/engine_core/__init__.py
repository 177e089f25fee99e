"""
Engine Core - Deterministic single-player tile exploration.

The engine is the runtime that:
1. Owns the grid, resources and ledgers (GameState)
2. Validates and applies player intents (GameSession)
3. Draws and resolves tile drafts
4. Resolves action costs, quests and passive abilities
5. Scores the grid and decides win/loss
"""

from .geometry import Direction, Position, adjacent_position, direction_between, is_adjacent
from .rotation import door_facing, rotate_doors, rotation_for_entry
from .state import (
    FocusMode,
    GameResources,
    GameState,
    GameStatus,
    GridIndexError,
    LogEntry,
    MessageKind,
    PendingDraft,
    PlacedTile,
)
from .scoring import base_victory_points, color_counts
from .effect_resolver import EffectResolver
from .session import ActionUsage, GameSession, QuestProgress
from .command import Command, CommandResult, CommandType
from .reducer import Reducer, apply_command

__all__ = [
    "Direction",
    "Position",
    "adjacent_position",
    "direction_between",
    "is_adjacent",
    "door_facing",
    "rotate_doors",
    "rotation_for_entry",
    "FocusMode",
    "GameResources",
    "GameState",
    "GameStatus",
    "GridIndexError",
    "LogEntry",
    "MessageKind",
    "PendingDraft",
    "PlacedTile",
    "base_victory_points",
    "color_counts",
    "EffectResolver",
    "ActionUsage",
    "GameSession",
    "QuestProgress",
    "Command",
    "CommandResult",
    "CommandType",
    "Reducer",
    "apply_command",
]
