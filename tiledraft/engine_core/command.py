"""
Command System - Player intents and their results.

Commands represent:
1. Movement intents (keyboard move, pointer move, tile selection)
2. Draft intents (choose an option, reroll)
3. Tile intents (claim an action, focus navigation)
4. Session intents (reset, save, load)

The API layer builds a Command per request and hands it to apply_command().
"""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum

from .geometry import Direction, Position
from .state import FocusMode, LogEntry


class CommandType(Enum):
    """Types of commands accepted by a session."""
    # Movement
    MOVE = "move"
    MOVE_TO_TILE = "move_to_tile"
    SELECT_TILE = "select_tile"

    # Drafting
    SELECT_DRAFT = "select_draft"
    REROLL = "reroll"

    # Tile actions
    CLAIM_ACTION = "claim_action"
    SET_FOCUS = "set_focus"
    FOCUS_ACTION = "focus_action"
    USE_FOCUSED_ACTION = "use_focused_action"

    # Session lifecycle
    RESET = "reset"
    SAVE = "save"
    LOAD = "load"


@dataclass
class Command:
    """
    One intent, with only the fields its type needs filled in.

    Validation of the fields against the current state happens when the
    command is applied, not here.
    """
    command_type: CommandType
    direction: Direction | None = None
    position: Position | None = None
    option_index: int | None = None
    template_id: str | None = None
    action_id: str | None = None
    focus_mode: FocusMode | None = None
    index: int | None = None

    @classmethod
    def move(cls, direction: Direction) -> Command:
        return cls(CommandType.MOVE, direction=direction)

    @classmethod
    def move_to_tile(cls, position: Position) -> Command:
        return cls(CommandType.MOVE_TO_TILE, position=position)

    @classmethod
    def select_tile(cls, position: Position) -> Command:
        return cls(CommandType.SELECT_TILE, position=position)

    @classmethod
    def select_draft(cls, option_index: int | None = None, template_id: str | None = None) -> Command:
        """Choose a draft option by index, or by template id."""
        return cls(CommandType.SELECT_DRAFT, option_index=option_index, template_id=template_id)

    @classmethod
    def reroll(cls) -> Command:
        return cls(CommandType.REROLL)

    @classmethod
    def claim_action(cls, action_id: str) -> Command:
        return cls(CommandType.CLAIM_ACTION, action_id=action_id)

    @classmethod
    def set_focus(cls, mode: FocusMode) -> Command:
        return cls(CommandType.SET_FOCUS, focus_mode=mode)

    @classmethod
    def focus_action(cls, index: int) -> Command:
        return cls(CommandType.FOCUS_ACTION, index=index)

    @classmethod
    def use_focused_action(cls) -> Command:
        return cls(CommandType.USE_FOCUSED_ACTION)

    @classmethod
    def reset(cls) -> Command:
        return cls(CommandType.RESET)

    @classmethod
    def save(cls) -> Command:
        return cls(CommandType.SAVE)

    @classmethod
    def load(cls) -> Command:
        return cls(CommandType.LOAD)


@dataclass
class CommandResult:
    """
    Result of applying a command.

    A rejected intent is not an error: `success` is False and `error`
    describes why, but the session is untouched. `messages` holds the
    player-facing log entries the command appended, which can include
    warnings on a rejected intent.
    """
    success: bool
    error: str | None = None
    error_code: str | None = None
    messages: list[LogEntry] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> CommandResult:
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def ok(cls, messages: list[LogEntry] | None = None) -> CommandResult:
        return cls(success=True, messages=messages or [])
