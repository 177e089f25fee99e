"""
Reducer - Applies commands to a game session.

The reducer is the single dispatch point for the outer layers.
Every command from the API goes through apply_command().

Design principles:
- Validates command fields before dispatch (shape, not game rules)
- Game rules stay in GameSession; a rejected intent is success=False
- Returns CommandResult with the log entries the command produced
"""

from __future__ import annotations
from dataclasses import dataclass
import logging
from typing import Callable

from .command import Command, CommandResult, CommandType
from .session import GameSession

logger = logging.getLogger(__name__)


# Error codes
INVALID_COMMAND = "INVALID_COMMAND"
GAME_OVER = "GAME_OVER"
REJECTED = "REJECTED"
NO_HANDLER = "NO_HANDLER"
HANDLER_ERROR = "HANDLER_ERROR"

# Commands that are still accepted after the game has ended
_LIFECYCLE_COMMANDS = {CommandType.RESET, CommandType.SAVE, CommandType.LOAD}


@dataclass
class Reducer:
    """
    Applies commands to a session.

    Stateless - all state lives in the session.
    """
    session: GameSession

    def apply(self, command: Command) -> CommandResult:
        validation_error = self._validate_command(command)
        if validation_error:
            return CommandResult.failure(validation_error, error_code=INVALID_COMMAND)

        if not self.session.state.is_playing and command.command_type not in _LIFECYCLE_COMMANDS:
            return CommandResult.failure(
                f"Game is over ({self.session.status.value})",
                error_code=GAME_OVER,
            )

        handler = self._get_handler(command.command_type)
        if handler is None:
            return CommandResult.failure(
                f"No handler for command type: {command.command_type}",
                error_code=NO_HANDLER,
            )

        state_before = self.session.state
        first_new_id = state_before.next_message_id
        try:
            accepted = handler(command)
        except (ValueError, IndexError) as e:
            logger.exception("Command %s failed", command.command_type.value)
            return CommandResult.failure(str(e), error_code=HANDLER_ERROR)

        # Reset and load swap in a different state; its log is not "new"
        messages = []
        if self.session.state is state_before:
            messages = [m for m in self.session.state.messages if m.id >= first_new_id]

        if not accepted:
            logger.debug("Command %s rejected", command.command_type.value)
            result = CommandResult.failure(
                _rejection_reason(command, messages), error_code=REJECTED
            )
            result.messages = messages
            return result
        return CommandResult.ok(messages)

    def _validate_command(self, command: Command) -> str | None:
        """
        Check that the command carries the fields its type needs.

        Returns error message if invalid, None if valid.
        """
        ct = command.command_type
        if ct == CommandType.MOVE and command.direction is None:
            return "Move requires a direction"
        if ct in {CommandType.MOVE_TO_TILE, CommandType.SELECT_TILE} and command.position is None:
            return f"{ct.value} requires a position"
        if ct == CommandType.CLAIM_ACTION and not command.action_id:
            return "Claim requires an action id"
        if ct == CommandType.SET_FOCUS and command.focus_mode is None:
            return "Focus change requires a mode"
        if ct == CommandType.FOCUS_ACTION and command.index is None:
            return "Focus change requires an action index"

        if ct == CommandType.SELECT_DRAFT:
            if command.option_index is None and command.template_id is None:
                return "Draft selection requires an option index or template id"
            options = self.session.draft_options
            if command.option_index is not None and not 0 <= command.option_index < len(options):
                return f"Draft option {command.option_index} does not exist"
            if command.template_id is not None:
                if self.session.catalog.get(command.template_id) is None:
                    return f"Unknown tile template '{command.template_id}'"
        return None

    def _get_handler(self, command_type: CommandType) -> Callable[[Command], bool] | None:
        handlers = {
            CommandType.MOVE: self._handle_move,
            CommandType.MOVE_TO_TILE: self._handle_move_to_tile,
            CommandType.SELECT_TILE: self._handle_select_tile,
            CommandType.SELECT_DRAFT: self._handle_select_draft,
            CommandType.REROLL: self._handle_reroll,
            CommandType.CLAIM_ACTION: self._handle_claim_action,
            CommandType.SET_FOCUS: self._handle_set_focus,
            CommandType.FOCUS_ACTION: self._handle_focus_action,
            CommandType.USE_FOCUSED_ACTION: self._handle_use_focused_action,
            CommandType.RESET: self._handle_reset,
            CommandType.SAVE: self._handle_save,
            CommandType.LOAD: self._handle_load,
        }
        return handlers.get(command_type)

    def _handle_move(self, command: Command) -> bool:
        return self.session.move(command.direction)

    def _handle_move_to_tile(self, command: Command) -> bool:
        return self.session.move_to_tile(command.position)

    def _handle_select_tile(self, command: Command) -> bool:
        return self.session.select_tile(command.position)

    def _handle_select_draft(self, command: Command) -> bool:
        if command.option_index is not None:
            return self.session.select_draft_option(command.option_index)
        return self.session.select_draft_tile(self.session.catalog.get(command.template_id))

    def _handle_reroll(self, command: Command) -> bool:
        return self.session.reroll_draft()

    def _handle_claim_action(self, command: Command) -> bool:
        return self.session.claim_action(command.action_id)

    def _handle_set_focus(self, command: Command) -> bool:
        self.session.set_focus_mode(command.focus_mode)
        return True

    def _handle_focus_action(self, command: Command) -> bool:
        self.session.set_focused_action_index(command.index)
        return True

    def _handle_use_focused_action(self, command: Command) -> bool:
        return self.session.use_focused_action()

    def _handle_reset(self, command: Command) -> bool:
        self.session.reset_game()
        return True

    def _handle_save(self, command: Command) -> bool:
        return self.session.save()

    def _handle_load(self, command: Command) -> bool:
        return self.session.load()


def _rejection_reason(command: Command, messages: list) -> str:
    """Prefer the player-facing warning the session logged, if any."""
    if messages:
        return messages[-1].text
    return f"{command.command_type.value} not possible right now"


def apply_command(session: GameSession, command: Command) -> CommandResult:
    """
    Convenience function to apply a command.

    Creates a temporary reducer and applies the command.
    """
    return Reducer(session).apply(command)
