"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to engine commands
2. Runs them through apply_command()
3. Formats the session as response models

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field
import logging

from .. import __version__
from ..catalog.templates import ResourceDelta, TileAction, TileTemplate
from ..config import GameConfig
from ..engine_core.command import Command, CommandResult
from ..engine_core.geometry import Direction, Position
from ..engine_core.reducer import HANDLER_ERROR, INVALID_COMMAND, apply_command
from ..engine_core.session import GameSession
from ..engine_core.state import FocusMode, LogEntry, PlacedTile
from ..persistence.store import SaveStore
from .schemas import (
    # Requests
    ClaimActionRequest,
    DraftChoiceRequest,
    FocusActionRequest,
    FocusRequest,
    MoveRequest,
    PositionRequest,
    # Responses
    CatalogResponse,
    CommandResponse,
    ErrorResponse,
    GameStateResponse,
    HealthResponse,
    # Shared
    ActionInfo,
    DraftInfo,
    MessageInfo,
    PassiveInfo,
    PositionInfo,
    QuestInfo,
    ResourcesInfo,
    TemplateInfo,
    TileInfo,
    # Enums
    DirectionName,
    ErrorCode,
    FocusModeName,
    GameStatusName,
    MessageKindName,
)

logger = logging.getLogger(__name__)


def _default_session() -> GameSession:
    """A session configured from the environment, continuing any save."""
    config = GameConfig.from_env()
    session = GameSession(config=config, store=SaveStore.from_config(config))
    if session.load():
        logger.info("Continuing saved game")
    return session


def _delta_dict(delta: ResourceDelta | None) -> dict[str, int]:
    if delta is None:
        return {}
    out = dict(delta.items())
    if delta.vp:
        out["vp"] = delta.vp
    return out


@dataclass
class GameService:
    """
    Main API service.

    Usage:
        service = GameService()

        state = service.get_state()
        response = service.move(MoveRequest(direction="N"))
        if response.state.draft:
            service.select_draft(DraftChoiceRequest(option_index=0))
    """
    session: GameSession = field(default_factory=_default_session)

    # =========================================================================
    # Commands
    # =========================================================================

    def move(self, request: MoveRequest) -> CommandResponse | ErrorResponse:
        return self.execute(Command.move(Direction(request.direction.value)))

    def move_to_tile(self, request: PositionRequest) -> CommandResponse | ErrorResponse:
        return self.execute(Command.move_to_tile(Position(request.x, request.y)))

    def select_tile(self, request: PositionRequest) -> CommandResponse | ErrorResponse:
        return self.execute(Command.select_tile(Position(request.x, request.y)))

    def select_draft(self, request: DraftChoiceRequest) -> CommandResponse | ErrorResponse:
        return self.execute(
            Command.select_draft(option_index=request.option_index, template_id=request.template_id)
        )

    def reroll(self) -> CommandResponse | ErrorResponse:
        return self.execute(Command.reroll())

    def claim_action(self, request: ClaimActionRequest) -> CommandResponse | ErrorResponse:
        return self.execute(Command.claim_action(request.action_id))

    def set_focus(self, request: FocusRequest) -> CommandResponse | ErrorResponse:
        return self.execute(Command.set_focus(FocusMode(request.mode.value)))

    def focus_action(self, request: FocusActionRequest) -> CommandResponse | ErrorResponse:
        return self.execute(Command.focus_action(request.index))

    def use_focused_action(self) -> CommandResponse | ErrorResponse:
        return self.execute(Command.use_focused_action())

    def reset(self) -> CommandResponse | ErrorResponse:
        return self.execute(Command.reset())

    def save(self) -> CommandResponse | ErrorResponse:
        return self.execute(Command.save())

    def load(self) -> CommandResponse | ErrorResponse:
        return self.execute(Command.load())

    def execute(self, command: Command) -> CommandResponse | ErrorResponse:
        """Apply a command; malformed commands become an ErrorResponse."""
        result = apply_command(self.session, command)
        if result.error_code == INVALID_COMMAND:
            return ErrorResponse(error=result.error, error_code=ErrorCode.INVALID_COMMAND)
        if result.error_code == HANDLER_ERROR:
            return ErrorResponse(error=result.error, error_code=ErrorCode.INTERNAL_ERROR)
        return self._result_to_response(result)

    # =========================================================================
    # Queries
    # =========================================================================

    def get_state(self) -> GameStateResponse:
        session = self.session
        state = session.state
        pending = state.pending_draft

        draft = None
        if pending is not None:
            draft = DraftInfo(
                target=self._position(pending.target),
                direction=DirectionName(pending.direction.value),
                options=[self._template_to_info(t) for t in pending.options],
                affordable=[
                    session.draft_option_affordable(i) for i in range(len(pending.options))
                ],
                reroll_count=pending.reroll_count,
                next_reroll_cost=session.next_reroll_cost(),
            )

        current = session.current_tile
        store = session.store
        return GameStateResponse(
            width=state.width,
            height=state.height,
            status=GameStatusName(state.status.value),
            loss_reason=state.loss_reason,
            victory_points=session.victory_points,
            win_vp_threshold=session.config.win_vp_threshold,
            tiles_placed=session.tiles_placed,
            resources=ResourcesInfo(**state.resources.as_dict()),
            player_position=self._position(state.player_position),
            selected_position=(
                self._position(state.selected_position) if state.selected_position else None
            ),
            tiles=[self._tile_to_info(tile) for tile in state.placed_tiles()],
            current_tile=self._tile_to_info(current) if current else None,
            draft=draft,
            can_move={d.value: session.can_move(d) for d in Direction},
            door_restricted=session.config.door_restricted,
            focus_mode=FocusModeName(state.focus_mode.value),
            focused_action_index=state.focused_action_index,
            messages=[self._message(m) for m in state.messages],
            save_exists=store.exists() if store is not None else False,
        )

    def get_catalog(self) -> CatalogResponse:
        catalog = self.session.catalog
        return CatalogResponse(
            starter=self._template_to_info(catalog.starter),
            deck=[self._template_to_info(t) for t in catalog.deck],
        )

    def health(self) -> HealthResponse:
        return HealthResponse(status="healthy", service="tiledraft", version=__version__)

    # =========================================================================
    # Conversions
    # =========================================================================

    def _result_to_response(self, result: CommandResult) -> CommandResponse:
        return CommandResponse(
            success=result.success,
            error=result.error,
            messages=[self._message(m) for m in result.messages],
            state=self.get_state(),
        )

    def _position(self, pos: Position) -> PositionInfo:
        return PositionInfo(x=pos.x, y=pos.y)

    def _message(self, entry: LogEntry) -> MessageInfo:
        return MessageInfo(id=entry.id, text=entry.text, kind=MessageKindName(entry.kind.value))

    def _action_to_info(self, action: TileAction, tile: PlacedTile | None = None) -> ActionInfo:
        info = ActionInfo(
            action_id=action.id,
            label=action.label,
            description=action.description,
            cost=_delta_dict(action.cost),
            effect=_delta_dict(action.effect),
            max_uses=action.max_uses,
        )
        if tile is not None:
            usage = self.session.get_action_usage(tile, action.id)
            info.used = usage.current
            info.is_complete = usage.is_complete
            info.affordable = self.session.can_afford(action.cost)
        return info

    def _template_to_info(self, template: TileTemplate, tile: PlacedTile | None = None) -> TemplateInfo:
        quest = None
        if template.quest is not None:
            quest = QuestInfo(
                quest_id=template.quest.id,
                label=template.quest.label,
                trigger=template.quest.trigger.value,
                target=template.quest.target,
                reward=_delta_dict(template.quest.reward),
                description=template.quest.description,
            )
            if tile is not None:
                progress = self.session.get_quest_progress(tile)
                quest.progress = progress.current
                quest.is_complete = progress.is_complete

        vp = template.vp_logic
        return TemplateInfo(
            tile_id=template.id,
            name=template.name,
            color=template.color.value,
            kind=template.kind.value,
            description=template.description,
            cost=template.cost,
            doors=template.doors.as_dict(),
            actions=[self._action_to_info(a, tile) for a in template.actions],
            passive_abilities=[
                PassiveInfo(
                    ability_id=p.id,
                    trigger_color=p.trigger_color.value,
                    reward=_delta_dict(p.reward),
                    description=p.description,
                )
                for p in template.passive_abilities
            ],
            quest=quest,
            vp_flat=vp.flat if vp else 0,
            vp_per_color={c.value: n for c, n in vp.per_color.items()} if vp else {},
        )

    def _tile_to_info(self, tile: PlacedTile) -> TileInfo:
        return TileInfo(
            position=self._position(tile.position),
            template=self._template_to_info(tile.template, tile),
            rotation=tile.rotation,
            doors=tile.doors.as_dict(),
            claimed_actions=list(tile.claimed_actions),
            is_complete=self.session.is_tile_complete(tile),
        )
