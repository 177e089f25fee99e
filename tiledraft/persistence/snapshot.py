"""
Save Snapshots - Versioned serialization of GameState.

The envelope is:
    {"version": "...", "timestamp": <unix seconds>, "state": {...}}

Templates are stored by id and re-bound to the catalog on load, so a save
never duplicates catalog content. A save that names an unknown template,
or places tiles outside the grid, is rejected as malformed.

Error taxonomy:
- SnapshotError: malformed or unparseable blob (discard, start fresh)
- SaveVersionMismatch: written by an incompatible version (discard and clear)
"""

from typing import Optional
import json
import time

from pydantic import BaseModel, Field, ValidationError

from ..catalog.templates import TileCatalog
from ..engine_core.geometry import Direction, Position, adjacent_position
from ..engine_core.rotation import VALID_ROTATIONS
from ..engine_core.state import (
    FocusMode,
    GameResources,
    GameState,
    GameStatus,
    LogEntry,
    MessageKind,
    PendingDraft,
    PlacedTile,
)


class SnapshotError(Exception):
    """A saved blob could not be turned back into a GameState."""


class SaveVersionMismatch(SnapshotError):
    """A saved blob was written with a different format version."""

    def __init__(self, found: Optional[str], expected: str):
        self.found = found
        self.expected = expected
        super().__init__(f"Save version {found!r} does not match {expected!r}")


# =============================================================================
# Models
# =============================================================================

class PositionModel(BaseModel):
    x: int
    y: int


class ResourcesModel(BaseModel):
    energy: int = 0
    money: int = 0
    materials: int = 0
    reputation: int = 0
    workers: int = 0


class PlacedTileModel(BaseModel):
    position: PositionModel
    template_id: str
    rotation: int = Field(default=0, description="0, 90, 180 or 270")
    claimed_actions: list[str] = Field(default_factory=list)
    action_usage: dict[str, int] = Field(default_factory=dict)


class PendingDraftModel(BaseModel):
    target: PositionModel
    direction: Direction
    option_ids: list[str]
    reroll_count: int = 0


class LogEntryModel(BaseModel):
    id: int
    text: str
    kind: MessageKind = MessageKind.INFO


class StateSnapshot(BaseModel):
    """Everything in GameState, with templates replaced by ids."""
    width: int
    height: int
    tiles: list[PlacedTileModel]
    player_position: PositionModel
    selected_position: Optional[PositionModel] = None
    resources: ResourcesModel
    pending_draft: Optional[PendingDraftModel] = None
    status: GameStatus = GameStatus.PLAYING
    loss_reason: Optional[str] = None
    messages: list[LogEntryModel] = Field(default_factory=list)
    next_message_id: int = 1
    passive_vp: int = 0
    repeatable_usage: dict[str, int] = Field(default_factory=dict)
    quest_progress: dict[str, int] = Field(default_factory=dict)
    completed_quests: dict[str, bool] = Field(default_factory=dict)
    focus_mode: FocusMode = FocusMode.GRID
    focused_action_index: int = 0


class SaveEnvelope(BaseModel):
    version: str
    timestamp: float
    state: StateSnapshot


# =============================================================================
# Conversion
# =============================================================================

def _pos_model(pos: Position) -> PositionModel:
    return PositionModel(x=pos.x, y=pos.y)


def _pos(model: PositionModel) -> Position:
    return Position(model.x, model.y)


def state_to_snapshot(state: GameState) -> StateSnapshot:
    pending = None
    if state.pending_draft is not None:
        pending = PendingDraftModel(
            target=_pos_model(state.pending_draft.target),
            direction=state.pending_draft.direction,
            option_ids=[t.id for t in state.pending_draft.options],
            reroll_count=state.pending_draft.reroll_count,
        )

    return StateSnapshot(
        width=state.width,
        height=state.height,
        tiles=[
            PlacedTileModel(
                position=_pos_model(tile.position),
                template_id=tile.template.id,
                rotation=tile.rotation,
                claimed_actions=list(tile.claimed_actions),
                action_usage=dict(tile.action_usage),
            )
            for tile in state.placed_tiles()
        ],
        player_position=_pos_model(state.player_position),
        selected_position=(
            _pos_model(state.selected_position) if state.selected_position else None
        ),
        resources=ResourcesModel(**state.resources.as_dict()),
        pending_draft=pending,
        status=state.status,
        loss_reason=state.loss_reason,
        messages=[
            LogEntryModel(id=m.id, text=m.text, kind=m.kind) for m in state.messages
        ],
        next_message_id=state.next_message_id,
        passive_vp=state.passive_vp,
        repeatable_usage=dict(state.repeatable_usage),
        quest_progress=dict(state.quest_progress),
        completed_quests=dict(state.completed_quests),
        focus_mode=state.focus_mode,
        focused_action_index=state.focused_action_index,
    )


def snapshot_to_state(snapshot: StateSnapshot, catalog: TileCatalog) -> GameState:
    """Rebuild a GameState, binding template ids to `catalog`."""
    if snapshot.width < 1 or snapshot.height < 1:
        raise SnapshotError(f"Invalid grid size {snapshot.width}x{snapshot.height}")

    def template(tile_id: str):
        found = catalog.get(tile_id)
        if found is None:
            raise SnapshotError(f"Unknown tile template '{tile_id}'")
        return found

    grid: list[list[PlacedTile | None]] = [
        [None for _ in range(snapshot.width)] for _ in range(snapshot.height)
    ]
    for tile_model in snapshot.tiles:
        pos = _pos(tile_model.position)
        if not (0 <= pos.x < snapshot.width and 0 <= pos.y < snapshot.height):
            raise SnapshotError(f"Tile at {pos} is outside the grid")
        if grid[pos.y][pos.x] is not None:
            raise SnapshotError(f"Two tiles saved at {pos}")
        if tile_model.rotation not in VALID_ROTATIONS:
            raise SnapshotError(f"Invalid rotation {tile_model.rotation} at {pos}")
        grid[pos.y][pos.x] = PlacedTile(
            position=pos,
            template=template(tile_model.template_id),
            rotation=tile_model.rotation,
            claimed_actions=list(tile_model.claimed_actions),
            action_usage=dict(tile_model.action_usage),
        )

    player = _pos(snapshot.player_position)
    if not (0 <= player.x < snapshot.width and 0 <= player.y < snapshot.height):
        raise SnapshotError(f"Player position {player} is outside the grid")
    if grid[player.y][player.x] is None:
        raise SnapshotError(f"Player position {player} is not on a tile")

    pending = None
    if snapshot.pending_draft is not None:
        target = _pos(snapshot.pending_draft.target)
        if not (0 <= target.x < snapshot.width and 0 <= target.y < snapshot.height):
            raise SnapshotError(f"Draft target {target} is outside the grid")
        direction = snapshot.pending_draft.direction
        if target != adjacent_position(player, direction, snapshot.width, snapshot.height):
            raise SnapshotError(f"Draft target {target} is not {direction.value} of the player")
        if grid[target.y][target.x] is not None:
            raise SnapshotError(f"Draft target {target} is already occupied")
        pending = PendingDraft(
            target=target,
            direction=direction,
            options=[template(tid) for tid in snapshot.pending_draft.option_ids],
            reroll_count=snapshot.pending_draft.reroll_count,
        )

    return GameState(
        width=snapshot.width,
        height=snapshot.height,
        grid=grid,
        player_position=player,
        resources=GameResources(**snapshot.resources.model_dump()),
        selected_position=(
            _pos(snapshot.selected_position) if snapshot.selected_position else None
        ),
        pending_draft=pending,
        status=snapshot.status,
        loss_reason=snapshot.loss_reason,
        messages=[LogEntry(id=m.id, text=m.text, kind=m.kind) for m in snapshot.messages],
        next_message_id=snapshot.next_message_id,
        passive_vp=snapshot.passive_vp,
        repeatable_usage=dict(snapshot.repeatable_usage),
        quest_progress=dict(snapshot.quest_progress),
        completed_quests=dict(snapshot.completed_quests),
        focus_mode=snapshot.focus_mode,
        focused_action_index=snapshot.focused_action_index,
    )


def encode_envelope(state: GameState, version: str, timestamp: Optional[float] = None) -> str:
    envelope = SaveEnvelope(
        version=version,
        timestamp=time.time() if timestamp is None else timestamp,
        state=state_to_snapshot(state),
    )
    return envelope.model_dump_json()


def decode_envelope(raw: str, expected_version: str) -> SaveEnvelope:
    """
    Parse a saved blob.

    Raises SaveVersionMismatch before validating the body, so an old
    layout is reported as a version problem rather than a parse error.
    """
    try:
        data = json.loads(raw)
    except ValueError as e:
        raise SnapshotError(f"Save is not valid JSON: {e}") from e
    if not isinstance(data, dict):
        raise SnapshotError("Save is not a JSON object")

    version = data.get("version")
    if version != expected_version:
        raise SaveVersionMismatch(version, expected_version)

    try:
        return SaveEnvelope.model_validate(data)
    except ValidationError as e:
        raise SnapshotError(f"Save does not match the expected layout: {e}") from e
