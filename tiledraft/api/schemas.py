"""
Pydantic Schemas for API - Request/response models for OpenAPI.

These models define the contract between a front end and the engine.
Every command endpoint answers with the full game state, so a client
re-renders from one response without extra queries.

Error Codes:
- INVALID_COMMAND: Well-formed JSON naming something that does not exist
  (draft option out of range, unknown template id)
- VALIDATION_ERROR: Request body failed schema validation
- INTERNAL_ERROR: The engine hit a condition that should not occur

A well-formed intent the game refuses (blocked door, not enough energy,
game over) is NOT an error: it is a 200 with success=false.
"""

from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field


# =============================================================================
# Enums
# =============================================================================

class DirectionName(str, Enum):
    """Cardinal directions. y grows South."""
    N = "N"
    E = "E"
    S = "S"
    W = "W"


class GameStatusName(str, Enum):
    PLAYING = "playing"
    WON = "won"
    LOST = "lost"


class MessageKindName(str, Enum):
    INFO = "info"
    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"


class FocusModeName(str, Enum):
    GRID = "grid"
    DETAILS = "details"


class ErrorCode(str, Enum):
    """Structured error codes."""
    INVALID_COMMAND = "INVALID_COMMAND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Shared Models
# =============================================================================

class PositionInfo(BaseModel):
    x: int
    y: int

    model_config = {"from_attributes": True}


class ResourcesInfo(BaseModel):
    """The player's resource counters."""
    energy: int
    money: int
    materials: int
    reputation: int
    workers: int

    model_config = {"from_attributes": True}


class ActionInfo(BaseModel):
    """
    A tile action.

    Usage fields are filled in for placed tiles and left empty when the
    action is shown from the catalog.
    """
    action_id: str
    label: str
    description: str = ""
    cost: dict[str, int] = Field(default_factory=dict, description="Resources spent")
    effect: dict[str, int] = Field(default_factory=dict, description="Resources and vp gained")
    max_uses: Optional[int] = Field(None, description="None means once per placed tile")
    used: Optional[int] = None
    is_complete: Optional[bool] = None
    affordable: Optional[bool] = None


class PassiveInfo(BaseModel):
    ability_id: str
    trigger_color: str
    reward: dict[str, int] = Field(default_factory=dict)
    description: str = ""


class QuestInfo(BaseModel):
    quest_id: str
    label: str
    trigger: str = Field(description="spend_money, spend_reputation, spend_materials, spend_energy")
    target: int
    reward: dict[str, int] = Field(default_factory=dict)
    description: str = ""
    progress: Optional[int] = None
    is_complete: Optional[bool] = None


class TemplateInfo(BaseModel):
    """A catalog tile template."""
    tile_id: str
    name: str
    color: str
    kind: str = Field("economy", description="Broad role: starter, economy, build, social or vp")
    description: str = ""
    cost: int = Field(0, description="Workers spent to place the tile")
    doors: dict[str, bool] = Field(description="Unrotated template doors, keyed N/E/S/W")
    actions: list[ActionInfo] = Field(default_factory=list)
    passive_abilities: list[PassiveInfo] = Field(default_factory=list)
    quest: Optional[QuestInfo] = None
    vp_flat: int = 0
    vp_per_color: dict[str, int] = Field(default_factory=dict)


class TileInfo(BaseModel):
    """A placed tile with its runtime state."""
    position: PositionInfo
    template: TemplateInfo
    rotation: int = Field(description="0, 90, 180 or 270, clockwise")
    doors: dict[str, bool] = Field(description="Doors after rotation, keyed N/E/S/W")
    claimed_actions: list[str] = Field(default_factory=list)
    is_complete: bool = False


class DraftInfo(BaseModel):
    """A draft in progress."""
    target: PositionInfo
    direction: DirectionName
    options: list[TemplateInfo]
    affordable: list[bool] = Field(description="Per option, can the player pay its cost")
    reroll_count: int
    next_reroll_cost: Optional[int] = Field(None, description="None when no reroll is left")


class MessageInfo(BaseModel):
    id: int
    text: str
    kind: MessageKindName

    model_config = {"from_attributes": True}


# =============================================================================
# Request Models
# =============================================================================

class MoveRequest(BaseModel):
    """Move one cell; entering an empty cell starts a draft."""
    direction: DirectionName


class PositionRequest(BaseModel):
    """Select a cell, or move to an adjacent placed tile."""
    x: int
    y: int


class DraftChoiceRequest(BaseModel):
    """Choose a draft option by index or by template id."""
    option_index: Optional[int] = Field(None, ge=0)
    template_id: Optional[str] = None


class ClaimActionRequest(BaseModel):
    action_id: str = Field(..., min_length=1)


class FocusRequest(BaseModel):
    mode: FocusModeName


class FocusActionRequest(BaseModel):
    index: int


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameStateResponse(BaseModel):
    """The whole game as the front end needs it."""
    width: int
    height: int
    status: GameStatusName
    loss_reason: Optional[str] = None
    victory_points: int
    win_vp_threshold: int
    tiles_placed: int
    resources: ResourcesInfo
    player_position: PositionInfo
    selected_position: Optional[PositionInfo] = None
    tiles: list[TileInfo]
    current_tile: Optional[TileInfo] = None
    draft: Optional[DraftInfo] = None
    can_move: dict[str, bool] = Field(description="Per direction, would a move do anything")
    door_restricted: bool = True
    focus_mode: FocusModeName = FocusModeName.GRID
    focused_action_index: int = 0
    messages: list[MessageInfo] = Field(default_factory=list)
    save_exists: bool = False


class CommandResponse(BaseModel):
    """Outcome of one command."""
    success: bool
    error: Optional[str] = Field(None, description="Why the intent was refused")
    messages: list[MessageInfo] = Field(
        default_factory=list, description="Log entries added by this command"
    )
    state: GameStateResponse


class CatalogResponse(BaseModel):
    starter: TemplateInfo
    deck: list[TemplateInfo]


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
