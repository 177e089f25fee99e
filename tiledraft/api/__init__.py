"""
API Module - Front end interface.

Exposes a game session via REST. The front end:
1. Reads the full game state
2. Sends one intent per request (move, select, draft, reroll, claim)
3. Re-renders from the state returned with every command

There is one session per service instance; it is saved after every
mutation and continued on startup when a compatible save exists.
"""

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
    TemplateInfo,
    TileInfo,
    # Enums
    ErrorCode,
)
from .service import GameService
from .app import create_app

__all__ = [
    # Requests
    "ClaimActionRequest",
    "DraftChoiceRequest",
    "FocusActionRequest",
    "FocusRequest",
    "MoveRequest",
    "PositionRequest",
    # Responses
    "CatalogResponse",
    "CommandResponse",
    "ErrorResponse",
    "GameStateResponse",
    "HealthResponse",
    # Shared
    "TemplateInfo",
    "TileInfo",
    # Enums
    "ErrorCode",
    # Service
    "GameService",
    "create_app",
]
