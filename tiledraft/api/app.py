"""
FastAPI Application - REST API for a tile exploration front end.

Endpoints:
    GET    /api/v1/game                 Full game state
    POST   /api/v1/game/move            Move one cell (may start a draft)
    POST   /api/v1/game/move-to         Move onto an adjacent placed tile
    POST   /api/v1/game/select          Select a cell (may start a draft)
    POST   /api/v1/game/draft/select    Place a draft option
    POST   /api/v1/game/draft/reroll    Pay energy for new draft options
    POST   /api/v1/game/actions/claim   Claim an action on the current tile
    POST   /api/v1/game/focus           Switch keyboard focus (grid/details)
    POST   /api/v1/game/focus/action    Focus an action by index
    POST   /api/v1/game/focus/use       Claim the focused action
    POST   /api/v1/game/reset           Discard the save, start over
    POST   /api/v1/game/save            Save now
    POST   /api/v1/game/load            Reload the saved game
    GET    /api/v1/catalog              Starter tile and drafting deck

Every command answers with CommandResponse: success, the log entries the
command added, and the new state. A refused intent is success=false, not
an HTTP error.
"""

from typing import Optional
import logging
import os

# Environment configuration
TILEDRAFT_ENV = os.getenv("TILEDRAFT_ENV", "development")
ALLOWED_ORIGINS = os.getenv("ALLOWED_ORIGINS", "*").split(",")

logger = logging.getLogger(__name__)


def create_app(service=None):
    """
    Create the FastAPI application.

    Args:
        service: Optional GameService instance (creates new if not provided)

    Returns:
        FastAPI application instance
    """
    try:
        from fastapi import FastAPI, Request
        from fastapi.exceptions import RequestValidationError
        from fastapi.middleware.cors import CORSMiddleware
        from fastapi.responses import JSONResponse
    except ImportError:
        raise ImportError(
            "FastAPI not installed. Install with: pip install fastapi uvicorn"
        )

    from .. import __version__
    from .service import GameService
    from .schemas import (
        # Request models
        ClaimActionRequest,
        DraftChoiceRequest,
        FocusActionRequest,
        FocusRequest,
        MoveRequest,
        PositionRequest,
        # Response models
        CatalogResponse,
        CommandResponse,
        ErrorResponse,
        GameStateResponse,
        HealthResponse,
        # Enums
        ErrorCode,
    )

    app = FastAPI(
        title="Tiledraft API",
        description="""
Single-player tile exploration game engine.

## Turn flow

1. `POST /move` into an empty cell starts a **draft** of three tiles
2. `POST /draft/select` places the chosen tile and walks onto it
3. `POST /actions/claim` spends and gains resources on the current tile
4. The game ends at the VP threshold (won), or when energy runs out,
   the board fills, or a draft offers nothing affordable (lost)

## Error Codes

| Code | Description |
|------|-------------|
| `INVALID_COMMAND` | Option index out of range or unknown template id |
| `VALIDATION_ERROR` | Request body failed validation |
| `INTERNAL_ERROR` | Unexpected engine failure |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    game_service = service or GameService()

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    def respond(result):
        if isinstance(result, ErrorResponse):
            status = 500 if result.error_code == ErrorCode.INTERNAL_ERROR else 400
            return make_error_response(result.error_code, result.error, status_code=status)
        return result

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "Request validation failed",
            details={"errors": [
                {"loc": list(e.get("loc", ())), "msg": e.get("msg", "")} for e in exc.errors()
            ]},
        )

    command_responses = {
        400: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    }

    # =========================================================================
    # State Endpoints
    # =========================================================================

    @app.get(
        "/api/v1/game",
        response_model=GameStateResponse,
        tags=["Game"],
        summary="Get the current game state",
    )
    async def get_game() -> GameStateResponse:
        return game_service.get_state()

    @app.get(
        "/api/v1/catalog",
        response_model=CatalogResponse,
        tags=["Catalog"],
        summary="List the starter tile and the drafting deck",
    )
    async def get_catalog() -> CatalogResponse:
        return game_service.get_catalog()

    # =========================================================================
    # Movement Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/game/move",
        response_model=CommandResponse,
        responses=command_responses,
        tags=["Movement"],
        summary="Move one cell in a direction",
    )
    async def move(request: MoveRequest):
        """
        Move onto a placed neighbor, or start a draft for an empty one.

        With door-restricted movement the current tile needs a door toward
        the target, and a placed target needs a door back.
        """
        return respond(game_service.move(request))

    @app.post(
        "/api/v1/game/move-to",
        response_model=CommandResponse,
        responses=command_responses,
        tags=["Movement"],
        summary="Move onto an adjacent placed tile",
    )
    async def move_to(request: PositionRequest):
        return respond(game_service.move_to_tile(request))

    @app.post(
        "/api/v1/game/select",
        response_model=CommandResponse,
        responses=command_responses,
        tags=["Movement"],
        summary="Select a cell",
    )
    async def select(request: PositionRequest):
        """Inspect a placed tile, or start a draft for a reachable empty neighbor."""
        return respond(game_service.select_tile(request))

    # =========================================================================
    # Draft Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/game/draft/select",
        response_model=CommandResponse,
        responses=command_responses,
        tags=["Draft"],
        summary="Place one of the draft options",
    )
    async def select_draft(request: DraftChoiceRequest):
        return respond(game_service.select_draft(request))

    @app.post(
        "/api/v1/game/draft/reroll",
        response_model=CommandResponse,
        responses=command_responses,
        tags=["Draft"],
        summary="Reroll the draft options",
    )
    async def reroll():
        """The Nth reroll of a draft costs N energy; three rerolls per draft."""
        return respond(game_service.reroll())

    # =========================================================================
    # Action Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/game/actions/claim",
        response_model=CommandResponse,
        responses=command_responses,
        tags=["Actions"],
        summary="Claim an action on the current tile",
    )
    async def claim_action(request: ClaimActionRequest):
        return respond(game_service.claim_action(request))

    @app.post(
        "/api/v1/game/focus",
        response_model=CommandResponse,
        responses=command_responses,
        tags=["Actions"],
        summary="Switch keyboard focus",
    )
    async def set_focus(request: FocusRequest):
        return respond(game_service.set_focus(request))

    @app.post(
        "/api/v1/game/focus/action",
        response_model=CommandResponse,
        responses=command_responses,
        tags=["Actions"],
        summary="Focus an action on the current tile",
    )
    async def focus_action(request: FocusActionRequest):
        return respond(game_service.focus_action(request))

    @app.post(
        "/api/v1/game/focus/use",
        response_model=CommandResponse,
        responses=command_responses,
        tags=["Actions"],
        summary="Claim the focused action",
    )
    async def use_focused_action():
        return respond(game_service.use_focused_action())

    # =========================================================================
    # Session Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/game/reset",
        response_model=CommandResponse,
        responses=command_responses,
        tags=["Session"],
        summary="Discard the save and start a new game",
    )
    async def reset():
        return respond(game_service.reset())

    @app.post(
        "/api/v1/game/save",
        response_model=CommandResponse,
        responses=command_responses,
        tags=["Session"],
        summary="Save the game now",
    )
    async def save():
        return respond(game_service.save())

    @app.post(
        "/api/v1/game/load",
        response_model=CommandResponse,
        responses=command_responses,
        tags=["Session"],
        summary="Reload the saved game",
    )
    async def load():
        """success=false when there is no usable save."""
        return respond(game_service.load())

    # =========================================================================
    # System Endpoints
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        return game_service.health()

    @app.get("/", tags=["System"])
    async def root():
        """Root endpoint with API info."""
        return {
            "name": "Tiledraft API",
            "version": __version__,
            "environment": TILEDRAFT_ENV,
            "docs": "/api/docs",
        }

    logger.debug("Created app for %s environment", TILEDRAFT_ENV)
    return app
