"""
FastAPI Application - REST API for tic-tac-toe sessions.

Endpoints:
    GET    /health                              Liveness check
    POST   /api/v1/registry                     Initialize the session registry
    GET    /api/v1/registry                     Read the registry counter
    POST   /api/v1/games                        Create a game (caller is player one)
    GET    /api/v1/games                        List game addresses
    GET    /api/v1/games/{address}              Get game state
    POST   /api/v1/games/{address}/start        Start hook (no state change)
    POST   /api/v1/games/{address}/moves        Play a move as the caller

Caller identity:
    X-Player-Id          64 hex characters
    X-Player-Signature   HMAC-SHA256(TICTAC_AUTH_SECRET, X-Player-Id), hex

All responses are JSON with explicit Pydantic schemas.
"""

from typing import Annotated, Optional, Union
import logging

from fastapi import FastAPI, Header
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .. import __version__
from ..config import Config, get_config, configure_logging
from ..session import GameManager
from ..storage import FileStore, MemoryStore
from .auth import verify_caller
from .service import GameService
from .schemas import (
    CreateGameRequest,
    PlayRequest,
    ErrorResponse,
    ErrorCode,
    GameStateResponse,
    CreateGameResponse,
    PlayResponse,
    RegistryResponse,
    GameListResponse,
    HealthResponse,
)

logger = logging.getLogger(__name__)


ERROR_STATUS = {
    ErrorCode.GAME_ALREADY_OVER: 400,
    ErrorCode.TILE_ALREADY_SET: 400,
    ErrorCode.TILE_OUT_OF_BOUNDS: 400,
    ErrorCode.VALIDATION_ERROR: 400,
    ErrorCode.UNAUTHENTICATED: 401,
    ErrorCode.NOT_PLAYERS_TURN: 403,
    ErrorCode.CALLER_MISMATCH: 403,
    ErrorCode.GAME_NOT_FOUND: 404,
    ErrorCode.REGISTRY_ALREADY_INITIALIZED: 409,
    ErrorCode.REGISTRY_NOT_INITIALIZED: 409,
    ErrorCode.RECORD_EXISTS: 409,
    ErrorCode.INTERNAL_ERROR: 500,
}


def build_service(config: Config) -> GameService:
    """Service over a file store if a data dir is configured, else in memory."""
    store = FileStore(config.data_dir) if config.data_dir else MemoryStore()
    return GameService(manager=GameManager(store))


def create_app(service: GameService | None = None, config: Config | None = None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional GameService instance (built from config if not provided)
        config: Optional Config (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    config = config or get_config()
    configure_logging(config)

    app = FastAPI(
        title="Tictac Engine API",
        description="""
Two-player tic-tac-toe sessions on durable fixed-size records.

## Flow

1. `POST /api/v1/registry` once
2. `POST /api/v1/games` as player one
3. `POST /api/v1/games/{address}/moves` alternately as each player

## Rule Error Codes

| Code | Description |
|------|-------------|
| `NotPlayersTurn` | Caller is not the player to move |
| `GameAlreadyOver` | Game is won or tied |
| `TileOutOfBounds` | Row or column outside 0-2 |
| `TileAlreadySet` | Tile is occupied |
        """,
        version=__version__,
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    api_service = service or build_service(config)

    # =========================================================================
    # Helpers
    # =========================================================================

    def make_error_response(error: ErrorResponse) -> JSONResponse:
        """Create a JSON response with the status for the error code."""
        return JSONResponse(
            status_code=ERROR_STATUS.get(error.error_code, 400),
            content=error.model_dump(mode="json"),
        )

    def authenticate(player_id: Optional[str], signature: Optional[str]) -> Optional[str]:
        return verify_caller(player_id, signature, config.auth_secret, debug=config.debug)

    def unauthenticated() -> JSONResponse:
        return make_error_response(ErrorResponse(
            error="Missing or invalid caller identity",
            error_code=ErrorCode.UNAUTHENTICATED,
        ))

    # =========================================================================
    # Health
    # =========================================================================

    @app.get("/health", response_model=HealthResponse, tags=["System"])
    async def health() -> HealthResponse:
        return HealthResponse(status="ok", version=__version__)

    # =========================================================================
    # Registry Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/registry",
        response_model=RegistryResponse,
        status_code=201,
        responses={409: {"model": ErrorResponse}},
        tags=["Registry"],
        summary="Initialize the session registry",
    )
    async def initialize_registry() -> Union[RegistryResponse, JSONResponse]:
        """One-time setup. Fails if the registry already exists."""
        response = api_service.initialize_registry()
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.get(
        "/api/v1/registry",
        response_model=RegistryResponse,
        tags=["Registry"],
        summary="Read the registry counter",
    )
    async def get_registry() -> RegistryResponse:
        return api_service.get_registry()

    # =========================================================================
    # Game Endpoints
    # =========================================================================

    @app.post(
        "/api/v1/games",
        response_model=CreateGameResponse,
        status_code=201,
        responses={
            401: {"model": ErrorResponse, "description": "Caller not authenticated"},
            403: {"model": ErrorResponse, "description": "Caller is not player one"},
            409: {"model": ErrorResponse, "description": "Registry missing or address taken"},
        },
        tags=["Games"],
        summary="Create a new game",
    )
    async def create_game(
        body: CreateGameRequest,
        x_player_id: Annotated[Optional[str], Header(alias="X-Player-Id")] = None,
        x_player_signature: Annotated[Optional[str], Header(alias="X-Player-Signature")] = None,
    ) -> Union[CreateGameResponse, JSONResponse]:
        """
        Create a game between `player_one` and `player_two`.

        The authenticated caller must be `player_one`. `player_two` is not
        checked until they make their first move.
        """
        caller = authenticate(x_player_id, x_player_signature)
        if caller is None:
            return unauthenticated()

        response = api_service.create_game(caller, body)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.get(
        "/api/v1/games",
        response_model=GameListResponse,
        tags=["Games"],
        summary="List games",
    )
    async def list_games() -> GameListResponse:
        return api_service.list_games()

    @app.get(
        "/api/v1/games/{address}",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Get game state",
    )
    async def get_game(address: str) -> Union[GameStateResponse, JSONResponse]:
        response = api_service.get_game(address)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.post(
        "/api/v1/games/{address}/start",
        response_model=GameStateResponse,
        responses={404: {"model": ErrorResponse}},
        tags=["Games"],
        summary="Start a game",
    )
    async def start_game(address: str) -> Union[GameStateResponse, JSONResponse]:
        """Reserved for pre-play setup. Returns the game unchanged."""
        response = api_service.start_game(address)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    @app.post(
        "/api/v1/games/{address}/moves",
        response_model=PlayResponse,
        responses={
            400: {"model": ErrorResponse, "description": "Rule violation"},
            401: {"model": ErrorResponse, "description": "Caller not authenticated"},
            403: {"model": ErrorResponse, "description": "Not the caller's turn"},
            404: {"model": ErrorResponse, "description": "Game not found"},
        },
        tags=["Games"],
        summary="Play a move",
    )
    async def play(
        address: str,
        body: PlayRequest,
        x_player_id: Annotated[Optional[str], Header(alias="X-Player-Id")] = None,
        x_player_signature: Annotated[Optional[str], Header(alias="X-Player-Signature")] = None,
    ) -> Union[PlayResponse, JSONResponse]:
        """
        Place the caller's sign on a tile.

        **Request Body:**
        ```json
        {"row": 1, "column": 2}
        ```
        """
        caller = authenticate(x_player_id, x_player_signature)
        if caller is None:
            return unauthenticated()

        response = api_service.play(address, caller, body)
        if isinstance(response, ErrorResponse):
            return make_error_response(response)
        return response

    return app


# For running directly: uvicorn tictac.api.app:app
app = create_app()
