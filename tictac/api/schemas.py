"""
Pydantic Schemas for API - Request/response models for OpenAPI.

Error Codes:
- GameAlreadyOver: move on a won or tied game
- NotPlayersTurn: caller is not the player to move
- TileAlreadySet: target tile is occupied
- TileOutOfBounds: row or column outside 0-2
- GAME_NOT_FOUND: no game at the address
- REGISTRY_ALREADY_INITIALIZED / REGISTRY_NOT_INITIALIZED: registry lifecycle
- RECORD_EXISTS: game address already allocated
- CALLER_MISMATCH: caller is not player one
- UNAUTHENTICATED: missing or invalid caller identity
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, Field, field_validator

from ..storage import parse_identity


# =============================================================================
# Enums
# =============================================================================

class GameStatus(str, Enum):
    """Outcome tag of a game."""
    ACTIVE = "active"
    TIE = "tie"
    WON = "won"


class SignValue(str, Enum):
    """Sign on a tile."""
    X = "X"
    O = "O"


class ErrorCode(str, Enum):
    """Structured error codes."""
    GAME_ALREADY_OVER = "GameAlreadyOver"
    NOT_PLAYERS_TURN = "NotPlayersTurn"
    TILE_ALREADY_SET = "TileAlreadySet"
    TILE_OUT_OF_BOUNDS = "TileOutOfBounds"
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    REGISTRY_ALREADY_INITIALIZED = "REGISTRY_ALREADY_INITIALIZED"
    REGISTRY_NOT_INITIALIZED = "REGISTRY_NOT_INITIALIZED"
    RECORD_EXISTS = "RECORD_EXISTS"
    CALLER_MISMATCH = "CALLER_MISMATCH"
    UNAUTHENTICATED = "UNAUTHENTICATED"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Request Models
# =============================================================================

class CreateGameRequest(BaseModel):
    """Request to create a game. player_one must be the caller."""
    player_one: str = Field(..., description="Identity of the creator, plays X")
    player_two: str = Field(..., description="Identity of the opponent, plays O")

    @field_validator("player_one", "player_two")
    @classmethod
    def _check_identity(cls, value: str) -> str:
        return parse_identity(value)


class PlayRequest(BaseModel):
    """A move. Bounds are checked by the engine, not here."""
    row: int = Field(..., description="Row, 0-2")
    column: int = Field(..., description="Column, 0-2")


# =============================================================================
# Response Models
# =============================================================================

class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str = Field(..., description="Human-readable error message")
    error_code: ErrorCode = Field(..., description="Machine-readable error code")
    details: Optional[dict[str, Any]] = Field(None, description="Additional error context")
    api_version: str = Field("v1", description="API version")


class GameStateResponse(BaseModel):
    """Full state of one game."""
    address: str
    player_one: str
    player_two: str
    turn: int = Field(..., ge=1)
    board: list[list[Optional[SignValue]]] = Field(
        ..., description="3x3 rows; null for empty tiles"
    )
    status: GameStatus
    winner: Optional[str] = None
    current_player: Optional[str] = Field(
        None, description="Player to move; null once the game is over"
    )
    is_active: bool


class CreateGameResponse(BaseModel):
    """Response from creating a game."""
    game_count: int = Field(..., description="Registry counter value used for the address")
    game: GameStateResponse


class PlayResponse(BaseModel):
    """Response from an accepted move."""
    success: bool = True
    changes: list[str] = Field(default_factory=list)
    game: GameStateResponse


class RegistryResponse(BaseModel):
    """Registry counter."""
    initialized: bool
    game_count: Optional[int] = None


class GameListResponse(BaseModel):
    """Stored game addresses."""
    games: list[str] = Field(default_factory=list)
    count: int = 0


class HealthResponse(BaseModel):
    """Health check response."""
    status: str = "ok"
    version: str
