"""
API Module - REST interface to the engine.

Clients:
1. Initialize the registry once
2. Create games as player one
3. Submit moves with a signed caller identity
4. Read game state

The service layer is framework-agnostic; the FastAPI app wraps it.
"""

from .schemas import (
    # Requests
    CreateGameRequest,
    PlayRequest,
    # Responses
    GameStateResponse,
    CreateGameResponse,
    PlayResponse,
    RegistryResponse,
    GameListResponse,
    HealthResponse,
    ErrorResponse,
    # Enums
    ErrorCode,
    GameStatus,
    SignValue,
)
from .auth import sign_identity, verify_caller
from .service import GameService, game_to_response
from .app import create_app

__all__ = [
    # Requests
    "CreateGameRequest",
    "PlayRequest",
    # Responses
    "GameStateResponse",
    "CreateGameResponse",
    "PlayResponse",
    "RegistryResponse",
    "GameListResponse",
    "HealthResponse",
    "ErrorResponse",
    # Enums
    "ErrorCode",
    "GameStatus",
    "SignValue",
    # Service
    "sign_identity",
    "verify_caller",
    "GameService",
    "game_to_response",
    "create_app",
]
