"""
API Service - Business logic layer between API and engine.

The service:
1. Translates API requests to manager calls
2. Converts games to response schemas
3. Turns domain and storage failures into ErrorResponses

This layer is framework-agnostic (can be used with FastAPI, a CLI, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field

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
    GameStatus,
    SignValue,
)
from ..engine_core.state import Game, Tile, OutcomeKind
from ..session import (
    GameManager,
    GameNotFound,
    CallerMismatch,
    RegistryAlreadyInitialized,
    RegistryNotInitialized,
)
from ..storage import RecordExists


_STATUS = {
    OutcomeKind.ACTIVE: GameStatus.ACTIVE,
    OutcomeKind.TIE: GameStatus.TIE,
    OutcomeKind.WON: GameStatus.WON,
}


def game_to_response(address: str, game: Game) -> GameStateResponse:
    """Convert an engine Game to its API schema."""
    return GameStateResponse(
        address=address,
        player_one=game.players[0],
        player_two=game.players[1],
        turn=game.turn,
        board=[
            [SignValue(cell.symbol) if cell else None for cell in row]
            for row in game.board
        ],
        status=_STATUS[game.state.kind],
        winner=game.winner,
        current_player=game.current_player() if game.is_active() else None,
        is_active=game.is_active(),
    )


@dataclass
class GameService:
    """
    Main API service.

    Usage:
        service = GameService()
        service.initialize_registry()
        created = service.create_game(caller, CreateGameRequest(...))
        service.play(created.game.address, caller, PlayRequest(row=0, column=0))
    """
    manager: GameManager = field(default_factory=GameManager)

    def initialize_registry(self) -> RegistryResponse | ErrorResponse:
        try:
            self.manager.initialize_registry()
        except RegistryAlreadyInitialized as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.REGISTRY_ALREADY_INITIALIZED)
        return RegistryResponse(initialized=True, game_count=0)

    def get_registry(self) -> RegistryResponse:
        registry = self.manager.registry
        if not registry.is_initialized():
            return RegistryResponse(initialized=False)
        return RegistryResponse(initialized=True, game_count=registry.current())

    def create_game(
        self,
        caller: str,
        request: CreateGameRequest,
    ) -> CreateGameResponse | ErrorResponse:
        """
        Create a game on behalf of `caller`.
        """
        try:
            handle = self.manager.create_game(caller, request.player_one, request.player_two)
        except CallerMismatch as e:
            return ErrorResponse(
                error=str(e),
                error_code=ErrorCode.CALLER_MISMATCH,
                details={"caller": e.caller, "player_one": e.expected},
            )
        except RegistryNotInitialized as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.REGISTRY_NOT_INITIALIZED)
        except RecordExists as e:
            return ErrorResponse(
                error=str(e),
                error_code=ErrorCode.RECORD_EXISTS,
                details={"address": e.key},
            )
        except ValueError as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.VALIDATION_ERROR)

        return CreateGameResponse(
            game_count=handle.game_count,
            game=game_to_response(handle.address, handle.game),
        )

    def get_game(self, address: str) -> GameStateResponse | ErrorResponse:
        try:
            game = self.manager.get_game(address)
        except GameNotFound as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.GAME_NOT_FOUND)
        return game_to_response(address, game)

    def start_game(self, address: str) -> GameStateResponse | ErrorResponse:
        try:
            game = self.manager.start_game(address)
        except GameNotFound as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.GAME_NOT_FOUND)
        return game_to_response(address, game)

    def play(
        self,
        address: str,
        caller: str,
        request: PlayRequest,
    ) -> PlayResponse | ErrorResponse:
        """
        Play a move as `caller`.

        Rule violations surface with the engine's error code.
        """
        tile = Tile(row=request.row, column=request.column)
        try:
            result = self.manager.play(address, tile, caller)
        except GameNotFound as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.GAME_NOT_FOUND)
        except ValueError as e:
            return ErrorResponse(error=str(e), error_code=ErrorCode.VALIDATION_ERROR)

        if not result.success:
            return ErrorResponse(
                error=result.error,
                error_code=ErrorCode(result.error_code),
                details={"row": request.row, "column": request.column},
            )

        return PlayResponse(
            changes=result.state_changes,
            game=game_to_response(address, result.new_state),
        )

    def list_games(self) -> GameListResponse:
        games = self.manager.list_games()
        return GameListResponse(games=games, count=len(games))
