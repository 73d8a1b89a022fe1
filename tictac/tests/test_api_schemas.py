"""
Tests for API Pydantic schemas.

Validates that:
- Requests reject malformed identities
- Responses serialize to the documented JSON
- Rule error codes match the engine's
"""

import pytest
from pydantic import ValidationError

from ..engine_core.errors import (
    GameAlreadyOver,
    NotPlayersTurn,
    TileAlreadySet,
    TileOutOfBounds,
)


class TestPydanticSchemas:
    """Tests for Pydantic schema validation."""

    def test_create_request_normalizes_identities(self):
        from tictac.api.schemas import CreateGameRequest

        request = CreateGameRequest(player_one="AA" * 32, player_two="bb" * 32)

        assert request.player_one == "aa" * 32

    def test_create_request_rejects_bad_identity(self):
        from tictac.api.schemas import CreateGameRequest

        with pytest.raises(ValidationError):
            CreateGameRequest(player_one="aa" * 32, player_two="short")

    def test_play_request_allows_out_of_range(self):
        """Bounds belong to the engine, so the schema accepts any int."""
        from tictac.api.schemas import PlayRequest

        request = PlayRequest(row=-4, column=17)

        assert (request.row, request.column) == (-4, 17)

    def test_game_state_response_schema(self):
        from tictac.api.schemas import GameStateResponse, GameStatus, SignValue

        response = GameStateResponse(
            address="ab" * 32,
            player_one="11" * 32,
            player_two="22" * 32,
            turn=2,
            board=[[SignValue.X, None, None], [None, None, None], [None, None, None]],
            status=GameStatus.ACTIVE,
            current_player="22" * 32,
            is_active=True,
        )

        data = response.model_dump(mode="json")
        assert data["board"][0] == ["X", None, None]
        assert data["status"] == "active"
        assert data["winner"] is None

    def test_turn_must_be_positive(self):
        from tictac.api.schemas import GameStateResponse, GameStatus

        with pytest.raises(ValidationError):
            GameStateResponse(
                address="ab",
                player_one="11" * 32,
                player_two="22" * 32,
                turn=0,
                board=[],
                status=GameStatus.ACTIVE,
                is_active=True,
            )


class TestErrorCodes:
    """Tests for error code structure."""

    def test_rule_errors_have_api_codes(self):
        from tictac.api.schemas import ErrorCode

        for error in (GameAlreadyOver, NotPlayersTurn, TileAlreadySet, TileOutOfBounds):
            assert ErrorCode(error.error_code).value == error.error_code

    def test_every_code_has_http_status(self):
        from tictac.api.app import ERROR_STATUS
        from tictac.api.schemas import ErrorCode

        missing = [code for code in ErrorCode if code not in ERROR_STATUS]
        assert missing == []

    def test_error_response_serializes(self):
        from tictac.api.schemas import ErrorResponse, ErrorCode

        response = ErrorResponse(error="Tile is already set", error_code=ErrorCode.TILE_ALREADY_SET)

        data = response.model_dump(mode="json")
        assert data["error_code"] == "TileAlreadySet"
        assert data["api_version"] == "v1"
