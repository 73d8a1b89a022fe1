"""
Tests for API layer.

Tests:
- Service methods and error mapping
- Caller authentication
- HTTP endpoints
"""

import pytest
from fastapi.testclient import TestClient

from ..api.app import create_app
from ..api.auth import sign_identity, verify_caller
from ..api.schemas import (
    CreateGameRequest,
    PlayRequest,
    ErrorResponse,
    ErrorCode,
    GameStatus,
    SignValue,
)
from ..api.service import GameService


class TestGameService:
    """Tests for GameService."""

    @pytest.fixture
    def created(self, service, player_one, player_two):
        request = CreateGameRequest(player_one=player_one, player_two=player_two)
        return service.create_game(player_one, request)

    def test_create_game(self, created, player_one, player_two):
        assert created.game_count == 0
        assert created.game.player_one == player_one
        assert created.game.player_two == player_two
        assert created.game.status == GameStatus.ACTIVE
        assert created.game.current_player == player_one

    def test_create_game_wrong_caller(self, service, player_one, player_two):
        request = CreateGameRequest(player_one=player_one, player_two=player_two)

        response = service.create_game(player_two, request)

        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.CALLER_MISMATCH
        assert service.get_registry().game_count == 0

    def test_create_game_without_registry(self, player_one, player_two):
        service = GameService()
        request = CreateGameRequest(player_one=player_one, player_two=player_two)

        response = service.create_game(player_one, request)

        assert response.error_code == ErrorCode.REGISTRY_NOT_INITIALIZED

    def test_initialize_twice(self, service):
        response = service.initialize_registry()
        assert response.error_code == ErrorCode.REGISTRY_ALREADY_INITIALIZED

    def test_play(self, service, created, player_one, player_two):
        response = service.play(created.game.address, player_one, PlayRequest(row=2, column=0))

        assert response.success
        assert response.game.board[2][0] == SignValue.X
        assert response.game.turn == 2
        assert response.game.current_player == player_two

    def test_play_rule_violation(self, service, created, player_two):
        response = service.play(created.game.address, player_two, PlayRequest(row=0, column=0))

        assert isinstance(response, ErrorResponse)
        assert response.error_code == ErrorCode.NOT_PLAYERS_TURN
        assert response.details == {"row": 0, "column": 0}

    def test_play_unknown_game(self, service, player_one):
        response = service.play("ff" * 32, player_one, PlayRequest(row=0, column=0))
        assert response.error_code == ErrorCode.GAME_NOT_FOUND

    def test_play_malformed_caller(self, service, created):
        response = service.play(created.game.address, "not-hex", PlayRequest(row=0, column=0))
        assert response.error_code == ErrorCode.VALIDATION_ERROR

    def test_finished_game_response(self, service, created, player_one, player_two):
        address = created.game.address
        for player, row, column in [
            (player_one, 0, 0), (player_two, 1, 0),
            (player_one, 0, 1), (player_two, 1, 1),
            (player_one, 0, 2),
        ]:
            service.play(address, player, PlayRequest(row=row, column=column))

        state = service.get_game(address)

        assert state.status == GameStatus.WON
        assert state.winner == player_one
        assert state.current_player is None
        assert not state.is_active

    def test_list_games(self, service, created):
        response = service.list_games()
        assert response.games == [created.game.address]
        assert response.count == 1


class TestAuth:
    """Tests for caller identity assertion."""

    def test_valid_signature(self, player_one):
        signature = sign_identity(player_one, "secret")
        assert verify_caller(player_one, signature, "secret") == player_one

    def test_bad_signature(self, player_one, player_two):
        signature = sign_identity(player_two, "secret")
        assert verify_caller(player_one, signature, "secret") is None

    def test_missing_signature(self, player_one):
        assert verify_caller(player_one, None, "secret") is None

    def test_missing_signature_is_logged(self, player_one, caplog):
        with caplog.at_level("WARNING", logger="tictac.api.auth"):
            verify_caller(player_one, "", "secret")

        assert "missing signature" in caplog.text

    def test_non_ascii_signature(self, player_one):
        assert verify_caller(player_one, "\xe9" * 64, "secret") is None
        assert verify_caller(player_one, "\u00e9", "secret") is None

    def test_no_secret_requires_debug(self, player_one):
        assert verify_caller(player_one, None, "") is None
        assert verify_caller(player_one, None, "", debug=True) == player_one

    def test_malformed_identity(self):
        assert verify_caller("nope", None, "", debug=True) is None


class TestHTTP:
    """Tests for the FastAPI endpoints."""

    @pytest.fixture
    def client(self, debug_config):
        return TestClient(create_app(config=debug_config))

    @staticmethod
    def as_player(identity):
        return {"X-Player-Id": identity}

    def create(self, client, player_one, player_two):
        client.post("/api/v1/registry")
        return client.post(
            "/api/v1/games",
            json={"player_one": player_one, "player_two": player_two},
            headers=self.as_player(player_one),
        )

    def test_health(self, client):
        response = client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "ok"

    def test_registry_lifecycle(self, client):
        assert client.get("/api/v1/registry").json() == {"initialized": False, "game_count": None}
        assert client.post("/api/v1/registry").status_code == 201

        again = client.post("/api/v1/registry")

        assert again.status_code == 409
        assert again.json()["error_code"] == "REGISTRY_ALREADY_INITIALIZED"

    def test_create_and_play(self, client, player_one, player_two):
        created = self.create(client, player_one, player_two)
        assert created.status_code == 201
        address = created.json()["game"]["address"]

        moved = client.post(
            f"/api/v1/games/{address}/moves",
            json={"row": 1, "column": 1},
            headers=self.as_player(player_one),
        )

        assert moved.status_code == 200
        body = moved.json()
        assert body["game"]["board"][1][1] == "X"
        assert body["game"]["current_player"] == player_two
        assert client.get("/api/v1/registry").json()["game_count"] == 1

    def test_not_players_turn(self, client, player_one, player_two):
        address = self.create(client, player_one, player_two).json()["game"]["address"]

        response = client.post(
            f"/api/v1/games/{address}/moves",
            json={"row": 0, "column": 0},
            headers=self.as_player(player_two),
        )

        assert response.status_code == 403
        assert response.json()["error_code"] == "NotPlayersTurn"

    def test_out_of_bounds(self, client, player_one, player_two):
        address = self.create(client, player_one, player_two).json()["game"]["address"]

        response = client.post(
            f"/api/v1/games/{address}/moves",
            json={"row": 3, "column": 0},
            headers=self.as_player(player_one),
        )

        assert response.status_code == 400
        assert response.json()["error_code"] == "TileOutOfBounds"
        assert client.get(f"/api/v1/games/{address}").json()["turn"] == 1

    def test_missing_identity(self, client, player_one, player_two):
        client.post("/api/v1/registry")
        response = client.post(
            "/api/v1/games",
            json={"player_one": player_one, "player_two": player_two},
        )
        assert response.status_code == 401
        assert response.json()["error_code"] == "UNAUTHENTICATED"

    def test_creator_must_be_player_one(self, client, player_one, player_two):
        client.post("/api/v1/registry")
        response = client.post(
            "/api/v1/games",
            json={"player_one": player_one, "player_two": player_two},
            headers=self.as_player(player_two),
        )
        assert response.status_code == 403
        assert response.json()["error_code"] == "CALLER_MISMATCH"

    def test_invalid_identity_in_body(self, client, player_one):
        client.post("/api/v1/registry")
        response = client.post(
            "/api/v1/games",
            json={"player_one": player_one, "player_two": "xyz"},
            headers=self.as_player(player_one),
        )
        assert response.status_code == 422

    def test_unknown_game(self, client):
        response = client.get(f"/api/v1/games/{'ab' * 32}")
        assert response.status_code == 404
        assert response.json()["error_code"] == "GAME_NOT_FOUND"

    def test_start_and_list(self, client, player_one, player_two):
        address = self.create(client, player_one, player_two).json()["game"]["address"]

        started = client.post(f"/api/v1/games/{address}/start")

        assert started.status_code == 200
        assert started.json()["turn"] == 1
        assert client.get("/api/v1/games").json() == {"games": [address], "count": 1}

    def test_signed_requests(self, secret_config, player_one, player_two):
        client = TestClient(create_app(config=secret_config))
        client.post("/api/v1/registry")
        body = {"player_one": player_one, "player_two": player_two}

        unsigned = client.post("/api/v1/games", json=body, headers={"X-Player-Id": player_one})
        signed = client.post(
            "/api/v1/games",
            json=body,
            headers={
                "X-Player-Id": player_one,
                "X-Player-Signature": sign_identity(player_one, "test-secret"),
            },
        )

        assert unsigned.status_code == 401
        assert signed.status_code == 201

    def test_non_ascii_signature_is_unauthenticated(self, secret_config, player_one, player_two):
        client = TestClient(create_app(config=secret_config))
        client.post("/api/v1/registry")

        response = client.post(
            "/api/v1/games",
            json={"player_one": player_one, "player_two": player_two},
            headers={
                "X-Player-Id": player_one,
                "X-Player-Signature": "\xe9".encode("latin-1"),
            },
        )

        assert response.status_code == 401
        assert response.json()["error_code"] == "UNAUTHENTICATED"
