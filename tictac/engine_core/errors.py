"""
Rule Errors - Move rejections raised by the engine.

Every error here is a caller-input or caller-authorization violation.
The reducer converts them to failed ActionResults carrying `error_code`.
"""

from __future__ import annotations


class TicTacToeError(Exception):
    """Base class for rule violations."""
    error_code = "TIC_TAC_TOE_ERROR"
    default_message = "Move rejected"

    def __init__(self, message: str | None = None):
        super().__init__(message or self.default_message)


class GameAlreadyOver(TicTacToeError):
    """Move attempted on a game that has been won or tied."""
    error_code = "GameAlreadyOver"
    default_message = "Game is already over"


class NotPlayersTurn(TicTacToeError):
    """Move attempted by someone other than the player to move."""
    error_code = "NotPlayersTurn"
    default_message = "Not this player's turn"


class TileAlreadySet(TicTacToeError):
    """Target tile is already occupied."""
    error_code = "TileAlreadySet"
    default_message = "Tile is already set"


class TileOutOfBounds(TicTacToeError):
    """Row or column outside the 3x3 board."""
    error_code = "TileOutOfBounds"
    default_message = "Tile is out of bounds"

