"""
Engine Core - Deterministic tic-tac-toe state machine.

The engine:
1. Creates a Game on an empty board
2. Checks turn ownership
3. Validates and places moves
4. Detects wins and ties
"""

from .state import Game, Sign, Tile, Outcome, OutcomeKind, BOARD_SIZE, WINNING_LINES
from .action import Move, ActionResult
from .reducer import apply_move, authorize
from .errors import (
    TicTacToeError,
    GameAlreadyOver,
    NotPlayersTurn,
    TileAlreadySet,
    TileOutOfBounds,
)

__all__ = [
    "Game",
    "Sign",
    "Tile",
    "Outcome",
    "OutcomeKind",
    "BOARD_SIZE",
    "WINNING_LINES",
    "Move",
    "ActionResult",
    "apply_move",
    "authorize",
    "TicTacToeError",
    "GameAlreadyOver",
    "NotPlayersTurn",
    "TileAlreadySet",
    "TileOutOfBounds",
]
