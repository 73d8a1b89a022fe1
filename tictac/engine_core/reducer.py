"""
Reducer - Applies moves to game state.

The reducer is the single point of state mutation.
All moves must go through apply_move().

Design principles:
- Pure function: (game, move) -> ActionResult with a new game
- Turn ownership is checked here, before the transition runs
- The input game is never mutated, even on failure
"""

from __future__ import annotations
import logging

from .state import Game, OutcomeKind
from .action import Move, ActionResult
from .errors import TicTacToeError, NotPlayersTurn

logger = logging.getLogger(__name__)


def authorize(game: Game, player: str) -> None:
    """Raise NotPlayersTurn unless `player` is expected to move."""
    if game.current_player() != player:
        raise NotPlayersTurn(f"Not {player}'s turn")


def apply_move(game: Game, move: Move) -> ActionResult:
    """
    Apply a move to a game.

    Returns ActionResult with the new game or the rule violation.
    """
    try:
        authorize(game, move.player)
        new_game = game.clone()
        outcome = new_game.play(move.tile)
    except TicTacToeError as e:
        logger.warning(
            "Rejected move by %s at (%s, %s): %s",
            move.player, move.tile.row, move.tile.column, e.error_code,
        )
        return ActionResult.failure(str(e), error_code=e.error_code)

    sign = game.current_sign().symbol
    changes = [f"{sign} placed at ({move.tile.row}, {move.tile.column})"]
    if outcome.kind == OutcomeKind.WON:
        changes.append(f"{sign} wins")
    elif outcome.kind == OutcomeKind.TIE:
        changes.append("Board full, game tied")

    logger.debug("Applied move by %s on turn %d", move.player, game.turn)
    return ActionResult.success_with_state(new_game, changes=changes)
