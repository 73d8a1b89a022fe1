"""
Action System - Moves and results.

A move is the only action in the game: an acting player and a tile.
All state changes flow through the reducer, which answers with an
ActionResult.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any

from .state import Tile


@dataclass(frozen=True)
class Move:
    """A player's request to place their sign on a tile."""
    player: str
    tile: Tile

    @classmethod
    def at(cls, player: str, row: int, column: int) -> Move:
        """Factory for a move at (row, column)."""
        return cls(player=player, tile=Tile(row=row, column=column))


@dataclass
class ActionResult:
    """
    Result of applying a move.

    Contains:
    - Whether the move succeeded
    - New game (if succeeded)
    - Error message and code (if failed)
    - Human-readable changes for presentation
    """
    success: bool
    new_state: Any | None = None  # Game
    error: str | None = None
    error_code: str | None = None
    state_changes: list[str] = field(default_factory=list)

    @classmethod
    def failure(cls, error: str, error_code: str | None = None) -> ActionResult:
        """Create a failure result."""
        return cls(success=False, error=error, error_code=error_code)

    @classmethod
    def success_with_state(
        cls,
        state: Any,
        changes: list[str] | None = None,
    ) -> ActionResult:
        """Create a success result with new state."""
        return cls(
            success=True,
            new_state=state,
            state_changes=changes or [],
        )
