"""
Game State - The tic-tac-toe state machine.

Design principles:
- The turn counter is the only source of "whose move is it"
- Outcome is a tagged union: ACTIVE, TIE, or WON carrying the winner
- play() is the pure transition; turn ownership is checked by the reducer
- Rejections happen before any mutation
"""

from __future__ import annotations
from dataclasses import dataclass, field
from copy import deepcopy
from enum import Enum

from .errors import GameAlreadyOver, TileAlreadySet, TileOutOfBounds


BOARD_SIZE = 3


class Sign(Enum):
    """Mark placed on a tile. X belongs to player one, O to player two."""
    X = 0
    O = 1

    @classmethod
    def for_player_index(cls, index: int) -> Sign:
        return cls(index)

    @property
    def symbol(self) -> str:
        return self.name


class OutcomeKind(Enum):
    """Tag of the game outcome."""
    ACTIVE = "active"
    TIE = "tie"
    WON = "won"


@dataclass(frozen=True)
class Outcome:
    """
    Game outcome.

    Only WON carries a payload (the winner's identity).
    """
    kind: OutcomeKind
    winner: str | None = None

    def __post_init__(self):
        if (self.kind == OutcomeKind.WON) != (self.winner is not None):
            raise ValueError("winner is set if and only if the outcome is WON")

    @classmethod
    def active(cls) -> Outcome:
        return cls(OutcomeKind.ACTIVE)

    @classmethod
    def tie(cls) -> Outcome:
        return cls(OutcomeKind.TIE)

    @classmethod
    def won(cls, winner: str) -> Outcome:
        return cls(OutcomeKind.WON, winner)

    @property
    def is_terminal(self) -> bool:
        return self.kind != OutcomeKind.ACTIVE

    def describe(self) -> str:
        if self.kind == OutcomeKind.WON:
            return f"won by {self.winner}"
        if self.kind == OutcomeKind.TIE:
            return "tie"
        return "active"


@dataclass(frozen=True)
class Tile:
    """
    A move request: (row, column).

    Not validated on construction; the engine rejects out-of-range values.
    """
    row: int
    column: int


# Rows and columns interleaved (row i, then column i), then both diagonals.
WINNING_LINES: tuple[tuple[tuple[int, int], ...], ...] = tuple(
    line
    for i in range(BOARD_SIZE)
    for line in (
        tuple((i, c) for c in range(BOARD_SIZE)),
        tuple((r, i) for r in range(BOARD_SIZE)),
    )
) + (
    tuple((i, i) for i in range(BOARD_SIZE)),
    tuple((i, BOARD_SIZE - 1 - i) for i in range(BOARD_SIZE)),
)


def empty_board() -> list[list[Sign | None]]:
    return [[None] * BOARD_SIZE for _ in range(BOARD_SIZE)]


@dataclass
class Game:
    """
    Complete state of one game.

    Created ACTIVE with an empty board on turn 1. The only mutation is
    play(); once the outcome is terminal the board never changes again.
    """
    players: tuple[str, str]
    turn: int = 1
    board: list[list[Sign | None]] = field(default_factory=empty_board)
    state: Outcome = field(default_factory=Outcome.active)

    @classmethod
    def create(cls, player_one: str, player_two: str) -> Game:
        """New active game between player_one (X) and player_two (O)."""
        return cls(players=(player_one, player_two))

    def is_active(self) -> bool:
        """Check if moves are still accepted."""
        return self.state.kind == OutcomeKind.ACTIVE

    def current_player_index(self) -> int:
        return (self.turn - 1) % 2

    def current_player(self) -> str:
        """Identity expected to make the move on the current turn."""
        return self.players[self.current_player_index()]

    def current_sign(self) -> Sign:
        return Sign.for_player_index(self.current_player_index())

    @property
    def winner(self) -> str | None:
        return self.state.winner

    def tile(self, row: int, column: int) -> Sign | None:
        return self.board[row][column]

    def empty_tiles(self) -> list[Tile]:
        return [
            Tile(row, column)
            for row in range(BOARD_SIZE)
            for column in range(BOARD_SIZE)
            if self.board[row][column] is None
        ]

    def play(self, tile: Tile) -> Outcome:
        """
        Place the current player's sign on a tile.

        Checks, in order: game active, tile in bounds, tile empty.
        Raises on the first failed check without touching state.
        The turn advances only while the game stays active.
        """
        if not self.is_active():
            raise GameAlreadyOver()

        if not (0 <= tile.row < BOARD_SIZE and 0 <= tile.column < BOARD_SIZE):
            raise TileOutOfBounds(f"Tile ({tile.row}, {tile.column}) is out of bounds")

        if self.board[tile.row][tile.column] is not None:
            raise TileAlreadySet(f"Tile ({tile.row}, {tile.column}) is already set")

        self.board[tile.row][tile.column] = self.current_sign()

        self.state = self._evaluate_outcome()
        if self.state.kind == OutcomeKind.ACTIVE:
            self.turn += 1

        return self.state

    def _is_winning_trio(self, trio: tuple[tuple[int, int], ...]) -> bool:
        (r0, c0), (r1, c1), (r2, c2) = trio
        first = self.board[r0][c0]
        return (
            first is not None
            and first == self.board[r1][c1]
            and first == self.board[r2][c2]
        )

    def _evaluate_outcome(self) -> Outcome:
        """
        Decide the outcome after a placement.

        The winner is whoever moved on the current turn; the turn has not
        been advanced yet.
        """
        for line in WINNING_LINES:
            if self._is_winning_trio(line):
                return Outcome.won(self.current_player())

        if any(cell is None for row in self.board for cell in row):
            return Outcome.active()

        return Outcome.tie()

    def render(self) -> str:
        """Board as three lines of X, O and '.'."""
        return "\n".join(
            "".join(cell.symbol if cell else "." for cell in row)
            for row in self.board
        )

    def clone(self) -> Game:
        """Deep copy the game."""
        return deepcopy(self)
