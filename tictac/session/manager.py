"""
Game Manager - Creates games and routes moves to them.

LIFECYCLE:
1. initialize_registry() once per store
2. create_game() by player one, naming player two
   - game address derives from both players and the registry counter
   - counter advances only when the record was created
3. start_game() is a hook with no state change
4. play() until the game reports a terminal outcome

Every mutating call runs inside one store transaction: load the record,
reduce in memory, persist once. A rejected move persists nothing.
"""

from __future__ import annotations
from dataclasses import dataclass
import logging

from ..engine_core.state import Game, Tile
from ..engine_core.action import Move, ActionResult
from ..engine_core.reducer import apply_move
from ..storage import (
    RecordStore,
    MemoryStore,
    parse_identity,
    game_address,
    encode_game,
    decode_game,
    is_game_record,
)
from .registry import SessionRegistry

logger = logging.getLogger(__name__)


class GameNotFound(Exception):
    """No game record at the address."""

    def __init__(self, address: str):
        self.address = address
        super().__init__(f"Game {address} not found")


class CallerMismatch(Exception):
    """Authenticated caller is not the player they claim to act as."""

    def __init__(self, caller: str, expected: str):
        self.caller = caller
        self.expected = expected
        super().__init__(f"Caller {caller} cannot act as {expected}")


@dataclass
class GameHandle:
    """A stored game and the address it lives at."""
    address: str
    game_count: int
    game: Game


class GameManager:
    """
    Manages games in a record store.

    Responsibilities:
    - Own the session registry
    - Allocate game records
    - Apply moves atomically
    """

    def __init__(self, store: RecordStore | None = None):
        self.store = store or MemoryStore()
        self.registry = SessionRegistry(self.store)

    def initialize_registry(self) -> None:
        """One-time setup. Raises RegistryAlreadyInitialized on repeat."""
        self.registry.initialize()

    def create_game(self, caller: str, player_one: str, player_two: str) -> GameHandle:
        """
        Create a new game.

        Args:
            caller: Authenticated identity making the call
            player_one: Must equal caller; plays X and moves first
            player_two: Recorded as-is; plays O

        Returns:
            GameHandle for the new game
        """
        player_one = parse_identity(player_one)
        player_two = parse_identity(player_two)
        if parse_identity(caller) != player_one:
            raise CallerMismatch(caller, player_one)

        game = Game.create(player_one, player_two)
        with self.store.transaction():
            game_count = self.registry.current()
            address = game_address(player_one, player_two, game_count)
            self.store.create(address, encode_game(game))
            self.registry.advance()

        logger.info(
            "Created game %s (#%d) between %s and %s",
            address, game_count, player_one, player_two,
        )
        return GameHandle(address=address, game_count=game_count, game=game)

    def get_game(self, address: str) -> Game:
        """Load a game. Raises GameNotFound if missing."""
        data = self.store.get(address)
        if data is None or not is_game_record(data):
            raise GameNotFound(address)
        return decode_game(data)

    def start_game(self, address: str) -> Game:
        """Reserved for pre-play setup; currently changes nothing."""
        return self.get_game(address)

    def play(self, address: str, tile: Tile, acting_player: str) -> ActionResult:
        """
        Apply a move by `acting_player` to the game at `address`.

        Rule violations come back as a failed ActionResult;
        storage failures and malformed identities propagate.
        """
        acting_player = parse_identity(acting_player)
        with self.store.transaction():
            game = self.get_game(address)
            result = apply_move(game, Move(player=acting_player, tile=tile))
            if result.success:
                self.store.put(address, encode_game(result.new_state))

        if result.success and result.new_state.state.is_terminal:
            logger.info("Game %s finished: %s", address, result.new_state.state.describe())
        return result

    def list_games(self) -> list[str]:
        """Addresses of all stored games."""
        return [
            key for key in self.store.keys()
            if is_game_record(self.store.get(key) or b"")
        ]
