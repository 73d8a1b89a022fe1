"""
Record Codec - Fixed-width binary records.

Game record layout (little-endian, 124 bytes):

    discriminator        8   sha256(b"account:Game")[:8]
    players          2 x 32
    turn                 1   u8
    board            9 x  2  (presence flag, sign)
    outcome tag          1   0 active, 1 tie, 2 won
    winner              32   zeroed unless won

Registry record layout (16 bytes):

    discriminator        8   sha256(b"account:GlobalState")[:8]
    game_count           8   u64
"""

from __future__ import annotations
import hashlib
import struct

from ..engine_core.state import BOARD_SIZE, Game, Outcome, OutcomeKind, Sign
from .identity import IDENTITY_SIZE, identity_bytes
from .store import RecordCorrupted


def _discriminator(name: str) -> bytes:
    return hashlib.sha256(f"account:{name}".encode()).digest()[:8]


GAME_DISCRIMINATOR = _discriminator("Game")
REGISTRY_DISCRIMINATOR = _discriminator("GlobalState")

_CELL_COUNT = BOARD_SIZE * BOARD_SIZE
_GAME_FORMAT = (
    f"<8s{IDENTITY_SIZE}s{IDENTITY_SIZE}sB{_CELL_COUNT * 2}sB{IDENTITY_SIZE}s"
)
_REGISTRY_FORMAT = "<8sQ"

GAME_RECORD_SIZE = struct.calcsize(_GAME_FORMAT)
REGISTRY_RECORD_SIZE = struct.calcsize(_REGISTRY_FORMAT)

_OUTCOME_TAGS = {
    OutcomeKind.ACTIVE: 0,
    OutcomeKind.TIE: 1,
    OutcomeKind.WON: 2,
}
_TAG_OUTCOMES = {tag: kind for kind, tag in _OUTCOME_TAGS.items()}
_NO_WINNER = bytes(IDENTITY_SIZE)


def encode_game(game: Game) -> bytes:
    """Serialize a game to its fixed-width record."""
    cells = bytearray()
    for row in game.board:
        for cell in row:
            if cell is None:
                cells += b"\x00\x00"
            else:
                cells += bytes((1, cell.value))

    tag = _OUTCOME_TAGS[game.state.kind]
    winner = identity_bytes(game.state.winner) if game.state.kind == OutcomeKind.WON else _NO_WINNER

    return struct.pack(
        _GAME_FORMAT,
        GAME_DISCRIMINATOR,
        identity_bytes(game.players[0]),
        identity_bytes(game.players[1]),
        game.turn,
        bytes(cells),
        tag,
        winner,
    )


def decode_game(data: bytes) -> Game:
    """
    Deserialize a game record.

    Raises RecordCorrupted if the size, discriminator or any tag is invalid.
    """
    if len(data) != GAME_RECORD_SIZE:
        raise RecordCorrupted(
            f"Game record must be {GAME_RECORD_SIZE} bytes, got {len(data)}"
        )

    discriminator, one, two, turn, cells, tag, winner = struct.unpack(_GAME_FORMAT, data)
    if discriminator != GAME_DISCRIMINATOR:
        raise RecordCorrupted("Record is not a game")

    board: list[list[Sign | None]] = []
    for row in range(BOARD_SIZE):
        board_row: list[Sign | None] = []
        for column in range(BOARD_SIZE):
            offset = (row * BOARD_SIZE + column) * 2
            present, value = cells[offset], cells[offset + 1]
            if present == 0:
                board_row.append(None)
            elif present == 1 and value in (0, 1):
                board_row.append(Sign(value))
            else:
                raise RecordCorrupted(f"Invalid cell at ({row}, {column})")
        board.append(board_row)

    kind = _TAG_OUTCOMES.get(tag)
    if kind is None:
        raise RecordCorrupted(f"Unknown outcome tag: {tag}")
    if kind == OutcomeKind.WON:
        state = Outcome.won(winner.hex())
    elif kind == OutcomeKind.TIE:
        state = Outcome.tie()
    else:
        state = Outcome.active()

    return Game(
        players=(one.hex(), two.hex()),
        turn=turn,
        board=board,
        state=state,
    )


def encode_registry(game_count: int) -> bytes:
    return struct.pack(_REGISTRY_FORMAT, REGISTRY_DISCRIMINATOR, game_count)


def decode_registry(data: bytes) -> int:
    """Read the game counter from a registry record."""
    if len(data) != REGISTRY_RECORD_SIZE:
        raise RecordCorrupted(
            f"Registry record must be {REGISTRY_RECORD_SIZE} bytes, got {len(data)}"
        )
    discriminator, game_count = struct.unpack(_REGISTRY_FORMAT, data)
    if discriminator != REGISTRY_DISCRIMINATOR:
        raise RecordCorrupted("Record is not a registry")
    return game_count


def is_game_record(data: bytes) -> bool:
    return len(data) == GAME_RECORD_SIZE and data[:8] == GAME_DISCRIMINATOR
