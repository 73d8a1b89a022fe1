"""
Storage - Durable fixed-size records keyed by deterministic address.

Game state and the registry counter are the only things persisted.
Each lives in one fixed-width record; see codec for the layouts.
"""

from .store import (
    RecordStore,
    MemoryStore,
    FileStore,
    StorageError,
    RecordExists,
    RecordNotFound,
    RecordCorrupted,
)
from .codec import (
    GAME_RECORD_SIZE,
    REGISTRY_RECORD_SIZE,
    encode_game,
    decode_game,
    encode_registry,
    decode_registry,
    is_game_record,
)
from .identity import (
    IDENTITY_SIZE,
    new_identity,
    parse_identity,
    derive_address,
    registry_address,
    game_address,
)

__all__ = [
    "RecordStore",
    "MemoryStore",
    "FileStore",
    "StorageError",
    "RecordExists",
    "RecordNotFound",
    "RecordCorrupted",
    "GAME_RECORD_SIZE",
    "REGISTRY_RECORD_SIZE",
    "encode_game",
    "decode_game",
    "encode_registry",
    "decode_registry",
    "is_game_record",
    "IDENTITY_SIZE",
    "new_identity",
    "parse_identity",
    "derive_address",
    "registry_address",
    "game_address",
]
