"""
Identities and Addresses.

An identity is a 32-byte token carried as 64 lowercase hex characters.
Record addresses are derived deterministically from seeds, so the same
inputs always name the same record.
"""

from __future__ import annotations
import hashlib
import secrets


IDENTITY_SIZE = 32
ADDRESS_NAMESPACE = b"tictac"

REGISTRY_SEED = b"global_state"
GAME_SEED = b"game"


def new_identity() -> str:
    """Generate a random identity."""
    return secrets.token_hex(IDENTITY_SIZE)


def parse_identity(identity: str) -> str:
    """
    Normalize an identity.

    Raises ValueError unless `identity` is 32 bytes of hex.
    """
    if not isinstance(identity, str):
        raise ValueError(f"Identity must be a hex string, got {type(identity).__name__}")
    try:
        raw = bytes.fromhex(identity)
    except ValueError:
        raise ValueError(f"Identity is not valid hex: {identity!r}") from None
    if len(raw) != IDENTITY_SIZE:
        raise ValueError(f"Identity must be {IDENTITY_SIZE} bytes, got {len(raw)}")
    return raw.hex()


def identity_bytes(identity: str) -> bytes:
    return bytes.fromhex(parse_identity(identity))


def derive_address(*seeds: bytes) -> str:
    """Hex SHA-256 of the namespace followed by each seed."""
    digest = hashlib.sha256(ADDRESS_NAMESPACE)
    for seed in seeds:
        digest.update(seed)
    return digest.hexdigest()


def registry_address() -> str:
    return derive_address(REGISTRY_SEED)


def game_address(player_one: str, player_two: str, game_count: int) -> str:
    """Address of the game created with this counter value."""
    return derive_address(
        GAME_SEED,
        identity_bytes(player_one),
        identity_bytes(player_two),
        game_count.to_bytes(8, "little"),
    )
