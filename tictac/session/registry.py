"""
Session Registry - Hands out unique game counter values.

The registry is one durable record holding a u64 counter. Each game
creation reads the counter, uses it in the game's address, then
advances it by one. Atomicity comes from the store's transaction().
"""

from __future__ import annotations
import logging

from ..storage import (
    RecordStore,
    RecordExists,
    registry_address,
    encode_registry,
    decode_registry,
)

logger = logging.getLogger(__name__)


class RegistryError(Exception):
    """Base class for registry failures."""


class RegistryAlreadyInitialized(RegistryError):
    """initialize() called twice."""

    def __init__(self):
        super().__init__("Registry is already initialized")


class RegistryNotInitialized(RegistryError):
    """Counter read before initialize()."""

    def __init__(self):
        super().__init__("Registry is not initialized")


class SessionRegistry:
    """
    Durable monotonic counter.

    Usage:
        registry = SessionRegistry(store)
        registry.initialize()
        game_count = registry.next_id()
    """

    def __init__(self, store: RecordStore):
        self.store = store
        self.address = registry_address()

    def initialize(self) -> None:
        """Create the counter at 0. Fails if it already exists."""
        try:
            self.store.create(self.address, encode_registry(0))
        except RecordExists:
            raise RegistryAlreadyInitialized() from None
        logger.info("Registry initialized at %s", self.address)

    def is_initialized(self) -> bool:
        return self.store.exists(self.address)

    def current(self) -> int:
        """Counter value the next created game will use."""
        data = self.store.get(self.address)
        if data is None:
            raise RegistryNotInitialized()
        return decode_registry(data)

    def advance(self) -> int:
        """Increment the counter and return the new value."""
        with self.store.transaction():
            game_count = self.current() + 1
            self.store.put(self.address, encode_registry(game_count))
        return game_count

    def next_id(self) -> int:
        """Return the current counter value, then increment it."""
        with self.store.transaction():
            game_count = self.current()
            self.advance()
        return game_count
