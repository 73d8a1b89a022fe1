"""
Session Module - Game creation and move routing over durable records.

A session is one game between two identities:
- Addressed by (player one, player two, registry counter)
- Created by player one
- Played move by move until won or tied

All state lives in the record store; the manager keeps nothing in memory.
"""

from .manager import GameManager, GameHandle, GameNotFound, CallerMismatch
from .registry import (
    SessionRegistry,
    RegistryError,
    RegistryAlreadyInitialized,
    RegistryNotInitialized,
)

__all__ = [
    "GameManager",
    "GameHandle",
    "GameNotFound",
    "CallerMismatch",
    "SessionRegistry",
    "RegistryError",
    "RegistryAlreadyInitialized",
    "RegistryNotInitialized",
]
