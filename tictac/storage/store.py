"""
Record Store - Durable storage for fixed-size records.

The store:
- Keys records by deterministic address
- Never creates the same address twice
- Serializes read-modify-write sequences through transaction()

Two backends:
- MemoryStore: dict-backed, for tests and ephemeral servers
- FileStore: one file per record under a directory
"""

from __future__ import annotations
import os
import tempfile
import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator


class StorageError(Exception):
    """Base class for storage failures."""


class RecordExists(StorageError):
    """A record already lives at the address."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Record already exists: {key}")


class RecordNotFound(StorageError):
    """No record lives at the address."""

    def __init__(self, key: str):
        self.key = key
        super().__init__(f"Record not found: {key}")


class RecordCorrupted(StorageError):
    """Stored bytes do not decode to the expected record."""


class RecordStore(ABC):
    """
    Abstract key/value store of byte records.

    Subclasses implement the raw operations; transaction() holds a
    re-entrant lock so callers can group several of them.
    """

    def __init__(self):
        self._lock = threading.RLock()

    @contextmanager
    def transaction(self) -> Iterator[RecordStore]:
        """Serialize a read-modify-write sequence."""
        with self._lock:
            yield self

    @abstractmethod
    def get(self, key: str) -> bytes | None:
        """Get a record, or None if missing."""
        pass

    @abstractmethod
    def _write(self, key: str, data: bytes) -> None:
        pass

    @abstractmethod
    def keys(self) -> list[str]:
        """List all record addresses."""
        pass

    def exists(self, key: str) -> bool:
        return self.get(key) is not None

    def create(self, key: str, data: bytes) -> None:
        """Allocate a new record. Raises RecordExists on collision."""
        with self._lock:
            if self.exists(key):
                raise RecordExists(key)
            self._write(key, data)

    def put(self, key: str, data: bytes) -> None:
        """Overwrite an existing record. Raises RecordNotFound if missing."""
        with self._lock:
            if not self.exists(key):
                raise RecordNotFound(key)
            self._write(key, data)


class MemoryStore(RecordStore):
    """In-memory store. Contents are lost with the process."""

    def __init__(self):
        super().__init__()
        self._records: dict[str, bytes] = {}

    def get(self, key: str) -> bytes | None:
        return self._records.get(key)

    def _write(self, key: str, data: bytes) -> None:
        self._records[key] = bytes(data)

    def keys(self) -> list[str]:
        return list(self._records.keys())


class FileStore(RecordStore):
    """
    File-backed store.

    Usage:
        store = FileStore("~/.tictac/data")
        store.create(address, record)
    """

    SUFFIX = ".bin"

    def __init__(self, directory: str | Path):
        super().__init__()
        self.directory = Path(directory).expanduser()
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}{self.SUFFIX}"

    def get(self, key: str) -> bytes | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_bytes()

    def _write(self, key: str, data: bytes) -> None:
        # Write to a sibling temp file, then swap it in
        fd, tmp_name = tempfile.mkstemp(dir=self.directory, suffix=".tmp")
        try:
            with os.fdopen(fd, "wb") as f:
                f.write(data)
            os.replace(tmp_name, self._path(key))
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def keys(self) -> list[str]:
        return sorted(f.stem for f in self.directory.glob(f"*{self.SUFFIX}"))
