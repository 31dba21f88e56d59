"""
Abstract base class for storage backends.

A backend is a durable key -> bytes slot store. The journal keeps its whole
entry collection under one key, so the contract that matters most is that
``save`` replaces a key's value atomically.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime

from ..exceptions import DaybookError


@dataclass
class StorageMetadata:
    """Metadata for stored objects."""

    key: str
    size: int
    modified_at: datetime
    compression: str | None = None


class StorageBackend(ABC):
    """Abstract base class for storage backends."""

    def __init__(self, **config):
        self.config = config

    @abstractmethod
    async def save(self, key: str, data: bytes, compress: bool = False) -> StorageMetadata:
        """Atomically replace the value stored under *key*.

        A concurrent or later ``load`` sees either the previous value or the
        new one, never a partial write.
        """

    @abstractmethod
    async def load(self, key: str) -> bytes:
        """Load data from storage. Raises StorageKeyError if not found."""

    @abstractmethod
    async def exists(self, key: str) -> bool:
        """Check if a key exists in storage."""

    @abstractmethod
    async def delete(self, key: str) -> bool:
        """Delete an object. Returns True if deleted, False if didn't exist."""


class StorageError(DaybookError):
    """Base exception for storage errors."""


class StorageKeyError(StorageError, KeyError):
    """Raised when a storage key doesn't exist."""


class StoragePermissionError(StorageError):
    """Raised when storage operation is not permitted."""
