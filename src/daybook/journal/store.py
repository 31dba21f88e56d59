"""Persistent entry store.

Holds the whole entry collection as one JSON document under a single key
of a :class:`~daybook.core.storage.StorageBackend`. Every save rewrites the
full document; the backend's atomic replace keeps it crash-consistent.
"""

from __future__ import annotations

import json

from loguru import logger

from daybook.core.exceptions import StorageReadError, StorageWriteError
from daybook.core.storage import StorageBackend, StorageError, StorageKeyError

from .config import JournalConfig
from .models import Entry


class EntryStore:
    """Load and save the entry collection.

    Example::

        store = EntryStore(LocalStorage("~/.daybook-data/storage"))
        entries = await store.load()
        await store.save(entries)
    """

    def __init__(self, backend: StorageBackend, config: JournalConfig | None = None):
        self.backend = backend
        self.config = config or JournalConfig()

    @property
    def key(self) -> str:
        return self.config.storage_key

    async def load(self) -> list[Entry]:
        """Read the stored collection, in stored order.

        Returns an empty list when nothing has been saved yet.

        Raises:
            StorageReadError: The medium failed or the document is malformed.
        """
        try:
            raw = await self.backend.load(self.key)
        except StorageKeyError:
            logger.debug(f"No stored document under '{self.key}', starting empty")
            return []
        except StorageError as e:
            logger.error(f"Failed to read journal document '{self.key}': {e}")
            raise StorageReadError(str(e)) from e

        try:
            document = json.loads(raw.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            logger.error(f"Journal document '{self.key}' is not valid JSON: {e}")
            raise StorageReadError(f"Stored document is not valid JSON: {e}") from e

        # A null document is what an empty first-run write looks like on some media.
        if document is None:
            return []
        if not isinstance(document, list):
            raise StorageReadError(f"Stored document must be a list of entries, got {type(document).__name__}")

        entries: list[Entry] = []
        seen: set[str] = set()
        for index, record in enumerate(document):
            try:
                entry = Entry.from_dict(record)
            except ValueError as e:
                logger.error(f"Malformed entry at position {index}: {e}")
                raise StorageReadError(f"Malformed entry at position {index}: {e}") from e
            if entry.id in seen:
                raise StorageReadError(f"Duplicate entry id in stored document: {entry.id}")
            seen.add(entry.id)
            entries.append(entry)

        logger.debug(f"Loaded {len(entries)} entries from '{self.key}'")
        return entries

    async def save(self, entries: list[Entry]) -> None:
        """Serialize *entries* and atomically replace the stored document.

        Raises:
            StorageWriteError: The medium failed to persist the document.
        """
        payload = json.dumps([entry.to_dict() for entry in entries], ensure_ascii=False).encode("utf-8")
        try:
            await self.backend.save(self.key, payload, compress=self.config.compress)
        except StorageError as e:
            logger.error(f"Failed to save {len(entries)} entries to '{self.key}': {e}")
            raise StorageWriteError(str(e)) from e
        except OSError as e:
            logger.error(f"Failed to save {len(entries)} entries to '{self.key}': {e}")
            raise StorageWriteError(str(e)) from e
        logger.debug(f"Saved {len(entries)} entries to '{self.key}'")
