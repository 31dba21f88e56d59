"""Entry repository: the in-memory journal and its derived views.

The repository owns the authoritative list of entries for a running
session. Mutations change memory first, then write the whole collection
through an :class:`~daybook.journal.store.EntryStore`. If that write
fails the change stays in memory and the failure is reported, both by
raising and on the repository's error channel (``repository.error``).

Typical use::

    repo = EntryRepository(EntryStore(LocalStorage(path)))
    await repo.initialize()
    entry_id = await repo.add("Long walk by the river", Mood.GOOD)
    repo.current_streak()
"""

from __future__ import annotations

import asyncio
import uuid
from collections.abc import Callable
from dataclasses import replace
from datetime import date, tzinfo

from loguru import logger

from daybook.core.events import (
    ENTRY_ADDED,
    ENTRY_DELETED,
    ENTRY_UPDATED,
    JOURNAL_ERROR,
    JOURNAL_LOADED,
    Event,
    EventBus,
)
from daybook.core.exceptions import (
    ImagePickError,
    InvalidMoodError,
    JournalError,
    NotFoundError,
    StorageReadError,
    StorageWriteError,
)

from . import analytics
from .images import ImageProvider
from .models import Entry, Mood, MoodCount, WeekdayCount, now_timestamp
from .store import EntryStore

_EDITABLE_FIELDS = frozenset({"content", "mood", "image"})


def _new_id() -> str:
    return str(uuid.uuid4())


def _check_text_fields(content: object, image: object) -> None:
    """Reject values the stored document could not load back."""
    if not isinstance(content, str):
        raise ValueError(f"Entry content must be a string, got {type(content).__name__}")
    if image is not None and not isinstance(image, str):
        raise ValueError(f"Entry image must be a path/URI string or None, got {type(image).__name__}")


class EntryRepository:
    """In-memory entry collection backed by an :class:`EntryStore`.

    Starts uninitialized; ``await initialize()`` once before anything else.
    """

    def __init__(
        self,
        store: EntryStore,
        *,
        image_provider: ImageProvider | None = None,
        events: EventBus | None = None,
        tz: tzinfo | None = None,
        id_factory: Callable[[], str] = _new_id,
        clock: Callable[[], str] = now_timestamp,
    ):
        """
        Args:
            store: Persistence for the collection.
            image_provider: Photo picker used by :meth:`pick_image`.
            events: Optional bus that receives lifecycle events.
            tz: Zone defining local calendar days. Defaults to the store's
                configured timezone, else system local time.
            id_factory: Generates candidate entry ids.
            clock: Returns the current instant as an ISO-8601 string.
        """
        self.store = store
        self.image_provider = image_provider
        self.events = events
        self.tz = tz if tz is not None else store.config.tzinfo
        self._id_factory = id_factory
        self._clock = clock

        self._entries: list[Entry] = []
        self._ready = False
        self._initializing = False
        self._save_lock = asyncio.Lock()
        self.error: JournalError | None = None

    # -- lifecycle ----------------------------------------------------------

    @property
    def is_ready(self) -> bool:
        return self._ready

    async def initialize(self) -> None:
        """Load the stored collection into memory.

        A read failure never propagates: it is recorded on the error channel
        and the session starts with an empty collection.
        """
        if self._ready or self._initializing:
            logger.debug("EntryRepository already initialized")
            return
        self._initializing = True
        try:
            try:
                self._entries = await self.store.load()
            except StorageReadError as e:
                self._entries = []
                await self._report(e)
            self._ready = True
        finally:
            self._initializing = False

        logger.info(f"Journal ready with {len(self._entries)} entries")
        await self._emit(JOURNAL_LOADED, count=len(self._entries))

    def _require_ready(self) -> None:
        if not self._ready:
            raise RuntimeError("EntryRepository.initialize() must be awaited before use")

    # -- error channel ------------------------------------------------------

    def clear_error(self) -> None:
        """Dismiss the current error."""
        self.error = None

    async def _report(self, error: JournalError) -> None:
        self.error = error
        logger.warning(f"{type(error).__name__}: {error}")
        await self._emit(JOURNAL_ERROR, kind=type(error).__name__, message=error.user_message, detail=str(error))

    async def _emit(self, name: str, **payload) -> None:
        if self.events is not None:
            await self.events.emit(Event(name=name, payload=payload, source="journal"))

    # -- persistence --------------------------------------------------------

    async def _persist(self, operation: str) -> None:
        """Write the current in-memory collection after *operation*.

        Saves are serialized; each one writes the snapshot current when it
        gets the lock, so the last save to finish always matches memory.
        """
        async with self._save_lock:
            snapshot = list(self._entries)
            try:
                await self.store.save(snapshot)
            except StorageWriteError as e:
                error = StorageWriteError(str(e), operation=operation)
                await self._report(error)
                raise error from e

    # -- CRUD ---------------------------------------------------------------

    def _unique_id(self) -> str:
        taken = {entry.id for entry in self._entries}
        entry_id = self._id_factory()
        while entry_id in taken:
            logger.debug(f"Generated id {entry_id} already in use, retrying")
            entry_id = self._id_factory()
        return entry_id

    async def add(self, content: str, mood: Mood | str, image: str | None = None) -> str:
        """Create an entry stamped with the current instant and return its id.

        Raises:
            ValueError: *content* or *image* is not text.
            InvalidMoodError: *mood* is not one of the five moods.
            StorageWriteError: The entry was added in memory but not saved.
        """
        self._require_ready()
        _check_text_fields(content, image)
        if not Mood.is_valid(mood):
            error = InvalidMoodError(mood)
            await self._report(error)
            raise error

        entry = Entry(
            id=self._unique_id(),
            content=content,
            mood=str(mood),
            image=image or None,
            timestamp=self._clock(),
        )
        self._entries.append(entry)
        logger.debug(f"Added entry {entry.id}")

        await self._persist("add")
        await self._emit(ENTRY_ADDED, id=entry.id)
        return entry.id

    async def update(self, entry_id: str, **changes: object) -> Entry:
        """Change content, mood and/or image of an entry; other fields are kept.

        Raises:
            ValueError: A field other than content, mood or image was given.
            InvalidMoodError: The new mood is not one of the five moods.
            NotFoundError: No entry has *entry_id*.
            StorageWriteError: Updated in memory but not saved.
        """
        self._require_ready()
        unknown = set(changes) - _EDITABLE_FIELDS
        if unknown:
            raise ValueError(f"Cannot update entry field(s): {', '.join(sorted(unknown))}")
        if "mood" in changes and not Mood.is_valid(changes["mood"]):
            error = InvalidMoodError(changes["mood"])
            await self._report(error)
            raise error
        _check_text_fields(changes.get("content", ""), changes.get("image"))

        entry = self._find(entry_id)
        if entry is None:
            error = NotFoundError(entry_id)
            await self._report(error)
            raise error

        if "content" in changes:
            entry.content = changes["content"]
        if "mood" in changes:
            entry.mood = str(changes["mood"])
        if "image" in changes:
            entry.image = changes["image"] or None
        logger.debug(f"Updated entry {entry_id}: {', '.join(sorted(changes)) or 'no fields'}")

        await self._persist("update")
        await self._emit(ENTRY_UPDATED, id=entry_id, fields=sorted(changes))
        return replace(entry)

    async def delete(self, entry_id: str) -> bool:
        """Remove an entry. Returns False (and writes nothing) if it was already gone.

        Raises:
            StorageWriteError: Removed from memory but not saved.
        """
        self._require_ready()
        remaining = [entry for entry in self._entries if entry.id != entry_id]
        if len(remaining) == len(self._entries):
            logger.debug(f"Delete of unknown entry {entry_id} ignored")
            return False
        self._entries = remaining
        logger.debug(f"Deleted entry {entry_id}")

        await self._persist("delete")
        await self._emit(ENTRY_DELETED, id=entry_id)
        return True

    def _find(self, entry_id: str) -> Entry | None:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def get_by_id(self, entry_id: str) -> Entry | None:
        """Return a copy of the entry with *entry_id*, or None."""
        self._require_ready()
        entry = self._find(entry_id)
        return replace(entry) if entry is not None else None

    @property
    def entries(self) -> list[Entry]:
        """Copies of all entries, in insertion order."""
        self._require_ready()
        return [replace(entry) for entry in self._entries]

    def __len__(self) -> int:
        return len(self._entries)

    # -- images -------------------------------------------------------------

    async def pick_image(self) -> str | None:
        """Ask the image provider for a photo.

        Returns None when there is no provider, the user picked nothing, or
        the provider failed (the failure goes to the error channel).
        """
        if self.image_provider is None:
            return None
        try:
            return await self.image_provider.pick_image()
        except Exception as e:
            logger.error(f"Image picker failed: {e}")
            await self._report(ImagePickError(str(e)))
            return None

    # -- derived views ------------------------------------------------------

    def group_by_day(self) -> dict[str, list[Entry]]:
        self._require_ready()
        return analytics.group_by_day(self.entries, self.tz)

    def group_by_month(self) -> dict[str, list[Entry]]:
        self._require_ready()
        return analytics.group_by_month(self.entries, self.tz)

    def mood_histogram(self) -> dict[Mood, int]:
        self._require_ready()
        return analytics.mood_histogram(self._entries)

    def mood_data(self) -> list[MoodCount]:
        self._require_ready()
        return analytics.mood_data(self._entries)

    def weekday_histogram(self) -> list[int]:
        self._require_ready()
        return analytics.weekday_histogram(self._entries, self.tz)

    def weekday_counts(self) -> list[WeekdayCount]:
        self._require_ready()
        return analytics.weekday_counts(self._entries, self.tz)

    def current_streak(self, today: date | None = None) -> int:
        self._require_ready()
        return analytics.current_streak(self._entries, self.tz, today=today)

    def entries_this_month(self, today: date | None = None) -> int:
        self._require_ready()
        return analytics.entries_this_month(self._entries, self.tz, today=today)
