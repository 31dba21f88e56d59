"""
Daybook exception hierarchy.

All daybook exceptions inherit from DaybookError, making it easy for callers
to catch library-level errors while still distinguishing specific failure modes.
"""


class DaybookError(Exception):
    """Base exception class for all daybook errors."""


class ConfigurationError(DaybookError):
    """Raised for configuration errors (missing keys, invalid values)."""


class JournalError(DaybookError):
    """Base class for failures surfaced on the journal error channel.

    ``user_message`` is the short, human-readable text a front end shows
    in its one-shot error dialog.
    """

    user_message = "Something went wrong with your journal"


class StorageReadError(JournalError):
    """The stored document could not be read or is malformed."""

    user_message = "Failed to load your journal entries"


class StorageWriteError(JournalError):
    """The entry collection could not be persisted.

    ``operation`` names the change that was being saved ("add", "update"
    or "delete") so the message can say which one may be lost.
    """

    _MESSAGES = {
        "add": "Failed to save your journal entry",
        "update": "Failed to update your journal entry",
        "delete": "Failed to delete your journal entry",
    }

    def __init__(self, message: str = "", operation: str | None = None):
        super().__init__(message)
        self.operation = operation

    @property
    def user_message(self) -> str:
        return self._MESSAGES.get(self.operation, "Failed to save your journal entries")


class NotFoundError(JournalError):
    """An operation referenced an entry id that does not exist."""

    user_message = "That journal entry no longer exists"

    def __init__(self, entry_id: str):
        super().__init__(f"Entry not found: {entry_id}")
        self.entry_id = entry_id


class InvalidMoodError(JournalError, ValueError):
    """A mood value outside the fixed mood set was supplied."""

    user_message = "Please choose a valid mood"

    def __init__(self, mood: object):
        super().__init__(f"Unrecognized mood: {mood!r}")
        self.mood = mood


class ImagePickError(JournalError):
    """The image provider failed while selecting a photo."""

    user_message = "Failed to select image"
