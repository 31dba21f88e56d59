"""Journal entry store and analytics.

Provides the entry model and mood table, a persistent whole-document
store, the in-memory repository that CRUD and stats go through, and
pure derived-view functions.
"""

from .config import JournalConfig
from .images import ImageProvider, PathImageProvider
from .models import MOOD_OPTIONS, WEEKDAY_NAMES, Entry, Mood, MoodCount, MoodOption, WeekdayCount, mood_option
from .repository import EntryRepository
from .store import EntryStore

__all__ = [
    "MOOD_OPTIONS",
    "WEEKDAY_NAMES",
    "Entry",
    "EntryRepository",
    "EntryStore",
    "ImageProvider",
    "JournalConfig",
    "Mood",
    "MoodCount",
    "MoodOption",
    "PathImageProvider",
    "WeekdayCount",
    "mood_option",
]
