"""Core data models for the journal.

Entries keep ``mood`` and ``timestamp`` as the plain strings they are
persisted as, so a document written by another version (or edited by hand)
with an unfamiliar mood still loads and round-trips untouched.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from enum import StrEnum
from typing import Any


class Mood(StrEnum):
    AMAZING = "amazing"
    GOOD = "good"
    OKAY = "okay"
    POOR = "poor"
    TERRIBLE = "terrible"

    @classmethod
    def is_valid(cls, value: object) -> bool:
        return isinstance(value, str) and value in cls._value2member_map_


@dataclass(frozen=True)
class MoodOption:
    """Display metadata for a mood."""

    mood: Mood
    label: str
    emoji: str
    color: str


# Display order used by pickers and charts.
MOOD_OPTIONS: tuple[MoodOption, ...] = (
    MoodOption(Mood.AMAZING, "Amazing", "😁", "#10b981"),
    MoodOption(Mood.GOOD, "Good", "😊", "#60a5fa"),
    MoodOption(Mood.OKAY, "Okay", "😐", "#fbbf24"),
    MoodOption(Mood.POOR, "Poor", "😔", "#f87171"),
    MoodOption(Mood.TERRIBLE, "Terrible", "😭", "#ef4444"),
)

_OPTIONS_BY_MOOD = {option.mood: option for option in MOOD_OPTIONS}


def mood_option(mood: Mood | str) -> MoodOption | None:
    """Look up display metadata for *mood*. Returns None for unknown values."""
    if not Mood.is_valid(mood):
        return None
    return _OPTIONS_BY_MOOD[Mood(mood)]


WEEKDAY_NAMES: tuple[str, ...] = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


def now_timestamp() -> str:
    """Current instant as a UTC ISO-8601 string with millisecond precision."""
    return datetime.now(UTC).isoformat(timespec="milliseconds")


def parse_timestamp(value: str) -> datetime:
    """Parse a stored timestamp into an aware datetime.

    Accepts a trailing ``Z``; naive values are taken to be UTC.
    Raises ValueError if *value* is not ISO-8601.
    """
    if not isinstance(value, str):
        raise ValueError(f"Timestamp must be a string, got {type(value).__name__}")
    dt = datetime.fromisoformat(value.strip())
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=UTC)
    return dt


_FIELDS = ("id", "content", "mood", "image", "timestamp")


@dataclass
class Entry:
    """One journaling record.

    Attributes:
        id: Opaque unique identifier, assigned at creation.
        content: Free-form text.
        mood: Mood key; normally one of :class:`Mood`.
        image: Path or URI of an attached photo, or None.
        timestamp: Creation instant (ISO-8601). Never changes after creation.
    """

    id: str
    content: str
    mood: str
    image: str | None = None
    timestamp: str = ""

    @property
    def created_at(self) -> datetime:
        return parse_timestamp(self.timestamp)

    @property
    def mood_option(self) -> MoodOption | None:
        return mood_option(self.mood)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Any) -> Entry:
        """Build an Entry from a stored record.

        Raises ValueError if the record is not a mapping with the expected
        field types. Unknown extra keys are ignored.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Entry record must be an object, got {type(data).__name__}")
        for name in ("id", "timestamp"):
            if not isinstance(data.get(name), str) or not data[name]:
                raise ValueError(f"Entry record is missing '{name}'")
        content = data.get("content", "")
        mood = data.get("mood", "")
        image = data.get("image")
        if not isinstance(content, str):
            raise ValueError(f"Entry {data['id']} has non-text content")
        if not isinstance(mood, str):
            raise ValueError(f"Entry {data['id']} has a non-text mood")
        if image is not None and not isinstance(image, str):
            raise ValueError(f"Entry {data['id']} has an invalid image reference")
        return cls(id=data["id"], content=content, mood=mood, image=image or None, timestamp=data["timestamp"])

    def __repr__(self) -> str:
        preview = self.content[:30] + "..." if len(self.content) > 30 else self.content
        return f"Entry(id='{self.id}', mood='{self.mood}', timestamp='{self.timestamp}', content='{preview}')"


@dataclass(frozen=True)
class MoodCount:
    """Histogram bucket for one mood, with its display metadata."""

    mood: Mood
    label: str
    emoji: str
    color: str
    count: int


@dataclass(frozen=True)
class WeekdayCount:
    name: str
    count: int
