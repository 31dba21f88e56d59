"""Derived views over an entry collection.

Everything here is a pure function of a list of entries plus the timezone
that defines a "local calendar day". The repository calls these against
its in-memory collection; they are equally usable on a freshly loaded list.

Entries whose timestamp cannot be parsed, or cannot be expressed in the
target zone, are left out of every date-based view (with a warning) but
still count toward the mood histogram.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, timedelta, tzinfo

from loguru import logger

from .models import MOOD_OPTIONS, WEEKDAY_NAMES, Entry, Mood, MoodCount, WeekdayCount


def local_datetime(entry: Entry, tz: tzinfo | None = None) -> datetime | None:
    """The entry's timestamp in *tz* (system local time when None)."""
    try:
        return entry.created_at.astimezone(tz)
    except (ValueError, OverflowError) as e:
        logger.warning(f"Skipping entry {entry.id} with unusable timestamp {entry.timestamp!r}: {e}")
        return None


def local_today(tz: tzinfo | None = None) -> date:
    return datetime.now(tz).date()


def _dated(entries: Iterable[Entry], tz: tzinfo | None) -> list[tuple[Entry, datetime]]:
    dated = []
    for entry in entries:
        dt = local_datetime(entry, tz)
        if dt is not None:
            dated.append((entry, dt))
    return dated


def group_by_day(entries: Iterable[Entry], tz: tzinfo | None = None) -> dict[str, list[Entry]]:
    """Bucket entries by local day (``YYYY-MM-DD``).

    Days are ordered newest first, and so are the entries within each day.
    """
    dated = _dated(entries, tz)
    # stable with reverse=True: equal timestamps keep collection order
    dated.sort(key=lambda pair: pair[1], reverse=True)

    grouped: dict[str, list[Entry]] = {}
    for entry, dt in dated:
        grouped.setdefault(dt.date().isoformat(), []).append(entry)
    return grouped


def group_by_month(entries: Iterable[Entry], tz: tzinfo | None = None) -> dict[str, list[Entry]]:
    """Bucket entries by local month (``YYYY-MM``).

    Keys appear in the order their first entry appears in *entries*; entries
    keep collection order within a month.
    """
    grouped: dict[str, list[Entry]] = {}
    for entry, dt in _dated(entries, tz):
        grouped.setdefault(f"{dt.year:04d}-{dt.month:02d}", []).append(entry)
    return grouped


def mood_histogram(entries: Iterable[Entry]) -> dict[Mood, int]:
    """Count entries per mood.

    All five moods are always present. Entries with an unrecognized mood
    are not counted anywhere.
    """
    counts = {option.mood: 0 for option in MOOD_OPTIONS}
    for entry in entries:
        if Mood.is_valid(entry.mood):
            counts[Mood(entry.mood)] += 1
    return counts


def mood_data(entries: Iterable[Entry]) -> list[MoodCount]:
    """Mood histogram with display metadata, in mood display order."""
    counts = mood_histogram(entries)
    return [
        MoodCount(mood=option.mood, label=option.label, emoji=option.emoji, color=option.color, count=counts[option.mood])
        for option in MOOD_OPTIONS
    ]


def weekday_histogram(entries: Iterable[Entry], tz: tzinfo | None = None) -> list[int]:
    """Entry counts per local weekday, index 0 = Sunday through 6 = Saturday."""
    counts = [0] * 7
    for _, dt in _dated(entries, tz):
        # date.weekday() is Monday=0; shift so Sunday leads.
        counts[(dt.weekday() + 1) % 7] += 1
    return counts


def weekday_counts(entries: Iterable[Entry], tz: tzinfo | None = None) -> list[WeekdayCount]:
    return [WeekdayCount(name=name, count=count) for name, count in zip(WEEKDAY_NAMES, weekday_histogram(entries, tz))]


def current_streak(entries: Iterable[Entry], tz: tzinfo | None = None, today: date | None = None) -> int:
    """Count consecutive local days, ending today, that each have an entry.

    Returns 0 when today has no entry. Walks backward one calendar day at a
    time, so month and year boundaries need no special handling.
    """
    days = {dt.date() for _, dt in _dated(entries, tz)}
    cursor = today or local_today(tz)

    streak = 0
    while cursor in days:
        streak += 1
        cursor -= timedelta(days=1)
    return streak


def entries_this_month(entries: Iterable[Entry], tz: tzinfo | None = None, today: date | None = None) -> int:
    """Count entries written in the current local calendar month."""
    today = today or local_today(tz)
    return sum(1 for _, dt in _dated(entries, tz) if (dt.year, dt.month) == (today.year, today.month))
