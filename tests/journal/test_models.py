"""Tests for daybook.journal.models."""

from datetime import UTC, datetime, timedelta, timezone

import pytest

from daybook.journal.models import (
    MOOD_OPTIONS,
    WEEKDAY_NAMES,
    Entry,
    Mood,
    mood_option,
    now_timestamp,
    parse_timestamp,
)


class TestMood:
    def test_five_moods_in_display_order(self):
        assert [o.mood.value for o in MOOD_OPTIONS] == ["amazing", "good", "okay", "poor", "terrible"]

    def test_is_valid(self):
        assert Mood.is_valid("good")
        assert Mood.is_valid(Mood.POOR)
        assert not Mood.is_valid("Good")
        assert not Mood.is_valid("ecstatic")
        assert not Mood.is_valid(None)

    def test_mood_option_lookup(self):
        option = mood_option("amazing")
        assert option.label == "Amazing"
        assert option.emoji == "😁"
        assert option.color == "#10b981"
        assert mood_option("unknown") is None

    def test_weekday_names_start_on_sunday(self):
        assert WEEKDAY_NAMES[0] == "Sunday"
        assert WEEKDAY_NAMES[-1] == "Saturday"
        assert len(WEEKDAY_NAMES) == 7


class TestTimestamps:
    def test_now_timestamp_is_aware_and_millisecond_precise(self):
        stamp = now_timestamp()
        parsed = parse_timestamp(stamp)
        assert parsed.tzinfo is not None
        assert parsed.utcoffset() == timedelta(0)
        # 2024-05-01T09:30:00.123+00:00
        assert len(stamp.split("T")[1].split("+")[0]) == len("09:30:00.123")

    def test_now_timestamps_sort_as_text(self):
        earlier = datetime(2024, 1, 2, 3, 4, 5, 6000, tzinfo=UTC).isoformat(timespec="milliseconds")
        assert earlier < now_timestamp()

    def test_parse_z_suffix(self):
        assert parse_timestamp("2024-03-01T10:00:00.000Z") == datetime(2024, 3, 1, 10, tzinfo=UTC)

    def test_parse_naive_is_utc(self):
        assert parse_timestamp("2024-03-01T10:00:00") == datetime(2024, 3, 1, 10, tzinfo=UTC)

    def test_parse_keeps_offset(self):
        parsed = parse_timestamp("2024-03-01T10:00:00+05:30")
        assert parsed.utcoffset() == timedelta(hours=5, minutes=30)
        assert parsed == datetime(2024, 3, 1, 4, 30, tzinfo=timezone.utc)

    @pytest.mark.parametrize("bad", ["yesterday", "", "2024-13-01T00:00:00"])
    def test_parse_rejects_garbage(self, bad):
        with pytest.raises(ValueError):
            parse_timestamp(bad)


class TestEntry:
    def _record(self, **overrides):
        record = {
            "id": "e1",
            "content": "Coffee with Sam",
            "mood": "good",
            "image": None,
            "timestamp": "2024-03-01T10:00:00.000Z",
        }
        record.update(overrides)
        return record

    def test_from_dict_roundtrip(self):
        entry = Entry.from_dict(self._record(image="file:///photos/a.jpg"))
        assert entry.to_dict() == self._record(image="file:///photos/a.jpg")

    def test_unknown_mood_is_preserved(self):
        entry = Entry.from_dict(self._record(mood="meh"))
        assert entry.mood == "meh"
        assert entry.mood_option is None

    def test_missing_optional_fields_default(self):
        entry = Entry.from_dict({"id": "e1", "timestamp": "2024-03-01T10:00:00Z"})
        assert entry.content == ""
        assert entry.image is None

    def test_extra_keys_ignored(self):
        entry = Entry.from_dict(self._record(weather="rain"))
        assert "weather" not in entry.to_dict()

    @pytest.mark.parametrize(
        "record",
        [
            "not a dict",
            {"content": "no id", "timestamp": "2024-03-01T10:00:00Z"},
            {"id": "e1", "content": "no timestamp"},
            {"id": 7, "timestamp": "2024-03-01T10:00:00Z"},
            {"id": "e1", "timestamp": "2024-03-01T10:00:00Z", "content": 42},
            {"id": "e1", "timestamp": "2024-03-01T10:00:00Z", "mood": ["good"]},
            {"id": "e1", "timestamp": "2024-03-01T10:00:00Z", "image": {"uri": "x"}},
        ],
    )
    def test_from_dict_rejects_malformed(self, record):
        with pytest.raises(ValueError):
            Entry.from_dict(record)

    def test_created_at(self):
        entry = Entry.from_dict(self._record())
        assert entry.created_at == datetime(2024, 3, 1, 10, tzinfo=UTC)

    def test_repr_truncates(self):
        entry = Entry.from_dict(self._record(content="x" * 100))
        assert "..." in repr(entry)
        assert "e1" in repr(entry)
