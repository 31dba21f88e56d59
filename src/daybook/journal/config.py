"""Configuration dataclass for the journal.

A pure data container with sensible defaults. Build it directly, or
project it out of the application :class:`~daybook.core.config.Config`.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from daybook.core.config import Config
from daybook.core.exceptions import ConfigurationError


@dataclass
class JournalConfig:
    """Settings for the entry store and analytics.

    Attributes:
        storage_key: Key the entry document is stored under.
        timezone: IANA name used to derive local calendar days.
            Empty means the system's local timezone.
        compress: Gzip the stored document.
    """

    storage_key: str = "journalEntries"
    timezone: str = ""
    compress: bool = False

    def __post_init__(self):
        if not self.storage_key or not self.storage_key.strip():
            raise ConfigurationError("journal.storage_key cannot be empty")
        # Fail fast on a bad zone name.
        _ = self.tzinfo

    @property
    def tzinfo(self) -> tzinfo | None:
        """The configured zone, or None for system local time."""
        if not self.timezone:
            return None
        try:
            return ZoneInfo(self.timezone)
        except (ZoneInfoNotFoundError, ValueError) as e:
            raise ConfigurationError(f"Unknown timezone: {self.timezone!r}") from e

    @classmethod
    def from_config(cls, config: Config) -> JournalConfig:
        return cls(
            storage_key=str(config.get("journal.storage_key", "journalEntries")),
            timezone=str(config.get("journal.timezone", "") or ""),
            compress=config.get_bool("journal.compress", False),
        )
