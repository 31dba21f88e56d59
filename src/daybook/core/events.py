"""Event bus for journal lifecycle notifications.

Front ends and plugins subscribe to what the repository announces
without the repository knowing about them. A subscription is an exact
event name, a dotted prefix ending in ``.*`` (``journal.entry.*``), or
``*`` for everything. Hooks can be sync or async.

Usage::

    from daybook.core.events import EventBus, Event, ENTRY_ADDED

    bus = EventBus()
    bus.on("journal.entry.*", lambda event: print(event.name, event.payload))
    await bus.emit(Event(name=ENTRY_ADDED, payload={"id": "..."}, source="journal"))
"""

from __future__ import annotations

import inspect
from dataclasses import dataclass, field
from time import time
from typing import Any

from loguru import logger

JOURNAL_LOADED = "journal.loaded"
ENTRY_ADDED = "journal.entry.added"
ENTRY_UPDATED = "journal.entry.updated"
ENTRY_DELETED = "journal.entry.deleted"
JOURNAL_ERROR = "journal.error"

ALL_EVENTS = "*"

# Callable[[Event], None] | Callable[[Event], Awaitable[None]]
Hook = Any


@dataclass(frozen=True)
class Event:
    """An immutable notification."""

    name: str
    payload: dict[str, Any] = field(default_factory=dict)
    timestamp: float = field(default_factory=time)
    source: str = ""


def _matches(pattern: str, event_name: str) -> bool:
    if pattern in (ALL_EVENTS, event_name):
        return True
    return pattern.endswith(".*") and event_name.startswith(pattern[:-1])


class EventBus:
    """Pub/sub bus; hooks run in the order they subscribed."""

    def __init__(self) -> None:
        self._subscriptions: list[tuple[str, Hook]] = []

    def on(self, pattern: str, hook: Hook) -> None:
        """Subscribe *hook* to events matching *pattern*."""
        self._subscriptions.append((pattern, hook))

    def on_all(self, hook: Hook) -> None:
        self.on(ALL_EVENTS, hook)

    def off(self, pattern: str, hook: Hook) -> None:
        """Drop a subscription made with the same *pattern* and *hook*. Unknown pairs are ignored."""
        try:
            self._subscriptions.remove((pattern, hook))
        except ValueError:
            pass

    def listeners(self, event_name: str) -> list[Hook]:
        """Hooks an event called *event_name* would reach."""
        return [hook for pattern, hook in self._subscriptions if _matches(pattern, event_name)]

    async def emit(self, event: Event) -> None:
        """Deliver *event* to every matching hook.

        A hook that raises is logged and skipped; the emitter never sees it.
        """
        for hook in self.listeners(event.name):
            try:
                result = hook(event)
                if inspect.isawaitable(result):
                    await result
            except Exception as exc:
                logger.warning(f"Event hook {getattr(hook, '__name__', hook)!r} failed for {event.name}: {exc}")

    def clear(self) -> None:
        self._subscriptions.clear()
