"""Toast surface: a bounded notification feed plus console output."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from rich.console import Console
from rich.text import Text

from ..models import Notification, NotificationSeverity


class Notifier(ABC):
    """Fire-and-forget notification surface."""

    @abstractmethod
    def notify(self, notification: Notification) -> None:
        """Show `notification` transiently."""


@dataclass(slots=True)
class FeedEntry:
    """One visible toast, with a repeat counter for collapsed errors."""

    notification: Notification
    count: int = 1
    last_seen: datetime | None = None


class NotificationBuffer(Notifier):
    """Keep recent toasts and collapse repeated identical errors."""

    def __init__(self, *, max_events: int = 20, dedupe_window_seconds: int = 10) -> None:
        self.max_events = max_events
        self.dedupe_window = timedelta(seconds=dedupe_window_seconds)
        self._entries: list[FeedEntry] = []

    def notify(self, notification: Notification) -> None:
        self.add(notification)

    def add(self, notification: Notification) -> FeedEntry:
        now = notification.ts
        now = now.replace(tzinfo=UTC) if now.tzinfo is None else now.astimezone(UTC)

        if notification.severity is NotificationSeverity.ERROR and self._entries:
            latest = self._entries[-1]
            if (
                latest.notification.severity is NotificationSeverity.ERROR
                and latest.notification.message == notification.message
                and latest.last_seen is not None
                and now - latest.last_seen <= self.dedupe_window
            ):
                latest.count += 1
                latest.last_seen = now
                return latest

        entry = FeedEntry(notification=notification, last_seen=now)
        self._entries.append(entry)
        while len(self._entries) > self.max_events:
            self._entries.pop(0)
        return entry

    def snapshot(self, *, newest_first: bool = False) -> list[FeedEntry]:
        items = list(self._entries)
        if newest_first:
            items.reverse()
        return items

    @property
    def latest(self) -> Notification | None:
        return self._entries[-1].notification if self._entries else None


class ConsoleNotifier(Notifier):
    """Prints toasts to a rich console and records them in a buffer."""

    _STYLES = {
        NotificationSeverity.SUCCESS: "bold green",
        NotificationSeverity.ERROR: "bold red",
    }

    def __init__(self, console: Console, buffer: NotificationBuffer | None = None) -> None:
        self.console = console
        self.buffer = buffer or NotificationBuffer()

    def notify(self, notification: Notification) -> None:
        entry = self.buffer.add(notification)
        suffix = f" (x{entry.count})" if entry.count > 1 else ""
        self.console.print(
            Text.assemble(
                (notification.title, self._STYLES[notification.severity]),
                f": {notification.message}{suffix}",
            )
        )
