"""Presentation layer: view state, notifications, and terminal rendering."""

from .notifications import ConsoleNotifier, FeedEntry, NotificationBuffer, Notifier
from .render import render_widget
from .state import ViewState

__all__ = [
    "ConsoleNotifier",
    "FeedEntry",
    "NotificationBuffer",
    "Notifier",
    "ViewState",
    "render_widget",
]
