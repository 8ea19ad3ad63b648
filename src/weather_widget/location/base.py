"""Subscription and geolocation contracts used by the location resolver."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Awaitable, Callable, Sequence

from ..exceptions import SubscriptionError
from ..models import Coordinates, RecordSnapshot

SnapshotHandler = Callable[[RecordSnapshot], Awaitable[None]]
ErrorHandler = Callable[[SubscriptionError], Awaitable[None]]


class Subscription(ABC):
    """Handle for one registered interest in a record's fields."""

    @abstractmethod
    async def refresh(self) -> None:
        """Ask the source to deliver the current field values again."""

    @abstractmethod
    def cancel(self) -> None:
        """Stop further deliveries; safe to call more than once."""


class FieldSource(ABC):
    """Push-based delivery of record field values.

    Every change produces exactly one call: `on_data` with a snapshot, or
    `on_error` with a `SubscriptionError`. The first delivery happens
    before `subscribe` returns when the source already holds the record.
    """

    @abstractmethod
    async def subscribe(
        self,
        record_id: str,
        fields: Sequence[str],
        on_data: SnapshotHandler,
        on_error: ErrorHandler,
    ) -> Subscription:
        """Register interest in `fields` of `record_id`."""


class GeolocationProvider(ABC):
    """Device position lookup."""

    @abstractmethod
    async def locate(self) -> Coordinates | None:
        """Return the current position, or None when unavailable or denied."""
