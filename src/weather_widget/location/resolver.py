"""Resolve the effective location from a bound entity or the device."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Protocol

from ..exceptions import GeolocationUnavailable, SubscriptionError, WeatherWidgetError
from ..models import (
    ENTITY_FIELDS,
    LAST_REPORT_FIELD,
    USER_FIELDS,
    CurrentActor,
    Location,
    LocationSource,
    RecordSnapshot,
    Unresolved,
    build_location,
)
from .base import FieldSource, GeolocationProvider, Subscription

GEOLOCATION_UNAVAILABLE_MESSAGE = "Geolocation is not supported by this browser."


class LocationListener(Protocol):
    """Receives resolver output as it arrives."""

    async def location_resolved(self, location: Location) -> None:
        ...

    async def resolution_failed(self, error: WeatherWidgetError) -> None:
        ...

    async def last_report_changed(self, sent_at: datetime | None) -> None:
        ...


class LocationResolver:
    """Chooses between the bound entity's address and device geolocation.

    An entity id takes absolute precedence. Without one, the current user's
    record is followed only for its last-report timestamp and the device
    position is requested exactly once; a denial is final for the session.
    """

    def __init__(
        self,
        *,
        entity_source: FieldSource,
        user_source: FieldSource,
        geolocation: GeolocationProvider,
        listener: LocationListener,
        logger: logging.Logger,
    ) -> None:
        self.entity_source = entity_source
        self.user_source = user_source
        self.geolocation = geolocation
        self.listener = listener
        self.logger = logger
        self.location: Location = Unresolved()
        self.subscriptions: list[Subscription] = []

    async def resolve(
        self,
        bound_entity_id: str | None,
        actor: CurrentActor | None = None,
    ) -> Location:
        """Start resolution and return the location known once it settles."""
        if bound_entity_id:
            self.subscriptions.append(
                await self.entity_source.subscribe(
                    bound_entity_id,
                    ENTITY_FIELDS,
                    self._on_entity_data,
                    self._on_entity_error,
                )
            )
            return self.location

        if actor is not None:
            self.subscriptions.append(
                await self.user_source.subscribe(
                    actor.user_id,
                    USER_FIELDS,
                    self._on_user_data,
                    self._on_subscription_error,
                )
            )
        await self._locate_device()
        return self.location

    async def refresh(self) -> None:
        """Ask every live subscription to re-deliver."""
        for subscription in list(self.subscriptions):
            await subscription.refresh()

    def close(self) -> None:
        for subscription in self.subscriptions:
            subscription.cancel()
        self.subscriptions.clear()

    async def _on_entity_data(self, snapshot: RecordSnapshot) -> None:
        self.location = build_location(
            latitude=snapshot.get("latitude"),
            longitude=snapshot.get("longitude"),
            city=snapshot.get("city"),
            country=snapshot.get("country"),
            source=LocationSource.ENTITY,
        )
        self.logger.info(
            "Entity location resolved",
            extra={"record_id": snapshot.record_id, "kind": self.location.kind},
        )
        await self.listener.last_report_changed(snapshot.get_datetime(LAST_REPORT_FIELD))
        await self.listener.location_resolved(self.location)

    async def _on_user_data(self, snapshot: RecordSnapshot) -> None:
        await self.listener.last_report_changed(snapshot.get_datetime(LAST_REPORT_FIELD))

    async def _on_entity_error(self, error: SubscriptionError) -> None:
        self.location = Unresolved(source=LocationSource.ENTITY)
        await self._on_subscription_error(error)

    async def _on_subscription_error(self, error: SubscriptionError) -> None:
        self.logger.error("Field subscription failed: %s", error)
        await self.listener.resolution_failed(error)

    async def _locate_device(self) -> None:
        coordinates = await self.geolocation.locate()
        if coordinates is None:
            self.logger.warning("Device geolocation unavailable or denied.")
            await self.listener.resolution_failed(
                GeolocationUnavailable(GEOLOCATION_UNAVAILABLE_MESSAGE)
            )
            return
        self.location = coordinates.model_copy(update={"source": LocationSource.DEVICE})
        self.logger.info("Device location resolved")
        await self.listener.location_resolved(self.location)
