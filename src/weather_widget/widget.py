"""The weather widget: wires resolver, fetcher, and dispatcher to one view state."""

from __future__ import annotations

import logging
from datetime import datetime

from .exceptions import WeatherWidgetError
from .location.base import FieldSource, GeolocationProvider
from .location.resolver import LocationResolver
from .models import (
    CurrentActor,
    Location,
    LocationSource,
    Notification,
    NotificationSeverity,
    ReportContext,
    WeatherReading,
)
from .reports.base import ReportBackend
from .reports.dispatcher import ReportDispatcher
from .ui.notifications import Notifier
from .ui.state import ViewState
from .weather.base import WeatherProvider
from .weather.fetcher import WeatherFetcher

NO_READING_MESSAGE = "Weather data is not available."


class WeatherWidget:
    """One mounted widget instance.

    Bound to an entity id, it follows that record's address; otherwise it
    uses the device position and follows the current user's record for the
    last-report timestamp. Fetches are tagged with a generation number so a
    result that arrives after a newer fetch started, or after `unmount()`,
    is dropped instead of overwriting newer state.
    """

    def __init__(
        self,
        *,
        entity_source: FieldSource,
        user_source: FieldSource,
        geolocation: GeolocationProvider,
        weather_provider: WeatherProvider,
        report_backend: ReportBackend,
        notifier: Notifier,
        logger: logging.Logger,
        bound_entity_id: str | None = None,
        actor: CurrentActor | None = None,
        success_token: str = "Success",
    ) -> None:
        self.bound_entity_id = bound_entity_id
        self.actor = actor
        self.notifier = notifier
        self.logger = logger
        self.state = ViewState()
        self.fetcher = WeatherFetcher(weather_provider, logger)
        self.resolver = LocationResolver(
            entity_source=entity_source,
            user_source=user_source,
            geolocation=geolocation,
            listener=self,
            logger=logger,
        )
        self.dispatcher = ReportDispatcher(
            backend=report_backend,
            notifier=notifier,
            state=self.state,
            logger=logger,
            success_token=success_token,
        )
        self._generation = 0
        self._mounted = False

    @property
    def mounted(self) -> bool:
        return self._mounted

    async def mount(self) -> ViewState:
        """Resolve the location and run the first fetch."""
        self._mounted = True
        await self.resolver.resolve(self.bound_entity_id, self.actor)
        return self.state

    def unmount(self) -> None:
        self._mounted = False
        self._generation += 1
        self.resolver.close()

    async def refresh_weather(self) -> WeatherReading | None:
        """Fetch for the current location; also the user-facing retry."""
        self._generation += 1
        generation = self._generation
        try:
            reading = await self.fetcher.fetch(self.state.location)
        except WeatherWidgetError as exc:
            if self._is_current(generation):
                self.state.reading = None
                self.state.error = str(exc)
            return None

        if not self._is_current(generation):
            self.logger.info("Discarding superseded weather result.")
            return None
        self.state.reading = reading
        self.state.error = None
        return reading

    async def send_report(self) -> Notification | None:
        """Send the current reading; returns None when a send is already running."""
        if not self.state.can_send_report:
            if self.state.is_sending:
                self.logger.warning("Report send already in flight; ignoring trigger.")
                return None

            notification = Notification(
                title="Error",
                message=NO_READING_MESSAGE,
                severity=NotificationSeverity.ERROR,
            )
            self.notifier.notify(notification)
            return notification

        entity_id = (
            self.bound_entity_id if self.state.location.source is LocationSource.ENTITY else None
        )
        context = ReportContext(entity_id=entity_id, reading=self.state.reading)
        notification = await self.dispatcher.send_report(context)
        if (
            notification is not None
            and notification.severity is NotificationSeverity.SUCCESS
            and self._mounted
        ):
            await self.resolver.refresh()
        return notification

    async def location_resolved(self, location: Location) -> None:
        self.state.location = location
        await self.refresh_weather()

    async def resolution_failed(self, error: WeatherWidgetError) -> None:
        # Drops any fetch still in flight for the previous location.
        self._generation += 1
        self.state.location = self.resolver.location
        self.state.reading = None
        self.state.error = str(error)

    async def last_report_changed(self, sent_at: datetime | None) -> None:
        self.state.last_report_sent_at = sent_at

    def _is_current(self, generation: int) -> bool:
        return self._mounted and generation == self._generation
