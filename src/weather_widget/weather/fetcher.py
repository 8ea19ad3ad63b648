"""Location-aware weather fetch with response validation and icon derivation."""

from __future__ import annotations

import logging
from typing import Any

from ..exceptions import MalformedResponseError, NoLocationError, RemoteError
from ..models import CityCountry, Coordinates, Location, WeatherReading
from ..redaction import sanitize_for_logging
from .base import WeatherProvider
from .icons import cloud_icon_url

NO_LOCATION_MESSAGE = "Location information is not available."
MALFORMED_MESSAGE = "Unexpected result structure"

REQUIRED_FIELDS: tuple[str, ...] = (
    "temperature",
    "weatherConditions",
    "humidity",
    "windSpeed",
    "clouds",
)


class WeatherFetcher:
    """Routes a location to the matching lookup and normalizes the result."""

    def __init__(self, provider: WeatherProvider, logger: logging.Logger) -> None:
        self.provider = provider
        self.logger = logger

    async def fetch(self, location: Location) -> WeatherReading:
        """Fetch a reading for `location`.

        Raises `NoLocationError` without any remote call for an unresolved
        location, `MalformedResponseError` when a required field is missing
        or falsy, and lets `RemoteError` from the provider propagate.
        """
        if isinstance(location, Coordinates):
            latitude, longitude = str(location.latitude), str(location.longitude)
            self.logger.info("Fetching weather for coordinates %s,%s", latitude, longitude)
            payload = await self._call(
                self.provider.fetch_by_coordinates(latitude=latitude, longitude=longitude)
            )
        elif isinstance(location, CityCountry):
            self.logger.info("Fetching weather for %s, %s", location.city, location.country)
            payload = await self._call(
                self.provider.fetch_by_city(city=location.city, country=location.country)
            )
        else:
            raise NoLocationError(NO_LOCATION_MESSAGE)
        return self.normalize(payload)

    async def _call(self, pending: Any) -> Any:
        try:
            return await pending
        except RemoteError as exc:
            self.logger.error(
                "Weather lookup failed: %s",
                exc,
                extra={"category": exc.category, "status_code": exc.status_code},
            )
            raise

    def normalize(self, payload: Any) -> WeatherReading:
        """Validate a raw provider payload and derive the cloud icon."""
        if not isinstance(payload, dict) or not all(payload.get(key) for key in REQUIRED_FIELDS):
            self.logger.error(
                "Unexpected weather result structure",
                extra={"payload": sanitize_for_logging(payload)},
            )
            raise MalformedResponseError(MALFORMED_MESSAGE)

        clouds = str(payload["clouds"])
        return WeatherReading(
            temperature=str(payload["temperature"]),
            weather_conditions=str(payload["weatherConditions"]),
            humidity=str(payload["humidity"]),
            wind_speed=str(payload["windSpeed"]),
            clouds=clouds,
            cloud_icon_url=cloud_icon_url(clouds),
        )
