"""Device geolocation providers."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..models import Coordinates, LocationSource
from ..redaction import sanitize_text
from .base import GeolocationProvider


class StaticGeolocationProvider(GeolocationProvider):
    """Reports a fixed, configured device position."""

    def __init__(self, latitude: float, longitude: float) -> None:
        self._coordinates = Coordinates(
            latitude=latitude, longitude=longitude, source=LocationSource.DEVICE
        )

    async def locate(self) -> Coordinates | None:
        return self._coordinates


class UnavailableGeolocationProvider(GeolocationProvider):
    """Geolocation switched off; every request is denied."""

    async def locate(self) -> Coordinates | None:
        return None


class IpGeolocationProvider(GeolocationProvider):
    """Approximates the device position with an IP lookup service.

    Any failure reads as "unavailable"; the lookup service's error detail
    is logged but never surfaced.
    """

    def __init__(
        self,
        url: str,
        logger: logging.Logger,
        timeout_seconds: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url
        self.logger = logger
        self._client = httpx.AsyncClient(
            timeout=timeout_seconds,
            headers={"Accept": "application/json", "User-Agent": "weather-widget/0.1"},
            transport=transport,
        )

    async def aclose(self) -> None:
        await self._client.aclose()

    async def locate(self) -> Coordinates | None:
        try:
            response = await self._client.get(self.url)
            response.raise_for_status()
            payload = response.json()
        except (httpx.HTTPError, ValueError) as exc:
            self.logger.warning(
                "IP geolocation lookup failed (%s): %s",
                type(exc).__name__,
                sanitize_text(str(exc)),
            )
            return None

        latitude = self._coordinate(payload, "latitude", "lat")
        longitude = self._coordinate(payload, "longitude", "lon")
        if latitude is None or longitude is None:
            self.logger.warning("IP geolocation payload had no usable coordinates.")
            return None
        if not (-90 <= latitude <= 90 and -180 <= longitude <= 180):
            self.logger.warning("IP geolocation returned out-of-range coordinates.")
            return None
        return Coordinates(latitude=latitude, longitude=longitude, source=LocationSource.DEVICE)

    @staticmethod
    def _coordinate(payload: Any, *keys: str) -> float | None:
        if not isinstance(payload, dict):
            return None
        for key in keys:
            value = payload.get(key)
            if isinstance(value, (int, float)) and not isinstance(value, bool):
                return float(value)
        return None
