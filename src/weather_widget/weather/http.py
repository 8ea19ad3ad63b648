"""Weather lookups served by the host platform API."""

from __future__ import annotations

from typing import Any

from ..api_client import HostApiClient
from .base import WeatherProvider


class HttpWeatherProvider(WeatherProvider):
    """Calls the host's coordinates and city weather endpoints."""

    def __init__(
        self,
        api: HostApiClient,
        *,
        coordinates_endpoint: str,
        city_endpoint: str,
    ) -> None:
        self.api = api
        self.coordinates_endpoint = coordinates_endpoint
        self.city_endpoint = city_endpoint

    async def fetch_by_coordinates(self, *, latitude: str, longitude: str) -> Any:
        return await self.api.get_json(
            self.coordinates_endpoint,
            params={"latitude": latitude, "longitude": longitude},
            context="weather coordinates lookup",
        )

    async def fetch_by_city(self, *, city: str, country: str) -> Any:
        return await self.api.get_json(
            self.city_endpoint,
            params={"city": city, "country": country},
            context="weather city lookup",
        )
