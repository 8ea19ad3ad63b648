"""Provider-agnostic weather lookup interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any


class WeatherProvider(ABC):
    """Remote current-conditions lookups consumed by the weather fetcher.

    Both lookups return the provider's raw payload; validation and
    normalization happen in `WeatherFetcher`.
    """

    @abstractmethod
    async def fetch_by_coordinates(self, *, latitude: str, longitude: str) -> Any:
        """Look up current conditions for a coordinate pair."""

    @abstractmethod
    async def fetch_by_city(self, *, city: str, country: str) -> Any:
        """Look up current conditions for a city within a country."""
