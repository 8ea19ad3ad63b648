"""Weather lookup, validation, and icon derivation."""

from .base import WeatherProvider
from .fetcher import WeatherFetcher
from .http import HttpWeatherProvider
from .icons import CLOUD_ICONS, cloud_icon_url

__all__ = [
    "CLOUD_ICONS",
    "HttpWeatherProvider",
    "WeatherFetcher",
    "WeatherProvider",
    "cloud_icon_url",
]
