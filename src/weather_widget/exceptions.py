"""Application exception classes."""


class ConfigError(Exception):
    """Raised when configuration is invalid or incomplete."""


class JournalError(Exception):
    """Raised when writing to journal files fails."""


class WeatherWidgetError(Exception):
    """Base class for errors surfaced to the widget user."""


class SubscriptionError(WeatherWidgetError):
    """Raised when entity or user field delivery fails."""


class GeolocationUnavailable(WeatherWidgetError):
    """Raised when device geolocation is unsupported or denied."""


class NoLocationError(WeatherWidgetError):
    """Raised when neither coordinates nor a city/country pair are known."""


class MalformedResponseError(WeatherWidgetError):
    """Raised when a weather payload lacks a required field."""


class RemoteError(WeatherWidgetError):
    """Raised for host API failures with category/status metadata."""

    def __init__(
        self,
        message: str,
        *,
        category: str = "unknown",
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.category = category
        self.status_code = status_code


class DispatchBusinessFailure(WeatherWidgetError):
    """Raised when the report action returns a non-success token."""

    def __init__(self, response: str) -> None:
        super().__init__(response)
        self.response = response


class DispatchTransportError(WeatherWidgetError):
    """Raised when the report action call itself fails."""
