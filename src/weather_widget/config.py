"""Typed settings loader for the weather widget."""

from __future__ import annotations

from pathlib import Path
from typing import Any, Literal

from pydantic import AnyUrl, Field, ValidationError, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .exceptions import ConfigError


class Settings(BaseSettings):
    """Application settings loaded from environment variables and `.env`."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_env: Literal["dev", "staging", "prod"] = Field(default="dev", alias="APP_ENV")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", alias="LOG_LEVEL"
    )

    widget_api_base_url: AnyUrl = Field(alias="WIDGET_API_BASE_URL")
    widget_api_token: str | None = Field(default=None, alias="WIDGET_API_TOKEN", repr=False)
    widget_timeout_seconds: float = Field(default=15.0, alias="WIDGET_TIMEOUT_SECONDS")

    weather_coordinates_endpoint: str = Field(
        default="/weather/coordinates",
        alias="WEATHER_COORDINATES_ENDPOINT",
    )
    weather_city_endpoint: str = Field(default="/weather/city", alias="WEATHER_CITY_ENDPOINT")
    report_send_endpoint: str = Field(default="/reports/weather", alias="REPORT_SEND_ENDPOINT")
    record_endpoint_template: str = Field(
        default="/records/{record_id}",
        alias="RECORD_ENDPOINT_TEMPLATE",
    )
    user_endpoint_template: str = Field(
        default="/users/{record_id}",
        alias="USER_ENDPOINT_TEMPLATE",
    )
    report_success_token: str = Field(default="Success", alias="REPORT_SUCCESS_TOKEN")

    geolocation_mode: Literal["static", "ip", "disabled"] = Field(
        default="ip",
        alias="GEOLOCATION_MODE",
    )
    geolocation_url: str = Field(
        default="https://ipapi.co/json/",
        alias="GEOLOCATION_URL",
    )
    device_lat: float | None = Field(default=None, alias="DEVICE_LAT")
    device_lon: float | None = Field(default=None, alias="DEVICE_LON")

    journal_enabled: bool = Field(default=True, alias="JOURNAL_ENABLED")
    journal_dir: Path = Field(default=Path("./data/journal"), alias="JOURNAL_DIR")

    notification_max_events: int = Field(default=20, alias="NOTIFICATION_MAX_EVENTS")
    notification_dedupe_window_seconds: int = Field(
        default=10,
        alias="NOTIFICATION_DEDUPE_WINDOW_SECONDS",
    )

    @field_validator("device_lat", "device_lon", "widget_api_token", mode="before")
    @classmethod
    def empty_string_to_none(cls, value: Any) -> Any:
        """Treat empty env-string values as unset."""
        if isinstance(value, str) and value.strip() == "":
            return None
        return value

    @model_validator(mode="after")
    def validate_settings(self) -> Settings:
        """Validate endpoint shapes and cross-field constraints."""
        for name in (
            "weather_coordinates_endpoint",
            "weather_city_endpoint",
            "report_send_endpoint",
            "record_endpoint_template",
            "user_endpoint_template",
        ):
            if not getattr(self, name).startswith("/"):
                raise ValueError(f"{name.upper()} must start with '/'.")
        for name in ("record_endpoint_template", "user_endpoint_template"):
            if "{record_id}" not in getattr(self, name):
                raise ValueError(f"{name.upper()} must include '{{record_id}}'.")
        if self.widget_timeout_seconds <= 0:
            raise ValueError("WIDGET_TIMEOUT_SECONDS must be > 0.")
        if not self.report_success_token.strip():
            raise ValueError("REPORT_SUCCESS_TOKEN must not be empty.")

        has_lat = self.device_lat is not None
        has_lon = self.device_lon is not None
        if has_lat != has_lon:
            raise ValueError("DEVICE_LAT and DEVICE_LON must be set together.")
        if has_lat and not (-90 <= self.device_lat <= 90):
            raise ValueError("DEVICE_LAT must be between -90 and 90.")
        if has_lon and not (-180 <= self.device_lon <= 180):
            raise ValueError("DEVICE_LON must be between -180 and 180.")
        if self.geolocation_mode == "static" and not has_lat:
            raise ValueError(
                "DEVICE_LAT and DEVICE_LON are required when GEOLOCATION_MODE='static'."
            )

        if self.notification_max_events <= 0:
            raise ValueError("NOTIFICATION_MAX_EVENTS must be > 0.")
        if self.notification_dedupe_window_seconds < 0:
            raise ValueError("NOTIFICATION_DEDUPE_WINDOW_SECONDS must be >= 0.")
        return self

    def safe_summary(self) -> dict[str, Any]:
        """Return config summary safe for journaling (no credentials)."""
        return {
            "app_env": self.app_env,
            "base_url": str(self.widget_api_base_url),
            "auth": "bearer" if self.widget_api_token else "none",
            "timeout_seconds": self.widget_timeout_seconds,
            "weather_coordinates_endpoint": self.weather_coordinates_endpoint,
            "weather_city_endpoint": self.weather_city_endpoint,
            "report_send_endpoint": self.report_send_endpoint,
            "geolocation_mode": self.geolocation_mode,
            "journal_enabled": self.journal_enabled,
        }


def load_settings() -> Settings:
    """Load and validate settings, raising ConfigError on failure."""
    try:
        settings = Settings()
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration: {exc}") from exc
    except OSError as exc:
        raise ConfigError(f"Failed reading environment/.env: {exc}") from exc

    if settings.journal_enabled:
        settings.journal_dir.mkdir(parents=True, exist_ok=True)
    return settings
