"""Shared typed models for locations, readings, and report payloads."""

from __future__ import annotations

from datetime import UTC, datetime
from enum import Enum
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field

ENTITY_FIELDS: tuple[str, ...] = (
    "latitude",
    "longitude",
    "city",
    "country",
    "last_report_sent_at",
)
USER_FIELDS: tuple[str, ...] = ("last_report_sent_at",)
LAST_REPORT_FIELD = "last_report_sent_at"


class LocationSource(str, Enum):
    """Which origin produced the current location."""

    ENTITY = "entity"
    DEVICE = "device"
    NONE = "none"


class Coordinates(BaseModel):
    """Latitude/longitude location."""

    kind: Literal["coordinates"] = "coordinates"
    latitude: float
    longitude: float
    source: LocationSource = LocationSource.NONE


class CityCountry(BaseModel):
    """City and country location, used when no coordinates are stored."""

    kind: Literal["city_country"] = "city_country"
    city: str
    country: str
    source: LocationSource = LocationSource.NONE


class Unresolved(BaseModel):
    """No usable location is known for the source."""

    kind: Literal["unresolved"] = "unresolved"
    source: LocationSource = LocationSource.NONE


Location = Annotated[Coordinates | CityCountry | Unresolved, Field(discriminator="kind")]


def build_location(
    *,
    latitude: Any = None,
    longitude: Any = None,
    city: Any = None,
    country: Any = None,
    source: LocationSource,
) -> Location:
    """Pick coordinates over city/country; fall back to Unresolved."""
    latitude = _as_float(latitude)
    longitude = _as_float(longitude)
    if latitude is not None and longitude is not None:
        return Coordinates(latitude=latitude, longitude=longitude, source=source)
    if _non_blank(city) and _non_blank(country):
        return CityCountry(city=city.strip(), country=country.strip(), source=source)
    return Unresolved(source=source)


def _non_blank(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


def _as_float(value: Any) -> float | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str) and value.strip():
        try:
            return float(value)
        except ValueError:
            return None
    return None


class WeatherReading(BaseModel):
    """Normalized weather snapshot ready for display and reporting."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    temperature: str
    weather_conditions: str = Field(alias="weatherConditions")
    humidity: str
    wind_speed: str = Field(alias="windSpeed")
    clouds: str
    cloud_icon_url: str = Field(alias="cloudIconUrl")

    def to_payload(self) -> dict[str, str]:
        """Return the camelCase shape the report backend expects."""
        return self.model_dump(by_alias=True)


class ReportContext(BaseModel):
    """Everything the report dispatcher needs for one send."""

    entity_id: str | None = None
    reading: WeatherReading


class CurrentActor(BaseModel):
    """The signed-in user, resolved once by the host."""

    user_id: str


class RecordSnapshot(BaseModel):
    """Field values delivered by an entity or user subscription."""

    record_id: str
    fields: dict[str, Any] = Field(default_factory=dict)

    def get(self, field: str) -> Any:
        return self.fields.get(field)

    def get_datetime(self, field: str) -> datetime | None:
        """Parse an ISO-8601 field value; unparseable values read as None."""
        value = self.fields.get(field)
        if isinstance(value, datetime):
            return value.astimezone(UTC) if value.tzinfo else value.replace(tzinfo=UTC)
        if not isinstance(value, str) or not value.strip():
            return None
        candidate = value.strip()
        if candidate.endswith("Z"):
            candidate = candidate[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(candidate)
        except ValueError:
            return None
        return parsed.astimezone(UTC) if parsed.tzinfo else parsed.replace(tzinfo=UTC)


class NotificationSeverity(str, Enum):
    SUCCESS = "success"
    ERROR = "error"


class Notification(BaseModel):
    """A transient toast shown to the user."""

    title: str
    message: str
    severity: NotificationSeverity
    ts: datetime = Field(default_factory=lambda: datetime.now(UTC))
