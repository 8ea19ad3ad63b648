"""Transient view state and its display accessors."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime

from ..models import Location, Unresolved, WeatherReading

NOT_AVAILABLE = "N/A"


@dataclass(slots=True)
class ViewState:
    """Everything the widget renders; lives for one mounted session.

    The resolver owns `location` and `last_report_sent_at`, the fetch owns
    `reading` and `error`, the dispatcher owns `is_sending`. The display
    properties below never raise and never mutate.
    """

    location: Location = field(default_factory=Unresolved)
    reading: WeatherReading | None = None
    error: str | None = None
    is_sending: bool = False
    last_report_sent_at: datetime | None = None

    @property
    def temperature(self) -> str:
        return self.reading.temperature if self.reading else NOT_AVAILABLE

    @property
    def humidity(self) -> str:
        return self.reading.humidity if self.reading else NOT_AVAILABLE

    @property
    def wind_speed(self) -> str:
        return self.reading.wind_speed if self.reading else NOT_AVAILABLE

    @property
    def weather_conditions(self) -> str:
        return self.reading.weather_conditions if self.reading else NOT_AVAILABLE

    @property
    def cloud_icon_url(self) -> str:
        return self.reading.cloud_icon_url if self.reading else ""

    @property
    def last_report_sent_formatted(self) -> str:
        """Last report time in local time, using the locale's date-time format."""
        if self.last_report_sent_at is None:
            return NOT_AVAILABLE
        return self.last_report_sent_at.astimezone().strftime("%c")

    @property
    def can_send_report(self) -> bool:
        return self.reading is not None and not self.is_sending
