"""Tests for view state display accessors."""

from __future__ import annotations

from datetime import UTC, datetime

from weather_widget.models import WeatherReading
from weather_widget.ui.render import describe_location, render_widget
from weather_widget.ui.state import ViewState

READING = WeatherReading(
    temperature="20C",
    weather_conditions="Clear",
    humidity="40%",
    wind_speed="10km/h",
    clouds="CAVOK",
    cloud_icon_url="https://icons.example.com/cavok.png",
)


def test_accessors_fall_back_without_reading() -> None:
    state = ViewState()

    assert state.temperature == "N/A"
    assert state.humidity == "N/A"
    assert state.wind_speed == "N/A"
    assert state.weather_conditions == "N/A"
    assert state.cloud_icon_url == ""
    assert state.last_report_sent_formatted == "N/A"
    assert state.can_send_report is False


def test_accessors_read_current_reading() -> None:
    state = ViewState(reading=READING)

    assert state.temperature == "20C"
    assert state.humidity == "40%"
    assert state.wind_speed == "10km/h"
    assert state.weather_conditions == "Clear"
    assert state.cloud_icon_url == "https://icons.example.com/cavok.png"
    assert state.can_send_report is True


def test_accessors_are_idempotent() -> None:
    state = ViewState(reading=READING, error=None)
    before = (state.reading, state.error, state.is_sending, state.last_report_sent_at)

    first = [state.temperature, state.humidity, state.wind_speed, state.cloud_icon_url]
    second = [state.temperature, state.humidity, state.wind_speed, state.cloud_icon_url]

    assert first == second
    assert (state.reading, state.error, state.is_sending, state.last_report_sent_at) == before


def test_last_report_is_formatted_in_local_time() -> None:
    sent_at = datetime(2026, 3, 1, 8, 30, tzinfo=UTC)
    state = ViewState(last_report_sent_at=sent_at)

    assert state.last_report_sent_formatted == sent_at.astimezone().strftime("%c")


def test_render_handles_empty_state() -> None:
    state = ViewState(error="Location information is not available.")

    assert describe_location(state) == "- (unknown)"
    assert render_widget(state) is not None
