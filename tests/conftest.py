"""Shared fixtures for widget tests."""

from __future__ import annotations

import logging
from types import SimpleNamespace
from typing import Any

import pytest
from fakes import FakeReportBackend, FakeWeatherProvider, RecordingNotifier


@pytest.fixture
def logger() -> logging.Logger:
    return logging.getLogger("test_weather_widget")


@pytest.fixture
def weather_provider() -> FakeWeatherProvider:
    return FakeWeatherProvider()


@pytest.fixture
def report_backend() -> FakeReportBackend:
    return FakeReportBackend()


@pytest.fixture
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture
def api_settings() -> Any:
    return SimpleNamespace(
        widget_api_base_url="https://host.example.com",
        widget_api_token="test-token",
        widget_timeout_seconds=5.0,
    )
