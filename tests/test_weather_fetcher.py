"""Tests for location dispatch, validation, and normalization in WeatherFetcher."""

from __future__ import annotations

import logging

import pytest
from fakes import GOOD_PAYLOAD, FakeWeatherProvider

from weather_widget.exceptions import MalformedResponseError, NoLocationError, RemoteError
from weather_widget.models import CityCountry, Coordinates, LocationSource, Unresolved
from weather_widget.weather.fetcher import WeatherFetcher
from weather_widget.weather.icons import CLOUD_ICONS


def _fetcher(provider: FakeWeatherProvider, logger: logging.Logger) -> WeatherFetcher:
    return WeatherFetcher(provider, logger)


@pytest.mark.asyncio
@pytest.mark.parametrize(("lat", "lon"), [(48.85, 2.35), (-33.9, 151.2), (0.0, 0.0)])
async def test_coordinates_use_coordinates_lookup(
    lat: float, lon: float, weather_provider: FakeWeatherProvider, logger: logging.Logger
) -> None:
    location = Coordinates(latitude=lat, longitude=lon, source=LocationSource.ENTITY)

    await _fetcher(weather_provider, logger).fetch(location)

    assert weather_provider.calls == [
        ("coordinates", {"latitude": str(lat), "longitude": str(lon)})
    ]


@pytest.mark.asyncio
async def test_city_country_uses_city_lookup(
    weather_provider: FakeWeatherProvider, logger: logging.Logger
) -> None:
    location = CityCountry(city="Paris", country="France", source=LocationSource.ENTITY)

    await _fetcher(weather_provider, logger).fetch(location)

    assert weather_provider.calls == [("city", {"city": "Paris", "country": "France"})]


@pytest.mark.asyncio
async def test_unresolved_location_fails_without_remote_call(
    weather_provider: FakeWeatherProvider, logger: logging.Logger
) -> None:
    with pytest.raises(NoLocationError, match="Location information is not available."):
        await _fetcher(weather_provider, logger).fetch(Unresolved(source=LocationSource.ENTITY))
    assert weather_provider.calls == []


@pytest.mark.asyncio
async def test_valid_payload_builds_reading_with_icon(logger: logging.Logger) -> None:
    provider = FakeWeatherProvider(payload=dict(GOOD_PAYLOAD))

    reading = await _fetcher(provider, logger).fetch(Coordinates(latitude=1.0, longitude=2.0))

    assert reading.temperature == "20C"
    assert reading.weather_conditions == "Clear"
    assert reading.humidity == "40%"
    assert reading.wind_speed == "10km/h"
    assert reading.clouds == "CAVOK"
    assert reading.cloud_icon_url == CLOUD_ICONS["CAVOK"]


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "missing", ["temperature", "weatherConditions", "humidity", "windSpeed", "clouds"]
)
async def test_missing_field_is_malformed(missing: str, logger: logging.Logger) -> None:
    payload = {key: value for key, value in GOOD_PAYLOAD.items() if key != missing}
    provider = FakeWeatherProvider(payload=payload)

    with pytest.raises(MalformedResponseError, match="Unexpected result structure"):
        await _fetcher(provider, logger).fetch(Coordinates(latitude=1.0, longitude=2.0))


@pytest.mark.asyncio
@pytest.mark.parametrize("payload", [None, [], "Clear", {**GOOD_PAYLOAD, "humidity": ""}])
async def test_non_dict_or_falsy_payload_is_malformed(
    payload: object, logger: logging.Logger
) -> None:
    provider = FakeWeatherProvider()
    provider.payload = payload

    with pytest.raises(MalformedResponseError):
        await _fetcher(provider, logger).fetch(CityCountry(city="Oslo", country="Norway"))


def test_unknown_cloud_code_uses_fallback_icon(logger: logging.Logger) -> None:
    fetcher = _fetcher(FakeWeatherProvider(), logger)

    reading = fetcher.normalize({**GOOD_PAYLOAD, "clouds": "XX"})

    assert reading.cloud_icon_url == CLOUD_ICONS["n/a"]


def test_numeric_fields_are_stringified(logger: logging.Logger) -> None:
    fetcher = _fetcher(FakeWeatherProvider(), logger)

    reading = fetcher.normalize({**GOOD_PAYLOAD, "temperature": 21.5, "humidity": 40})

    assert reading.temperature == "21.5"
    assert reading.humidity == "40"


@pytest.mark.asyncio
async def test_remote_error_propagates_with_provider_message(logger: logging.Logger) -> None:
    provider = FakeWeatherProvider(error=RemoteError("City not found", status_code=404))

    with pytest.raises(RemoteError, match="City not found"):
        await _fetcher(provider, logger).fetch(CityCountry(city="Nowhere", country="XX"))
