"""CLI smoke tests against a mocked host API."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

import httpx
import pytest

from weather_widget import cli
from weather_widget.api_client import HostApiClient
from weather_widget.config import Settings

WEATHER = {
    "temperature": "20C",
    "weatherConditions": "Clear",
    "humidity": "40%",
    "windSpeed": "10km/h",
    "clouds": "CAVOK",
}


def _set_required_env(monkeypatch: Any, tmp_path: Path) -> None:
    monkeypatch.setenv("WIDGET_API_BASE_URL", "https://host.example.com")
    monkeypatch.setenv("JOURNAL_DIR", str(tmp_path / "journal"))
    monkeypatch.setenv("GEOLOCATION_MODE", "disabled")
    monkeypatch.chdir(tmp_path)


def _mock_host(monkeypatch: Any, handler: Any) -> None:
    def _build(settings: Settings, logger: logging.Logger) -> HostApiClient:
        return HostApiClient(settings, logger, transport=httpx.MockTransport(handler))

    monkeypatch.setattr(cli, "build_api_client", _build)


def _event_types(tmp_path: Path) -> list[str]:
    journal_files = list((tmp_path / "journal").glob("*.jsonl"))
    assert journal_files
    lines = journal_files[0].read_text(encoding="utf-8").strip().splitlines()
    return [json.loads(line)["event_type"] for line in lines]


def test_entity_run_renders_and_sends_report(
    monkeypatch: Any, tmp_path: Path, capsys: Any
) -> None:
    _set_required_env(monkeypatch, tmp_path)
    report_bodies: list[dict[str, Any]] = []

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/records/001A":
            return httpx.Response(200, json={"latitude": 48.85, "longitude": 2.35})
        if request.url.path == "/weather/coordinates":
            return httpx.Response(200, json=WEATHER)
        if request.url.path == "/reports/weather":
            report_bodies.append(json.loads(request.content))
            return httpx.Response(200, json="Success")
        return httpx.Response(404, json={"message": "not found"})

    _mock_host(monkeypatch, handler)

    exit_code = cli.main(["--entity-id", "001A", "--send-report"])

    assert exit_code == 0
    output = capsys.readouterr().out
    assert "20C" in output
    assert "Weather report sent successfully" in output
    assert report_bodies[0]["recordId"] == "001A"
    assert report_bodies[0]["weatherData"]["cloudIconUrl"]
    event_types = _event_types(tmp_path)
    assert event_types[0] == "widget_startup"
    assert "widget_report" in event_types
    assert event_types[-1] == "widget_shutdown"


def test_geolocation_disabled_shows_error(
    monkeypatch: Any, tmp_path: Path, capsys: Any
) -> None:
    _set_required_env(monkeypatch, tmp_path)

    def handler(request: httpx.Request) -> httpx.Response:
        if request.url.path == "/users/005U":
            return httpx.Response(200, json={"last_report_sent_at": None})
        raise AssertionError(f"unexpected request {request.url}")

    _mock_host(monkeypatch, handler)

    exit_code = cli.main(["--user-id", "005U"])

    assert exit_code == 4
    assert "Geolocation is not supported by this browser." in capsys.readouterr().out


def test_device_coordinates_from_arguments(
    monkeypatch: Any, tmp_path: Path, capsys: Any
) -> None:
    _set_required_env(monkeypatch, tmp_path)
    seen: list[httpx.Request] = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=WEATHER)

    _mock_host(monkeypatch, handler)

    exit_code = cli.main(["--lat", "51.5", "--lon", "-0.12"])

    assert exit_code == 0
    assert seen[0].url.params["latitude"] == "51.5"
    assert seen[0].url.params["longitude"] == "-0.12"


def test_config_failure_exit_code(monkeypatch: Any, tmp_path: Path) -> None:
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("WIDGET_API_BASE_URL", raising=False)

    assert cli.main([]) == 2


def test_lat_without_lon_is_rejected() -> None:
    with pytest.raises(SystemExit):
        cli.parse_args(["--lat", "10"])
