"""Terminal front-end: mount the widget, render it, optionally send a report."""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
import uuid

from rich.console import Console

from .api_client import HostApiClient
from .config import Settings, load_settings
from .exceptions import ConfigError, JournalError
from .journal import JournalWriter
from .location.base import GeolocationProvider
from .location.geolocation import (
    IpGeolocationProvider,
    StaticGeolocationProvider,
    UnavailableGeolocationProvider,
)
from .location.subscriptions import HttpFieldSource
from .log_setup import setup_logger
from .models import CurrentActor
from .reports.http import HttpReportBackend
from .ui.notifications import ConsoleNotifier, NotificationBuffer
from .ui.render import render_widget
from .weather.http import HttpWeatherProvider
from .widget import WeatherWidget


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse widget CLI arguments."""
    parser = argparse.ArgumentParser(
        description="Show current weather for an account or this device and send reports."
    )
    parser.add_argument(
        "--entity-id",
        type=str,
        default=None,
        help="Bind to an account record and use its stored address.",
    )
    parser.add_argument(
        "--user-id",
        type=str,
        default=None,
        help="Current user id, used for the last-report timestamp without --entity-id.",
    )
    parser.add_argument("--lat", type=float, default=None, help="Device latitude override.")
    parser.add_argument("--lon", type=float, default=None, help="Device longitude override.")
    parser.add_argument(
        "--send-report",
        action="store_true",
        help="E-mail a weather report after the reading is shown.",
    )
    args = parser.parse_args(argv)
    if (args.lat is None) != (args.lon is None):
        parser.error("--lat and --lon must be passed together.")
    if args.lat is not None and not (-90 <= args.lat <= 90 and -180 <= args.lon <= 180):
        parser.error("--lat must be within [-90, 90] and --lon within [-180, 180].")
    return args


def build_api_client(settings: Settings, logger: logging.Logger) -> HostApiClient:
    return HostApiClient(settings=settings, logger=logger)


def build_geolocation(
    args: argparse.Namespace, settings: Settings, logger: logging.Logger
) -> GeolocationProvider:
    if args.lat is not None and args.lon is not None:
        return StaticGeolocationProvider(args.lat, args.lon)
    if settings.geolocation_mode == "static" and settings.device_lat is not None:
        return StaticGeolocationProvider(settings.device_lat, settings.device_lon)
    if settings.geolocation_mode == "ip":
        return IpGeolocationProvider(
            settings.geolocation_url,
            logger,
            timeout_seconds=settings.widget_timeout_seconds,
        )
    return UnavailableGeolocationProvider()


async def run_widget(
    args: argparse.Namespace,
    settings: Settings,
    logger: logging.Logger,
    console: Console,
    journal: JournalWriter | None,
) -> int:
    """Mount, render, and optionally report; returns the exit code."""
    api = build_api_client(settings, logger)
    geolocation = build_geolocation(args, settings, logger)
    notifier = ConsoleNotifier(
        console,
        NotificationBuffer(
            max_events=settings.notification_max_events,
            dedupe_window_seconds=settings.notification_dedupe_window_seconds,
        ),
    )
    widget = WeatherWidget(
        entity_source=HttpFieldSource(
            api, endpoint_template=settings.record_endpoint_template, logger=logger
        ),
        user_source=HttpFieldSource(
            api, endpoint_template=settings.user_endpoint_template, logger=logger
        ),
        geolocation=geolocation,
        weather_provider=HttpWeatherProvider(
            api,
            coordinates_endpoint=settings.weather_coordinates_endpoint,
            city_endpoint=settings.weather_city_endpoint,
        ),
        report_backend=HttpReportBackend(api, endpoint=settings.report_send_endpoint),
        notifier=notifier,
        logger=logger,
        bound_entity_id=args.entity_id,
        actor=CurrentActor(user_id=args.user_id) if args.user_id else None,
        success_token=settings.report_success_token,
    )

    try:
        state = await widget.mount()
        _journal(
            journal,
            "widget_weather",
            {
                "location": state.location.model_dump(mode="json"),
                "reading": state.reading.to_payload() if state.reading else None,
                "error": state.error,
            },
        )
        console.print(render_widget(state))

        if args.send_report:
            notification = await widget.send_report()
            if notification is not None:
                _journal(journal, "widget_report", notification.model_dump(mode="json"))
        return 4 if state.error else 0
    finally:
        widget.unmount()
        await api.aclose()
        if isinstance(geolocation, IpGeolocationProvider):
            await geolocation.aclose()


def _journal(journal: JournalWriter | None, event_type: str, payload: dict) -> None:
    if journal is None:
        return
    journal.write_event(event_type, payload=payload, metadata={"session_id": journal.session_id})


def main(argv: list[str] | None = None) -> int:
    """Run the widget once from the terminal."""
    args = parse_args(argv)
    logger = setup_logger()
    console = Console()
    session_id = uuid.uuid4().hex[:12]
    journal: JournalWriter | None = None

    try:
        settings = load_settings()
    except ConfigError as exc:
        logger.error("Configuration failure: %s", exc)
        return 2
    logger.setLevel(settings.log_level)

    if settings.journal_enabled:
        try:
            journal = JournalWriter(journal_dir=settings.journal_dir, session_id=session_id)
            journal.write_event(
                "widget_startup",
                payload={
                    **settings.safe_summary(),
                    "entity_bound": args.entity_id is not None,
                    "send_report": args.send_report,
                },
                metadata={"session_id": session_id},
            )
        except JournalError as exc:
            logger.error("Failed to initialize journal: %s", exc)
            return 3

    exit_code = 0
    try:
        exit_code = asyncio.run(run_widget(args, settings, logger, console, journal))
    except JournalError as exc:
        exit_code = 3
        logger.error("Journal failure: %s", exc)
    except Exception as exc:  # pragma: no cover - defensive catch for CLI runtime
        exit_code = 99
        logger.exception("Unexpected widget failure: %s", exc)
        try:
            _journal(
                journal,
                "widget_failure_unhandled",
                {"error": str(exc), "type": type(exc).__name__},
            )
        except JournalError:
            logger.error("Failed to write widget_failure_unhandled event.")
    finally:
        try:
            _journal(journal, "widget_shutdown", {"exit_code": exit_code})
        except JournalError:
            logger.error("Failed to write widget_shutdown event.")

    return exit_code


if __name__ == "__main__":
    sys.exit(main())
