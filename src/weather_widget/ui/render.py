"""Rich rendering of the widget view state."""

from __future__ import annotations

from rich.console import Group, RenderableType
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from ..models import CityCountry, Coordinates, LocationSource
from .state import ViewState

_SOURCE_LABELS = {
    LocationSource.ENTITY: "account address",
    LocationSource.DEVICE: "device location",
    LocationSource.NONE: "unknown",
}


def describe_location(state: ViewState) -> str:
    location = state.location
    if isinstance(location, Coordinates):
        where = f"{location.latitude:.4f}, {location.longitude:.4f}"
    elif isinstance(location, CityCountry):
        where = f"{location.city}, {location.country}"
    else:
        where = "-"
    return f"{where} ({_SOURCE_LABELS[location.source]})"


def render_widget(state: ViewState, *, title: str = "Current Weather") -> RenderableType:
    """Build the panel shown for the widget."""
    table = Table.grid(padding=(0, 2))
    table.add_column(style="bold")
    table.add_column(overflow="fold")
    table.add_row("Location", describe_location(state))
    table.add_row("Temperature", state.temperature)
    table.add_row("Conditions", state.weather_conditions)
    table.add_row("Humidity", state.humidity)
    table.add_row("Wind speed", state.wind_speed)
    table.add_row("Cloud icon", state.cloud_icon_url or "-")
    table.add_row("Last report sent", state.last_report_sent_formatted)

    parts: list[RenderableType] = [table]
    if state.error:
        parts.append(Text(state.error, style="bold red"))
    if state.is_sending:
        parts.append(Text("Sending weather report...", style="yellow"))

    border = "red" if state.error else "cyan"
    return Panel(Group(*parts), title=title, border_style=border)
