"""Report dispatch through the host platform API."""

from __future__ import annotations

from typing import Any

from ..api_client import UNKNOWN_ERROR, HostApiClient
from ..exceptions import DispatchTransportError, RemoteError
from .base import ReportBackend


class HttpReportBackend(ReportBackend):
    """Posts report requests to the host's report endpoint."""

    def __init__(self, api: HostApiClient, *, endpoint: str) -> None:
        self.api = api
        self.endpoint = endpoint

    async def send(self, *, entity_id: str | None, weather_data: dict[str, str]) -> str:
        body: dict[str, Any] = {"weatherData": weather_data}
        if entity_id is not None:
            body["recordId"] = entity_id
        try:
            result = await self.api.post_json(self.endpoint, body=body, context="report send")
        except RemoteError as exc:
            raise DispatchTransportError(str(exc)) from exc

        if isinstance(result, dict):
            result = result.get("result")
        if not isinstance(result, str):
            raise DispatchTransportError(UNKNOWN_ERROR)
        return result
