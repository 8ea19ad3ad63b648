"""Async adapter for the host platform API that fronts every remote service."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from .config import Settings
from .exceptions import RemoteError
from .redaction import sanitize_text

UNKNOWN_ERROR = "Unknown error"


def extract_error_message(response: httpx.Response) -> str | None:
    """Return the host's `{"message": ...}` error text when the body carries one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, list) and body and isinstance(body[0], dict):
        body = body[0]
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message.strip():
            return message.strip()
    return None


class HostApiClient:
    """Thin JSON client over `httpx.AsyncClient` with host error mapping.

    Failures raise `RemoteError` whose message is the host-supplied error
    message when one is present and `"Unknown error"` otherwise; the
    underlying detail is logged rather than shown to the user.
    """

    def __init__(
        self,
        settings: Settings,
        logger: logging.Logger,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.settings = settings
        self.logger = logger
        headers = {
            "Accept": "application/json",
            "User-Agent": "weather-widget/0.1",
        }
        if settings.widget_api_token:
            headers["Authorization"] = f"Bearer {settings.widget_api_token}"
        self._client = httpx.AsyncClient(
            base_url=str(settings.widget_api_base_url),
            timeout=settings.widget_timeout_seconds,
            headers=headers,
            transport=transport,
        )

    async def __aenter__(self) -> HostApiClient:
        return self

    async def __aexit__(self, exc_type: Any, exc: Any, exc_tb: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        """Close underlying HTTP client."""
        await self._client.aclose()

    async def get_json(
        self, path: str, *, params: dict[str, Any] | None = None, context: str
    ) -> Any:
        return await self._request_json("GET", path, params=params, context=context)

    async def post_json(self, path: str, *, body: dict[str, Any], context: str) -> Any:
        return await self._request_json("POST", path, json=body, context=context)

    async def _request_json(self, method: str, path: str, *, context: str, **kwargs: Any) -> Any:
        try:
            response = await self._client.request(method, path, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            message = extract_error_message(exc.response)
            self.logger.error(
                "Host %s failed with status %d: %s",
                context,
                status,
                sanitize_text(exc.response.text[:300]),
            )
            raise RemoteError(
                message or UNKNOWN_ERROR,
                category="client" if 400 <= status < 500 else "server",
                status_code=status,
            ) from exc
        except httpx.HTTPError as exc:
            self.logger.error(
                "Host %s request failed (%s): %s",
                context,
                type(exc).__name__,
                sanitize_text(str(exc)),
            )
            raise RemoteError(UNKNOWN_ERROR, category="transport") from exc

        try:
            return response.json()
        except ValueError as exc:
            self.logger.error("Host %s returned non-JSON response.", context)
            raise RemoteError(UNKNOWN_ERROR, category="decode") from exc
