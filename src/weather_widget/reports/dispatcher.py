"""User-triggered report dispatch with single-flight enforcement."""

from __future__ import annotations

import asyncio
import logging

from ..exceptions import DispatchBusinessFailure, DispatchTransportError
from ..models import Notification, NotificationSeverity, ReportContext
from ..ui.notifications import Notifier
from ..ui.state import ViewState
from .base import ReportBackend

SUCCESS_MESSAGE = "Weather report sent successfully"
UNKNOWN_ERROR = "Unknown error"


class ReportDispatcher:
    """Sends one report at a time and turns the outcome into a notification.

    `ViewState.is_sending` is owned here: it is raised for the duration of
    a send and lowered on every exit path, including a failing notifier.
    Calls made while a send is in flight are ignored.
    """

    def __init__(
        self,
        *,
        backend: ReportBackend,
        notifier: Notifier,
        state: ViewState,
        logger: logging.Logger,
        success_token: str = "Success",
    ) -> None:
        self.backend = backend
        self.notifier = notifier
        self.state = state
        self.logger = logger
        self.success_token = success_token
        self._lock = asyncio.Lock()

    async def send_report(self, context: ReportContext) -> Notification | None:
        if self._lock.locked() or self.state.is_sending:
            self.logger.warning("Report send already in flight; ignoring trigger.")
            return None

        async with self._lock:
            self.state.is_sending = True
            try:
                notification = await self._dispatch(context)
                self.notifier.notify(notification)
                return notification
            finally:
                self.state.is_sending = False

    async def _dispatch(self, context: ReportContext) -> Notification:
        try:
            response = await self.backend.send(
                entity_id=context.entity_id,
                weather_data=context.reading.to_payload(),
            )
            self.logger.info("Report send response: %s", response)
            if response != self.success_token:
                raise DispatchBusinessFailure(response)
        except DispatchBusinessFailure as exc:
            self.logger.error("Report rejected by backend: %r", exc.response)
            return _error(exc.response)
        except DispatchTransportError as exc:
            self.logger.error("Report send failed: %s", exc)
            return _error(str(exc) or UNKNOWN_ERROR)
        except Exception as exc:
            self.logger.error(
                "Report backend raised unexpected error (%s): %s", type(exc).__name__, exc
            )
            return _error(str(exc) or UNKNOWN_ERROR)

        return Notification(
            title="Success",
            message=SUCCESS_MESSAGE,
            severity=NotificationSeverity.SUCCESS,
        )


def _error(message: str) -> Notification:
    return Notification(title="Error", message=message, severity=NotificationSeverity.ERROR)
