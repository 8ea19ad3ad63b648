"""Field sources: an in-process record store and the host API reader."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any

from ..api_client import HostApiClient
from ..exceptions import RemoteError, SubscriptionError
from ..models import RecordSnapshot
from .base import ErrorHandler, FieldSource, SnapshotHandler, Subscription


class _Registration(Subscription):
    def __init__(
        self,
        store: InMemoryRecordStore,
        record_id: str,
        fields: tuple[str, ...],
        on_data: SnapshotHandler,
        on_error: ErrorHandler,
    ) -> None:
        self.store = store
        self.record_id = record_id
        self.fields = fields
        self.on_data = on_data
        self.on_error = on_error
        self.active = True

    async def refresh(self) -> None:
        if self.active:
            await self.store._deliver(self)

    def cancel(self) -> None:
        self.active = False
        self.store._drop(self)


class InMemoryRecordStore(FieldSource):
    """Holds records in memory and re-delivers to subscribers on change."""

    def __init__(self, records: dict[str, dict[str, Any]] | None = None) -> None:
        self._records: dict[str, dict[str, Any]] = {
            record_id: dict(values) for record_id, values in (records or {}).items()
        }
        self._failures: dict[str, str] = {}
        self._registrations: list[_Registration] = []

    async def subscribe(
        self,
        record_id: str,
        fields: Sequence[str],
        on_data: SnapshotHandler,
        on_error: ErrorHandler,
    ) -> Subscription:
        registration = _Registration(self, record_id, tuple(fields), on_data, on_error)
        self._registrations.append(registration)
        if record_id in self._records or record_id in self._failures:
            await self._deliver(registration)
        return registration

    async def put(self, record_id: str, **values: Any) -> None:
        """Merge `values` into the record and notify its subscribers."""
        self._failures.pop(record_id, None)
        self._records.setdefault(record_id, {}).update(values)
        await self._broadcast(record_id)

    async def fail(self, record_id: str, message: str) -> None:
        """Make the record undeliverable and notify subscribers with an error."""
        self._failures[record_id] = message
        await self._broadcast(record_id)

    def subscriber_count(self, record_id: str) -> int:
        return sum(1 for item in self._registrations if item.record_id == record_id)

    async def _broadcast(self, record_id: str) -> None:
        for registration in list(self._registrations):
            if registration.record_id == record_id:
                await self._deliver(registration)

    async def _deliver(self, registration: _Registration) -> None:
        if not registration.active:
            return
        failure = self._failures.get(registration.record_id)
        if failure is not None:
            await registration.on_error(SubscriptionError(failure))
            return
        values = self._records.get(registration.record_id, {})
        snapshot = RecordSnapshot(
            record_id=registration.record_id,
            fields={name: values.get(name) for name in registration.fields},
        )
        await registration.on_data(snapshot)

    def _drop(self, registration: _Registration) -> None:
        if registration in self._registrations:
            self._registrations.remove(registration)


class _HttpSubscription(Subscription):
    def __init__(
        self,
        source: HttpFieldSource,
        record_id: str,
        fields: tuple[str, ...],
        on_data: SnapshotHandler,
        on_error: ErrorHandler,
    ) -> None:
        self.source = source
        self.record_id = record_id
        self.fields = fields
        self.on_data = on_data
        self.on_error = on_error
        self.active = True

    async def refresh(self) -> None:
        if self.active:
            await self.source._deliver(self)

    def cancel(self) -> None:
        self.active = False


class HttpFieldSource(FieldSource):
    """Reads record fields from the host API.

    The host exposes no change feed, so deliveries happen on subscribe and
    on explicit `refresh()` only.
    """

    def __init__(
        self,
        api: HostApiClient,
        *,
        endpoint_template: str,
        logger: logging.Logger,
    ) -> None:
        self.api = api
        self.endpoint_template = endpoint_template
        self.logger = logger

    async def subscribe(
        self,
        record_id: str,
        fields: Sequence[str],
        on_data: SnapshotHandler,
        on_error: ErrorHandler,
    ) -> Subscription:
        subscription = _HttpSubscription(self, record_id, tuple(fields), on_data, on_error)
        await self._deliver(subscription)
        return subscription

    async def _deliver(self, subscription: _HttpSubscription) -> None:
        path = self.endpoint_template.format(record_id=subscription.record_id)
        try:
            payload = await self.api.get_json(
                path,
                params={"fields": ",".join(subscription.fields)},
                context="record fields fetch",
            )
        except RemoteError as exc:
            if subscription.active:
                await subscription.on_error(SubscriptionError(str(exc)))
            return

        if not subscription.active:
            return
        if not isinstance(payload, dict):
            self.logger.error(
                "Record fields payload had unexpected type %s", type(payload).__name__
            )
            await subscription.on_error(SubscriptionError("Unexpected record payload"))
            return
        snapshot = RecordSnapshot(
            record_id=subscription.record_id,
            fields={name: payload.get(name) for name in subscription.fields},
        )
        await subscription.on_data(snapshot)
