"""Report backend contract."""

from __future__ import annotations

from abc import ABC, abstractmethod


class ReportBackend(ABC):
    """Queues an e-mail weather report and answers with an outcome token."""

    @abstractmethod
    async def send(self, *, entity_id: str | None, weather_data: dict[str, str]) -> str:
        """Request a report; raise `DispatchTransportError` if the call fails.

        Without `entity_id` the backend picks the recipient itself (the
        current user).
        """
