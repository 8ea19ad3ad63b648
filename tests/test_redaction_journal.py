"""Tests for log redaction and the session journal."""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from pathlib import Path

import pytest

from weather_widget.exceptions import JournalError
from weather_widget.journal import JournalWriter
from weather_widget.log_setup import JsonConsoleFormatter
from weather_widget.models import LocationSource
from weather_widget.redaction import REDACTED, mask_email, sanitize_for_logging, sanitize_text


def test_bearer_tokens_and_key_values_are_redacted() -> None:
    text = "Authorization: Bearer abc.def.ghi token=xyz123"

    sanitized = sanitize_text(text)

    assert "abc.def.ghi" not in sanitized
    assert "xyz123" not in sanitized
    assert REDACTED in sanitized


def test_email_addresses_are_masked() -> None:
    assert mask_email("Invalid recipient jane.doe@example.com") == (
        "Invalid recipient j***@example.com"
    )


def test_nested_sensitive_keys_are_redacted() -> None:
    payload = {"headers": {"Authorization": "Bearer abc"}, "items": ["ok", ("a@b.io",)]}

    sanitized = sanitize_for_logging(payload)

    assert sanitized["headers"]["Authorization"] == REDACTED
    assert sanitized["items"][0] == "ok"
    assert sanitized["items"][1] == ("a***@b.io",)


def test_json_formatter_includes_sanitized_extra() -> None:
    record = logging.LogRecord(
        "weather_widget", logging.INFO, __file__, 1, "sent to %s", ("ops@example.com",), None
    )
    record.category = "client"

    event = json.loads(JsonConsoleFormatter().format(record))

    assert event["message"] == "sent to o***@example.com"
    assert event["extra"] == {"category": "client"}


def test_journal_writes_jsonl_events(tmp_path: Path) -> None:
    journal = JournalWriter(journal_dir=tmp_path / "journal", session_id="abc123")

    journal.write_event(
        "widget_weather",
        payload={
            "source": LocationSource.ENTITY,
            "at": datetime(2026, 3, 1, tzinfo=UTC),
            "api_key": "secret",
        },
    )

    line = journal.events_path.read_text(encoding="utf-8").strip()
    record = json.loads(line)
    assert record["event_type"] == "widget_weather"
    assert record["session_id"] == "abc123"
    assert record["payload"]["source"] == "entity"
    assert record["payload"]["at"] == "2026-03-01T00:00:00+00:00"
    assert record["payload"]["api_key"] == REDACTED


def test_journal_rejects_unserializable_payload(tmp_path: Path) -> None:
    journal = JournalWriter(journal_dir=tmp_path, session_id="abc123")

    with pytest.raises(JournalError):
        journal.write_event("bad", payload={"value": object()})
