from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from datamanager_util.common.errors import DataFileError
from datamanager_util.common.hashing import Encoding
from datamanager_util.common.io import read_json
from datamanager_util.common.schema import (
    EVENT_SOURCES,
    AdIdentifiers,
    Destination,
    Event,
    IngestEventsRequest,
    UserData,
    request_encoding,
)
from datamanager_util.ingest.identifiers import build_user_identifiers

logger = logging.getLogger(__name__)


def read_event_data_file(path: str | Path) -> list[dict[str, Any]]:
    events = read_json(path)
    if not isinstance(events, list):
        raise DataFileError(f"Expected a JSON array of events in file: {path}")
    return events


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp, treating naive values as UTC."""
    parsed = datetime.fromisoformat(str(value).strip())
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def _string_values(record: dict[str, Any], key: str) -> list[str]:
    """Return the identifier list under ``key``; numbers are kept as their string form."""
    values = record.get(key) or []
    if not isinstance(values, list):
        logger.warning("Ignoring %s: expected a list, got %s", key, type(values).__name__)
        return []
    strings: list[str] = []
    for value in values:
        if isinstance(value, str):
            strings.append(value)
        elif isinstance(value, int) and not isinstance(value, bool):
            strings.append(str(value))
        else:
            logger.warning("Skipping %s entry of type %s", key, type(value).__name__)
    return strings


def build_event(record: dict[str, Any], encoding: Encoding | str) -> Event | None:
    if not record.get("timestamp"):
        logger.warning("Skipping event with no timestamp.")
        return None
    try:
        event_timestamp = parse_timestamp(record["timestamp"])
    except ValueError:
        logger.warning("Skipping event with invalid timestamp: %s", record["timestamp"])
        return None

    transaction_id = record.get("transactionId")
    if not transaction_id:
        logger.warning("Skipping event with no transaction ID.")
        return None

    event_source = record.get("eventSource") or None
    if event_source is not None and event_source not in EVENT_SOURCES:
        logger.warning("Skipping event with invalid event source: %s", event_source)
        return None

    identifiers = build_user_identifiers(
        _string_values(record, "emails"),
        _string_values(record, "phoneNumbers"),
        encoding,
    )

    try:
        return Event(
            event_timestamp=event_timestamp,
            transaction_id=str(transaction_id),
            event_source=event_source,
            ad_identifiers=AdIdentifiers(gclid=record["gclid"]) if record.get("gclid") else None,
            currency=record.get("currency") or None,
            conversion_value=record.get("value"),
            user_data=UserData(user_identifiers=identifiers) if identifiers else None,
        )
    except ValidationError as exc:
        logger.warning(
            "Skipping event %s: %d invalid field(s)", transaction_id, exc.error_count()
        )
        return None


def build_events(
    records: Iterable[dict[str, Any]],
    encoding: Encoding | str,
) -> list[Event]:
    events: list[Event] = []
    for record in records:
        if not isinstance(record, dict):
            logger.warning("Skipping event that is not a JSON object.")
            continue
        event = build_event(record, encoding)
        if event is not None:
            events.append(event)
    return events


def build_events_request(
    destination: Destination,
    events: list[Event],
    *,
    encoding: Encoding | str,
    validate_only: bool = True,
) -> IngestEventsRequest:
    return IngestEventsRequest(
        destinations=[destination],
        events=events,
        encoding=request_encoding(encoding),
        validate_only=validate_only,
    )


__all__ = [
    "build_event",
    "build_events",
    "build_events_request",
    "parse_timestamp",
    "read_event_data_file",
]
