"""UTC timestamp helpers shared by the models and the error payloads."""

from __future__ import annotations

from datetime import UTC, datetime


def utcnow() -> datetime:
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def format_timestamp(value: datetime) -> str:
    """Render a timestamp in the fixed-width form stored in Cosmos DB.

    Stored values and query cutoffs must share this format so that string
    comparison inside queries orders them chronologically.
    """
    return as_utc(value).isoformat(timespec="microseconds")
