"""Conversions from stored values to API response fields."""
from datetime import datetime, timezone
from typing import Iterable, List, Optional
from uuid import UUID


def serialize_uuid(value: Optional[UUID]) -> Optional[str]:
    return str(value) if value else None


def serialize_uuids(values: Iterable[UUID]) -> List[str]:
    return [str(v) for v in values]


def serialize_datetime(value: Optional[datetime]) -> Optional[str]:
    """
    ISO 8601 string with an explicit offset.

    Stored timestamps are UTC; backends that drop the zone (SQLite) hand
    them back naive, so naive values are tagged as UTC.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.isoformat()
