# forum/utils/datetime_utils.py
"""
Central time handling for the forum backend.

- Every timestamp the backend writes is a timezone-aware UTC datetime.
- Every timestamp the backend emits is an ISO-8601 string with a 'Z' suffix.
- Values read back from the store may be Firestore timestamps, naive
  datetimes or (for legacy documents) ISO strings; `coerce` accepts all of
  them and returns None for anything it cannot interpret.
"""

import logging
from datetime import datetime, timezone
from typing import Any, Optional
from dateutil import parser as dateutil_parser

logger = logging.getLogger(__name__)


class DateTimeUtils:
    """Timestamp helpers used by the store adapters, services and the materializer."""

    @staticmethod
    def now() -> datetime:
        """Current time as a UTC timezone-aware datetime."""
        return datetime.now(timezone.utc)

    @staticmethod
    def parse_iso_datetime(iso_string: str) -> datetime:
        """
        Parses an ISO string into a UTC datetime.

        Supported:
        - 2024-01-15T10:30:00Z
        - 2024-01-15T10:30:00+09:00
        - 2024-01-15T10:30:00.123456Z
        - 2024-01-15T10:30:00 (assumed UTC)
        """
        if not iso_string:
            raise ValueError("Cannot parse an empty timestamp string")
        try:
            if iso_string.endswith('Z'):
                iso_string = iso_string[:-1] + '+00:00'
            dt = dateutil_parser.isoparse(iso_string)
        except (ValueError, OverflowError) as e:
            raise ValueError(f"Invalid ISO timestamp: {iso_string}") from e
        return DateTimeUtils.to_utc(dt)

    @staticmethod
    def to_utc(dt: datetime) -> datetime:
        if dt.tzinfo is None:
            return dt.replace(tzinfo=timezone.utc)
        return dt.astimezone(timezone.utc)

    @staticmethod
    def to_iso_string(dt: datetime) -> str:
        """datetime -> '2024-01-15T10:30:00Z' (microseconds kept when present)."""
        return DateTimeUtils.to_utc(dt).isoformat().replace('+00:00', 'Z')

    @staticmethod
    def coerce(value: Any) -> Optional[datetime]:
        """
        Best-effort conversion of a stored timestamp to a UTC datetime.

        Returns None for absent or unreadable values; callers decide whether
        None becomes null or "now".
        """
        if value is None:
            return None
        if isinstance(value, datetime):
            return DateTimeUtils.to_utc(value)
        if isinstance(value, str):
            try:
                return DateTimeUtils.parse_iso_datetime(value)
            except ValueError:
                logger.debug(f"Ignoring unreadable timestamp string: {value!r}")
                return None
        # Firestore/protobuf timestamp objects
        if hasattr(value, 'timestamp') and callable(value.timestamp):
            try:
                return datetime.fromtimestamp(value.timestamp(), tz=timezone.utc)
            except (TypeError, ValueError, OverflowError, OSError):
                return None
        return None

    @staticmethod
    def for_firestore(obj: Any) -> Any:
        """Normalises every datetime inside dicts/lists to UTC before a write."""
        if isinstance(obj, datetime):
            return DateTimeUtils.to_utc(obj)
        if isinstance(obj, dict):
            return {k: DateTimeUtils.for_firestore(v) for k, v in obj.items()}
        if isinstance(obj, list):
            return [DateTimeUtils.for_firestore(item) for item in obj]
        return obj


def now() -> datetime:
    return DateTimeUtils.now()


def to_iso(dt: datetime) -> str:
    return DateTimeUtils.to_iso_string(dt)


def for_firestore(obj: Any) -> Any:
    return DateTimeUtils.for_firestore(obj)
