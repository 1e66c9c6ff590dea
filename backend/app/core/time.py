"""Time utilities for timezone-aware datetimes and epoch values."""

from datetime import UTC, datetime
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError


def utc_now() -> datetime:
    """Return a timezone-aware UTC datetime."""
    return datetime.now(UTC)


def now_epoch_seconds() -> int:
    return int(utc_now().timestamp())


def now_epoch_millis() -> int:
    return int(utc_now().timestamp() * 1000)


def resolve_timezone(name: str) -> ZoneInfo:
    """Return the ZoneInfo for an IANA name, raising ValueError when unknown."""
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as exc:
        raise ValueError(f"Unknown timezone: {name!r}") from exc
