from __future__ import annotations

from datetime import datetime, timezone

from ..core.constants import DAY_SCHEDULED_UTC_HOUR
from ..core.exceptions import ValidationError


def utc_now() -> datetime:
    """Current UTC time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


def to_iso(value: datetime) -> str:
    """ISO-8601 with milliseconds and a ``Z`` suffix."""
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def parse_iso(value: str) -> datetime:
    v = (value or "").strip()
    if not v:
        raise ValidationError("Date is required")
    if v.endswith("Z"):
        v = v[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(v)
    except ValueError:
        raise ValidationError(f"Invalid date: {value!r}")
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def normalize_day_scheduled(value: str) -> str:
    """Pin a scheduled day to 06:00:00.000 UTC of its (UTC) date."""
    d = parse_iso(value).astimezone(timezone.utc)
    pinned = d.replace(hour=DAY_SCHEDULED_UTC_HOUR, minute=0, second=0, microsecond=0)
    return to_iso(pinned)


def epoch_millis(value: datetime) -> int:
    return int(value.timestamp() * 1000)
