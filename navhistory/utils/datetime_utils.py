from datetime import datetime, timezone
from typing import Optional


def format_iso_z(value: datetime) -> str:
    """Format a datetime as an ISO-8601 UTC string with millisecond precision and a `Z` suffix.

    Naive datetimes are assumed to already be UTC.
    """
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value.isoformat(timespec="milliseconds") + "Z"


def utc_now_iso(now: Optional[datetime] = None) -> str:
    return format_iso_z(now if now is not None else datetime.now(timezone.utc))
