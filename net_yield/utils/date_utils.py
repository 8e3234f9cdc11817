"""Date manipulation utilities"""

from datetime import datetime, timezone


def to_utc_isoformat(value: datetime) -> str:
    """ISO 8601 in UTC with explicit offset; naive values are taken as UTC (SQLite drops the offset)"""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).isoformat()
