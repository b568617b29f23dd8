"""Timezone-aware timestamps for model defaults and order numbering."""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Current time as an aware UTC datetime. Naive datetimes are never stored."""
    return datetime.now(timezone.utc)
