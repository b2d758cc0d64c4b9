"""Date helpers for workout logs."""

from datetime import date, datetime, timezone
from typing import Optional


def local_iso_date(today: Optional[date] = None) -> str:
    """Today's date in the local timezone as YYYY-MM-DD."""
    return (today or date.today()).isoformat()


def iso_date_to_millis(value: str) -> int:
    """Epoch milliseconds of midnight UTC on an ISO date (YYYY-MM-DD)."""
    parsed = datetime.strptime(value, "%Y-%m-%d").replace(tzinfo=timezone.utc)
    return int(parsed.timestamp() * 1000)
