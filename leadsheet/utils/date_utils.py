from datetime import datetime
from typing import Optional

import pytz


def now_in_timezone(timezone: str = "UTC") -> datetime:
    return datetime.now(pytz.timezone(timezone))


def short_date(dt: Optional[datetime] = None) -> str:
    """
    Format a datetime as a day/month label, e.g. "12 Jan" or "3 Feb".
    If no datetime is provided, uses current UTC time.
    """
    if dt is None:
        dt = now_in_timezone()
    return f"{dt.day} {dt.strftime('%b')}"


def short_time(dt: Optional[datetime] = None) -> str:
    """Format a datetime as a zero-padded 24h "HH:MM" label."""
    if dt is None:
        dt = now_in_timezone()
    return dt.strftime("%H:%M")
