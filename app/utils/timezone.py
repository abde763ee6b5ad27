"""Timezone utilities: timestamps are stored as naive UTC and rendered in the display zone"""
from datetime import datetime
import pytz

from app import config

DISPLAY_TZ = pytz.timezone(config.DISPLAY_TIMEZONE)


def utc_now() -> datetime:
    """Current time as a naive UTC datetime (storage format)."""
    return datetime.now(pytz.utc).replace(tzinfo=None)


def to_display_tz(dt: datetime | None) -> datetime | None:
    """
    Convert a stored datetime to an aware datetime in the display zone.

    Args:
        dt: Naive datetime assumed to be in UTC, or None

    Returns:
        Aware datetime in DISPLAY_TIMEZONE, or None if input is None
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = pytz.utc.localize(dt)
    return dt.astimezone(DISPLAY_TZ)
