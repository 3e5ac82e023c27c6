"""Date manipulation utilities"""

import math
from datetime import datetime, timezone

SECONDS_PER_HOUR = 60 * 60
SECONDS_PER_DAY = 24 * SECONDS_PER_HOUR


def hours_until(check_in: datetime, moment: datetime) -> float:
    """Hours from moment to check-in (negative once check-in has passed)"""
    return (check_in - moment).total_seconds() / SECONDS_PER_HOUR


def days_until(check_in: datetime, moment: datetime) -> int:
    """Whole days from moment to check-in, partial days rounded up"""
    return math.ceil((check_in - moment).total_seconds() / SECONDS_PER_DAY)


def ensure_utc(value: datetime) -> datetime:
    """Treat naive datetimes as UTC; convert aware ones to UTC"""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
