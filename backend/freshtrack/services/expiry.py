"""
Expiry Classifier: maps an expiry date to an urgency bucket.

Pure functions only: the evaluation instant is always passed in, never read
from a clock. Timestamps are reduced to civil (calendar) dates before any
comparison so time of day never shifts an item between buckets.
"""

from datetime import date, datetime
from enum import Enum
from zoneinfo import ZoneInfo


class ExpiryBucket(str, Enum):
    EXPIRED = "expired"
    EXPIRING_SOON = "expiring_soon"
    USE_SOON = "use_soon"
    FRESH = "fresh"


# Urgency order, most urgent first
BUCKET_ORDER = (
    ExpiryBucket.EXPIRED,
    ExpiryBucket.EXPIRING_SOON,
    ExpiryBucket.USE_SOON,
    ExpiryBucket.FRESH,
)

URGENT_BUCKETS = (ExpiryBucket.EXPIRED, ExpiryBucket.EXPIRING_SOON)

EXPIRING_SOON_DAYS = 3
USE_SOON_DAYS = 7


def civil_date(value: date | datetime, tz: str = "UTC") -> date:
    """Reduce a date or timestamp to a calendar date.

    Aware timestamps are converted to `tz` first; naive ones keep their own
    date component.
    """
    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(ZoneInfo(tz))
        return value.date()
    return value


def days_until_expiry(
    expiry_date: date | datetime,
    now: date | datetime,
    tz: str = "UTC",
) -> int:
    """Whole calendar days from `now` to `expiry_date` (negative once past)."""
    return (civil_date(expiry_date, tz) - civil_date(now, tz)).days


def _bucket_from_days_remaining(days_left: int) -> ExpiryBucket:
    """Convert days remaining to an urgency bucket."""
    if days_left < 0:
        return ExpiryBucket.EXPIRED
    elif days_left < EXPIRING_SOON_DAYS:
        # Expiring today still counts as "soon", not expired
        return ExpiryBucket.EXPIRING_SOON
    elif days_left < USE_SOON_DAYS:
        return ExpiryBucket.USE_SOON
    else:
        return ExpiryBucket.FRESH


def classify(
    expiry_date: date | datetime,
    now: date | datetime,
    tz: str = "UTC",
) -> ExpiryBucket:
    return _bucket_from_days_remaining(days_until_expiry(expiry_date, now, tz))
