"""
Inventory Aggregator: derived views over a snapshot of food items.

Every function here takes the item collection and the evaluation instant as
arguments and returns new values; nothing is cached or mutated, so the same
input always yields the same output.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from datetime import date, datetime

from freshtrack.services.expiry import (
    BUCKET_ORDER,
    URGENT_BUCKETS,
    ExpiryBucket,
    civil_date,
    classify,
    days_until_expiry,
)

DEFAULT_CANDIDATE_LIMIT = 5
FALLBACK_CANDIDATE_LIMIT = 3


@dataclass(frozen=True)
class InventoryView:
    """Active items grouped by urgency bucket and counted per expiry date.

    Only buckets holding at least one item appear in `by_bucket`.
    """

    by_bucket: dict[ExpiryBucket, list] = field(default_factory=dict)
    by_date: dict[date, int] = field(default_factory=dict)

    def bucket(self, name: ExpiryBucket) -> list:
        return list(self.by_bucket.get(name, []))

    def count(self, name: ExpiryBucket) -> int:
        return len(self.by_bucket.get(name, []))

    @property
    def urgent_count(self) -> int:
        """Expired plus expiring-soon items: the "Expiring Soon" badge."""
        return sum(self.count(b) for b in URGENT_BUCKETS)

    @property
    def total(self) -> int:
        return sum(len(v) for v in self.by_bucket.values())


def active_items(items: Iterable) -> list:
    return [i for i in items if not i.consumed]


def aggregate(items: Iterable, now: date | datetime, tz: str = "UTC") -> InventoryView:
    """Partition non-consumed items by bucket and count them per expiry date.

    Within a bucket items keep their input order.
    """
    grouped: dict[ExpiryBucket, list] = {}
    by_date: dict[date, int] = {}

    for item in active_items(items):
        grouped.setdefault(classify(item.expiry_date, now, tz), []).append(item)
        day = civil_date(item.expiry_date, tz)
        by_date[day] = by_date.get(day, 0) + 1

    by_bucket = {b: grouped[b] for b in BUCKET_ORDER if b in grouped}
    return InventoryView(by_bucket=by_bucket, by_date=by_date)


def items_expiring_on(items: Iterable, day: date, tz: str = "UTC") -> list:
    """Active items whose expiry falls on `day` (calendar selection)."""
    return [i for i in active_items(items) if civil_date(i.expiry_date, tz) == day]


def dashboard_summary(items: Sequence, now: date | datetime, tz: str = "UTC") -> dict:
    """Full bucket listing plus the counts shown on the dashboard."""
    view = aggregate(items, now, tz)
    return {
        "buckets": {b.value: view.bucket(b) for b in BUCKET_ORDER},
        "counts": {b.value: view.count(b) for b in BUCKET_ORDER},
        "urgent_count": view.urgent_count,
        "total": view.total,
    }


def urgency_fields(item, now: date | datetime, tz: str = "UTC") -> dict:
    """Bucket and day offset of one item, for list displays."""
    return {
        "bucket": classify(item.expiry_date, now, tz).value,
        "days_until_expiry": days_until_expiry(item.expiry_date, now, tz),
    }


def select_recipe_candidates(
    items: Sequence,
    now: date | datetime,
    limit: int = DEFAULT_CANDIDATE_LIMIT,
    tz: str = "UTC",
) -> list:
    """Pick the items a suggested recipe should use up.

    Expired then expiring-soon items come first. When nothing is urgent the
    first few remaining active items are used instead.
    """
    view = aggregate(items, now, tz)
    urgent = [i for b in URGENT_BUCKETS for i in view.bucket(b)]
    if urgent:
        return urgent[:limit]

    fallback = min(limit, FALLBACK_CANDIDATE_LIMIT)
    return active_items(items)[:fallback]


def resolve_receipt(item, store):
    """Look up the receipt an item points at, or None when there is none.

    The reference is weak: a deleted receipt simply resolves to None.
    """
    if item.receipt_ref is None:
        return None
    return store.get_receipt(item.owner_id, item.receipt_ref)
