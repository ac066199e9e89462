from datetime import date, datetime
from uuid import UUID

from fastapi import APIRouter, Depends

from freshtrack.routers.items import item_view
from freshtrack.schemas.food_item import FoodItemView
from freshtrack.services.inventory import aggregate, dashboard_summary, items_expiring_on
from freshtrack.store import InventoryStore
from freshtrack.utils.auth import get_current_owner
from freshtrack.utils.deps import get_civil_tz, get_now, get_store

router = APIRouter()


@router.get("/dashboard", response_model=dict)
def dashboard(
    store: InventoryStore = Depends(get_store),
    owner_id: UUID = Depends(get_current_owner),
    now: datetime = Depends(get_now),
    tz: str = Depends(get_civil_tz),
):
    summary = dashboard_summary(store.list_items(owner_id), now, tz)
    summary["buckets"] = {
        bucket: [item_view(i, now, tz) for i in items]
        for bucket, items in summary["buckets"].items()
    }
    return summary


@router.get("/calendar", response_model=dict)
def calendar(
    store: InventoryStore = Depends(get_store),
    owner_id: UUID = Depends(get_current_owner),
    now: datetime = Depends(get_now),
    tz: str = Depends(get_civil_tz),
):
    view = aggregate(store.list_items(owner_id), now, tz)
    return {
        "by_date": {day.isoformat(): n for day, n in sorted(view.by_date.items())},
    }


@router.get("/calendar/{day}", response_model=list[FoodItemView])
def calendar_day(
    day: date,
    store: InventoryStore = Depends(get_store),
    owner_id: UUID = Depends(get_current_owner),
    now: datetime = Depends(get_now),
    tz: str = Depends(get_civil_tz),
):
    items = items_expiring_on(store.list_items(owner_id), day, tz)
    return [item_view(i, now, tz) for i in items]
