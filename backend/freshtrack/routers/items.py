from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from freshtrack.errors import InvalidInput
from freshtrack.schemas.food_item import (
    FoodItemCreate, FoodItemUpdate, FoodItemView,
)
from freshtrack.schemas.receipt import ReceiptResponse
from freshtrack.services.inventory import resolve_receipt, urgency_fields
from freshtrack.store import InventoryStore
from freshtrack.utils.auth import get_current_owner
from freshtrack.utils.deps import get_civil_tz, get_now, get_store

router = APIRouter()


def item_view(item, now: datetime, tz: str) -> FoodItemView:
    return FoodItemView(**item.model_dump(), **urgency_fields(item, now, tz))


def _get_item(store: InventoryStore, item_id: UUID, owner_id: UUID):
    item = store.get_item(owner_id, item_id)
    if not item:
        raise HTTPException(status_code=404, detail="Food item not found")
    return item


def _check_receipt_ref(store: InventoryStore, owner_id: UUID, receipt_ref: UUID | None):
    if receipt_ref is not None and store.get_receipt(owner_id, receipt_ref) is None:
        raise InvalidInput(f"Receipt {receipt_ref} not found")


@router.get("/", response_model=list[FoodItemView])
def list_items(
    include_consumed: bool = False,
    category: str | None = None,
    search: str | None = None,
    receipt_id: UUID | None = None,
    store: InventoryStore = Depends(get_store),
    owner_id: UUID = Depends(get_current_owner),
    now: datetime = Depends(get_now),
    tz: str = Depends(get_civil_tz),
):
    items = store.list_items(
        owner_id,
        include_consumed=include_consumed,
        category=category,
        receipt_ref=receipt_id,
        search=search,
    )
    return [item_view(i, now, tz) for i in items]


@router.post("/", response_model=FoodItemView, status_code=201)
def create_item(
    body: FoodItemCreate,
    store: InventoryStore = Depends(get_store),
    owner_id: UUID = Depends(get_current_owner),
    now: datetime = Depends(get_now),
    tz: str = Depends(get_civil_tz),
):
    _check_receipt_ref(store, owner_id, body.receipt_ref)
    item = store.create_item(owner_id, body)
    return item_view(item, now, tz)


@router.get("/{item_id}", response_model=FoodItemView)
def get_item(
    item_id: UUID,
    store: InventoryStore = Depends(get_store),
    owner_id: UUID = Depends(get_current_owner),
    now: datetime = Depends(get_now),
    tz: str = Depends(get_civil_tz),
):
    return item_view(_get_item(store, item_id, owner_id), now, tz)


@router.patch("/{item_id}", response_model=FoodItemView)
def update_item(
    item_id: UUID,
    body: FoodItemUpdate,
    store: InventoryStore = Depends(get_store),
    owner_id: UUID = Depends(get_current_owner),
    now: datetime = Depends(get_now),
    tz: str = Depends(get_civil_tz),
):
    _get_item(store, item_id, owner_id)
    if "receipt_ref" in body.model_fields_set:
        _check_receipt_ref(store, owner_id, body.receipt_ref)
    item = store.update_item(owner_id, item_id, body)
    return item_view(item, now, tz)


@router.delete("/{item_id}", status_code=204)
def delete_item(
    item_id: UUID,
    store: InventoryStore = Depends(get_store),
    owner_id: UUID = Depends(get_current_owner),
):
    if not store.delete_item(owner_id, item_id):
        raise HTTPException(status_code=404, detail="Food item not found")


@router.post("/{item_id}/consume", response_model=FoodItemView)
def consume_item(
    item_id: UUID,
    store: InventoryStore = Depends(get_store),
    owner_id: UUID = Depends(get_current_owner),
    now: datetime = Depends(get_now),
    tz: str = Depends(get_civil_tz),
):
    _get_item(store, item_id, owner_id)
    return item_view(store.mark_consumed(owner_id, item_id), now, tz)


@router.get("/{item_id}/receipt", response_model=ReceiptResponse)
def get_item_receipt(
    item_id: UUID,
    store: InventoryStore = Depends(get_store),
    owner_id: UUID = Depends(get_current_owner),
):
    receipt = resolve_receipt(_get_item(store, item_id, owner_id), store)
    if receipt is None:
        raise HTTPException(status_code=404, detail="Receipt not found")
    return receipt
