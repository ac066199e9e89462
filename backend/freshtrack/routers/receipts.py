from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from freshtrack.routers.items import item_view
from freshtrack.schemas.food_item import FoodItemView
from freshtrack.schemas.receipt import ReceiptCreate, ReceiptUpdate, ReceiptResponse
from freshtrack.store import InventoryStore
from freshtrack.utils.auth import get_current_owner
from freshtrack.utils.deps import get_civil_tz, get_now, get_store

router = APIRouter()


def _get_receipt(store: InventoryStore, receipt_id: UUID, owner_id: UUID) -> ReceiptResponse:
    receipt = store.get_receipt(owner_id, receipt_id)
    if not receipt:
        raise HTTPException(status_code=404, detail="Receipt not found")
    return receipt


@router.get("/", response_model=list[ReceiptResponse])
def list_receipts(
    store: InventoryStore = Depends(get_store),
    owner_id: UUID = Depends(get_current_owner),
):
    return store.list_receipts(owner_id)


@router.post("/", response_model=ReceiptResponse, status_code=201)
def create_receipt(
    body: ReceiptCreate,
    store: InventoryStore = Depends(get_store),
    owner_id: UUID = Depends(get_current_owner),
):
    return store.create_receipt(owner_id, body)


@router.get("/{receipt_id}", response_model=ReceiptResponse)
def get_receipt(
    receipt_id: UUID,
    store: InventoryStore = Depends(get_store),
    owner_id: UUID = Depends(get_current_owner),
):
    return _get_receipt(store, receipt_id, owner_id)


@router.patch("/{receipt_id}", response_model=ReceiptResponse)
def update_receipt(
    receipt_id: UUID,
    body: ReceiptUpdate,
    store: InventoryStore = Depends(get_store),
    owner_id: UUID = Depends(get_current_owner),
):
    _get_receipt(store, receipt_id, owner_id)
    return store.update_receipt(owner_id, receipt_id, body)


@router.delete("/{receipt_id}", status_code=204)
def delete_receipt(
    receipt_id: UUID,
    store: InventoryStore = Depends(get_store),
    owner_id: UUID = Depends(get_current_owner),
):
    if not store.delete_receipt(owner_id, receipt_id):
        raise HTTPException(status_code=404, detail="Receipt not found")


@router.get("/{receipt_id}/items", response_model=list[FoodItemView])
def receipt_items(
    receipt_id: UUID,
    include_consumed: bool = True,
    store: InventoryStore = Depends(get_store),
    owner_id: UUID = Depends(get_current_owner),
    now: datetime = Depends(get_now),
    tz: str = Depends(get_civil_tz),
):
    _get_receipt(store, receipt_id, owner_id)
    items = store.list_items(owner_id, include_consumed=include_consumed, receipt_ref=receipt_id)
    return [item_view(i, now, tz) for i in items]
