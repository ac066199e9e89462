"""
InventoryStore: the storage collaborator the core talks to.

Every operation is scoped to an owner. A record belonging to someone else is
indistinguishable from a missing one.
"""

import logging
from abc import ABC, abstractmethod
from uuid import UUID

from pydantic import BaseModel, ValidationError

from freshtrack.errors import InvalidInput
from freshtrack.schemas.food_item import FoodItemCreate, FoodItemResponse, FoodItemUpdate
from freshtrack.schemas.receipt import ReceiptCreate, ReceiptResponse, ReceiptUpdate
from freshtrack.schemas.recipe import RecipeCreate, RecipeResponse, RecipeUpdate

logger = logging.getLogger(__name__)


def validate_payload(schema: type[BaseModel], data):
    """Coerce a dict (or pass through an instance) into `schema`.

    Validation failures surface as InvalidInput.
    """
    if isinstance(data, schema):
        return data
    try:
        return schema.model_validate(data)
    except ValidationError as e:
        logger.warning("Rejected %s: %s", schema.__name__, e)
        raise InvalidInput(str(e)) from e


class InventoryStore(ABC):
    # ── Food items ───────────────────────────────────────────────────

    @abstractmethod
    def create_item(self, owner_id: UUID, data: FoodItemCreate | dict) -> FoodItemResponse:
        ...

    @abstractmethod
    def list_items(
        self,
        owner_id: UUID,
        include_consumed: bool = False,
        category: str | None = None,
        receipt_ref: UUID | None = None,
        search: str | None = None,
    ) -> list[FoodItemResponse]:
        ...

    @abstractmethod
    def get_item(self, owner_id: UUID, item_id: UUID) -> FoodItemResponse | None:
        ...

    @abstractmethod
    def update_item(
        self, owner_id: UUID, item_id: UUID, changes: FoodItemUpdate | dict
    ) -> FoodItemResponse:
        ...

    @abstractmethod
    def delete_item(self, owner_id: UUID, item_id: UUID) -> bool:
        ...

    def mark_consumed(self, owner_id: UUID, item_id: UUID) -> FoodItemResponse:
        return self.update_item(owner_id, item_id, FoodItemUpdate(consumed=True))

    # ── Receipts ─────────────────────────────────────────────────────

    @abstractmethod
    def create_receipt(self, owner_id: UUID, data: ReceiptCreate | dict) -> ReceiptResponse:
        ...

    @abstractmethod
    def list_receipts(self, owner_id: UUID) -> list[ReceiptResponse]:
        ...

    @abstractmethod
    def get_receipt(self, owner_id: UUID, receipt_id: UUID) -> ReceiptResponse | None:
        ...

    @abstractmethod
    def update_receipt(
        self, owner_id: UUID, receipt_id: UUID, changes: ReceiptUpdate | dict
    ) -> ReceiptResponse:
        ...

    @abstractmethod
    def delete_receipt(self, owner_id: UUID, receipt_id: UUID) -> bool:
        ...

    # ── Recipes ──────────────────────────────────────────────────────

    @abstractmethod
    def create_recipe(self, owner_id: UUID, data: RecipeCreate | dict) -> RecipeResponse:
        ...

    @abstractmethod
    def list_recipes(self, owner_id: UUID) -> list[RecipeResponse]:
        ...

    @abstractmethod
    def get_recipe(self, owner_id: UUID, recipe_id: UUID) -> RecipeResponse | None:
        ...

    @abstractmethod
    def update_recipe(
        self, owner_id: UUID, recipe_id: UUID, changes: RecipeUpdate | dict
    ) -> RecipeResponse:
        ...

    @abstractmethod
    def delete_recipe(self, owner_id: UUID, recipe_id: UUID) -> bool:
        ...
