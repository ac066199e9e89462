import logging
from datetime import datetime, timezone
from uuid import UUID

from sqlalchemy.orm import Session

from freshtrack.errors import NotFound
from freshtrack.models.food_item import FoodItem
from freshtrack.models.receipt import Receipt
from freshtrack.models.recipe import Recipe
from freshtrack.schemas.food_item import FoodItemCreate, FoodItemResponse, FoodItemUpdate
from freshtrack.schemas.receipt import ReceiptCreate, ReceiptResponse, ReceiptUpdate
from freshtrack.schemas.recipe import RecipeCreate, RecipeResponse, RecipeUpdate
from freshtrack.store.base import InventoryStore, validate_payload

logger = logging.getLogger(__name__)


class SqlInventoryStore(InventoryStore):
    """InventoryStore backed by a SQLAlchemy session (Postgres in production)."""

    def __init__(self, db: Session):
        self.db = db

    def _get_row(self, model, owner_id: UUID, record_id: UUID):
        return self.db.query(model).filter(
            model.id == record_id, model.owner_id == owner_id
        ).first()

    def _require_row(self, model, owner_id: UUID, record_id: UUID):
        row = self._get_row(model, owner_id, record_id)
        if row is None:
            raise NotFound(model.__name__, record_id)
        return row

    def _apply(self, row, data: dict):
        for k, v in data.items():
            setattr(row, k, v)
        self.db.commit()
        self.db.refresh(row)
        return row

    def _delete(self, model, owner_id: UUID, record_id: UUID) -> bool:
        row = self._get_row(model, owner_id, record_id)
        if row is None:
            return False
        self.db.delete(row)
        self.db.commit()
        logger.info("Deleted %s %s", model.__name__, record_id)
        return True

    # ── Food items ───────────────────────────────────────────────────

    def create_item(self, owner_id, data):
        body = validate_payload(FoodItemCreate, data)
        item = FoodItem(**body.model_dump(), owner_id=owner_id)
        self.db.add(item)
        self.db.commit()
        self.db.refresh(item)
        logger.info("Added %s (expires %s) for %s", item.name, item.expiry_date, owner_id)
        return FoodItemResponse.model_validate(item)

    def list_items(
        self,
        owner_id,
        include_consumed=False,
        category=None,
        receipt_ref=None,
        search=None,
    ):
        q = self.db.query(FoodItem).filter(FoodItem.owner_id == owner_id)
        if not include_consumed:
            q = q.filter(FoodItem.consumed.is_(False))
        if category:
            q = q.filter(FoodItem.category == category)
        if receipt_ref:
            q = q.filter(FoodItem.receipt_ref == receipt_ref)
        if search:
            q = q.filter(FoodItem.name.ilike(f"%{search}%"))
        q = q.order_by(FoodItem.created_at.asc())
        return [FoodItemResponse.model_validate(i) for i in q.all()]

    def get_item(self, owner_id, item_id):
        item = self._get_row(FoodItem, owner_id, item_id)
        return FoodItemResponse.model_validate(item) if item else None

    def update_item(self, owner_id, item_id, changes):
        body = validate_payload(FoodItemUpdate, changes)
        item = self._require_row(FoodItem, owner_id, item_id)
        item = self._apply(item, body.model_dump(exclude_unset=True))
        return FoodItemResponse.model_validate(item)

    def delete_item(self, owner_id, item_id):
        return self._delete(FoodItem, owner_id, item_id)

    # ── Receipts ─────────────────────────────────────────────────────

    def create_receipt(self, owner_id, data):
        body = validate_payload(ReceiptCreate, data)
        uploaded_at = datetime.now(timezone.utc)
        receipt = Receipt(
            **body.model_dump(exclude={"purchase_date"}),
            purchase_date=body.purchase_date or uploaded_at.date(),
            uploaded_at=uploaded_at,
            owner_id=owner_id,
        )
        self.db.add(receipt)
        self.db.commit()
        self.db.refresh(receipt)
        logger.info("Added receipt %s for %s", receipt.id, owner_id)
        return ReceiptResponse.model_validate(receipt)

    def list_receipts(self, owner_id):
        rows = self.db.query(Receipt).filter(
            Receipt.owner_id == owner_id,
        ).order_by(Receipt.uploaded_at.desc()).all()
        return [ReceiptResponse.model_validate(r) for r in rows]

    def get_receipt(self, owner_id, receipt_id):
        receipt = self._get_row(Receipt, owner_id, receipt_id)
        return ReceiptResponse.model_validate(receipt) if receipt else None

    def update_receipt(self, owner_id, receipt_id, changes):
        body = validate_payload(ReceiptUpdate, changes)
        receipt = self._require_row(Receipt, owner_id, receipt_id)
        receipt = self._apply(receipt, body.model_dump(exclude_unset=True))
        return ReceiptResponse.model_validate(receipt)

    def delete_receipt(self, owner_id, receipt_id):
        # Items keep their receipt_ref; it simply stops resolving
        return self._delete(Receipt, owner_id, receipt_id)

    # ── Recipes ──────────────────────────────────────────────────────

    def create_recipe(self, owner_id, data):
        body = validate_payload(RecipeCreate, data)
        recipe = Recipe(**body.model_dump(mode="json"), owner_id=owner_id)
        self.db.add(recipe)
        self.db.commit()
        self.db.refresh(recipe)
        logger.info("Saved recipe %r for %s", recipe.recipe_name, owner_id)
        return RecipeResponse.model_validate(recipe)

    def list_recipes(self, owner_id):
        rows = self.db.query(Recipe).filter(
            Recipe.owner_id == owner_id,
        ).order_by(Recipe.created_at.desc()).all()
        return [RecipeResponse.model_validate(r) for r in rows]

    def get_recipe(self, owner_id, recipe_id):
        recipe = self._get_row(Recipe, owner_id, recipe_id)
        return RecipeResponse.model_validate(recipe) if recipe else None

    def update_recipe(self, owner_id, recipe_id, changes):
        body = validate_payload(RecipeUpdate, changes)
        recipe = self._require_row(Recipe, owner_id, recipe_id)
        recipe = self._apply(recipe, body.model_dump(mode="json", exclude_unset=True))
        return RecipeResponse.model_validate(recipe)

    def delete_recipe(self, owner_id, recipe_id):
        return self._delete(Recipe, owner_id, recipe_id)
