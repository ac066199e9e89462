"""Tests for the SQLAlchemy-backed inventory store."""

from datetime import date, timedelta
from uuid import uuid4

import pytest

from freshtrack.errors import InvalidInput, NotFound
from freshtrack.schemas.recipe import RecipeCreate, RecipeIngredient

from conftest import TODAY


def _item(store, owner, name="Milk", offset=0, **extra):
    return store.create_item(owner, {
        "name": name,
        "expiry_date": (TODAY + timedelta(days=offset)).isoformat(),
        **extra,
    })


def test_create_item_defaults(store, owner):
    item = _item(store, owner)
    assert item.id is not None
    assert item.owner_id == owner
    assert item.quantity == 1.0
    assert item.unit == "piece(s)"
    assert item.consumed is False
    assert item.created_at is not None


def test_create_item_accepts_timestamp_expiry(store, owner):
    item = store.create_item(owner, {"name": "Milk", "expiry_date": "2025-03-12T18:30:00.000Z"})
    assert item.expiry_date == date(2025, 3, 12)


def test_item_may_be_logged_already_expired(store, owner):
    item = _item(store, owner, offset=-30)
    assert item.expiry_date == TODAY - timedelta(days=30)


@pytest.mark.parametrize(
    "payload",
    [
        {"name": "", "expiry_date": "2025-03-10"},
        {"name": "  ", "expiry_date": "2025-03-10"},
        {"name": "Milk"},
        {"expiry_date": "2025-03-10"},
        {"name": "Milk", "expiry_date": "2025-03-10", "quantity": 0},
        {"name": "Milk", "expiry_date": "2025-03-10", "quantity": -1},
    ],
)
def test_create_item_rejects_invalid(store, owner, payload):
    with pytest.raises(InvalidInput):
        store.create_item(owner, payload)
    assert store.list_items(owner, include_consumed=True) == []


def test_list_items_in_creation_order(store, owner):
    names = ["Apples", "Milk", "Bread"]
    for name in names:
        _item(store, owner, name)
    assert [i.name for i in store.list_items(owner)] == names


def test_list_items_filters(store, owner):
    receipt = store.create_receipt(owner, {"image_url": "https://example.com/r.jpg"})
    _item(store, owner, "Apples", category="Fruits", receipt_ref=str(receipt.id))
    _item(store, owner, "Green Apples", category="Fruits")
    _item(store, owner, "Milk", category="Dairy")

    assert [i.name for i in store.list_items(owner, category="Dairy")] == ["Milk"]
    assert [i.name for i in store.list_items(owner, search="apple")] == ["Apples", "Green Apples"]
    assert [i.name for i in store.list_items(owner, receipt_ref=receipt.id)] == ["Apples"]


def test_consumed_items_hidden_but_kept(store, owner):
    item = _item(store, owner)
    consumed = store.mark_consumed(owner, item.id)

    assert consumed.consumed is True
    assert store.list_items(owner) == []
    assert [i.id for i in store.list_items(owner, include_consumed=True)] == [item.id]
    assert store.get_item(owner, item.id).consumed is True


def test_items_are_scoped_to_owner(store, owner):
    item = _item(store, owner)
    stranger = uuid4()

    assert store.get_item(stranger, item.id) is None
    assert store.list_items(stranger) == []
    assert store.delete_item(stranger, item.id) is False
    with pytest.raises(NotFound):
        store.update_item(stranger, item.id, {"name": "Mine now"})
    assert store.get_item(owner, item.id).name == "Milk"


def test_update_item_replaces_fields(store, owner):
    item = _item(store, owner)
    updated = store.update_item(owner, item.id, {"quantity": 3, "unit": "cartons"})
    assert updated.quantity == 3
    assert updated.unit == "cartons"
    assert updated.name == "Milk"
    assert updated.created_at == item.created_at
    assert updated.owner_id == owner


@pytest.mark.parametrize(
    "changes",
    [{"name": None}, {"name": ""}, {"quantity": 0}, {"expiry_date": None}, {"consumed": None}],
)
def test_update_item_rejects_invalid(store, owner, changes):
    item = _item(store, owner)
    with pytest.raises(InvalidInput):
        store.update_item(owner, item.id, changes)


def test_delete_item(store, owner):
    item = _item(store, owner)
    assert store.delete_item(owner, item.id) is True
    assert store.get_item(owner, item.id) is None
    assert store.delete_item(owner, item.id) is False


def test_receipt_defaults_purchase_date_to_upload(store, owner):
    receipt = store.create_receipt(owner, {"image_url": "https://example.com/r.jpg"})
    assert receipt.purchase_date == receipt.uploaded_at.date()
    assert receipt.store_name is None


def test_receipt_rejects_negative_total(store, owner):
    with pytest.raises(InvalidInput):
        store.create_receipt(owner, {"image_url": "x", "total_amount": -1})


def test_receipts_newest_first(store, owner):
    first = store.create_receipt(owner, {"image_url": "a", "store_name": "Kroger"})
    second = store.create_receipt(owner, {"image_url": "b", "store_name": "Safeway"})
    assert [r.id for r in store.list_receipts(owner)] == [second.id, first.id]


def test_deleting_receipt_keeps_items(store, owner):
    receipt = store.create_receipt(owner, {"image_url": "https://example.com/r.jpg"})
    item = _item(store, owner, receipt_ref=str(receipt.id))

    assert store.delete_receipt(owner, receipt.id) is True

    kept = store.get_item(owner, item.id)
    assert kept is not None
    assert kept.receipt_ref == receipt.id
    assert store.get_receipt(owner, receipt.id) is None


def test_update_receipt(store, owner):
    receipt = store.create_receipt(owner, {"image_url": "a"})
    updated = store.update_receipt(owner, receipt.id, {"store_name": "Whole Foods", "total_amount": 54.99})
    assert updated.store_name == "Whole Foods"
    assert updated.total_amount == 54.99
    with pytest.raises(InvalidInput):
        store.update_receipt(owner, receipt.id, {"image_url": None})


def _recipe(item_ids):
    return RecipeCreate(
        recipe_name="Chicken rice Bowl",
        ingredients=[RecipeIngredient(name="Chicken", quantity=2, unit="lb")],
        instructions=["Cook.", "Serve."],
        image_ref="https://source.unsplash.com/featured/?food,bowl",
        source_item_ids=item_ids,
    )


def test_recipe_round_trip(store, owner):
    item = _item(store, owner, "Chicken")
    recipe = store.create_recipe(owner, _recipe([item.id]))

    fetched = store.get_recipe(owner, recipe.id)
    assert fetched.recipe_name == "Chicken rice Bowl"
    assert fetched.ingredients[0].quantity == 2
    assert fetched.source_item_ids == [item.id]
    assert fetched.instructions == ["Cook.", "Serve."]


def test_recipe_survives_item_deletion(store, owner):
    item = _item(store, owner, "Chicken")
    recipe = store.create_recipe(owner, _recipe([item.id]))

    store.delete_item(owner, item.id)

    assert store.get_recipe(owner, recipe.id).source_item_ids == [item.id]


def test_update_recipe_keeps_snapshot(store, owner):
    item_id = uuid4()
    recipe = store.create_recipe(owner, _recipe([item_id]))
    updated = store.update_recipe(owner, recipe.id, {"recipe_name": "Weeknight Bowl"})
    assert updated.recipe_name == "Weeknight Bowl"
    assert updated.source_item_ids == [item_id]
    with pytest.raises(InvalidInput):
        store.update_recipe(owner, recipe.id, {"instructions": None})


def test_recipes_scoped_and_deletable(store, owner):
    recipe = store.create_recipe(owner, _recipe([]))
    assert store.list_recipes(uuid4()) == []
    assert store.delete_recipe(uuid4(), recipe.id) is False
    assert store.delete_recipe(owner, recipe.id) is True
    assert store.list_recipes(owner) == []


def test_update_item_strips_name(store, owner):
    item = _item(store, owner)
    assert store.update_item(owner, item.id, {"name": "  Bread  "}).name == "Bread"
