import logging
from datetime import datetime
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException

from freshtrack.config import get_settings
from freshtrack.errors import InvalidInput
from freshtrack.schemas.recipe import (
    GenerateRecipeRequest, RecipeCreate, RecipeResponse, RecipeUpdate,
)
from freshtrack.services.inventory import select_recipe_candidates
from freshtrack.services.recipe_synth import (
    RecipeSynthesizer, get_recipe_synthesizer, match_recipes,
)
from freshtrack.store import InventoryStore
from freshtrack.utils.auth import get_current_owner
from freshtrack.utils.deps import get_civil_tz, get_now, get_store

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_recipe(store: InventoryStore, recipe_id: UUID, owner_id: UUID) -> RecipeResponse:
    recipe = store.get_recipe(owner_id, recipe_id)
    if not recipe:
        raise HTTPException(status_code=404, detail="Recipe not found")
    return recipe


@router.get("/", response_model=list[RecipeResponse])
def list_recipes(
    search: str | None = None,
    store: InventoryStore = Depends(get_store),
    owner_id: UUID = Depends(get_current_owner),
):
    return match_recipes(store.list_recipes(owner_id), search)


@router.post("/generate", response_model=RecipeResponse, status_code=201)
def generate_recipe(
    body: GenerateRecipeRequest | None = None,
    store: InventoryStore = Depends(get_store),
    owner_id: UUID = Depends(get_current_owner),
    synthesizer: RecipeSynthesizer = Depends(get_recipe_synthesizer),
    now: datetime = Depends(get_now),
    tz: str = Depends(get_civil_tz),
):
    if body is not None and body.item_ids is not None:
        item_ids = list(dict.fromkeys(body.item_ids))
        items = [store.get_item(owner_id, item_id) for item_id in item_ids]
        missing = [str(i) for i, item in zip(item_ids, items) if item is None]
        if missing:
            raise InvalidInput(f"Unknown food items: {', '.join(missing)}")
    else:
        items = select_recipe_candidates(
            store.list_items(owner_id),
            now,
            limit=get_settings().RECIPE_CANDIDATE_LIMIT,
            tz=tz,
        )

    draft = synthesizer.synthesize(items)
    recipe = store.create_recipe(
        owner_id,
        RecipeCreate(**draft.model_dump(), source_item_ids=[i.id for i in items]),
    )
    logger.info("Generated recipe %s from %d item(s) for %s", recipe.id, len(items), owner_id)
    return recipe


@router.get("/{recipe_id}", response_model=RecipeResponse)
def get_recipe(
    recipe_id: UUID,
    store: InventoryStore = Depends(get_store),
    owner_id: UUID = Depends(get_current_owner),
):
    return _get_recipe(store, recipe_id, owner_id)


@router.patch("/{recipe_id}", response_model=RecipeResponse)
def update_recipe(
    recipe_id: UUID,
    body: RecipeUpdate,
    store: InventoryStore = Depends(get_store),
    owner_id: UUID = Depends(get_current_owner),
):
    _get_recipe(store, recipe_id, owner_id)
    return store.update_recipe(owner_id, recipe_id, body)


@router.delete("/{recipe_id}", status_code=204)
def delete_recipe(
    recipe_id: UUID,
    store: InventoryStore = Depends(get_store),
    owner_id: UUID = Depends(get_current_owner),
):
    if not store.delete_recipe(owner_id, recipe_id):
        raise HTTPException(status_code=404, detail="Recipe not found")
