from datetime import datetime
from uuid import UUID
from pydantic import BaseModel, Field, model_validator


class RecipeCandidate(BaseModel):
    """The slice of a food item the recipe synthesizer looks at."""

    id: UUID | None = None
    name: str
    quantity: float = 1.0
    unit: str | None = None

    model_config = {"from_attributes": True}


class RecipeIngredient(BaseModel):
    name: str
    quantity: float | None = None
    unit: str | None = None


class RecipeDraft(BaseModel):
    recipe_name: str
    ingredients: list[RecipeIngredient]
    instructions: list[str]
    image_ref: str | None = None


class RecipeCreate(RecipeDraft):
    source_item_ids: list[UUID] = []


class RecipeUpdate(BaseModel):
    recipe_name: str | None = Field(None, min_length=1)
    ingredients: list[RecipeIngredient] | None = None
    instructions: list[str] | None = None
    image_ref: str | None = None

    @model_validator(mode="after")
    def _required_fields_not_nulled(self):
        for field in ("recipe_name", "ingredients", "instructions"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be cleared")
        return self


class RecipeResponse(BaseModel):
    id: UUID
    owner_id: UUID
    created_at: datetime
    recipe_name: str
    ingredients: list[RecipeIngredient]
    instructions: list[str]
    source_item_ids: list[UUID]
    image_ref: str | None

    model_config = {"from_attributes": True, "frozen": True}


class GenerateRecipeRequest(BaseModel):
    # None means "pick from the inventory, most urgent first"
    item_ids: list[UUID] | None = None
