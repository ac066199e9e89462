"""
Recipe Synthesizer: turns a handful of food items into a recipe draft.

The synthesizer owns the input contract (a non-empty list of well-formed
items) and the output shape (RecipeDraft). Everything in between is delegated
to a RecipeStrategy:

  HeuristicRecipeStrategy: word-list naming and a generic method (default)
  ClaudeRecipeStrategy   : model-backed, see services/kitchen_ai.py

Pick one with the RECIPE_GENERATOR setting.
"""

import logging
import re
import zlib
from abc import ABC, abstractmethod
from collections.abc import Iterable

from pydantic import ValidationError

from freshtrack.config import get_settings
from freshtrack.errors import InsufficientInput, InvalidInput
from freshtrack.schemas.food_item import DEFAULT_UNIT
from freshtrack.schemas.recipe import RecipeCandidate, RecipeDraft, RecipeIngredient

logger = logging.getLogger(__name__)


PROTEIN_WORDS = ("chicken", "beef", "pork", "fish", "tofu")
CARB_WORDS = ("pasta", "rice", "noodles")

FALLBACK_RECIPE_NAME = "Mixed Ingredients Salad"
BOWL_SUFFIX = "Bowl"

GENERIC_INSTRUCTIONS = (
    "Prepare all ingredients and set aside.",
    "Combine main ingredients in a large bowl.",
    "Mix well and season to taste.",
    "Cook on medium heat for 15-20 minutes if needed.",
    "Serve hot and enjoy your meal!",
)

IMAGE_CATEGORIES = ("bowl", "plate", "salad", "meal")
IMAGE_URL_TEMPLATE = "https://source.unsplash.com/featured/?food,{category}"


def _words(name: str) -> list[str]:
    return re.findall(r"[a-z]+", name.lower())


def placeholder_image(candidates: list[RecipeCandidate]) -> str:
    """Stock photo pointer for a dish; stable for the same candidate names."""
    key = "|".join(c.name.lower() for c in candidates)
    category = IMAGE_CATEGORIES[zlib.crc32(key.encode("utf-8")) % len(IMAGE_CATEGORIES)]
    return IMAGE_URL_TEMPLATE.format(category=category)


def to_ingredients(candidates: list[RecipeCandidate]) -> list[RecipeIngredient]:
    """One ingredient per candidate, quantities and units carried over as is."""
    return [
        RecipeIngredient(name=c.name, quantity=c.quantity, unit=c.unit or DEFAULT_UNIT)
        for c in candidates
    ]


class RecipeStrategy(ABC):
    """Turns validated candidates into a RecipeDraft."""

    @abstractmethod
    def compose(self, candidates: list[RecipeCandidate]) -> RecipeDraft:
        ...


class HeuristicRecipeStrategy(RecipeStrategy):
    def __init__(
        self,
        proteins: Iterable[str] = PROTEIN_WORDS,
        carbs: Iterable[str] = CARB_WORDS,
        instructions: Iterable[str] = GENERIC_INSTRUCTIONS,
        fallback_name: str = FALLBACK_RECIPE_NAME,
    ):
        self.proteins = frozenset(w.lower() for w in proteins)
        self.carbs = frozenset(w.lower() for w in carbs)
        self.instructions = tuple(instructions)
        self.fallback_name = fallback_name

    @staticmethod
    def _first_match(candidates: list[RecipeCandidate], vocabulary: frozenset[str]) -> str | None:
        for c in candidates:
            for word in _words(c.name):
                if word in vocabulary:
                    return word
        return None

    def recipe_name(self, candidates: list[RecipeCandidate]) -> str:
        protein = self._first_match(candidates, self.proteins)
        carb = self._first_match(candidates, self.carbs)
        if not protein and not carb:
            return self.fallback_name

        parts = []
        if protein:
            parts.append(protein.capitalize())
        if carb:
            parts.append(carb)
        parts.append(BOWL_SUFFIX)
        return " ".join(parts)

    def compose(self, candidates: list[RecipeCandidate]) -> RecipeDraft:
        return RecipeDraft(
            recipe_name=self.recipe_name(candidates),
            ingredients=to_ingredients(candidates),
            instructions=list(self.instructions),
            image_ref=placeholder_image(candidates),
        )


def to_candidates(items: Iterable) -> list[RecipeCandidate]:
    """Validate food items (records or plain dicts) as recipe candidates."""
    candidates = []
    for item in items:
        try:
            if isinstance(item, dict):
                candidate = RecipeCandidate.model_validate(item)
            else:
                candidate = RecipeCandidate.model_validate(item, from_attributes=True)
        except ValidationError as e:
            raise InvalidInput(f"Invalid recipe candidate: {e}") from e
        if not candidate.name.strip():
            raise InvalidInput("Recipe candidates need a name")
        if candidate.quantity <= 0:
            raise InvalidInput(f"Quantity of {candidate.name!r} must be positive")
        candidates.append(candidate)
    return candidates


class RecipeSynthesizer:
    def __init__(self, strategy: RecipeStrategy | None = None):
        self.strategy = strategy or HeuristicRecipeStrategy()

    def synthesize(self, candidate_items: Iterable) -> RecipeDraft:
        items = list(candidate_items)
        if not items:
            raise InsufficientInput("At least one food item is needed to suggest a recipe")
        candidates = to_candidates(items)
        draft = self.strategy.compose(candidates)
        logger.info(
            "Synthesized %r from %d item(s) with %s",
            draft.recipe_name, len(candidates), type(self.strategy).__name__,
        )
        return draft


def synthesize(candidate_items: Iterable, strategy: RecipeStrategy | None = None) -> RecipeDraft:
    return RecipeSynthesizer(strategy).synthesize(candidate_items)


def get_recipe_synthesizer() -> RecipeSynthesizer:
    settings = get_settings()
    generator = settings.RECIPE_GENERATOR.lower()
    if generator == "claude":
        from freshtrack.services.kitchen_ai import ClaudeRecipeStrategy

        return RecipeSynthesizer(ClaudeRecipeStrategy())
    if generator != "heuristic":
        logger.warning("Unknown RECIPE_GENERATOR %r, using heuristic", settings.RECIPE_GENERATOR)
    return RecipeSynthesizer()


def match_recipes(recipes: Iterable, term: str | None) -> list:
    """Recipes whose name or any ingredient name contains `term`."""
    recipes = list(recipes)
    if not term:
        return recipes
    needle = term.lower()
    return [
        r for r in recipes
        if needle in r.recipe_name.lower()
        or any(needle in ing.name.lower() for ing in r.ingredients)
    ]
