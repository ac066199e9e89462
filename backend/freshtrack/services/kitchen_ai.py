"""
KitchenAI: Claude API integration for recipe suggestions.

ClaudeRecipeStrategy plugs the model into the recipe synthesizer. It returns
the same RecipeDraft shape as the heuristic strategy, so callers never know
which one produced a recipe.
"""

import json
import logging
import re
from functools import lru_cache

from pydantic import ValidationError

from freshtrack.config import get_settings
from freshtrack.errors import GenerationFailed
from freshtrack.schemas.recipe import RecipeCandidate, RecipeDraft, RecipeIngredient
from freshtrack.services.recipe_synth import RecipeStrategy, placeholder_image, to_ingredients

logger = logging.getLogger(__name__)

RECIPE_JSON_SCHEMA = """\
Return valid JSON matching this exact structure:
{
  "recipe_name": "string",
  "ingredients": [{"name": "...", "quantity": number or null, "unit": "string or null"}, ...],
  "instructions": ["step text", ...]
}
Use every listed item as an ingredient, referenced by its exact name. Keep the listed quantities and units. \
Return ONLY the JSON, no markdown fences or extra text."""


def _extract_json(text: str) -> dict:
    """Extract JSON from Claude response, handling markdown fences."""
    text = text.strip()
    m = re.search(r"```(?:json)?\s*([\s\S]*?)```", text)
    if m:
        text = m.group(1).strip()
    return json.loads(text)


class KitchenAI:
    """Recipe generation powered by the Anthropic Claude API."""

    def __init__(self, client=None):
        settings = get_settings()
        self.model = settings.CLAUDE_MODEL
        self.api_key = settings.ANTHROPIC_API_KEY
        self._client = client

    @property
    def client(self):
        if self._client is None and self.api_key:
            import anthropic
            self._client = anthropic.Anthropic(api_key=self.api_key)
        return self._client

    def _call_claude(self, system: str, user_message: str, max_tokens: int = 2048) -> str:
        """Make a call to the Claude API. Returns the text response."""
        if not self.client:
            raise GenerationFailed("Anthropic API key not configured")
        response = self.client.messages.create(
            model=self.model,
            max_tokens=max_tokens,
            system=system,
            messages=[{"role": "user", "content": user_message}],
        )
        return response.content[0].text

    def generate_recipe(self, candidates: list[RecipeCandidate]) -> dict:
        """Ask for a practical recipe that uses up the given items."""
        system = (
            "You are a creative home cook helping someone use up food before it expires. "
            "Suggest one practical recipe built around the items listed. " + RECIPE_JSON_SCHEMA
        )
        items_summary = "\n".join(
            f"- {c.name} ({c.quantity:g} {c.unit})" if c.unit else f"- {c.name} ({c.quantity:g})"
            for c in candidates
        )
        user_msg = f"Items to use:\n{items_summary}"
        text = self._call_claude(system, user_msg)
        try:
            return _extract_json(text)
        except json.JSONDecodeError as e:
            raise GenerationFailed(f"Model reply was not valid JSON: {e}") from e


class ClaudeRecipeStrategy(RecipeStrategy):
    def __init__(self, ai: KitchenAI | None = None):
        self.ai = ai or get_kitchen_ai()

    def compose(self, candidates: list[RecipeCandidate]) -> RecipeDraft:
        data = self.ai.generate_recipe(candidates)
        try:
            ingredients = [RecipeIngredient.model_validate(i) for i in data.get("ingredients") or []]
            draft = RecipeDraft(
                recipe_name=data["recipe_name"],
                ingredients=ingredients or to_ingredients(candidates),
                instructions=[str(s) for s in data.get("instructions") or []],
                image_ref=placeholder_image(candidates),
            )
        except (AttributeError, KeyError, TypeError, ValidationError) as e:
            logger.error("Unusable recipe from model: %s", e)
            raise GenerationFailed(f"Model reply did not match the recipe shape: {e}") from e
        if not draft.recipe_name.strip() or not draft.instructions:
            raise GenerationFailed("Model reply had no recipe name or no instructions")
        return draft


@lru_cache
def get_kitchen_ai() -> KitchenAI:
    return KitchenAI()
