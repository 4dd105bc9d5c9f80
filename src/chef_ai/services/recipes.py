"""Ingredient identification and recipe generation flows."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from chef_ai.domain.chat import ChatRequest
from chef_ai.domain.media import EncodedImage
from chef_ai.domain.recipes import IdentifiedIngredients, RecipeFilters, RecipeResponse
from chef_ai.services.extraction import extract_json_object
from chef_ai.services.media import MediaEncoder
from chef_ai.services.prompts import PromptBuilder
from chef_ai.services.validation import validate_json

_logger = logging.getLogger(__name__)


class ModelClient(Protocol):
    """Interface for a chat-completion model endpoint."""

    async def complete(self, request: ChatRequest) -> str:
        """Send one request and return the first choice's text."""


@dataclass
class RecipeService:
    """Runs encode, prompt, complete, extract and validate for each flow."""

    client: ModelClient
    prompts: PromptBuilder = field(default_factory=PromptBuilder)
    encoder: MediaEncoder = field(default_factory=MediaEncoder)

    async def identify_ingredients(
        self, image_ref: str | Path
    ) -> IdentifiedIngredients:
        """Identify the ingredients visible in a local image."""
        image = await self.encoder.encode(image_ref)
        return await self.identify_encoded(image)

    async def identify_encoded(self, image: EncodedImage) -> IdentifiedIngredients:
        """Identify the ingredients in an already encoded image."""
        raw = await self.client.complete(self.prompts.identification(image))
        result = validate_json(extract_json_object(raw), IdentifiedIngredients)
        _logger.info("Identified %s ingredients", len(result.ingredients))
        return result

    async def generate_recipes(
        self, ingredients: list[str], filters: RecipeFilters | None = None
    ) -> RecipeResponse:
        """Generate recipes for ingredients under optional filters."""
        raw = await self.client.complete(
            self.prompts.generation(ingredients, filters)
        )
        result = validate_json(extract_json_object(raw), RecipeResponse)
        _logger.info(
            "Generated %s recipes for %s ingredients",
            len(result.recipes),
            len(ingredients),
        )
        if filters is not None and filters.max_calories is not None:
            _warn_over_calorie_limit(result, filters.max_calories)
        return result


def _warn_over_calorie_limit(result: RecipeResponse, max_calories: float) -> None:
    """Log recipes that ignore the calorie ceiling; they are still returned."""
    for recipe in result.recipes:
        if recipe.calories > max_calories:
            _logger.warning(
                "Recipe exceeds calorie filter: name=%s calories=%s max=%s",
                recipe.name,
                recipe.calories,
                max_calories,
            )
