"""Prompt construction for ingredient identification and recipe generation."""

import json
from dataclasses import dataclass

from chef_ai.domain.chat import (
    ChatMessage,
    ChatRequest,
    ImageUrl,
    ImageUrlBlock,
    TextBlock,
)
from chef_ai.domain.media import EncodedImage
from chef_ai.domain.recipes import RecipeFilters

JSON_ONLY = "Return ONLY valid JSON with no additional text."

IDENTIFICATION_SYSTEM_PROMPT = (
    "You are a food identification expert. Analyze the image of a fridge or "
    "food items and identify all visible food ingredients. " + JSON_ONLY
)

IDENTIFICATION_INSTRUCTION = (
    "Identify all food items visible in this image. Return a JSON object with "
    'a single key "ingredients" containing an array of ingredient name '
    'strings. Example: {"ingredients": ["eggs", "milk", "butter", "spinach"]}'
)

GENERATION_SYSTEM_PROMPT = (
    "You are a professional chef and recipe creator. Generate recipes based on "
    "available ingredients and user preferences. " + JSON_ONLY
)

RECIPE_SCHEMA_DESCRIPTION = """\
Generate 3-5 recipes that primarily use these ingredients. For each recipe, provide:
- name: the recipe name (string)
- difficulty: integer on a 1-5 scale (1=easy, 5=expert)
- calories: estimated total calories (number)
- macros: object with "protein", "carbs", and "fat" (strings with units, e.g. "20g")
- prepTime: estimated preparation + cooking time (string, e.g. "30 mins", "1 hour")
- dietType: the primary dietary category (string, e.g. "Vegan", "Keto", "High Protein")
- tags: array of minor tag strings like "Low Effort", "Family Friendly", "Quick"
- ingredients: non-empty array of objects with "name" (string), "quantity" \
(string, optional), and "available" (boolean - true if in the provided list)
- steps: non-empty array of step-by-step cooking instruction strings

Return a JSON object with a single key "recipes" containing an array of 1 to 5
recipes."""

RECIPE_EXAMPLE = {
    "recipes": [
        {
            "name": "Simple Omelette",
            "difficulty": 1,
            "calories": 350,
            "macros": {"protein": "24g", "carbs": "2g", "fat": "28g"},
            "prepTime": "15 mins",
            "dietType": "Keto",
            "tags": ["Quick", "Protein Rich"],
            "ingredients": [
                {"name": "eggs", "quantity": "3 large", "available": True},
                {"name": "salt", "available": False},
            ],
            "steps": ["Crack eggs into a bowl...", "Heat a pan..."],
        }
    ]
}

NO_DIET_PLACEHOLDER = "None"
NO_LIMIT_PLACEHOLDER = "Unlimited"


def render_filter_block(filters: RecipeFilters) -> str:
    """Render filters as plain-text lines, with placeholders for unset fields."""
    max_calories = (
        _format_number(filters.max_calories)
        if filters.max_calories is not None
        else NO_LIMIT_PLACEHOLDER
    )
    return "\n".join(
        [
            "Apply these filters:",
            f"- Dietary Preference: {filters.diet_type or NO_DIET_PLACEHOLDER}",
            f"- Max Calories: {max_calories}",
            f"- Max Cooking Time: {filters.max_time or NO_LIMIT_PLACEHOLDER}",
        ]
    )


@dataclass(frozen=True)
class PromptBuilder:
    """Builds chat-completion requests for both pipeline operations."""

    model: str = "gpt-4o"
    identification_max_tokens: int = 1024
    generation_max_tokens: int = 4096

    def identification(self, image: EncodedImage) -> ChatRequest:
        """Build the ingredient identification request for an image."""
        return ChatRequest(
            model=self.model,
            max_tokens=self.identification_max_tokens,
            messages=[
                ChatMessage(role="system", content=IDENTIFICATION_SYSTEM_PROMPT),
                ChatMessage(
                    role="user",
                    content=[
                        ImageUrlBlock(image_url=ImageUrl(url=image.data_url)),
                        TextBlock(text=IDENTIFICATION_INSTRUCTION),
                    ],
                ),
            ],
        )

    def generation(
        self, ingredients: list[str], filters: RecipeFilters | None = None
    ) -> ChatRequest:
        """Build the recipe generation request for ingredients and filters."""
        sections = [f"Given these available ingredients: {json.dumps(ingredients)}"]
        if filters is not None:
            sections.append(render_filter_block(filters))
        sections.append(RECIPE_SCHEMA_DESCRIPTION)
        sections.append(
            "Example format:\n" + json.dumps(RECIPE_EXAMPLE, indent=2)
        )
        return ChatRequest(
            model=self.model,
            max_tokens=self.generation_max_tokens,
            messages=[
                ChatMessage(role="system", content=GENERATION_SYSTEM_PROMPT),
                ChatMessage(role="user", content="\n\n".join(sections)),
            ],
        )


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return str(value)
