"""Ingredient and recipe models returned by the model endpoint."""

from pydantic import BaseModel, ConfigDict, Field

_MODEL_CONFIG = ConfigDict(strict=True, frozen=True, populate_by_name=True)


class Ingredient(BaseModel):
    """Ingredient used by a recipe."""

    model_config = _MODEL_CONFIG

    name: str
    quantity: str | None = None
    available: bool


class IdentifiedIngredients(BaseModel):
    """Ingredient names recognized in a photo."""

    model_config = _MODEL_CONFIG

    ingredients: list[str]


class Macros(BaseModel):
    """Macronutrients as display strings, e.g. ``"20g"``."""

    model_config = _MODEL_CONFIG

    protein: str
    carbs: str
    fat: str


class Recipe(BaseModel):
    """Single generated recipe."""

    model_config = _MODEL_CONFIG

    name: str
    difficulty: int = Field(ge=1, le=5)
    calories: float
    prep_time: str = Field(alias="prepTime")
    macros: Macros | None = None
    diet_type: str | None = Field(default=None, alias="dietType")
    tags: list[str] | None = None
    ingredients: list[Ingredient] = Field(min_length=1)
    steps: list[str] = Field(min_length=1)


class RecipeResponse(BaseModel):
    """Structured output of a recipe generation request."""

    model_config = _MODEL_CONFIG

    recipes: list[Recipe] = Field(min_length=1, max_length=5)


class RecipeFilters(BaseModel):
    """Optional user preferences embedded in the generation prompt."""

    model_config = _MODEL_CONFIG

    diet_type: str | None = Field(default=None, alias="dietType")
    max_calories: float | None = Field(default=None, alias="maxCalories")
    max_time: str | None = Field(default=None, alias="maxTime")
