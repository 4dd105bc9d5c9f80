"""Pydantic models for API request payloads."""

from pydantic import BaseModel, ConfigDict, Field

from chef_ai.domain.recipes import RecipeFilters


class ImageRequest(BaseModel):
    """Reference to a local image on the serving host."""

    model_config = ConfigDict(populate_by_name=True)

    image_path: str = Field(alias="imagePath", min_length=1)


class GenerateRecipesRequest(BaseModel):
    """Ingredients and optional filters for recipe generation."""

    ingredients: list[str]
    filters: RecipeFilters | None = None


class DetectionModelRequest(BaseModel):
    """Detection backend to bind, e.g. ``remote`` or ``mock``."""

    backend: str
