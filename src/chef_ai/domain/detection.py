"""Models for pluggable ingredient detection."""

from pydantic import BaseModel, ConfigDict, Field


class BoundingBox(BaseModel):
    """Pixel rectangle around a detected ingredient."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    origin_x: float = Field(alias="originX")
    origin_y: float = Field(alias="originY")
    width: float = Field(ge=0.0)
    height: float = Field(ge=0.0)


class DetectionResult(BaseModel):
    """Single ingredient detected by a detection model."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    ingredient: str
    confidence: float = Field(ge=0.0, le=1.0)
    bounding_box: BoundingBox | None = Field(default=None, alias="boundingBox")
