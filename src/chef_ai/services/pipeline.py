"""Public entry point for ingredient detection and recipe generation."""

import json
import logging
from collections.abc import Awaitable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import TypeVar

from pydantic import ValidationError

from chef_ai.domain.detection import DetectionResult
from chef_ai.domain.errors import ChefAIError
from chef_ai.domain.recipes import IdentifiedIngredients, RecipeFilters, RecipeResponse
from chef_ai.domain.results import ApiFailure, ApiResult, ApiSuccess
from chef_ai.services.detection import DetectionModel
from chef_ai.services.inflight import InFlightRegistry, fingerprint
from chef_ai.services.preprocessing import ImagePreprocessor
from chef_ai.services.recipes import RecipeService
from chef_ai.services.validation import describe_validation_error

T = TypeVar("T")

_logger = logging.getLogger(__name__)


@dataclass
class RecipePipeline:
    """Runs pipeline operations and turns every failure into an ``ApiFailure``.

    Holds the single active detection model; ``set_model`` swaps it. Calls
    already running keep the model they started with.
    """

    service: RecipeService
    detection_model: DetectionModel
    preprocessor: ImagePreprocessor = field(default_factory=ImagePreprocessor)
    min_confidence: float = 0.0
    coalesce: bool = False
    inflight: InFlightRegistry = field(default_factory=InFlightRegistry)

    @property
    def model(self) -> DetectionModel:
        """Currently bound detection model."""
        return self.detection_model

    def set_model(self, model: DetectionModel) -> None:
        """Swap the active detection model."""
        self.detection_model = model
        _logger.info("Switched to model: %s %s", model.name, model.version)

    async def analyze_image(
        self, image_ref: str | Path
    ) -> ApiResult[IdentifiedIngredients]:
        """Identify the ingredients in a local image with the remote model."""
        return await self._guard(self._identify(image_ref), action="analyze_image")

    async def generate_recipes(
        self,
        ingredients: list[str],
        filters: RecipeFilters | Mapping[str, object] | None = None,
    ) -> ApiResult[RecipeResponse]:
        """Generate recipes for ingredients and optional filters."""
        try:
            resolved_filters = _resolve_filters(filters)
        except ValidationError as exc:
            details = describe_validation_error(exc)
            return ApiFailure(error=f"Invalid filters: {details}")
        return await self._guard(
            self._generate(ingredients, resolved_filters), action="generate_recipes"
        )

    async def detect(self, image_ref: str | Path) -> ApiResult[list[DetectionResult]]:
        """Run the active detection model on a local image."""
        return await self._guard(self._detect(image_ref), action="detect")

    async def detect_ingredients(
        self, image_ref: str | Path
    ) -> ApiResult[IdentifiedIngredients]:
        """Run detection and reduce the results to ingredient names."""
        result = await self.detect(image_ref)
        if isinstance(result, ApiFailure):
            return result
        names = [
            detection.ingredient
            for detection in result.data
            if detection.confidence >= self.min_confidence
        ]
        return ApiSuccess(
            data=IdentifiedIngredients(ingredients=list(dict.fromkeys(names)))
        )

    async def _identify(self, image_ref: str | Path) -> IdentifiedIngredients:
        if not self.coalesce:
            return await self.service.identify_ingredients(image_ref)
        image = await self.service.encoder.encode(image_ref)
        key = fingerprint("identify", image.mime_type, image.base64)
        return await self.inflight.run(
            key, lambda: self.service.identify_encoded(image)
        )

    async def _generate(
        self, ingredients: list[str], filters: RecipeFilters | None
    ) -> RecipeResponse:
        if not self.coalesce:
            return await self.service.generate_recipes(ingredients, filters)
        filter_values = None
        if filters is not None:
            filter_values = filters.model_dump(mode="json", by_alias=True)
        key = fingerprint(
            "generate",
            json.dumps(ingredients),
            json.dumps(filter_values, sort_keys=True),
        )
        return await self.inflight.run(
            key, lambda: self.service.generate_recipes(ingredients, filters)
        )

    async def _detect(self, image_ref: str | Path) -> list[DetectionResult]:
        model = self.detection_model
        if not model.needs_preprocessing:
            results = await model.detect(image_ref)
        else:
            prepared = await self.preprocessor.prepare_for_inference(image_ref)
            try:
                results = await model.detect(prepared)
            finally:
                prepared.unlink(missing_ok=True)
        _logger.info("Model %s found %s ingredients", model.name, len(results))
        return results

    async def _guard(self, operation: Awaitable[T], *, action: str) -> ApiResult[T]:
        try:
            data = await operation
        except ChefAIError as exc:
            _logger.warning("%s failed: %s: %s", action, type(exc).__name__, exc)
            return ApiFailure(error=str(exc))
        return ApiSuccess(data=data)


def _resolve_filters(
    filters: RecipeFilters | Mapping[str, object] | None,
) -> RecipeFilters | None:
    if filters is None or isinstance(filters, RecipeFilters):
        return filters
    return RecipeFilters.model_validate(dict(filters))
