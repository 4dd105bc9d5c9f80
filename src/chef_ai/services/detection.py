"""Swappable ingredient detection backends."""

import asyncio
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Protocol

from chef_ai.domain.detection import DetectionResult
from chef_ai.domain.errors import ConfigError
from chef_ai.services.recipes import RecipeService

_logger = logging.getLogger(__name__)


class DetectionModel(Protocol):
    """Interface for anything that can detect ingredients in an image."""

    name: str
    version: str
    needs_preprocessing: bool

    async def detect(self, image_ref: str | Path) -> list[DetectionResult]:
        """Return ingredients detected in a local image."""

    async def warmup(self) -> None:
        """Prepare the model ahead of the first detection."""


@dataclass
class RemoteMultimodalModel(DetectionModel):
    """Detection through the cloud vision-language model.

    The remote model returns names only, so every detection carries a
    confidence of 1.0 and no bounding box.
    """

    service: RecipeService
    name: str = "remote-multimodal"
    needs_preprocessing: bool = False

    @property
    def version(self) -> str:  # type: ignore[override]
        """Name of the backing model."""
        return self.service.prompts.model

    async def detect(self, image_ref: str | Path) -> list[DetectionResult]:
        """Identify ingredients remotely and wrap them as detections."""
        identified = await self.service.identify_ingredients(image_ref)
        return [
            DetectionResult(ingredient=name, confidence=1.0)
            for name in identified.ingredients
        ]

    async def warmup(self) -> None:
        """Nothing to load for a remote model."""


def _default_detections() -> list[DetectionResult]:
    return [
        DetectionResult(ingredient="Organic Eggs", confidence=0.98),
        DetectionResult(ingredient="Whole Milk", confidence=0.95),
        DetectionResult(ingredient="Unsalted Butter", confidence=1.0),
        DetectionResult(ingredient="Baby Spinach", confidence=0.88),
    ]


@dataclass
class MockModel(DetectionModel):
    """Offline model returning fixed detections after a simulated delay."""

    delay_seconds: float = 0.8
    detections: list[DetectionResult] = field(default_factory=_default_detections)
    name: str = "mock-base"
    version: str = "1.0.0"
    needs_preprocessing: bool = True

    async def detect(self, image_ref: str | Path) -> list[DetectionResult]:
        """Return the configured detections."""
        _logger.debug("Mock inference on %s", image_ref)
        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)
        return list(self.detections)

    async def warmup(self) -> None:
        """Nothing to load for the mock model."""


def build_detection_model(
    backend: str,
    service: RecipeService,
    mock_delay_seconds: float = 0.8,
) -> DetectionModel:
    """Create the detection model named by ``backend``."""
    if backend == "remote":
        return RemoteMultimodalModel(service=service)
    if backend == "mock":
        return MockModel(delay_seconds=mock_delay_seconds)
    raise ConfigError(f"Unknown detection backend: {backend}")
