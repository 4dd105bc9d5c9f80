"""Shared test fixtures."""

import asyncio
import json
from dataclasses import dataclass, field
from pathlib import Path

import pytest
from PIL import Image

from chef_ai.config import Settings
from chef_ai.containers import AppContainer
from chef_ai.domain.chat import ChatRequest
from chef_ai.domain.detection import DetectionResult
from chef_ai.services.detection import DetectionModel, MockModel
from chef_ai.services.pipeline import RecipePipeline
from chef_ai.services.preprocessing import ImagePreprocessor
from chef_ai.services.recipes import ModelClient, RecipeService

API_TOKEN = "api-token"
AUTH_HEADERS = {"X-API-Token": API_TOKEN}


def recipe_payload(**overrides: object) -> dict[str, object]:
    """Return a valid recipe dict, with fields replaced by ``overrides``."""
    recipe: dict[str, object] = {
        "name": "Spinach Omelette",
        "difficulty": 2,
        "calories": 420,
        "macros": {"protein": "26g", "carbs": "4g", "fat": "31g"},
        "prepTime": "15 mins",
        "dietType": "Vegetarian",
        "tags": ["Quick"],
        "ingredients": [
            {"name": "eggs", "quantity": "3 large", "available": True},
            {"name": "salt", "available": False},
        ],
        "steps": ["Whisk the eggs.", "Cook with spinach."],
    }
    recipe.update(overrides)
    return recipe


def recipes_json(count: int = 1, **overrides: object) -> str:
    """Return a recipe response JSON document with ``count`` recipes."""
    return json.dumps(
        {
            "recipes": [
                recipe_payload(name=f"Recipe {index}", **overrides)
                for index in range(count)
            ]
        }
    )


@dataclass
class FakeModelClient(ModelClient):
    """Fake model client returning canned text and recording requests."""

    response: str = 'Sure! {"ingredients": ["egg", "milk"]}'
    error: Exception | None = None
    delay_seconds: float = 0.0
    requests: list[ChatRequest] = field(default_factory=list)

    async def complete(self, request: ChatRequest) -> str:
        self.requests.append(request)
        if self.delay_seconds:
            await asyncio.sleep(self.delay_seconds)
        if self.error is not None:
            raise self.error
        return self.response


@dataclass
class StaticDetectionModel(DetectionModel):
    """Detection model returning fixed results without preprocessing."""

    results: list[DetectionResult]
    name: str = "static"
    version: str = "test"
    needs_preprocessing: bool = False
    warmed_up: bool = False
    seen_refs: list[object] = field(default_factory=list)

    async def detect(self, image_ref: str | Path) -> list[DetectionResult]:
        self.seen_refs.append(image_ref)
        return list(self.results)

    async def warmup(self) -> None:
        self.warmed_up = True


@pytest.fixture
def settings() -> Settings:
    return Settings(
        openai_api_key="openai-key",
        api_token=API_TOKEN,
        detection_backend="mock",
        mock_detection_delay_seconds=0.0,
    )


@pytest.fixture
def model_client() -> FakeModelClient:
    return FakeModelClient()


@pytest.fixture
def recipe_service(model_client: FakeModelClient) -> RecipeService:
    return RecipeService(client=model_client)


@pytest.fixture
def pipeline(recipe_service: RecipeService, tmp_path: Path) -> RecipePipeline:
    return RecipePipeline(
        service=recipe_service,
        detection_model=MockModel(delay_seconds=0.0),
        preprocessor=ImagePreprocessor(output_dir=tmp_path / "prepared"),
    )


@pytest.fixture
def image_path(tmp_path: Path) -> Path:
    path = tmp_path / "fridge.jpg"
    path.write_bytes(b"\xff\xd8\xff\xe0fake-jpeg-bytes")
    return path


@pytest.fixture
def real_image_path(tmp_path: Path) -> Path:
    path = tmp_path / "fridge.png"
    Image.new("RGBA", (320, 200), (200, 30, 30, 255)).save(path, format="PNG")
    return path


@pytest.fixture
def container(
    settings: Settings,
    recipe_service: RecipeService,
    pipeline: RecipePipeline,
) -> AppContainer:
    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        recipe_service=recipe_service,
        pipeline=pipeline,
        close_resources=close_resources,
    )
