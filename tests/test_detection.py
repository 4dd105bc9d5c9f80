"""Tests for detection models and image preprocessing."""

import asyncio

import pytest
from PIL import Image

from chef_ai.domain.detection import DetectionResult
from chef_ai.domain.errors import ConfigError, ImageReadError
from chef_ai.services.detection import (
    MockModel,
    RemoteMultimodalModel,
    build_detection_model,
)
from chef_ai.services.preprocessing import ImagePreprocessor
from chef_ai.services.prompts import PromptBuilder
from chef_ai.services.recipes import RecipeService
from tests.conftest import FakeModelClient


def test_mock_model_returns_fixed_detections() -> None:
    model = MockModel(delay_seconds=0.0)

    results = asyncio.run(model.detect("any.jpg"))

    assert model.name == "mock-base"
    assert model.version == "1.0.0"
    assert [(item.ingredient, item.confidence) for item in results] == [
        ("Organic Eggs", 0.98),
        ("Whole Milk", 0.95),
        ("Unsalted Butter", 1.0),
        ("Baby Spinach", 0.88),
    ]


def test_mock_model_returns_copies_of_its_detections() -> None:
    model = MockModel(delay_seconds=0.0)

    results = asyncio.run(model.detect("any.jpg"))
    results.clear()

    assert len(asyncio.run(model.detect("any.jpg"))) == 4


def test_remote_model_wraps_identified_ingredients(image_path) -> None:
    service = RecipeService(
        client=FakeModelClient(), prompts=PromptBuilder(model="gpt-4o-mini")
    )
    model = RemoteMultimodalModel(service=service)

    results = asyncio.run(model.detect(image_path))

    assert model.version == "gpt-4o-mini"
    assert model.needs_preprocessing is False
    assert results == [
        DetectionResult(ingredient="egg", confidence=1.0),
        DetectionResult(ingredient="milk", confidence=1.0),
    ]


def test_detection_result_rejects_confidence_out_of_range() -> None:
    with pytest.raises(ValueError):
        DetectionResult(ingredient="egg", confidence=1.5)


def test_detection_result_accepts_bounding_box_alias() -> None:
    result = DetectionResult.model_validate(
        {
            "ingredient": "egg",
            "confidence": 0.5,
            "boundingBox": {"originX": 1, "originY": 2, "width": 30, "height": 40},
        }
    )

    assert result.bounding_box is not None
    assert result.bounding_box.width == 30


def test_build_detection_model_selects_backend(recipe_service) -> None:
    remote = build_detection_model("remote", recipe_service)
    mock = build_detection_model("mock", recipe_service, mock_delay_seconds=0.0)

    assert isinstance(remote, RemoteMultimodalModel)
    assert isinstance(mock, MockModel)
    assert mock.delay_seconds == 0.0


def test_build_detection_model_rejects_unknown_backend(recipe_service) -> None:
    with pytest.raises(ConfigError, match="on-device"):
        build_detection_model("on-device", recipe_service)


def test_preprocessor_resizes_to_rgb_jpeg(real_image_path, tmp_path) -> None:
    preprocessor = ImagePreprocessor(output_dir=tmp_path / "out")

    prepared = asyncio.run(preprocessor.prepare_for_inference(real_image_path))

    assert prepared.parent == tmp_path / "out"
    assert prepared.suffix == ".jpg"
    with Image.open(prepared) as img:
        assert img.format == "JPEG"
        assert img.mode == "RGB"
        assert img.size == (640, 640)


def test_preprocessor_honours_custom_size(real_image_path, tmp_path) -> None:
    preprocessor = ImagePreprocessor(width=224, height=224, output_dir=tmp_path)

    prepared = asyncio.run(preprocessor.prepare_for_inference(real_image_path))

    with Image.open(prepared) as img:
        assert img.size == (224, 224)


def test_preprocessor_rejects_non_image_bytes(image_path, tmp_path) -> None:
    preprocessor = ImagePreprocessor(output_dir=tmp_path)

    with pytest.raises(ImageReadError, match="Could not decode image"):
        asyncio.run(preprocessor.prepare_for_inference(image_path))


def test_preprocessor_rejects_decompression_bomb(
    real_image_path, tmp_path, monkeypatch
) -> None:
    monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 1000)
    preprocessor = ImagePreprocessor(output_dir=tmp_path)

    with pytest.raises(ImageReadError, match="Could not decode image"):
        asyncio.run(preprocessor.prepare_for_inference(real_image_path))
