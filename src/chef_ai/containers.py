"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from chef_ai.adapters.openai_chat_client import OpenAIChatClient
from chef_ai.config import Settings
from chef_ai.services.detection import build_detection_model
from chef_ai.services.pipeline import RecipePipeline
from chef_ai.services.prompts import PromptBuilder
from chef_ai.services.recipes import RecipeService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    recipe_service: RecipeService
    pipeline: RecipePipeline
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    model_client = OpenAIChatClient.create(
        api_key=resolved_settings.openai_api_key,
        base_url=resolved_settings.openai_base_url,
        timeout_seconds=resolved_settings.request_timeout_seconds,
    )
    recipe_service = RecipeService(
        client=model_client,
        prompts=PromptBuilder(
            model=resolved_settings.openai_model,
            identification_max_tokens=resolved_settings.identification_max_tokens,
            generation_max_tokens=resolved_settings.generation_max_tokens,
        ),
    )
    detection_model = build_detection_model(
        resolved_settings.detection_backend,
        recipe_service,
        mock_delay_seconds=resolved_settings.mock_detection_delay_seconds,
    )
    pipeline = RecipePipeline(
        service=recipe_service,
        detection_model=detection_model,
        min_confidence=resolved_settings.min_detection_confidence,
        coalesce=resolved_settings.coalesce_requests,
    )

    async def close_resources() -> None:
        await model_client.close()

    return AppContainer(
        settings=resolved_settings,
        recipe_service=recipe_service,
        pipeline=pipeline,
        close_resources=close_resources,
    )
