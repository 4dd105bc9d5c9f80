"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI, HTTPException, Request, status

from chef_ai.api.auth import confine_image_path, require_api_token
from chef_ai.api.request_models import (
    DetectionModelRequest,
    GenerateRecipesRequest,
    ImageRequest,
)
from chef_ai.app_logging import configure_logging
from chef_ai.containers import AppContainer
from chef_ai.domain.errors import ConfigError
from chef_ai.services.detection import build_detection_model


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging(container.settings.log_level)
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        try:
            await app.state.container.pipeline.model.warmup()
        except Exception:
            logger.exception("Failed to warm up detection model")
        yield
        await app.state.container.close_resources()

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.post("/ingredients/analyze", dependencies=[Depends(require_api_token)])
    async def analyze_ingredients(
        body: ImageRequest, request: Request
    ) -> dict[str, object]:
        """Identify ingredients in an image with the remote model."""
        state_container: AppContainer = request.app.state.container
        image_path = confine_image_path(
            body.image_path, state_container.settings.image_root
        )
        result = await state_container.pipeline.analyze_image(image_path)
        return result.to_dict()

    @app.post("/ingredients/detect", dependencies=[Depends(require_api_token)])
    async def detect_ingredients(
        body: ImageRequest, request: Request
    ) -> dict[str, object]:
        """Run the active detection model on an image."""
        state_container: AppContainer = request.app.state.container
        image_path = confine_image_path(
            body.image_path, state_container.settings.image_root
        )
        result = await state_container.pipeline.detect(image_path)
        return result.to_dict()

    @app.post("/recipes/generate", dependencies=[Depends(require_api_token)])
    async def generate_recipes(
        body: GenerateRecipesRequest, request: Request
    ) -> dict[str, object]:
        """Generate recipes for the given ingredients."""
        state_container: AppContainer = request.app.state.container
        result = await state_container.pipeline.generate_recipes(
            body.ingredients, body.filters
        )
        return result.to_dict()

    @app.get("/detection-model")
    async def get_detection_model(request: Request) -> dict[str, str]:
        """Describe the active detection model."""
        state_container: AppContainer = request.app.state.container
        model = state_container.pipeline.model
        return {"name": model.name, "version": model.version}

    @app.put("/detection-model", dependencies=[Depends(require_api_token)])
    async def set_detection_model(
        body: DetectionModelRequest, request: Request
    ) -> dict[str, str]:
        """Swap the active detection model."""
        state_container: AppContainer = request.app.state.container
        settings = state_container.settings
        try:
            model = build_detection_model(
                body.backend,
                state_container.recipe_service,
                mock_delay_seconds=settings.mock_detection_delay_seconds,
            )
        except ConfigError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        await model.warmup()
        state_container.pipeline.set_model(model)
        return {"name": model.name, "version": model.version}

    return app
