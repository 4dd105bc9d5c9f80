"""Application configuration."""

import os
from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    openai_api_key: str | None = None
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-4o"
    identification_max_tokens: int = 1024
    generation_max_tokens: int = 4096
    request_timeout_seconds: float = 60.0
    detection_backend: str = "remote"
    mock_detection_delay_seconds: float = 0.8
    min_detection_confidence: float = 0.0
    coalesce_requests: bool = False
    api_token: str | None = None
    image_root: Path | None = None
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )
