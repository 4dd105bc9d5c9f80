"""OpenAI Chat Completions client for recipe prompts."""

import logging
from dataclasses import dataclass

import httpx
from openai import APIConnectionError, APIStatusError, APITimeoutError, AsyncOpenAI

from chef_ai.domain.chat import ChatRequest
from chef_ai.domain.errors import (
    ConfigError,
    EmptyResponseError,
    RemoteError,
    TransportError,
)
from chef_ai.services.recipes import ModelClient

DEFAULT_BASE_URL = "https://api.openai.com/v1"

_logger = logging.getLogger(__name__)


@dataclass
class OpenAIChatClient(ModelClient):
    """Model client backed by the OpenAI Chat Completions API.

    ``client`` is ``None`` when no API key is configured; every call then
    fails with ``ConfigError`` without touching the network.
    """

    client: AsyncOpenAI | None
    timeout_seconds: float = 60.0

    @classmethod
    def create(
        cls,
        api_key: str | None,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: float = 60.0,
        http_client: httpx.AsyncClient | None = None,
    ) -> "OpenAIChatClient":
        """Create a client that sends exactly one attempt per request."""
        if not api_key:
            return cls(client=None, timeout_seconds=timeout_seconds)
        return cls(
            client=AsyncOpenAI(
                api_key=api_key,
                base_url=base_url,
                max_retries=0,
                timeout=timeout_seconds,
                http_client=http_client,
            ),
            timeout_seconds=timeout_seconds,
        )

    async def complete(self, request: ChatRequest) -> str:
        """Send a chat-completion request and return the first choice's text."""
        if self.client is None:
            raise ConfigError("Missing OPENAI_API_KEY environment variable")

        _logger.debug(
            "Chat completion request: model=%s max_tokens=%s messages=%s",
            request.model,
            request.max_tokens,
            len(request.messages),
        )
        try:
            completion = await self.client.chat.completions.create(
                **request.to_payload()
            )
        except APIStatusError as exc:
            _logger.warning("Model API returned status %s", exc.status_code)
            raise RemoteError(exc.status_code, exc.response.text) from exc
        except APITimeoutError as exc:
            _logger.warning("Model API timed out after %ss", self.timeout_seconds)
            raise TransportError(
                f"Model API request timed out after {self.timeout_seconds}s"
            ) from exc
        except APIConnectionError as exc:
            _logger.warning("Model API connection failed: %s", exc)
            raise TransportError(f"Could not reach model API: {exc}") from exc
        except ValueError as exc:
            _logger.warning("Model API returned an unreadable body: %s", exc)
            raise EmptyResponseError(f"Malformed model response body: {exc}") from exc

        choices = getattr(completion, "choices", None) or []
        message = getattr(choices[0], "message", None) if choices else None
        content = getattr(message, "content", None)
        if not isinstance(content, str) or not content:
            raise EmptyResponseError("No content in model response")
        return content

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        if self.client is not None:
            await self.client.close()
