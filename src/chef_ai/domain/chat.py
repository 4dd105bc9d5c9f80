"""Chat-completion request models sent to the model endpoint."""

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class TextBlock(BaseModel):
    """Plain text content block."""

    model_config = ConfigDict(frozen=True)

    type: Literal["text"] = "text"
    text: str


class ImageUrl(BaseModel):
    """Image reference, usually a base64 data URL."""

    model_config = ConfigDict(frozen=True)

    url: str


class ImageUrlBlock(BaseModel):
    """Image content block."""

    model_config = ConfigDict(frozen=True)

    type: Literal["image_url"] = "image_url"
    image_url: ImageUrl


ContentBlock = Annotated[TextBlock | ImageUrlBlock, Field(discriminator="type")]


class ChatMessage(BaseModel):
    """Single chat message with string or block content."""

    model_config = ConfigDict(frozen=True)

    role: Literal["system", "user", "assistant"]
    content: str | list[ContentBlock]


class ChatRequest(BaseModel):
    """Chat-completion request body."""

    model_config = ConfigDict(frozen=True)

    model: str
    max_tokens: int = Field(gt=0)
    messages: list[ChatMessage]

    def to_payload(self) -> dict[str, object]:
        """Return the JSON-ready request body."""
        return self.model_dump(mode="json")
