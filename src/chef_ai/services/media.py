"""Local image encoding for model requests."""

import asyncio
import base64
import logging
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote, urlparse

from chef_ai.domain.errors import ImageReadError
from chef_ai.domain.media import EncodedImage

_MIME_TYPES = {
    "jpg": "image/jpeg",
    "jpeg": "image/jpeg",
    "png": "image/png",
    "gif": "image/gif",
    "webp": "image/webp",
}
DEFAULT_MIME_TYPE = "image/jpeg"

_logger = logging.getLogger(__name__)


def resolve_image_path(image_ref: str | Path) -> Path:
    """Turn a local path or ``file://`` URI into a filesystem path."""
    if isinstance(image_ref, Path):
        return image_ref
    if image_ref.startswith("file://"):
        return Path(unquote(urlparse(image_ref).path))
    return Path(image_ref)


def mime_type_for(image_ref: str | Path) -> str:
    """Infer an image MIME type from the file extension."""
    extension = resolve_image_path(image_ref).suffix.lower().lstrip(".")
    return _MIME_TYPES.get(extension, DEFAULT_MIME_TYPE)


async def read_image_bytes(image_ref: str | Path) -> bytes:
    """Read a local image off the event loop."""
    path = resolve_image_path(image_ref)
    try:
        content = await asyncio.to_thread(path.read_bytes)
    except (OSError, ValueError) as exc:
        reason = getattr(exc, "strerror", None) or str(exc)
        raise ImageReadError(f"Could not read image {path}: {reason}") from exc
    if not content:
        raise ImageReadError(f"Image {path} is empty")
    return content


@dataclass
class MediaEncoder:
    """Encodes local images into base64 payloads."""

    async def encode(self, image_ref: str | Path) -> EncodedImage:
        """Read an image and return its base64 body and MIME type."""
        content = await read_image_bytes(image_ref)
        mime_type = mime_type_for(image_ref)
        _logger.debug("Encoded image: bytes=%s mime_type=%s", len(content), mime_type)
        return EncodedImage(
            base64=base64.b64encode(content).decode("ascii"),
            mime_type=mime_type,
        )
