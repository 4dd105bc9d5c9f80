"""Image preparation for on-device detection models."""

import asyncio
import logging
import tempfile
import uuid
from dataclasses import dataclass, field
from io import BytesIO
from pathlib import Path

from PIL import Image, UnidentifiedImageError

from chef_ai.domain.errors import ImageReadError
from chef_ai.services.media import read_image_bytes

_logger = logging.getLogger(__name__)


@dataclass
class ImagePreprocessor:
    """Scales images to the fixed input size detection models expect."""

    width: int = 640
    height: int = 640
    quality: int = 80
    output_dir: Path = field(
        default_factory=lambda: Path(tempfile.gettempdir()) / "chef_ai"
    )

    async def prepare_for_inference(self, image_ref: str | Path) -> Path:
        """Resize an image to a JPEG file and return the new path."""
        content = await read_image_bytes(image_ref)
        _logger.debug("Preprocessing image: %s", image_ref)
        return await asyncio.to_thread(self._resize_to_file, content)

    def _resize_to_file(self, content: bytes) -> Path:
        try:
            img = Image.open(BytesIO(content))
            img.load()
        except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
            raise ImageReadError(f"Could not decode image: {exc}") from exc

        if img.mode in ("RGBA", "LA", "P"):
            img = img.convert("RGBA")
            rgb_img = Image.new("RGB", img.size, (255, 255, 255))
            rgb_img.paste(img, mask=img.split()[-1])
            img = rgb_img
        elif img.mode != "RGB":
            img = img.convert("RGB")

        img = img.resize((self.width, self.height), Image.Resampling.LANCZOS)

        self.output_dir.mkdir(parents=True, exist_ok=True)
        output_path = self.output_dir / f"{uuid.uuid4().hex}.jpg"
        img.save(output_path, format="JPEG", quality=self.quality, optimize=True)
        return output_path
