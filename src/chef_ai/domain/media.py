"""Encoded image payloads."""

from dataclasses import dataclass


@dataclass(frozen=True)
class EncodedImage:
    """Base64 image body with its MIME type."""

    base64: str
    mime_type: str

    @property
    def data_url(self) -> str:
        """Return the image as a ``data:`` URL."""
        return f"data:{self.mime_type};base64,{self.base64}"
