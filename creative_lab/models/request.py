"""Generation request models."""

import base64
from dataclasses import dataclass

from .creative import CreativeFormat


@dataclass(frozen=True)
class ImagePayload:
    """Reference image ready for transport: raw bytes plus MIME type."""

    data: bytes
    mime_type: str

    @property
    def base64(self) -> str:
        return base64.b64encode(self.data).decode("ascii")


@dataclass(frozen=True)
class CreativeRequest:
    """One normalized submission. Lives for a single generation call."""

    product_text: str
    occasion: str
    creative_format: CreativeFormat | str
    image: ImagePayload | None = None

    @property
    def has_image(self) -> bool:
        return self.image is not None
