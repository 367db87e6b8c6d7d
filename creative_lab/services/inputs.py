"""Input normalization - validate a submission and encode its reference image."""

import os
from io import BytesIO

import requests
from PIL import Image, UnidentifiedImageError

from ..errors import EncodingError, ValidationError
from ..models import CreativeFormat, CreativeRequest, ImagePayload

EMPTY_INPUT_MESSAGE = "Please provide product information, an occasion, or a reference image."

DOWNLOAD_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
}


def normalize_request(
    product_text: str | None,
    occasion: str | None,
    creative_format: CreativeFormat | str,
    image=None,
    mime_type: str | None = None,
) -> CreativeRequest:
    """
    Validate inputs and convert the optional image into an ImagePayload.

    Args:
        product_text: Free-text product/service description.
        occasion: Optional festival or event.
        creative_format: CreativeFormat or its string value (unknown values pass through).
        image: ImagePayload, bytes, file path, binary file-like object or http(s) URL.
        mime_type: Declared MIME type of the image; detected when omitted.

    Raises:
        ValidationError: product text, occasion and image are all empty.
        EncodingError: the image could not be read or is not an image.
    """
    product_text = (product_text or "").strip()
    occasion = (occasion or "").strip()
    has_image = image is not None and image != b"" and image != ""

    if not product_text and not occasion and not has_image:
        raise ValidationError(EMPTY_INPUT_MESSAGE)

    payload = encode_image(image, mime_type) if has_image else None
    return CreativeRequest(
        product_text=product_text,
        occasion=occasion,
        creative_format=CreativeFormat.parse(creative_format) or creative_format,
        image=payload,
    )


def encode_image(image, mime_type: str | None = None) -> ImagePayload:
    """Read an image source into bytes and attach its MIME type."""
    if isinstance(image, ImagePayload):
        mime_type = mime_type or image.mime_type
        data = image.data
    else:
        data = _read_bytes(image)
    if not data:
        raise EncodingError("The reference image is empty.")

    detected = _detect_mime_type(data)
    return ImagePayload(data=data, mime_type=mime_type or detected)


def _read_bytes(image) -> bytes:
    if isinstance(image, (bytes, bytearray)):
        return bytes(image)

    if isinstance(image, str) and image.startswith(("http://", "https://")):
        try:
            response = requests.get(image, headers=DOWNLOAD_HEADERS, timeout=30)
            response.raise_for_status()
            return response.content
        except requests.RequestException as e:
            raise EncodingError(f"Failed to download the reference image: {e}") from e

    if isinstance(image, (str, os.PathLike)):
        try:
            with open(image, "rb") as f:
                return f.read()
        except OSError as e:
            raise EncodingError(f"Failed to read the reference image: {e}") from e

    if hasattr(image, "read"):
        try:
            data = image.read()
        except (OSError, ValueError) as e:
            raise EncodingError(f"Failed to read the reference image: {e}") from e
        if not isinstance(data, (bytes, bytearray)):
            raise EncodingError("Reference image must be opened in binary mode.")
        return bytes(data)

    raise EncodingError(f"Unsupported reference image type: {type(image).__name__}")


def _detect_mime_type(data: bytes) -> str:
    """Return the MIME type Pillow detects, raising EncodingError if not an image."""
    try:
        with Image.open(BytesIO(data)) as img:
            img.verify()
            fmt = img.format
    except (UnidentifiedImageError, OSError, SyntaxError) as e:
        raise EncodingError("The reference image could not be decoded.") from e

    mime = Image.MIME.get(fmt or "")
    if not mime:
        raise EncodingError(f"Unsupported reference image format: {fmt}")
    return mime
