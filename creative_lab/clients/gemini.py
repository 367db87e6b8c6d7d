"""Gemini client - structured copy, Imagen generation and image editing."""

import logging

from google import genai
from google.genai import types

from ..errors import ServiceError
from ..models.request import ImagePayload

logger = logging.getLogger(__name__)


class GeminiClient:
    """Client for Google's Gemini text model, Imagen and the Gemini image editor."""

    def __init__(
        self,
        api_key: str | None = None,
        copy_model: str = "gemini-2.5-flash",
        image_model: str = "imagen-4.0-generate-001",
        edit_model: str = "gemini-2.5-flash-image-preview",
        client=None,
    ):
        if client is None:
            if not api_key:
                raise ValueError("GEMINI_API_KEY must be set")
            client = genai.Client(api_key=api_key)
        self.client = client
        self.copy_model = copy_model
        self.image_model = image_model
        self.edit_model = edit_model

    def generate_json(
        self,
        prompt: str,
        schema: dict,
        image: ImagePayload | None = None,
        name: str = "",
    ) -> str:
        """
        Generate a JSON object constrained by a flat string-field schema.

        Args:
            prompt: Text prompt.
            schema: JSON schema with string properties and a required list.
            image: Optional reference image attached after the prompt.
            name: Schema name (only used for logging here).

        Returns:
            Raw response text (expected to be JSON).
        """
        contents: list = [prompt]
        if image is not None:
            contents.append(types.Part.from_bytes(data=image.data, mime_type=image.mime_type))

        try:
            response = self.client.models.generate_content(
                model=self.copy_model,
                contents=contents,
                config=types.GenerateContentConfig(
                    response_mime_type="application/json",
                    response_schema=_response_schema(schema),
                ),
            )
        except Exception as e:
            logger.error(f"Gemini copy call failed ({name or 'json'}): {e}")
            raise ServiceError(
                "Copy generation failed due to a service error. "
                "This could be a temporary issue. Please try again."
            ) from e

        return (response.text or "").strip()

    def generate_images(
        self,
        prompt: str,
        aspect_ratio: str = "1:1",
        mime_type: str = "image/jpeg",
        count: int = 1,
    ) -> list[ImagePayload]:
        """
        Generate images from scratch with Imagen.

        Returns:
            Generated images (may be empty when the model refuses the prompt).
        """
        try:
            response = self.client.models.generate_images(
                model=self.image_model,
                prompt=prompt,
                config=types.GenerateImagesConfig(
                    number_of_images=count,
                    output_mime_type=mime_type,
                    aspect_ratio=aspect_ratio,
                ),
            )
        except Exception as e:
            logger.error(f"Error calling the generate_images API: {e}")
            raise ServiceError(
                "Image generation failed due to a service error. "
                "This could be a temporary issue. Please try again."
            ) from e

        images = []
        for generated in response.generated_images or []:
            image = generated.image
            if image is None or not image.image_bytes:
                continue
            images.append(ImagePayload(data=image.image_bytes, mime_type=image.mime_type or mime_type))
        return images

    def edit_image(self, prompt: str, image: ImagePayload) -> ImagePayload | None:
        """
        Edit a reference image following a text instruction.

        Returns:
            The first inline image in the response, or None if there is none.
        """
        contents = [
            types.Part.from_bytes(data=image.data, mime_type=image.mime_type),
            prompt,
        ]
        try:
            response = self.client.models.generate_content(
                model=self.edit_model,
                contents=contents,
                config=types.GenerateContentConfig(
                    response_modalities=["IMAGE", "TEXT"],
                ),
            )
        except Exception as e:
            logger.error(f"Error calling the image editing API: {e}")
            raise ServiceError(
                "Image editing failed due to a service error. "
                "This could be a temporary issue. Please try again."
            ) from e

        if response.candidates:
            content = response.candidates[0].content
            for part in (content.parts if content else None) or []:
                if part.inline_data and part.inline_data.data:
                    return ImagePayload(
                        data=part.inline_data.data,
                        mime_type=part.inline_data.mime_type or image.mime_type,
                    )
        return None


def _response_schema(schema: dict) -> types.Schema:
    """Convert a flat JSON schema of string fields to a Gemini Schema."""
    return types.Schema(
        type=types.Type.OBJECT,
        properties={
            field_name: types.Schema(type=types.Type.STRING)
            for field_name in schema["properties"]
        },
        required=list(schema.get("required", [])),
    )
