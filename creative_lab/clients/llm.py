"""Generic LLM client with provider-agnostic interface."""

import logging

from openai import OpenAI

from ..errors import ServiceError
from ..models.request import ImagePayload

logger = logging.getLogger(__name__)


class LLMClient:
    """Copy generation through OpenAI. Same generate_json interface as GeminiClient."""

    def __init__(self, api_key: str | None = None, model: str = "gpt-4.1", client=None):
        if client is None:
            if not api_key:
                raise ValueError("OPENAI_API_KEY must be set")
            client = OpenAI(api_key=api_key)
        self._client = client
        self.model = model
        self.total_input_tokens = 0
        self.total_output_tokens = 0

    def generate_json(
        self,
        prompt: str,
        schema: dict,
        image: ImagePayload | None = None,
        name: str = "response",
    ) -> str:
        """Make a structured-output call with a named strict JSON schema.

        Args:
            prompt: User prompt.
            schema: JSON schema for the response object.
            image: Optional reference image sent as an input_image.
            name: Schema name required by the API.

        Returns:
            Response text content.
        """
        content = [{"type": "input_text", "text": prompt}]
        if image is not None:
            content.append({
                "type": "input_image",
                "image_url": f"data:{image.mime_type};base64,{image.base64}",
            })

        try:
            response = self._client.responses.create(
                model=self.model,
                input=[{"role": "user", "content": content}],
                text={
                    "format": {
                        "type": "json_schema",
                        "name": name,
                        "schema": schema,
                        "strict": True,
                    }
                },
            )
        except Exception as e:
            logger.error(f"OpenAI copy call failed ({name}): {e}")
            raise ServiceError(
                "Copy generation failed due to a service error. "
                "This could be a temporary issue. Please try again."
            ) from e

        # Track tokens
        usage = getattr(response, "usage", None)
        if usage is not None:
            self.total_input_tokens += usage.input_tokens
            self.total_output_tokens += usage.output_tokens
            logger.info(f"{name}: input={usage.input_tokens}, output={usage.output_tokens}")

        return (response.output_text or "").strip()

    def get_token_totals(self) -> tuple[int, int]:
        """Return accumulated (input, output) tokens."""
        return self.total_input_tokens, self.total_output_tokens
