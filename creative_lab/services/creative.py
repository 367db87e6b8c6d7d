"""Creative generation service - copy call, then image generation or edit."""

import json
import logging
from dataclasses import dataclass, field
from enum import Enum

from ..errors import CreativeLabError, GenerationRefusedError, MalformedResponseError, ServiceError
from ..models import CreativeCopy, CreativeFormat, CreativeOutput, CreativeRequest
from ..models.creative import aspect_ratio_for, to_data_url
from .inputs import normalize_request
from .prompts import (
    COPY_SCHEMA,
    COPY_SCHEMA_NAME,
    DEFAULT_BRAND,
    build_copy_prompt,
    build_edit_prompt,
    build_image_prompt,
)

logger = logging.getLogger(__name__)

GENERATED_MIME_TYPE = "image/jpeg"


class GenerationState(Enum):
    IDLE = "idle"
    GENERATING_COPY = "generating_copy"
    GENERATING_VISUAL = "generating_visual"
    DONE = "done"
    FAILED = "failed"


@dataclass
class GenerationRun:
    """State of one generate() call."""

    state: GenerationState = GenerationState.IDLE
    copy: CreativeCopy | None = None
    output: CreativeOutput | None = None
    error: CreativeLabError | None = None
    history: list[GenerationState] = field(default_factory=lambda: [GenerationState.IDLE])

    def advance(self, state: GenerationState):
        logger.info(f"Generation {self.state.value} -> {state.value}")
        self.state = state
        self.history.append(state)


class CreativeService:
    """Turn a creative request into copy + visual using a copy model and an image model."""

    def __init__(self, copy_client, image_client, brand: str = DEFAULT_BRAND):
        """
        Args:
            copy_client: Anything with generate_json(prompt, schema, image, name) (GeminiClient, LLMClient).
            image_client: GeminiClient (generate_images / edit_image).
            brand: Brand name rendered into prompts.
        """
        self.copy_client = copy_client
        self.image_client = image_client
        self.brand = brand
        self.last_run: GenerationRun | None = None

    def generate(
        self,
        product_text: str,
        occasion: str,
        creative_format: CreativeFormat | str,
        image=None,
        mime_type: str | None = None,
    ) -> CreativeOutput:
        """Validate inputs and run the pipeline. Raises a CreativeLabError on failure."""
        request = normalize_request(product_text, occasion, creative_format, image, mime_type)
        return self.run(request)

    def run(self, request: CreativeRequest) -> CreativeOutput:
        """Run copy generation, then the visual step, for a normalized request."""
        run = GenerationRun()
        self.last_run = run
        try:
            run.advance(GenerationState.GENERATING_COPY)
            run.copy = self._generate_copy(request)

            run.advance(GenerationState.GENERATING_VISUAL)
            if request.image is not None:
                visual_url = self._edit_visual(run.copy, request)
            else:
                visual_url = self._generate_visual(run.copy, request)

            run.output = CreativeOutput(json=run.copy, visual_url=visual_url)
            run.advance(GenerationState.DONE)
            return run.output
        except CreativeLabError as e:
            run.error = e
            run.advance(GenerationState.FAILED)
            raise
        except Exception as e:
            logger.exception("Unexpected error during creative generation")
            run.error = ServiceError(
                "Creative generation failed due to a service error. "
                "This could be a temporary issue. Please try again."
            )
            run.advance(GenerationState.FAILED)
            raise run.error from e

    def _generate_copy(self, request: CreativeRequest) -> CreativeCopy:
        prompt = build_copy_prompt(
            request.product_text,
            request.occasion,
            request.creative_format,
            request.has_image,
            brand=self.brand,
        )
        raw = self.copy_client.generate_json(
            prompt, COPY_SCHEMA, image=request.image, name=COPY_SCHEMA_NAME
        )
        return parse_copy(raw)

    def _generate_visual(self, copy: CreativeCopy, request: CreativeRequest) -> str:
        prompt = build_image_prompt(copy, request.creative_format, brand=self.brand)
        images = self.image_client.generate_images(
            prompt,
            aspect_ratio=aspect_ratio_for(request.creative_format),
            mime_type=GENERATED_MIME_TYPE,
            count=1,
        )
        if not images:
            raise GenerationRefusedError(
                "The image generator returned no images. This may be due to safety policies "
                "(e.g., prompts with real names) or if the prompt is unclear. "
                "Please try modifying your request."
            )
        return to_data_url(images[0].data, images[0].mime_type)

    def _edit_visual(self, copy: CreativeCopy, request: CreativeRequest) -> str:
        edited = self.image_client.edit_image(build_edit_prompt(copy), request.image)
        if edited is None:
            raise GenerationRefusedError(
                "The image editor returned no image. The model might have refused the prompt. "
                "Please try a different instruction."
            )
        return to_data_url(edited.data, edited.mime_type)


def parse_copy(raw: str) -> CreativeCopy:
    """Parse the copy model's JSON text into CreativeCopy."""
    try:
        data = json.loads(raw)
        if not isinstance(data, dict):
            raise TypeError(f"expected a JSON object, got {type(data).__name__}")
        return CreativeCopy.from_dict(data)
    except (json.JSONDecodeError, KeyError, TypeError) as e:
        logger.warning(f"Failed to parse JSON response: {e}; raw={raw!r}")
        raise MalformedResponseError(
            "Could not generate creative data. The AI returned an invalid format.",
            raw_output=raw or "",
        ) from e
