"""Prompt builder - pure rendering of the copy, image and edit prompts."""

import re

from ..models.creative import COPY_FIELDS, CreativeCopy, CreativeFormat

DEFAULT_BRAND = "MegaTech Solutions"

COPY_SCHEMA_NAME = "creative_copy"

COPY_SCHEMA = {
    "type": "object",
    "properties": {name: {"type": "string"} for name in COPY_FIELDS},
    "required": list(COPY_FIELDS),
    "additionalProperties": False,
}

IMAGE_INSTRUCTION_WITH_REFERENCE = (
    "An image has been provided as a reference. Analyze it meticulously - it could be a "
    "product photo, a sketch, or even handwritten notes. Your concept must be directly "
    "inspired by or enhance this image."
)
IMAGE_INSTRUCTION_FROM_SCRATCH = (
    "No reference image was provided. You must conceive the entire visual from scratch."
)

LAYOUT_INSTRUCTION_EDIT = (
    "A concise, actionable instruction for a professional photo editor. Describe the exact "
    "edits needed for the provided image. Be specific. Example: 'Add a subtle lens flare in "
    "the top-left corner, enhance the product's metallic sheen, and change the background "
    "to a blurred, festive street scene at night.'"
)
LAYOUT_INSTRUCTION_SCENE = (
    "A rich, detailed art direction brief for an AI image generator. Describe the scene's "
    "composition (e.g., rule of thirds, leading lines), lighting (e.g., 'dramatic cinematic "
    "lighting', 'soft morning light'), color palette, mood, and subject. The goal is a "
    "visually stunning, photorealistic image."
)

OCCASION_INSTRUCTION = (
    'The creative is for a specific occasion: "{occasion}". This is the primary theme. The '
    "concept must be a clever, culturally authentic celebration of this event, with the "
    "product integrated naturally, not just placed in the scene."
)
PROMOTION_INSTRUCTION = (
    "This is a standard product/service promotion. The focus should be on creating desire "
    "and a clear value proposition."
)

COPY_PROMPT = """
You are a world-class Creative Director at a top-tier advertising agency. Your task is to brainstorm a winning creative concept for "{brand}," a modern, trustworthy, and innovative tech brand. The final output will be a "{format_name}".

**Your Goal:**
Go beyond the obvious. I need a "Big Idea" - a clever, unexpected concept that is emotionally resonant and visually arresting. Avoid generic marketing-speak.

**Context & User Input:**
- **Product/Service Information:** "{product_text}"
- **Occasion/Theme:** {occasion_instruction}
- **Reference Material:** {image_instruction}

**Mandatory Requirements:**
1.  **Concept First:** Develop a single, strong, creative concept before writing anything else.
2.  **Compelling Copy:** Write copy that is sharp, persuasive, and aligns with the "{brand}" brand voice. The headline should be a powerful hook. The CTA should be compelling (e.g., "Secure Your Peace of Mind" instead of just "Buy Now").
3.  **Art Direction:** The layout description must be incredibly detailed, providing a clear vision for the final image.
4.  **Error-Free:** All text must be proofread for spelling and grammatical errors.
5.  **Strict JSON Output:** The final output must be only a single JSON object with exactly these five fields, adhering strictly to the defined schema.

**JSON Structure:**
- "headline": The attention-grabbing main text. Should be clever and concise.
- "subtext": Supporting text. Details, features, or a warm message.
- "CTA": The call-to-action. Must be a compelling verb phrase. Empty string ("") for pure greetings.
- "layout_description": {layout_instruction}
- "festival_theme": If an occasion is specified, describe the visual theme in detail (e.g., for "Diwali": "Vibrant and warm, using a palette of saffron, gold, and deep indigo. Incorporate motifs of diya lamps and intricate rangoli patterns, with a focus on light overcoming darkness."). Empty string ("") if no occasion.
"""

IMAGE_PROMPT = """
Create a photorealistic, hyper-detailed, visually stunning marketing image for {brand}, formatted as a {format_name}.
Art Direction: {layout_description}.
{theme_line}
Visual Style: Cinematic lighting, professional color grading, sharp focus, 8K resolution, shot on a high-end camera. Resembles an Unreal Engine 5 render for its realism and detail.
CRITICALLY IMPORTANT: The image must contain absolutely NO text, letters, words, or numbers. It must be a pure visual with ample negative space for text overlays later. This is a strict requirement.
"""

EDIT_PROMPT = """
Act as a professional photo editor. Your task is to modify the provided image based on the following instructions.
Make the edits seamless, subtle, and photorealistic.
Instructions: "{layout_description}"
"""


def format_name(creative_format) -> str:
    """Format as prose: underscores replaced by spaces."""
    value = creative_format.value if isinstance(creative_format, CreativeFormat) else str(creative_format)
    return value.replace("_", " ")


def build_copy_prompt(
    product_text: str,
    occasion: str,
    creative_format,
    image_present: bool,
    brand: str = DEFAULT_BRAND,
) -> str:
    """Render the structured-copy prompt."""
    occasion_instruction = (
        OCCASION_INSTRUCTION.format(occasion=occasion) if occasion else PROMOTION_INSTRUCTION
    )
    if image_present:
        image_instruction = IMAGE_INSTRUCTION_WITH_REFERENCE
        layout_instruction = LAYOUT_INSTRUCTION_EDIT
    else:
        image_instruction = IMAGE_INSTRUCTION_FROM_SCRATCH
        layout_instruction = LAYOUT_INSTRUCTION_SCENE

    return COPY_PROMPT.format(
        brand=brand,
        format_name=format_name(creative_format),
        product_text=product_text,
        occasion_instruction=occasion_instruction,
        image_instruction=image_instruction,
        layout_instruction=layout_instruction,
    ).strip()


def build_image_prompt(copy: CreativeCopy, creative_format, brand: str = DEFAULT_BRAND) -> str:
    """Render the from-scratch image prompt, collapsed to a single line."""
    theme_line = f"Thematic Elements: {copy.festival_theme}." if copy.festival_theme else ""
    prompt = IMAGE_PROMPT.format(
        brand=brand,
        format_name=format_name(creative_format),
        layout_description=copy.layout_description,
        theme_line=theme_line,
    )
    return re.sub(r"\s+", " ", prompt).strip()


def build_edit_prompt(copy: CreativeCopy) -> str:
    """Render the photo-editor instructions for a reference image."""
    return EDIT_PROMPT.format(layout_description=copy.layout_description).strip()
