"""Creative models - formats, copy and assembled output."""

import base64
import re
from dataclasses import asdict, dataclass
from enum import Enum


class CreativeFormat(Enum):
    """Target creative format. Value is the wire identifier."""

    INSTAGRAM_POST = "instagram_post"
    WHATSAPP_STORY = "whatsapp_story"
    LINKEDIN_POST = "linkedin_post"
    BANNER = "banner"
    BROCHURE = "brochure"

    @classmethod
    def parse(cls, value: "CreativeFormat | str | None") -> "CreativeFormat | None":
        """Return the matching format, or None for unrecognised values."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None

    @property
    def display_name(self) -> str:
        """Format name as rendered into prompts ("instagram post")."""
        return self.value.replace("_", " ")


# Closest supported ratio per format (LinkedIn recommends 1.91:1, 4:3 is nearest)
ASPECT_RATIOS: dict[CreativeFormat, str] = {
    CreativeFormat.INSTAGRAM_POST: "1:1",
    CreativeFormat.WHATSAPP_STORY: "9:16",
    CreativeFormat.LINKEDIN_POST: "4:3",
    CreativeFormat.BANNER: "16:9",
    CreativeFormat.BROCHURE: "3:4",
}

DEFAULT_ASPECT_RATIO = "1:1"


def aspect_ratio_for(creative_format) -> str:
    """Aspect ratio for a format. Unrecognised values fall back to 1:1."""
    parsed = CreativeFormat.parse(creative_format)
    if parsed is None:
        return DEFAULT_ASPECT_RATIO
    return ASPECT_RATIOS.get(parsed, DEFAULT_ASPECT_RATIO)


FORMAT_LABELS: dict[CreativeFormat, str] = {
    CreativeFormat.INSTAGRAM_POST: "Instagram Post (1:1)",
    CreativeFormat.WHATSAPP_STORY: "WhatsApp Story (9:16)",
    CreativeFormat.LINKEDIN_POST: "LinkedIn Post (4:3)",
    CreativeFormat.BANNER: "Web Banner (16:9)",
    CreativeFormat.BROCHURE: "Brochure/Flyer (3:4)",
}

COPY_FIELDS = ["headline", "subtext", "CTA", "layout_description", "festival_theme"]


@dataclass(frozen=True)
class CreativeCopy:
    """Structured marketing copy returned by the text model."""

    headline: str
    subtext: str
    CTA: str
    layout_description: str
    festival_theme: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "CreativeCopy":
        """Build from the model's JSON object. Raises KeyError/TypeError on bad shape."""
        values = {}
        for name in COPY_FIELDS:
            value = data.get(name, "") if name == "festival_theme" else data[name]
            if value is None and name == "festival_theme":
                value = ""
            if not isinstance(value, str):
                raise TypeError(f"Field '{name}' must be a string, got {type(value).__name__}")
            values[name] = value
        return cls(**values)

    def to_dict(self) -> dict:
        return asdict(self)


DATA_URL_RE = re.compile(r"^data:(?P<mime>[\w.+-]+/[\w.+-]+);base64,(?P<data>.*)$", re.DOTALL)


def to_data_url(data: bytes, mime_type: str) -> str:
    """Encode image bytes as a data URL."""
    return f"data:{mime_type};base64,{base64.b64encode(data).decode('ascii')}"


@dataclass(frozen=True)
class CreativeOutput:
    """Copy plus the visual, as a data URL with embedded MIME type."""

    json: CreativeCopy
    visual_url: str

    @property
    def mime_type(self) -> str:
        match = DATA_URL_RE.match(self.visual_url)
        return match.group("mime") if match else ""

    def image_bytes(self) -> bytes:
        """Decode the visual back into raw image bytes."""
        match = DATA_URL_RE.match(self.visual_url)
        if not match:
            raise ValueError("visual_url is not a base64 data URL")
        return base64.b64decode(match.group("data"))

    def download_filename(self) -> str:
        """Filename for downloads: "<headline_snake>_creative.<ext>"."""
        stem = re.sub(r"\s+", "_", self.json.headline.strip()).lower() or "untitled"
        ext = self.mime_type.split("/")[-1] if self.mime_type else "jpg"
        if ext == "jpeg":
            ext = "jpg"
        return f"{stem}_creative.{ext}"
