"""History entry model - one per successful generation."""

import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone

from .creative import CreativeCopy, CreativeFormat, CreativeOutput


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


@dataclass(frozen=True)
class HistoryEntry:
    """A creative saved to a user's library. Never mutated after creation."""

    json: CreativeCopy
    visual_url: str
    creative_type: str
    user_input: str
    occasion: str
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    created_at: str = field(default_factory=_now_iso)

    @classmethod
    def from_output(
        cls,
        output: CreativeOutput,
        creative_type: CreativeFormat | str,
        user_input: str,
        occasion: str,
    ) -> "HistoryEntry":
        if isinstance(creative_type, CreativeFormat):
            creative_type = creative_type.value
        return cls(
            json=output.json,
            visual_url=output.visual_url,
            creative_type=creative_type,
            user_input=user_input,
            occasion=occasion,
        )

    @property
    def output(self) -> CreativeOutput:
        return CreativeOutput(json=self.json, visual_url=self.visual_url)

    @property
    def created_datetime(self) -> datetime:
        return datetime.fromisoformat(self.created_at)
