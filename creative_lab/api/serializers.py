"""Serializers for the wire/storage JSON shape (camelCase keys)."""

from ..models import CreativeCopy, CreativeFormat, CreativeOutput, HistoryEntry, User
from ..models.creative import FORMAT_LABELS, aspect_ratio_for


def serialize_output(output: CreativeOutput) -> dict:
    return {
        "json": output.json.to_dict(),
        "visualUrl": output.visual_url,
    }


def serialize_entry(entry: HistoryEntry) -> dict:
    return {
        "id": entry.id,
        "createdAt": entry.created_at,
        "creativeType": entry.creative_type,
        "userInput": entry.user_input,
        "occasion": entry.occasion,
        "json": entry.json.to_dict(),
        "visualUrl": entry.visual_url,
    }


def deserialize_entry(data: dict) -> HistoryEntry:
    return HistoryEntry(
        id=data["id"],
        created_at=data["createdAt"],
        creative_type=data["creativeType"],
        user_input=data.get("userInput", ""),
        occasion=data.get("occasion", ""),
        json=CreativeCopy.from_dict(data["json"]),
        visual_url=data["visualUrl"],
    )


def serialize_user(user: User) -> dict:
    return {"email": user.email}


def serialize_formats() -> list[dict]:
    """All creative formats for the UI selector."""
    return [
        {
            "value": fmt.value,
            "label": FORMAT_LABELS[fmt],
            "aspectRatio": aspect_ratio_for(fmt),
        }
        for fmt in CreativeFormat
    ]
