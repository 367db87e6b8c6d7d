"""Data models."""

from .creative import CreativeCopy, CreativeFormat, CreativeOutput
from .history import HistoryEntry
from .request import CreativeRequest, ImagePayload
from .user import Session, User

__all__ = [
    "CreativeCopy",
    "CreativeFormat",
    "CreativeOutput",
    "CreativeRequest",
    "HistoryEntry",
    "ImagePayload",
    "Session",
    "User",
]
