"""User and session models."""

from dataclasses import dataclass, field
from datetime import datetime, timezone


@dataclass(frozen=True)
class User:
    """An authenticated employee."""

    email: str


@dataclass(frozen=True)
class Session:
    """A logged-in session, identified by an opaque token."""

    token: str
    user: User
    created_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
