"""Authentication - pluggable credential store plus in-process sessions."""

import hmac
import logging
import secrets
from abc import ABC, abstractmethod

from ..errors import AuthError
from ..models import Session, User

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


class CredentialStore(ABC):
    """Source of employee credentials."""

    @abstractmethod
    def verify(self, email: str, password: str) -> bool:
        """Return True if the password matches the stored one for email."""
        pass


class StaticCredentialStore(CredentialStore):
    """Credentials from a mapping (e.g. loaded from config)."""

    def __init__(self, credentials: dict[str, str]):
        self._credentials = {normalize_email(k): v for k, v in credentials.items()}

    def verify(self, email: str, password: str) -> bool:
        stored = self._credentials.get(normalize_email(email))
        if stored is None:
            return False
        return hmac.compare_digest(stored.encode("utf-8"), (password or "").encode("utf-8"))


class Authenticator:
    """Log employees in and track their sessions by token."""

    def __init__(self, store: CredentialStore):
        self.store = store
        self._sessions: dict[str, Session] = {}

    def login(self, email: str, password: str) -> Session:
        """Check credentials and open a session. Raises AuthError."""
        email = normalize_email(email)
        if not email or not self.store.verify(email, password):
            logger.warning(f"Failed login for {email or '<empty>'}")
            raise AuthError("Invalid email or password.")

        session = Session(token=secrets.token_urlsafe(32), user=User(email=email))
        self._sessions[session.token] = session
        logger.info(f"Logged in {email}")
        return session

    def logout(self, token: str) -> None:
        self._sessions.pop(token, None)

    def current_user(self, token: str | None) -> User | None:
        """User for a session token, or None."""
        if not token:
            return None
        session = self._sessions.get(token)
        return session.user if session else None

    def require_user(self, token: str | None) -> User:
        user = self.current_user(token)
        if user is None:
            raise AuthError("Please log in to continue.")
        return user
