"""Business logic services."""

from .auth import Authenticator, CredentialStore, StaticCredentialStore
from .creative import CreativeService, GenerationState
from .library import LibraryService

__all__ = [
    "Authenticator",
    "CreativeService",
    "CredentialStore",
    "GenerationState",
    "LibraryService",
    "StaticCredentialStore",
]
