"""API clients for external services."""

from .gemini import GeminiClient
from .llm import LLMClient

__all__ = ["GeminiClient", "LLMClient"]
