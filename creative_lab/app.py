"""Wiring - build clients, services and stores from config."""

import logging
from dataclasses import dataclass

from . import config
from .clients import GeminiClient, LLMClient
from .services import Authenticator, CreativeService, LibraryService, StaticCredentialStore
from .stores import create_history_store


@dataclass
class CreativeLab:
    """Everything a surface (HTTP handler, CLI) needs."""

    authenticator: Authenticator
    creatives: CreativeService
    library: LibraryService


def configure_logging(level: str = config.LOG_LEVEL):
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def build_creative_service() -> CreativeService:
    """Creative service using the configured copy provider."""
    gemini = GeminiClient(
        api_key=config.GEMINI_API_KEY,
        copy_model=config.COPY_MODEL,
        image_model=config.IMAGE_MODEL,
        edit_model=config.EDIT_MODEL,
    )
    if config.COPY_PROVIDER == "openai":
        copy_client = LLMClient(api_key=config.OPENAI_API_KEY, model=config.OPENAI_COPY_MODEL)
    elif config.COPY_PROVIDER == "gemini":
        copy_client = gemini
    else:
        raise ValueError(f"Unknown COPY_PROVIDER: {config.COPY_PROVIDER}")
    return CreativeService(copy_client, gemini, brand=config.BRAND_NAME)


def build_app() -> CreativeLab:
    store = create_history_store(
        config.HISTORY_BACKEND,
        directory=config.HISTORY_DIR,
        bucket=config.HISTORY_S3_BUCKET,
        prefix=config.HISTORY_S3_PREFIX,
    )
    return CreativeLab(
        authenticator=Authenticator(StaticCredentialStore(config.load_credentials())),
        creatives=build_creative_service(),
        library=LibraryService(store),
    )
