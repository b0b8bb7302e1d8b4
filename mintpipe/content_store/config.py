"""Configuration for content store."""

import logging

from mintpipe.content_store.base import ContentStore
from mintpipe.content_store.memory import InMemoryContentStore
from mintpipe.content_store.pinata import PinataContentStore
from mintpipe.core.config import Settings

logger = logging.getLogger(__name__)


def create_content_store(config: Settings) -> ContentStore | None:
    """Create the content store selected by configuration.

    Reads:
    - CONTENT_STORE_BACKEND: "pinata" (default) or "memory"
    - PINATA_API_KEY / PINATA_API_SECRET: credentials (required for pinata)
    - PINATA_BASE_URL / PINATA_TIMEOUT: optional API overrides

    Returns:
        ContentStore instance or None if Pinata is selected without credentials
    """
    if config.CONTENT_STORE_BACKEND == "memory":
        return InMemoryContentStore()

    if not config.PINATA_API_KEY or not config.PINATA_API_SECRET:
        logger.warning(
            "Pinata credentials not set; set PINATA_API_KEY and PINATA_API_SECRET"
        )
        return None

    return PinataContentStore(
        api_key=config.PINATA_API_KEY,
        api_secret=config.PINATA_API_SECRET,
        base_url=config.PINATA_BASE_URL,
        timeout=config.PINATA_TIMEOUT,
    )
