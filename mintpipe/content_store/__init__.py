"""Content-addressed store clients."""

from mintpipe.content_store.base import ContentStore
from mintpipe.content_store.errors import (
    StoreError,
    StorePermanentFailure,
    StoreUnavailable,
)
from mintpipe.content_store.memory import InMemoryContentStore
from mintpipe.content_store.models import AssetFile, ContentReference
from mintpipe.content_store.pinata import PinataContentStore

__all__ = [
    "AssetFile",
    "ContentReference",
    "ContentStore",
    "InMemoryContentStore",
    "PinataContentStore",
    "StoreError",
    "StorePermanentFailure",
    "StoreUnavailable",
]
