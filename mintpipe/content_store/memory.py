"""In-process content-addressed store keyed by SHA-256."""

import hashlib
import json
import re
from typing import Any

from mintpipe.content_store.base import ContentStore
from mintpipe.content_store.errors import StorePermanentFailure
from mintpipe.content_store.models import ContentReference

SCHEME = "mem://"


class InMemoryContentStore(ContentStore):
    """Stores and deduplicates uploaded content using SHA-256 hashing.

    Used for local runs and tests. Identical payloads always map to the same
    reference.
    """

    # SHA-256 produces 64 hex characters
    _HASH_PATTERN = re.compile(r"^[a-f0-9]{64}$")

    def __init__(self, max_size: int | None = None) -> None:
        """Initialize content store.

        Args:
            max_size: Optional payload size limit in bytes; larger payloads
                are rejected as permanent failures
        """
        self.max_size = max_size
        self._blobs: dict[str, bytes] = {}
        self._names: dict[str, str | None] = {}
        self.upload_count = 0

    def hash_content(self, data: bytes) -> str:
        """Generate SHA-256 hash of content.

        Args:
            data: Content to hash

        Returns:
            Hex string of SHA-256 hash
        """
        return hashlib.sha256(data).hexdigest()

    async def put_blob(self, data: bytes, name: str | None = None) -> ContentReference:
        return self._store(data, name)

    async def put_document(
        self, document: dict[str, Any], name: str | None = None
    ) -> ContentReference:
        try:
            encoded = json.dumps(document, sort_keys=True, separators=(",", ":"))
        except (TypeError, ValueError) as e:
            raise StorePermanentFailure(f"Document is not JSON serializable: {e}")
        return self._store(encoded.encode(), name)

    def has_content(self, reference: ContentReference) -> bool:
        """Check if content exists in store.

        Raises:
            ValueError: If reference format is invalid
        """
        return self._validate(reference) in self._blobs

    def get(self, reference: ContentReference) -> bytes:
        """Return stored bytes for a reference.

        Raises:
            KeyError: If nothing is stored under the reference
            ValueError: If reference format is invalid
        """
        return self._blobs[self._validate(reference)]

    def get_document(self, reference: ContentReference) -> dict[str, Any]:
        """Return a stored JSON document."""
        return json.loads(self.get(reference))

    def get_statistics(self) -> dict[str, int]:
        """Get statistics about stored content."""
        return {
            "total_content": len(self._blobs),
            "total_uploads": self.upload_count,
            "store_size_bytes": sum(len(b) for b in self._blobs.values()),
        }

    def _store(self, data: bytes, name: str | None) -> ContentReference:
        if self.max_size is not None and len(data) > self.max_size:
            raise StorePermanentFailure(
                f"Payload of {len(data)} bytes exceeds limit of {self.max_size}",
                status_code=413,
            )
        content_hash = self.hash_content(data)
        self._blobs.setdefault(content_hash, data)
        self._names.setdefault(content_hash, name)
        self.upload_count += 1
        return ContentReference(f"{SCHEME}{content_hash}")

    def _validate(self, reference: ContentReference) -> str:
        """Validate reference format and return the content hash.

        Raises:
            ValueError: If reference format is invalid
        """
        value = reference.value
        content_hash = value[len(SCHEME) :] if value.startswith(SCHEME) else ""
        if not self._HASH_PATTERN.match(content_hash):
            raise ValueError(
                f"Invalid reference format: expected {SCHEME}<64 hex characters>, got: {value}"
            )
        return content_hash
