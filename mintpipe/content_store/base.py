"""Base class for content-addressed upload services."""

from abc import ABC, abstractmethod
from typing import Any

from mintpipe.content_store.models import ContentReference


class ContentStore(ABC):
    """Upload capability over an external content-addressed store.

    Implementations raise StoreUnavailable for transient failures and
    StorePermanentFailure when the store rejects a payload. Repeated uploads
    of identical content may or may not be deduplicated by the store.
    """

    @abstractmethod
    async def put_blob(self, data: bytes, name: str | None = None) -> ContentReference:
        """Upload raw bytes.

        Args:
            data: Payload to store
            name: Optional display name recorded alongside the payload

        Returns:
            Reference to the stored blob
        """
        raise NotImplementedError

    @abstractmethod
    async def put_document(
        self, document: dict[str, Any], name: str | None = None
    ) -> ContentReference:
        """Upload a JSON document.

        Args:
            document: JSON-serializable mapping
            name: Optional display name recorded alongside the document

        Returns:
            Reference to the stored document
        """
        raise NotImplementedError

    async def aclose(self) -> None:
        """Release any held resources."""
        return None

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
