"""Pinata IPFS pinning service client."""

import json
from typing import Any

import httpx

from mintpipe.content_store.base import ContentStore
from mintpipe.content_store.errors import StorePermanentFailure, StoreUnavailable
from mintpipe.content_store.models import ContentReference
from mintpipe.core.logging import get_logger

logger = get_logger(module="pinata_store")

IPFS_SCHEME = "ipfs://"

# Status codes worth another attempt
RETRYABLE_STATUS_CODES = frozenset({408, 425, 429, 500, 502, 503, 504})


class PinataContentStore(ContentStore):
    """Uploads blobs and JSON documents to IPFS through the Pinata API.

    References are returned as ``ipfs://<CID>``.
    """

    FILE_ENDPOINT = "/pinning/pinFileToIPFS"
    JSON_ENDPOINT = "/pinning/pinJSONToIPFS"

    def __init__(
        self,
        api_key: str,
        api_secret: str,
        base_url: str = "https://api.pinata.cloud",
        timeout: float = 60.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the Pinata client.

        Args:
            api_key: Pinata API key
            api_secret: Pinata API secret
            base_url: Base URL for the Pinata API
            timeout: Request timeout in seconds
            client: Optional preconfigured HTTP client (not closed by aclose)
        """
        if not api_key or not api_secret:
            raise ValueError("Pinata API key and secret are required")
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._api_key = api_key
        self._api_secret = api_secret
        self._client = client
        self._owns_client = client is None

    @property
    def headers(self) -> dict[str, str]:
        """Authentication headers for API requests."""
        return {
            "pinata_api_key": self._api_key,
            "pinata_secret_api_key": self._api_secret,
        }

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                headers=self.headers,
                timeout=httpx.Timeout(self.timeout, connect=self.timeout / 3),
            )
        return self._client

    async def put_blob(self, data: bytes, name: str | None = None) -> ContentReference:
        form: dict[str, str] = {}
        if name:
            form["pinataMetadata"] = json.dumps({"name": name})
        logger.info("uploading_blob", name=name, size=len(data))
        payload = await self._post(
            self.FILE_ENDPOINT,
            files={"file": (name or "asset", data)},
            data=form or None,
        )
        return self._reference_from(payload)

    async def put_document(
        self, document: dict[str, Any], name: str | None = None
    ) -> ContentReference:
        body: dict[str, Any] = {"pinataContent": document}
        if name:
            body["pinataMetadata"] = {"name": name}
        logger.info("uploading_document", name=name)
        payload = await self._post(self.JSON_ENDPOINT, json=body)
        return self._reference_from(payload)

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "PinataContentStore":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def _post(self, endpoint: str, **kwargs: Any) -> dict[str, Any]:
        url = f"{self.base_url}{endpoint}"
        try:
            response = await self.client.post(url, headers=self.headers, **kwargs)
        except httpx.TransportError as e:
            logger.warning("pinata_transport_error", url=url, error=str(e))
            raise StoreUnavailable(f"Transport error calling {url}: {e}") from e

        if response.status_code in RETRYABLE_STATUS_CODES:
            raise StoreUnavailable(
                f"Pinata returned {response.status_code} for {endpoint}",
                status_code=response.status_code,
            )
        if response.is_error:
            raise StorePermanentFailure(
                f"Pinata rejected upload to {endpoint} with "
                f"{response.status_code}: {response.text[:200]}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise StorePermanentFailure(
                f"Invalid JSON response from {endpoint}: {e}",
                status_code=response.status_code,
            ) from e

    def _reference_from(self, payload: dict[str, Any]) -> ContentReference:
        ipfs_hash = payload.get("IpfsHash") if isinstance(payload, dict) else None
        if not ipfs_hash:
            raise StorePermanentFailure(f"Response is missing IpfsHash: {payload}")
        return ContentReference(f"{IPFS_SCHEME}{ipfs_hash}")

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(base_url='{self.base_url}')"
