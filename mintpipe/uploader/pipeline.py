"""Batch upload of assets and their metadata documents."""

import asyncio
import time
from collections.abc import Awaitable, Callable, Sequence
from pathlib import Path
from typing import TypeVar

from mintpipe.content_store.base import ContentStore
from mintpipe.content_store.errors import StoreUnavailable
from mintpipe.content_store.models import AssetFile, ContentReference
from mintpipe.content_store.retry import with_upload_retry
from mintpipe.core.config import Settings
from mintpipe.core.logging import get_logger
from mintpipe.uploader.files import load_asset_files
from mintpipe.uploader.metadata import MetadataBuilder, build_metadata
from mintpipe.uploader.metrics import BATCH_DURATION, UPLOAD_RETRIES, UPLOADS
from mintpipe.uploader.models import MetadataDocument, MintableCatalog

logger = get_logger(module="upload_pipeline")

T = TypeVar("T")


class PartialUploadFailure(Exception):
    """Raised when one or more items of a batch could not be uploaded.

    Attributes:
        failed_indices: Sorted input positions that failed (blob or document)
        references: Metadata references for the items that succeeded
        blob_references: Blob references for every blob upload that succeeded
        errors: Final error per failed index
        total: Number of items in the batch
    """

    def __init__(
        self,
        failed_indices: list[int],
        references: dict[int, ContentReference],
        blob_references: dict[int, ContentReference],
        errors: dict[int, BaseException],
        total: int,
    ) -> None:
        self.failed_indices = failed_indices
        self.references = references
        self.blob_references = blob_references
        self.errors = errors
        self.total = total
        super().__init__(
            f"{len(failed_indices)} of {total} uploads failed at indices {failed_indices}"
        )


class BatchUploadPipeline:
    """Uploads a batch of assets, then one metadata document per asset.

    Uploads run concurrently under a shared concurrency cap. Output order
    always follows input order.
    """

    def __init__(
        self,
        store: ContentStore,
        concurrency: int | None = None,
        retries: int = 0,
        backoff_base: float = 0.5,
        backoff_max: float = 8.0,
    ) -> None:
        """Initialize the pipeline.

        Args:
            store: Content store to upload to
            concurrency: Maximum uploads in flight (None for unbounded)
            retries: Retry attempts per upload on transient store failures
            backoff_base: Initial backoff delay in seconds
            backoff_max: Maximum backoff delay in seconds
        """
        if concurrency is not None and concurrency < 1:
            raise ValueError(f"concurrency must be >= 1 or None, got {concurrency}")
        if retries < 0:
            raise ValueError(f"retries must be >= 0, got {retries}")
        self.store = store
        self.concurrency = concurrency
        self.retries = retries
        self.backoff_base = backoff_base
        self.backoff_max = backoff_max

    @classmethod
    def from_settings(cls, store: ContentStore, config: Settings) -> "BatchUploadPipeline":
        return cls(
            store,
            concurrency=config.UPLOAD_CONCURRENCY,
            retries=config.UPLOAD_RETRIES,
            backoff_base=config.UPLOAD_BACKOFF_BASE,
            backoff_max=config.UPLOAD_BACKOFF_MAX,
        )

    async def upload(
        self,
        assets: Sequence[AssetFile],
        metadata_builder: MetadataBuilder = build_metadata,
    ) -> MintableCatalog:
        """Upload assets and their metadata documents.

        Args:
            assets: Assets in catalog order
            metadata_builder: Builds the document for (asset, blob reference, index)

        Returns:
            Catalog of metadata references in input order

        Raises:
            PartialUploadFailure: If any blob or document upload failed
        """
        assets = list(assets)
        total = len(assets)
        if total == 0:
            return MintableCatalog([])

        started = time.perf_counter()
        log = logger.bind(batch_size=total, concurrency=self.concurrency)
        log.info("batch_upload_started")

        gate = asyncio.Semaphore(self.concurrency or total)
        blob_refs: list[ContentReference | None] = [None] * total
        doc_refs: list[ContentReference | None] = [None] * total
        errors: dict[int, BaseException] = {}

        put_blob = self._with_retry(self.store.put_blob, "blob")
        put_document = self._with_retry(self.store.put_document, "document")

        async def upload_blob(index: int, asset: AssetFile) -> None:
            async with gate:
                try:
                    blob_refs[index] = await put_blob(asset.content, name=asset.name)
                except Exception as e:
                    self._record_failure(errors, index, "blob", e)
                    return
            UPLOADS.labels(kind="blob", status="success").inc()

        await asyncio.gather(*(upload_blob(i, a) for i, a in enumerate(assets)))

        documents: dict[int, MetadataDocument] = {}
        for index, ref in enumerate(blob_refs):
            if ref is None:
                continue
            try:
                documents[index] = metadata_builder(assets[index], ref, index)
            except Exception as e:
                self._record_failure(errors, index, "document", e)

        async def upload_document(index: int, document: MetadataDocument) -> None:
            async with gate:
                try:
                    doc_refs[index] = await put_document(
                        document.to_json(), name=document.name
                    )
                except Exception as e:
                    self._record_failure(errors, index, "document", e)
                    return
            UPLOADS.labels(kind="document", status="success").inc()

        await asyncio.gather(*(upload_document(i, d) for i, d in documents.items()))

        BATCH_DURATION.observe(time.perf_counter() - started)

        if errors:
            failed = sorted(errors)
            log.error("batch_upload_failed", failed_indices=failed)
            raise PartialUploadFailure(
                failed_indices=failed,
                references={i: r for i, r in enumerate(doc_refs) if r is not None},
                blob_references={i: r for i, r in enumerate(blob_refs) if r is not None},
                errors=errors,
                total=total,
            )

        log.info("batch_upload_completed")
        return MintableCatalog(ref for ref in doc_refs if ref is not None)

    async def upload_folder(
        self,
        folder: Path | str,
        metadata_builder: MetadataBuilder = build_metadata,
    ) -> MintableCatalog:
        """Load every asset in a folder and upload it."""
        return await self.upload(load_asset_files(folder), metadata_builder)

    def _with_retry(
        self, func: Callable[..., Awaitable[T]], kind: str
    ) -> Callable[..., Awaitable[T]]:
        def on_retry(attempt: int, error: BaseException, delay: float) -> None:
            UPLOAD_RETRIES.labels(kind=kind).inc()

        return with_upload_retry(
            max_retries=self.retries,
            base_delay=self.backoff_base,
            max_delay=self.backoff_max,
            retry_on=(StoreUnavailable,),
            on_retry=on_retry,
        )(func)

    def _record_failure(
        self, errors: dict[int, BaseException], index: int, kind: str, error: Exception
    ) -> None:
        errors[index] = error
        UPLOADS.labels(kind=kind, status="failure").inc()
        logger.warning(
            "upload_item_failed",
            index=index,
            kind=kind,
            error=str(error),
            error_type=type(error).__name__,
        )

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(store={self.store!r}, "
            f"concurrency={self.concurrency}, retries={self.retries})"
        )
