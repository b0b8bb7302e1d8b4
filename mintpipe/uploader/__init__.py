"""Batch upload of assets and metadata documents."""

from mintpipe.uploader.files import load_asset_files
from mintpipe.uploader.metadata import build_metadata, metadata_builder_for
from mintpipe.uploader.models import MetadataAttribute, MetadataDocument, MintableCatalog
from mintpipe.uploader.pipeline import BatchUploadPipeline, PartialUploadFailure

__all__ = [
    "BatchUploadPipeline",
    "MetadataAttribute",
    "MetadataDocument",
    "MintableCatalog",
    "PartialUploadFailure",
    "build_metadata",
    "load_asset_files",
    "metadata_builder_for",
]
