"""Default metadata document template."""

from collections.abc import Callable, Sequence

from mintpipe.content_store.models import AssetFile, ContentReference
from mintpipe.uploader.models import MetadataAttribute, MetadataDocument

MetadataBuilder = Callable[[AssetFile, ContentReference, int], MetadataDocument]

DEFAULT_DESCRIPTION = "Tobikage : Ninja Robots"

DEFAULT_ATTRIBUTES: tuple[MetadataAttribute, ...] = (
    MetadataAttribute(trait_type="Coolness", value=100),
    MetadataAttribute(trait_type="Characters", value=1),
)


def document_name(filename: str) -> str:
    """Name of the document for a file: everything before the first dot."""
    return filename.split(".")[0]


def build_metadata(
    asset: AssetFile,
    reference: ContentReference,
    index: int,
    description: str = DEFAULT_DESCRIPTION,
    attributes: Sequence[MetadataAttribute] = DEFAULT_ATTRIBUTES,
) -> MetadataDocument:
    """Build the metadata document for an uploaded asset.

    Args:
        asset: Asset the document describes
        reference: Reference of the uploaded asset blob
        index: Catalog position of the asset (unused by the default template)
        description: Description shared by every document in the batch
        attributes: Trait/value pairs, in order

    Returns:
        Immutable metadata document
    """
    return MetadataDocument(
        name=document_name(asset.name),
        description=description,
        primary_reference=reference,
        attributes=tuple(attributes),
    )


def metadata_builder_for(
    description: str = DEFAULT_DESCRIPTION,
    attributes: Sequence[MetadataAttribute] = DEFAULT_ATTRIBUTES,
) -> MetadataBuilder:
    """Return a builder bound to a description and attribute set."""
    bound = tuple(attributes)

    def builder(
        asset: AssetFile, reference: ContentReference, index: int
    ) -> MetadataDocument:
        return build_metadata(asset, reference, index, description, bound)

    return builder
