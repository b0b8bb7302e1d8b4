"""Metadata and catalog models."""

from collections.abc import Iterable, Iterator, Sequence
from typing import Any, overload

from pydantic import BaseModel, ConfigDict, Field

from mintpipe.content_store.models import ContentReference


class MetadataAttribute(BaseModel):
    """Trait/value pair attached to a metadata document."""

    model_config = ConfigDict(frozen=True)

    trait_type: str
    value: str | int | float


class MetadataDocument(BaseModel):
    """Metadata for one uploaded asset."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    description: str
    primary_reference: ContentReference
    attributes: tuple[MetadataAttribute, ...] = Field(default_factory=tuple)

    def to_json(self) -> dict[str, Any]:
        """Document body as uploaded to the content store."""
        return {
            "name": self.name,
            "description": self.description,
            "image": str(self.primary_reference),
            "attributes": [attr.model_dump() for attr in self.attributes],
        }


class MintableCatalog(Sequence[ContentReference]):
    """Fixed, ordered list of metadata references.

    Index ``i`` corresponds to the asset at position ``i`` of the upload input.
    """

    __slots__ = ("_references",)

    def __init__(self, references: Iterable[ContentReference]) -> None:
        refs = tuple(references)
        for ref in refs:
            if not isinstance(ref, ContentReference):
                raise TypeError(f"Expected ContentReference, got {type(ref).__name__}")
        self._references = refs

    @classmethod
    def from_strings(cls, values: Iterable[str]) -> "MintableCatalog":
        return cls(ContentReference(v) for v in values)

    @property
    def references(self) -> tuple[ContentReference, ...]:
        return self._references

    def to_strings(self) -> list[str]:
        return [str(ref) for ref in self._references]

    @overload
    def __getitem__(self, index: int) -> ContentReference: ...

    @overload
    def __getitem__(self, index: slice) -> Sequence[ContentReference]: ...

    def __getitem__(self, index: int | slice) -> Any:
        return self._references[index]

    def __len__(self) -> int:
        return len(self._references)

    def __iter__(self) -> Iterator[ContentReference]:
        return iter(self._references)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, MintableCatalog):
            return self._references == other._references
        return NotImplemented

    def __hash__(self) -> int:
        return hash(self._references)

    def __repr__(self) -> str:
        return f"MintableCatalog({self.to_strings()!r})"
