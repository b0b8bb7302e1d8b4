"""Data models for content store."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class AssetFile:
    """A named binary payload to be uploaded."""

    name: str
    content: bytes = field(repr=False)

    @property
    def size(self) -> int:
        return len(self.content)


@dataclass(frozen=True, order=True)
class ContentReference:
    """Opaque identifier for content held by a content store.

    Two references are equal iff they name the same stored content.
    """

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise ValueError("ContentReference value must be a non-empty string")

    def __str__(self) -> str:
        return self.value
