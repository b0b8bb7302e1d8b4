"""Tests for catalog and metadata models."""

import pytest

from mintpipe.content_store import ContentReference
from mintpipe.uploader.models import MintableCatalog


class TestMintableCatalog:
    """Test cases for MintableCatalog."""

    def test_preserves_order_and_indexing(self):
        catalog = MintableCatalog.from_strings(["ipfs://A", "ipfs://B", "ipfs://C"])

        assert len(catalog) == 3
        assert catalog[1] == ContentReference("ipfs://B")
        assert catalog[-1] == ContentReference("ipfs://C")
        assert catalog.to_strings() == ["ipfs://A", "ipfs://B", "ipfs://C"]

    def test_is_a_sequence(self):
        catalog = MintableCatalog.from_strings(["ipfs://A", "ipfs://B"])

        assert ContentReference("ipfs://B") in catalog
        assert catalog.index(ContentReference("ipfs://B")) == 1
        assert list(reversed(catalog)) == [
            ContentReference("ipfs://B"),
            ContentReference("ipfs://A"),
        ]

    def test_equality_and_hash(self):
        first = MintableCatalog.from_strings(["ipfs://A"])
        second = MintableCatalog([ContentReference("ipfs://A")])

        assert first == second
        assert hash(first) == hash(second)
        assert first != MintableCatalog.from_strings(["ipfs://B"])

    def test_rejects_non_reference_items(self):
        with pytest.raises(TypeError):
            MintableCatalog(["ipfs://A"])

    def test_is_immutable(self):
        catalog = MintableCatalog.from_strings(["ipfs://A"])

        with pytest.raises(AttributeError):
            catalog.extra = 1
        with pytest.raises(TypeError):
            catalog[0] = ContentReference("ipfs://B")

    def test_repr_lists_references(self):
        assert repr(MintableCatalog.from_strings(["ipfs://A"])) == "MintableCatalog(['ipfs://A'])"
