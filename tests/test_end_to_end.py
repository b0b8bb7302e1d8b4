"""Upload a catalog, then mint from it through the coordinator."""

import pytest

from mintpipe.content_store import ContentReference, InMemoryContentStore
from mintpipe.randomness import LocalRandomnessOracle, RandomnessCoordinator
from mintpipe.uploader import BatchUploadPipeline


@pytest.mark.asyncio
async def test_minted_reference_resolves_to_uploaded_asset(assets, clock):
    store = InMemoryContentStore()
    catalog = await BatchUploadPipeline(store, concurrency=2).upload(assets)

    coordinator = RandomnessCoordinator(catalog, clock=clock)
    oracle = LocalRandomnessOracle(coordinator, random_source=lambda: 2**200 + 3)
    selections = []
    coordinator.add_selection_listener(selections.append)

    token = coordinator.request_randomness("alice", 0.01)
    result = oracle.fulfill(token)

    index = (2**200 + 3) % len(assets)
    assert selections == [result]
    assert result.selected_index == index
    document = store.get_document(result.reference)
    assert document["name"] == assets[index].name.split(".")[0]
    assert store.get(ContentReference(document["image"])) == assets[index].content


def test_fulfillment_selects_catalog_entry_by_modulo(catalog):
    coordinator = RandomnessCoordinator(catalog)
    selections = []
    coordinator.add_selection_listener(selections.append)

    token = coordinator.request_randomness("u1", 1.0)
    result = coordinator.on_fulfillment(token, 12)

    assert result.requester_id == "u1"
    assert result.reference == ContentReference("ipfs://C")
    assert selections == [result]
    assert coordinator.pending_count == 0
