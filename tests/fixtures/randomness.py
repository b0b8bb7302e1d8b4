"""Randomness coordinator fixtures for tests."""

import itertools
from datetime import datetime, timedelta, timezone

import pytest

from mintpipe.randomness import RandomnessCoordinator
from mintpipe.uploader.models import MintableCatalog


class FakeClock:
    """Manually advanced timezone-aware clock."""

    def __init__(self, start: datetime | None = None) -> None:
        self.now = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float) -> datetime:
        self.now = self.now + timedelta(seconds=seconds)
        return self.now


def sequential_tokens(prefix: str = "token"):
    counter = itertools.count(1)
    return lambda: f"{prefix}-{next(counter)}"


@pytest.fixture
def catalog() -> MintableCatalog:
    """Catalog of five references A through E."""
    return MintableCatalog.from_strings(
        ["ipfs://A", "ipfs://B", "ipfs://C", "ipfs://D", "ipfs://E"]
    )


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def coordinator(catalog: MintableCatalog, clock: FakeClock) -> RandomnessCoordinator:
    """Coordinator with a registered catalog, 0.01 minimum stake and 60s timeout."""
    return RandomnessCoordinator(
        catalog=catalog,
        minimum_stake=0.01,
        timeout=60,
        clock=clock,
        token_factory=sequential_tokens(),
    )
