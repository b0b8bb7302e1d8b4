"""Randomness request/fulfillment coordination."""

from mintpipe.randomness.coordinator import RandomnessCoordinator
from mintpipe.randomness.errors import (
    CatalogAlreadyRegistered,
    CatalogNotRegistered,
    CoordinatorError,
    InsufficientStake,
    NoPendingRequest,
    RequestAlreadyPending,
    RequestCancelled,
    RequestTimedOut,
    UnknownRequest,
)
from mintpipe.randomness.models import (
    ExpiredRequest,
    PendingRequest,
    RandomnessRequested,
    RequestStatus,
    SelectionResult,
)
from mintpipe.randomness.oracle import LocalRandomnessOracle
from mintpipe.randomness.selection import select_index
from mintpipe.randomness.watcher import TimeoutWatcher

__all__ = [
    "CatalogAlreadyRegistered",
    "CatalogNotRegistered",
    "CoordinatorError",
    "ExpiredRequest",
    "InsufficientStake",
    "LocalRandomnessOracle",
    "NoPendingRequest",
    "PendingRequest",
    "RandomnessCoordinator",
    "RandomnessRequested",
    "RequestAlreadyPending",
    "RequestCancelled",
    "RequestStatus",
    "RequestTimedOut",
    "SelectionResult",
    "TimeoutWatcher",
    "UnknownRequest",
    "select_index",
]
