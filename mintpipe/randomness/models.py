"""Randomness request models."""

from datetime import datetime
from decimal import Decimal
from enum import Enum

from pydantic import BaseModel, ConfigDict

from mintpipe.content_store.models import ContentReference

Stake = int | float | Decimal


class RequestStatus(str, Enum):
    """Request status enum."""

    PENDING = "pending"
    FULFILLED = "fulfilled"
    TIMED_OUT = "timed_out"
    CANCELLED = "cancelled"


class PendingRequest(BaseModel):
    """One in-flight randomness request."""

    token: str
    requester_id: str
    created_at: datetime
    supplied_stake: Stake
    status: RequestStatus = RequestStatus.PENDING


class RandomnessRequested(BaseModel):
    """Signal emitted for an external oracle when a request is issued."""

    model_config = ConfigDict(frozen=True)

    token: str
    requester_id: str
    minimum_stake: Stake
    supplied_stake: Stake
    requested_at: datetime


class SelectionResult(BaseModel):
    """Outcome of a fulfilled request."""

    model_config = ConfigDict(frozen=True)

    token: str
    requester_id: str
    random_value: int
    selected_index: int
    reference: ContentReference
    token_id: int
    fulfilled_at: datetime


class ExpiredRequest(BaseModel):
    """A request moved to TimedOut by a timeout sweep."""

    model_config = ConfigDict(frozen=True)

    token: str
    requester_id: str
    created_at: datetime
