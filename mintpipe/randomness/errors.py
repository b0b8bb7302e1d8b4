"""Randomness coordinator error types."""

from typing import Any


class CoordinatorError(Exception):
    """Base class for coordinator errors."""


class InsufficientStake(CoordinatorError):
    """Raised when the supplied stake is below the minimum."""

    def __init__(self, supplied_stake: Any, minimum_stake: Any) -> None:
        self.supplied_stake = supplied_stake
        self.minimum_stake = minimum_stake
        super().__init__(
            f"Supplied stake {supplied_stake} is below the minimum of {minimum_stake}"
        )


class RequestAlreadyPending(CoordinatorError):
    """Raised when a requester already has a pending request."""

    def __init__(self, requester_id: str, token: str) -> None:
        self.requester_id = requester_id
        self.token = token
        super().__init__(f"Requester {requester_id} already has pending request {token}")


class UnknownRequest(CoordinatorError):
    """Raised when no pending request matches a token.

    Covers tokens that were already fulfilled, timed out, cancelled or never issued.
    """

    def __init__(self, token: str) -> None:
        self.token = token
        super().__init__(f"No pending request for token {token}")


class NoPendingRequest(CoordinatorError):
    """Raised when a requester has nothing to cancel."""

    def __init__(self, requester_id: str) -> None:
        self.requester_id = requester_id
        super().__init__(f"Requester {requester_id} has no pending request")


class CatalogNotRegistered(CoordinatorError):
    """Raised when a request is made before a catalog is registered."""

    def __init__(self) -> None:
        super().__init__("No catalog registered")


class CatalogAlreadyRegistered(CoordinatorError):
    """Raised when registering a second catalog."""

    def __init__(self) -> None:
        super().__init__("A catalog is already registered")


class RequestResolutionError(CoordinatorError):
    """Set on a request's outcome future when it ends without a selection."""

    def __init__(self, token: str, requester_id: str, reason: str) -> None:
        self.token = token
        self.requester_id = requester_id
        super().__init__(f"Request {token} for {requester_id} {reason}")


class RequestTimedOut(RequestResolutionError):
    def __init__(self, token: str, requester_id: str) -> None:
        super().__init__(token, requester_id, "timed out")


class RequestCancelled(RequestResolutionError):
    def __init__(self, token: str, requester_id: str) -> None:
        super().__init__(token, requester_id, "was cancelled")
