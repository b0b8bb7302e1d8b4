"""Randomness request/fulfillment coordinator."""

import math
import threading
import uuid
from collections.abc import Callable
from concurrent.futures import Future
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Any, TypeVar

from mintpipe.content_store.models import ContentReference
from mintpipe.core.config import Settings
from mintpipe.core.logging import get_logger
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
from mintpipe.randomness.metrics import PENDING_REQUESTS, RANDOMNESS_REQUESTS
from mintpipe.randomness.models import (
    ExpiredRequest,
    PendingRequest,
    RandomnessRequested,
    RequestStatus,
    SelectionResult,
    Stake,
)
from mintpipe.randomness.selection import select_index
from mintpipe.uploader.models import MintableCatalog

logger = get_logger(module="randomness_coordinator")

P = TypeVar("P")

Clock = Callable[[], datetime]
RequestListener = Callable[[RandomnessRequested], None]
SelectionListener = Callable[[SelectionResult], None]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def new_token() -> str:
    return uuid.uuid4().hex


def _is_nan(value: Stake) -> bool:
    if isinstance(value, Decimal):
        return value.is_nan()
    return isinstance(value, float) and math.isnan(value)


class RandomnessCoordinator:
    """Correlates randomness requests with asynchronous fulfillments.

    Each requester may hold at most one pending request. A pending request
    leaves the table exactly once, through fulfillment, timeout or
    cancellation; all three paths take the same lock, so concurrent callers
    racing on one token see exactly one winner and the others get
    UnknownRequest or NoPendingRequest.

    Listeners and outcome futures are notified after the lock is released.
    """

    def __init__(
        self,
        catalog: MintableCatalog | None = None,
        minimum_stake: Stake = 0.01,
        timeout: timedelta | float = 300.0,
        clock: Clock = utcnow,
        token_factory: Callable[[], str] = new_token,
    ) -> None:
        """Initialize the coordinator.

        Args:
            catalog: Catalog to select from; may be registered later
            minimum_stake: Default minimum stake for requests
            timeout: Age after which a pending request times out (seconds or timedelta)
            clock: Source of timezone-aware current time
            token_factory: Produces correlation tokens
        """
        if not isinstance(timeout, timedelta):
            timeout = timedelta(seconds=timeout)
        if timeout <= timedelta(0):
            raise ValueError(f"timeout must be positive, got {timeout}")

        self._lock = threading.Lock()
        self._catalog: MintableCatalog | None = None
        self._minimum_stake = minimum_stake
        self._timeout = timeout
        self._clock = clock
        self._token_factory = token_factory

        self._pending: dict[str, PendingRequest] = {}
        self._by_requester: dict[str, str] = {}
        self._outcomes: dict[str, Future[SelectionResult]] = {}
        self._next_token_id = 0

        self._request_listeners: list[RequestListener] = []
        self._selection_listeners: list[SelectionListener] = []

        if catalog is not None:
            self.register_catalog(catalog)

    @classmethod
    def from_settings(
        cls, config: Settings, catalog: MintableCatalog | None = None
    ) -> "RandomnessCoordinator":
        return cls(
            catalog=catalog,
            minimum_stake=config.MINIMUM_STAKE,
            timeout=config.REQUEST_TIMEOUT_SECONDS,
        )

    # Catalog

    def register_catalog(self, catalog: MintableCatalog) -> None:
        """Register the fixed catalog that fulfillments select from.

        Raises:
            ValueError: If the catalog is empty
            CatalogAlreadyRegistered: If a catalog was registered before
        """
        if len(catalog) == 0:
            raise ValueError("Cannot register an empty catalog")
        with self._lock:
            if self._catalog is not None:
                raise CatalogAlreadyRegistered()
            self._catalog = catalog
        logger.info("catalog_registered", size=len(catalog))

    @property
    def catalog(self) -> MintableCatalog | None:
        return self._catalog

    def get_reference(self, index: int) -> ContentReference:
        """Reference at a catalog position."""
        return self._require_catalog()[index]

    @property
    def minimum_stake(self) -> Stake:
        return self._minimum_stake

    @property
    def timeout(self) -> timedelta:
        return self._timeout

    @property
    def next_token_id(self) -> int:
        return self._next_token_id

    # Listeners

    def add_request_listener(self, listener: RequestListener) -> None:
        """Subscribe to RandomnessRequested signals."""
        self._request_listeners.append(listener)

    def add_selection_listener(self, listener: SelectionListener) -> None:
        """Subscribe to SelectionResult signals."""
        self._selection_listeners.append(listener)

    # Operations

    def request_randomness(
        self,
        requester_id: str,
        supplied_stake: Stake,
        minimum_stake: Stake | None = None,
    ) -> str:
        """Register a randomness request and return its correlation token.

        Args:
            requester_id: Identity of the requester
            supplied_stake: Stake supplied with the request
            minimum_stake: Minimum for this request; defaults to the configured value

        Returns:
            Correlation token for the new pending request

        Raises:
            InsufficientStake: If supplied_stake < minimum_stake or is NaN
            RequestAlreadyPending: If the requester already has a pending request
            CatalogNotRegistered: If no catalog is registered
        """
        minimum = self._minimum_stake if minimum_stake is None else minimum_stake
        if _is_nan(supplied_stake) or _is_nan(minimum) or supplied_stake < minimum:
            RANDOMNESS_REQUESTS.labels(outcome="insufficient_stake").inc()
            raise InsufficientStake(supplied_stake, minimum)

        with self._lock:
            if self._catalog is None:
                raise CatalogNotRegistered()

            existing = self._by_requester.get(requester_id)
            if existing is not None:
                RANDOMNESS_REQUESTS.labels(outcome="already_pending").inc()
                raise RequestAlreadyPending(requester_id, existing)

            token = self._token_factory()
            if token in self._pending:
                raise CoordinatorError(f"Token factory returned a duplicate token {token}")

            now = self._clock()
            self._pending[token] = PendingRequest(
                token=token,
                requester_id=requester_id,
                created_at=now,
                supplied_stake=supplied_stake,
            )
            self._by_requester[requester_id] = token
            self._outcomes[token] = Future()
            PENDING_REQUESTS.set(len(self._pending))

        RANDOMNESS_REQUESTS.labels(outcome="issued").inc()
        logger.info("randomness_requested", token=token, requester_id=requester_id)

        self._notify(
            self._request_listeners,
            RandomnessRequested(
                token=token,
                requester_id=requester_id,
                minimum_stake=minimum,
                supplied_stake=supplied_stake,
                requested_at=now,
            ),
        )
        return token

    def on_fulfillment(self, token: str, random_value: int) -> SelectionResult:
        """Resolve a pending request with a delivered random value.

        Selects ``catalog[random_value mod N]``.

        Raises:
            UnknownRequest: If no pending request matches the token
            ValueError: If random_value is negative (the request stays pending)
            TypeError: If random_value is not an integer
        """
        with self._lock:
            request = self._pending.get(token)
            if request is None:
                RANDOMNESS_REQUESTS.labels(outcome="unknown_fulfillment").inc()
                logger.warning("unknown_fulfillment", token=token)
                raise UnknownRequest(token)

            catalog = self._require_catalog()
            index = select_index(random_value, len(catalog))

            future = self._evict(request, RequestStatus.FULFILLED)
            result = SelectionResult(
                token=token,
                requester_id=request.requester_id,
                random_value=random_value,
                selected_index=index,
                reference=catalog[index],
                token_id=self._next_token_id,
                fulfilled_at=self._clock(),
            )
            self._next_token_id += 1

        RANDOMNESS_REQUESTS.labels(outcome="fulfilled").inc()
        logger.info(
            "randomness_fulfilled",
            token=token,
            requester_id=result.requester_id,
            selected_index=index,
            reference=str(result.reference),
            token_id=result.token_id,
        )

        self._settle(future, result=result)
        self._notify(self._selection_listeners, result)
        return result

    def cancel(self, requester_id: str) -> PendingRequest:
        """Cancel the requester's pending request.

        Returns:
            The cancelled request

        Raises:
            NoPendingRequest: If the requester has no pending request
        """
        with self._lock:
            token = self._by_requester.get(requester_id)
            if token is None:
                raise NoPendingRequest(requester_id)
            request = self._pending[token]
            future = self._evict(request, RequestStatus.CANCELLED)

        RANDOMNESS_REQUESTS.labels(outcome="cancelled").inc()
        logger.info("randomness_cancelled", token=token, requester_id=requester_id)

        self._settle(future, error=RequestCancelled(token, requester_id))
        return request

    def check_timeouts(self, now: datetime | None = None) -> list[ExpiredRequest]:
        """Time out every pending request older than the configured timeout.

        Args:
            now: Reference time; defaults to the coordinator clock

        Returns:
            The requests that timed out in this sweep

        Raises:
            ValueError: If now is a naive datetime
        """
        now = now or self._clock()
        if now.tzinfo is None:
            raise ValueError("check_timeouts requires a timezone-aware datetime")
        expired: list[tuple[PendingRequest, Future[SelectionResult]]] = []

        with self._lock:
            stale = [
                request
                for request in self._pending.values()
                if now - request.created_at >= self._timeout
            ]
            for request in stale:
                expired.append((request, self._evict(request, RequestStatus.TIMED_OUT)))

        report = []
        for request, future in expired:
            RANDOMNESS_REQUESTS.labels(outcome="timed_out").inc()
            logger.info(
                "randomness_timed_out",
                token=request.token,
                requester_id=request.requester_id,
            )
            self._settle(future, error=RequestTimedOut(request.token, request.requester_id))
            report.append(
                ExpiredRequest(
                    token=request.token,
                    requester_id=request.requester_id,
                    created_at=request.created_at,
                )
            )
        return report

    # Queries

    def outcome(self, token: str) -> "Future[SelectionResult]":
        """Future resolved when the pending request leaves Pending.

        Resolves to a SelectionResult, or fails with RequestTimedOut or
        RequestCancelled.

        Raises:
            UnknownRequest: If the token is not pending
        """
        with self._lock:
            future = self._outcomes.get(token)
        if future is None:
            raise UnknownRequest(token)
        return future

    def pending_for(self, requester_id: str) -> PendingRequest | None:
        with self._lock:
            token = self._by_requester.get(requester_id)
            return self._pending[token].model_copy() if token else None

    def is_pending(self, token: str) -> bool:
        with self._lock:
            return token in self._pending

    @property
    def pending_count(self) -> int:
        with self._lock:
            return len(self._pending)

    # Internals

    def _require_catalog(self) -> MintableCatalog:
        if self._catalog is None:
            raise CatalogNotRegistered()
        return self._catalog

    def _evict(
        self, request: PendingRequest, status: RequestStatus
    ) -> "Future[SelectionResult]":
        """Move a request out of Pending. Caller holds the lock."""
        request.status = status
        del self._pending[request.token]
        del self._by_requester[request.requester_id]
        PENDING_REQUESTS.set(len(self._pending))
        return self._outcomes.pop(request.token)

    @staticmethod
    def _settle(
        future: "Future[SelectionResult]",
        result: SelectionResult | None = None,
        error: BaseException | None = None,
    ) -> None:
        # Callers may have cancelled the future they were handed
        if not future.set_running_or_notify_cancel():
            return
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(result)  # type: ignore[arg-type]

    @staticmethod
    def _notify(listeners: list[Callable[[P], Any]], payload: P) -> None:
        for listener in list(listeners):
            try:
                listener(payload)
            except Exception:
                logger.exception(
                    "listener_failed",
                    listener=getattr(listener, "__name__", repr(listener)),
                    signal=type(payload).__name__,
                )

    def __repr__(self) -> str:
        size = len(self._catalog) if self._catalog is not None else 0
        return (
            f"{self.__class__.__name__}(catalog_size={size}, "
            f"pending={len(self._pending)}, timeout={self._timeout})"
        )
