"""Local randomness oracle for development runs.

Stands in for an external oracle/keeper: it observes issued requests and
delivers fulfillments on demand.
"""

import secrets
import threading
from collections.abc import Callable

from mintpipe.core.logging import get_logger
from mintpipe.randomness.coordinator import RandomnessCoordinator
from mintpipe.randomness.errors import UnknownRequest
from mintpipe.randomness.models import RandomnessRequested, SelectionResult

logger = get_logger(module="local_oracle")


def random_word() -> int:
    """Uniform 256-bit random value."""
    return secrets.randbits(256)


class LocalRandomnessOracle:
    """Fulfills a coordinator's requests from a local random source."""

    def __init__(
        self,
        coordinator: RandomnessCoordinator,
        random_source: Callable[[], int] = random_word,
    ) -> None:
        self.coordinator = coordinator
        self._random_source = random_source
        self._lock = threading.Lock()
        self._outstanding: dict[str, RandomnessRequested] = {}
        coordinator.add_request_listener(self._on_request)

    @property
    def outstanding(self) -> list[str]:
        """Tokens observed but not yet fulfilled by this oracle."""
        with self._lock:
            return list(self._outstanding)

    def fulfill(self, token: str, random_value: int | None = None) -> SelectionResult:
        """Deliver a fulfillment for a token.

        Args:
            token: Correlation token of the request
            random_value: Value to deliver; drawn from the random source if omitted

        Raises:
            UnknownRequest: If the coordinator no longer has the request pending
        """
        with self._lock:
            self._outstanding.pop(token, None)
        value = self._random_source() if random_value is None else random_value
        return self.coordinator.on_fulfillment(token, value)

    def fulfill_all(self) -> list[SelectionResult]:
        """Fulfill every outstanding request, skipping ones no longer pending."""
        results = []
        for token in self.outstanding:
            try:
                results.append(self.fulfill(token))
            except UnknownRequest:
                logger.info("skipping_stale_request", token=token)
        return results

    def _on_request(self, signal: RandomnessRequested) -> None:
        with self._lock:
            self._outstanding[signal.token] = signal
