"""Periodic timeout sweep for pending randomness requests."""

import asyncio
from collections.abc import Callable
from typing import Any

from mintpipe.core.config import Settings
from mintpipe.core.logging import get_logger
from mintpipe.randomness.coordinator import RandomnessCoordinator
from mintpipe.randomness.models import ExpiredRequest

logger = get_logger(module="timeout_watcher")

ExpiryCallback = Callable[[list[ExpiredRequest]], None]


class TimeoutWatcher:
    """Runs ``check_timeouts`` on a coordinator every ``interval`` seconds."""

    def __init__(
        self,
        coordinator: RandomnessCoordinator,
        interval: float = 5.0,
        on_expired: ExpiryCallback | None = None,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.coordinator = coordinator
        self.interval = interval
        self.on_expired = on_expired
        self._task: asyncio.Task[None] | None = None
        self._stopping: asyncio.Event | None = None

    @classmethod
    def from_settings(
        cls,
        coordinator: RandomnessCoordinator,
        config: Settings,
        on_expired: ExpiryCallback | None = None,
    ) -> "TimeoutWatcher":
        return cls(coordinator, interval=config.TIMEOUT_SWEEP_INTERVAL, on_expired=on_expired)

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def sweep(self) -> list[ExpiredRequest]:
        """Run one timeout check and report expiries."""
        expired = self.coordinator.check_timeouts()
        if expired:
            logger.info("requests_expired", count=len(expired))
            if self.on_expired is not None:
                try:
                    self.on_expired(expired)
                except Exception:
                    logger.exception("expiry_callback_failed")
        return expired

    async def start(self) -> None:
        """Start the background sweep task."""
        if self.running:
            return
        self._stopping = asyncio.Event()
        self._task = asyncio.create_task(self._run())

    async def stop(self) -> None:
        """Stop the background sweep task and wait for it to finish."""
        if self._task is None or self._stopping is None:
            return
        self._stopping.set()
        await self._task
        self._task = None

    async def _run(self) -> None:
        stopping = self._stopping
        if stopping is None:
            return
        while not stopping.is_set():
            try:
                self.sweep()
            except Exception:
                logger.exception("timeout_sweep_failed")
            try:
                await asyncio.wait_for(stopping.wait(), timeout=self.interval)
            except asyncio.TimeoutError:
                pass

    async def __aenter__(self) -> "TimeoutWatcher":
        await self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.stop()
