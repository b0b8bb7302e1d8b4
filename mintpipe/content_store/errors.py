"""Content store error types."""


class StoreError(Exception):
    """Base class for content store failures."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class StoreUnavailable(StoreError):
    """Transient failure; the upload may be retried."""


class StorePermanentFailure(StoreError):
    """Non-retryable failure, e.g. the store rejected the payload."""
