"""Prometheus metrics for the randomness coordinator."""

from prometheus_client import Counter, Gauge

RANDOMNESS_REQUESTS = Counter(
    "mintpipe_randomness_requests_total",
    "Randomness request events by outcome",
    # issued, insufficient_stake, already_pending, fulfilled, cancelled,
    # timed_out, unknown_fulfillment
    ["outcome"],
)

PENDING_REQUESTS = Gauge(
    "mintpipe_pending_requests",
    "Number of randomness requests awaiting fulfillment",
)
