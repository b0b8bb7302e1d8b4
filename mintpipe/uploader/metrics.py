"""Prometheus metrics for the upload pipeline."""

from prometheus_client import Counter, Histogram

UPLOADS = Counter(
    "mintpipe_uploads_total",
    "Total number of content store uploads",
    ["kind", "status"],  # kind: blob, document; status: success, failure
)

UPLOAD_RETRIES = Counter(
    "mintpipe_upload_retries_total",
    "Total number of upload retry attempts",
    ["kind"],
)

BATCH_DURATION = Histogram(
    "mintpipe_upload_batch_seconds",
    "Time spent uploading a full asset batch",
)
