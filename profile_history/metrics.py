"""
Prometheus metrics for the profile history service.

Tracks HTTP traffic, history mutations and key-value store operations.
"""

from fastapi import Response
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Histogram, generate_latest

# Request metrics
http_requests_total = Counter(
    "profile_history_http_requests_total",
    "Total HTTP requests",
    ["method", "endpoint", "status"],
)

http_request_duration_seconds = Histogram(
    "profile_history_http_request_duration_seconds",
    "HTTP request duration in seconds",
    ["method", "endpoint"],
    buckets=(0.001, 0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5),
)

# History metrics
history_operations_total = Counter(
    "profile_history_operations_total",
    "History and starring operations",
    ["operation"],
)

# Store metrics
store_operations_total = Counter(
    "profile_history_store_operations_total",
    "Key-value store operations",
    ["backend", "operation", "status"],
)


def track_store_operation(backend: str, operation: str, success: bool) -> None:
    store_operations_total.labels(
        backend=backend, operation=operation, status="success" if success else "error"
    ).inc()


def track_history_operation(operation: str) -> None:
    history_operations_total.labels(operation=operation).inc()


async def metrics_endpoint() -> Response:
    """Prometheus metrics endpoint."""
    return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
