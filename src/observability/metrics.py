"""Prometheus metrics definitions for the search aggregator.

Defines counters and histograms for monitoring:
- Search request throughput and latency
- Per-provider call outcomes and latency
- Which extraction strategy produced each count

Usage:
    from src.observability.metrics import (
        SEARCHES_TOTAL,
        PROVIDER_REQUESTS,
        PROVIDER_REQUEST_DURATION,
    )

    # Increment counter
    PROVIDER_REQUESTS.labels(provider="google", status="success").inc()

    # Track histogram
    with PROVIDER_REQUEST_DURATION.labels(provider="google").time():
        await fetch()

Metrics are exposed via the /metrics endpoint of the API server.
"""

from prometheus_client import (
    Counter,
    Histogram,
    CollectorRegistry,
    generate_latest,
    CONTENT_TYPE_LATEST,
)

# Custom registry to avoid conflicts with default registry
REGISTRY = CollectorRegistry(auto_describe=True)

# =============================================================================
# COUNTERS - Monotonically increasing values
# =============================================================================

SEARCHES_TOTAL = Counter(
    name="hitcount_searches_total",
    documentation="Total number of aggregated search requests",
    labelnames=["status"],  # success, rejected
    registry=REGISTRY,
)

PROVIDER_REQUESTS = Counter(
    name="hitcount_provider_requests_total",
    documentation="Total outbound provider calls",
    labelnames=["provider", "status"],  # google/bing/..., success/failed/timeout
    registry=REGISTRY,
)

EXTRACTION_STRATEGY = Counter(
    name="hitcount_extraction_strategy_total",
    documentation="Extraction strategy that produced the count",
    labelnames=["strategy"],  # search_information, answer_box, organic_estimate, none
    registry=REGISTRY,
)

# =============================================================================
# HISTOGRAMS - Distribution of values
# =============================================================================

SEARCH_DURATION = Histogram(
    name="hitcount_search_duration_seconds",
    documentation="End-to-end aggregated search duration in seconds",
    buckets=(0.1, 0.25, 0.5, 1, 2, 5, 10, 30, 60, float("inf")),
    registry=REGISTRY,
)

PROVIDER_REQUEST_DURATION = Histogram(
    name="hitcount_provider_request_duration_seconds",
    documentation="Single provider call duration in seconds",
    labelnames=["provider"],
    buckets=(0.05, 0.1, 0.25, 0.5, 1, 2, 5, 10, 30, float("inf")),
    registry=REGISTRY,
)


# =============================================================================
# UTILITY FUNCTIONS
# =============================================================================


def get_metrics_text() -> bytes:
    """Generate Prometheus metrics in text format.

    Returns:
        UTF-8 encoded metrics in Prometheus exposition format.
    """
    return generate_latest(REGISTRY)


def get_metrics_content_type() -> str:
    """Get the content type for Prometheus metrics response."""
    return CONTENT_TYPE_LATEST
