"""Observability for the search aggregator.

Provides:
- Correlation ID context management for request tracing
- Structured logging with context propagation
- Prometheus metrics for monitoring

Usage:
    from src.observability import (
        correlation_id_context,
        get_logger,
        PROVIDER_REQUESTS,
    )

    with correlation_id_context():
        logger = get_logger("api")
        logger.info("search_received", engines=2)

    PROVIDER_REQUESTS.labels(provider="google", status="success").inc()
"""

from src.observability.context import (
    get_correlation_id,
    correlation_id_context,
)
from src.observability.logging import (
    get_logger,
    configure_logging,
    configure_from_settings,
    add_correlation_id_processor,
    bind_context,
    clear_context,
)
from src.observability.metrics import (
    SEARCHES_TOTAL,
    PROVIDER_REQUESTS,
    EXTRACTION_STRATEGY,
    SEARCH_DURATION,
    PROVIDER_REQUEST_DURATION,
    get_metrics_text,
    get_metrics_content_type,
)

__all__ = [
    # Context
    "get_correlation_id",
    "correlation_id_context",
    # Logging
    "get_logger",
    "configure_logging",
    "configure_from_settings",
    "add_correlation_id_processor",
    "bind_context",
    "clear_context",
    # Metrics
    "SEARCHES_TOTAL",
    "PROVIDER_REQUESTS",
    "EXTRACTION_STRATEGY",
    "SEARCH_DURATION",
    "PROVIDER_REQUEST_DURATION",
    "get_metrics_text",
    "get_metrics_content_type",
]
