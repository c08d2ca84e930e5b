"""Correlation ID context management for request tracing.

Every search request runs under its own correlation ID so that the log
lines of its |providers| x |words| concurrent calls can be grouped. The ID
lives in a ContextVar, which asyncio copies into every task spawned by the
fan-out.

Usage:
    from src.observability.context import correlation_id_context

    with correlation_id_context() as corr_id:
        totals = await aggregator.aggregate(query, engines)
"""

import uuid
from contextvars import ContextVar
from contextlib import contextmanager
from typing import Optional, Generator

_correlation_id_var: ContextVar[Optional[str]] = ContextVar(
    "correlation_id", default=None
)


def get_correlation_id() -> Optional[str]:
    """Get the current correlation ID, or None if not set."""
    return _correlation_id_var.get()


@contextmanager
def correlation_id_context(
    corr_id: Optional[str] = None,
) -> Generator[str, None, None]:
    """Scope a correlation ID to a block, restoring the previous one on exit.

    Args:
        corr_id: Optional correlation ID. If None, generates a UUID4.

    Yields:
        The correlation ID in effect inside the block.
    """
    if corr_id is None:
        corr_id = str(uuid.uuid4())

    token = _correlation_id_var.set(corr_id)
    try:
        yield corr_id
    finally:
        _correlation_id_var.reset(token)
