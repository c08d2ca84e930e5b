"""Concurrent multi-provider search aggregation.

Two-level fan-out:
- one task per requested provider
- within each provider, one task per query word (fetch -> extract)

Per-word counts are summed per provider. Provider validation happens once,
eagerly, before any network call. Every other failure degrades to a zero
contribution so that one flaky provider never blocks the others.
"""

import asyncio
import time
from typing import Dict, List, Optional, Sequence, Tuple

import structlog

from src.models.config import AppConfig
from src.models.search import ProviderConfig, SearchRequest, SearchResult
from src.observability.context import correlation_id_context
from src.observability.metrics import (
    PROVIDER_REQUESTS,
    SEARCH_DURATION,
    SEARCHES_TOTAL,
)
from src.services.providers.base import SearchProvider
from src.services.providers.mock import MockSearchProvider
from src.services.providers.registry import ProviderRegistry, get_default_registry
from src.services.providers.serpapi import SerpApiProvider
from src.services.result_extractor import ResultExtractor
from src.utils.exceptions import UnsupportedProviderError
from src.utils.query_utils import decompose_query

logger = structlog.get_logger()


class SearchAggregator:
    """Sums result counts per provider across all words of a query."""

    def __init__(
        self,
        provider: SearchProvider,
        registry: Optional[ProviderRegistry] = None,
        extractor: Optional[ResultExtractor] = None,
        word_timeout_seconds: Optional[float] = None,
    ):
        """Initialize aggregator.

        Args:
            provider: Backend that performs the per-word calls.
            registry: Provider registry (defaults to the built-in table).
            extractor: Result extractor (created if None).
            word_timeout_seconds: Optional deadline for each (word, provider)
                call. A call exceeding it contributes 0. None keeps the
                transport's own default.
        """
        if word_timeout_seconds is not None and word_timeout_seconds <= 0:
            raise ValueError("word_timeout_seconds must be positive")

        self.provider = provider
        self.registry = registry or get_default_registry()
        self.extractor = extractor or ResultExtractor()
        self.word_timeout_seconds = word_timeout_seconds

    def resolve_providers(
        self, providers: Sequence[str]
    ) -> List[Tuple[str, ProviderConfig]]:
        """Look up every requested provider, keeping the caller's spelling.

        Raises:
            ValueError: If providers is None.
            UnsupportedProviderError: On the first unknown identifier.
        """
        if providers is None:
            raise ValueError("providers must not be None")
        return [(name, self.registry.lookup(name)) for name in providers]

    async def aggregate(self, query: str, providers: Sequence[str]) -> Dict[str, int]:
        """Compute per-provider totals for a query.

        Args:
            query: Multi-word query (already validated).
            providers: Provider identifiers as supplied by the caller.

        Returns:
            Mapping from each requested identifier (original casing) to the
            sum of its per-word counts.

        Raises:
            UnsupportedProviderError: If any provider is unknown. Raised before
                any network call.
        """
        resolved = self.resolve_providers(providers)
        words = decompose_query(query)

        logger.info(
            "search_fanout_started",
            providers=[name for name, _ in resolved],
            words=len(words),
            calls=len(resolved) * len(words),
        )

        totals = await asyncio.gather(
            *(self._provider_total(config, words) for _, config in resolved)
        )

        engine_totals: Dict[str, int] = {}
        for (name, _), total in zip(resolved, totals):
            engine_totals[name] = total

        logger.info("search_fanout_complete", totals=engine_totals)
        return engine_totals

    async def search(self, request: SearchRequest) -> SearchResult:
        """Run aggregate() for a request and wrap it in a SearchResult.

        Each call runs under its own correlation ID.
        """
        with correlation_id_context():
            start = time.perf_counter()
            try:
                totals = await self.aggregate(request.query, request.search_engines)
            except UnsupportedProviderError:
                SEARCHES_TOTAL.labels(status="rejected").inc()
                raise
            finally:
                SEARCH_DURATION.observe(time.perf_counter() - start)

            SEARCHES_TOTAL.labels(status="success").inc()
            return SearchResult(
                query=request.query,
                search_engines=list(request.search_engines),
                engine_totals=totals,
            )

    async def _provider_total(self, config: ProviderConfig, words: List[str]) -> int:
        """Count every word for one provider concurrently and sum."""
        if not words:
            return 0

        results = await asyncio.gather(
            *(self._word_count(word, config) for word in words),
            return_exceptions=True,
        )

        total = 0
        for word, result in zip(words, results):
            if isinstance(result, BaseException):
                logger.error(
                    "word_count_failed",
                    provider=config.identifier,
                    word=word,
                    error_type=type(result).__name__,
                    error=str(result),
                )
                continue
            total += result

        logger.debug("provider_total", provider=config.identifier, total=total)
        return total

    async def _word_count(self, word: str, config: ProviderConfig) -> int:
        """Fetch and extract the count for one (word, provider) pair."""
        if self.word_timeout_seconds is None:
            response = await self.provider.fetch(word, config)
        else:
            try:
                response = await asyncio.wait_for(
                    self.provider.fetch(word, config),
                    timeout=self.word_timeout_seconds,
                )
            except asyncio.TimeoutError:
                logger.warning(
                    "provider_call_deadline_exceeded",
                    provider=config.identifier,
                    word=word,
                    timeout=self.word_timeout_seconds,
                )
                PROVIDER_REQUESTS.labels(
                    provider=config.identifier, status="timeout"
                ).inc()
                return 0

        if not response.success:
            logger.warning(
                "provider_call_failed",
                provider=config.identifier,
                word=word,
                status=response.status,
                error=response.error,
            )
            return 0

        return self.extractor.extract(response.document, config.fallback_multiplier)


def create_aggregator(
    config: AppConfig, use_mock: Optional[bool] = None
) -> SearchAggregator:
    """Build an aggregator wired to the backend the configuration selects.

    Args:
        config: Loaded application configuration.
        use_mock: Overrides config.use_mock when not None.
    """
    mock = config.use_mock if use_mock is None else use_mock

    provider: SearchProvider
    if mock:
        provider = MockSearchProvider()
    else:
        provider = SerpApiProvider(
            api_key=config.serpapi.api_key,
            base_url=config.serpapi.base_url,
        )

    logger.info("aggregator_created", backend=provider.name)
    return SearchAggregator(
        provider=provider,
        word_timeout_seconds=config.aggregator.word_timeout_seconds,
    )
