"""Deterministic offline search backend.

Content-addressed: the same (word, engine) pair always yields the same
document, so aggregation can be tested independently of network variance.
"""

import asyncio
import hashlib
from typing import Dict, Iterable, List, Optional, Set, Tuple

import structlog

from src.services.providers.base import SearchProvider
from src.models.search import ProviderConfig, ProviderResponse

logger = structlog.get_logger()

BASE_COUNTS: Dict[str, int] = {
    "google": 1_000_000,
    "bing": 750_000,
    "yahoo": 500_000,
    "duckduckgo": 250_000,
    "baidu": 800_000,
    "yandex": 600_000,
}

VARIATION_RANGE = 100_000


def word_variation(word: str) -> int:
    """Stable per-word offset in [0, VARIATION_RANGE)."""
    digest = hashlib.sha256(word.encode("utf-8")).hexdigest()
    return int(digest, 16) % VARIATION_RANGE


def expected_count(word: str, engine: str) -> int:
    """Count the mock backend reports for a word on an engine (0 if unknown)."""
    base = BASE_COUNTS.get(engine.lower())
    if base is None:
        return 0
    return base + word_variation(word)


class MockSearchProvider(SearchProvider):
    """Returns SerpAPI-shaped documents without any network access."""

    def __init__(
        self,
        delay_seconds: float = 0.0,
        failing_words: Optional[Iterable[str]] = None,
        base_counts: Optional[Dict[str, int]] = None,
    ):
        self.delay_seconds = delay_seconds
        self.failing_words: Set[str] = set(failing_words or [])
        self.base_counts = dict(base_counts) if base_counts else dict(BASE_COUNTS)
        self.calls: List[Tuple[str, str]] = []

    @property
    def name(self) -> str:
        return "mock"

    @property
    def requires_api_key(self) -> bool:
        return False

    async def fetch(self, word: str, config: ProviderConfig) -> ProviderResponse:
        self.calls.append((word, config.identifier))

        if self.delay_seconds > 0:
            await asyncio.sleep(self.delay_seconds)

        if word in self.failing_words:
            logger.warning(
                "mock_provider_failure", provider=config.identifier, word=word
            )
            return ProviderResponse.failed(
                config.identifier, word, "Simulated failure", status=503
            )

        base = self.base_counts.get(config.engine_name.lower())
        if base is None:
            return ProviderResponse.ok(config.identifier, word, {})

        document = {
            "search_metadata": {"status": "Success", "engine": config.engine_name},
            "search_information": {"total_results": base + word_variation(word)},
        }
        return ProviderResponse.ok(config.identifier, word, document)
