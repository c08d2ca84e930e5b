"""Result count extraction from raw provider responses.

Providers differ in whether they expose an authoritative total, so a count
is derived with three strategies in fixed priority order:

1. ``search_information.total_results`` (most accurate)
2. ``answer_box.result`` (single-answer queries)
3. ``organic_results`` length times a per-provider multiplier (estimate)

The first strategy yielding a value greater than zero wins. When none does,
the count is 0, which also covers "could not be determined".
"""

import re
from typing import Any, Dict, Optional

import structlog

from src.observability.metrics import EXTRACTION_STRATEGY

logger = structlog.get_logger()

_INTEGER = re.compile(r"^[+-]?\d+$", re.ASCII)


def _parse_int(value: Any, strip: str) -> int:
    """Parse a native number or formatted numeric string. Malformed -> 0."""
    if value is None or isinstance(value, bool):
        return 0

    if isinstance(value, int):
        return value

    if isinstance(value, float):
        return int(value) if value.is_integer() else 0

    if not isinstance(value, str):
        return 0

    cleaned = value
    for ch in strip:
        cleaned = cleaned.replace(ch, "")
    cleaned = cleaned.strip()

    if not _INTEGER.match(cleaned):
        return 0
    return int(cleaned)


class ResultExtractor:
    """Extracts a single integer result count from a provider document."""

    def from_search_information(self, document: Optional[Dict[str, Any]]) -> int:
        """Strategy 1: the total-results field, numeric or comma-formatted."""
        if not isinstance(document, dict):
            return 0

        section = document.get("search_information")
        if isinstance(section, dict):
            count = _parse_int(section.get("total_results"), strip=",")
            if count > 0:
                return count

        return _parse_int(document.get("total_results"), strip=",")

    def from_answer_box(self, document: Optional[Dict[str, Any]]) -> int:
        """Strategy 2: the featured answer, with commas and spaces removed."""
        if not isinstance(document, dict):
            return 0

        section = document.get("answer_box")
        if not isinstance(section, dict):
            return 0

        return _parse_int(section.get("result"), strip=", ")

    def estimate_from_organic_results(
        self, document: Optional[Dict[str, Any]], multiplier: int
    ) -> int:
        """Strategy 3: sample size times multiplier."""
        if not isinstance(document, dict) or multiplier <= 0:
            return 0

        results = document.get("organic_results")
        if isinstance(results, list) and results:
            return len(results) * multiplier

        return 0

    def extract(
        self, document: Optional[Dict[str, Any]], fallback_multiplier: int
    ) -> int:
        """Apply all strategies in priority order.

        Args:
            document: Parsed provider response, or None if the call failed.
            fallback_multiplier: Provider's organic-results multiplier.

        Returns:
            First positive count, or 0.
        """
        if document is None:
            return 0

        count = self.from_search_information(document)
        if count > 0:
            EXTRACTION_STRATEGY.labels(strategy="search_information").inc()
            return count

        count = self.from_answer_box(document)
        if count > 0:
            EXTRACTION_STRATEGY.labels(strategy="answer_box").inc()
            return count

        count = self.estimate_from_organic_results(document, fallback_multiplier)
        if count > 0:
            EXTRACTION_STRATEGY.labels(strategy="organic_estimate").inc()
            return count

        EXTRACTION_STRATEGY.labels(strategy="none").inc()
        logger.debug("extraction_yielded_zero", keys=sorted(document.keys()))
        return 0
