"""Validation of search requests before they reach the aggregator."""

from typing import List, Optional

import structlog

from src.models.search import ValidationResult
from src.services.providers.registry import ProviderRegistry, get_default_registry
from src.utils.security import InputValidation

logger = structlog.get_logger()

MAX_QUERY_LENGTH = 500


class SearchValidator:
    """Business-rule validation of the query and the selected engines.

    The aggregator trusts its inputs; this validator is the gate in front of
    it (API and CLI).
    """

    def __init__(self, registry: Optional[ProviderRegistry] = None):
        self.registry = registry or get_default_registry()

    def validate_search_query(self, query: Optional[str]) -> ValidationResult:
        if query is None or not query.strip():
            return ValidationResult.failure("Search query cannot be empty.")

        if len(query) > MAX_QUERY_LENGTH:
            return ValidationResult.failure(
                f"Search query is too long. Maximum {MAX_QUERY_LENGTH} "
                "characters allowed."
            )

        if InputValidation.find_sql_injection(query) or InputValidation.contains_xss(
            query
        ):
            return ValidationResult.failure(
                "Invalid characters detected in search query."
            )

        if not InputValidation.has_only_allowed_chars(query):
            return ValidationResult.failure(
                "Search query contains invalid characters. Only letters, "
                "numbers, spaces, and basic punctuation are allowed."
            )

        return ValidationResult.success()

    def validate_search_engines(
        self, search_engines: Optional[List[str]]
    ) -> ValidationResult:
        if not search_engines:
            return ValidationResult.failure(
                "At least one search engine must be selected."
            )

        allowed = self.registry.supported_identifiers
        if len(search_engines) > len(allowed):
            return ValidationResult.failure(
                f"Too many search engines selected. Maximum {len(allowed)} allowed."
            )

        for engine in search_engines:
            if not isinstance(engine, str) or not engine.strip():
                return ValidationResult.failure("Search engine name cannot be empty.")

            if self.registry.get(engine) is None:
                logger.info("search_engine_rejected", engine=engine)
                return ValidationResult.failure(
                    f"Invalid search engine: {engine}. "
                    f"Allowed engines are: {', '.join(allowed)}"
                )

        return ValidationResult.success()

    def validate(
        self, query: Optional[str], search_engines: Optional[List[str]]
    ) -> ValidationResult:
        """Validate query then engines, returning the first failure."""
        result = self.validate_search_query(query)
        if not result.is_valid:
            return result
        return self.validate_search_engines(search_engines)
