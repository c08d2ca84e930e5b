"""Custom exceptions for the search aggregator

This module defines the exception hierarchy for a search request:
- Base exception for all search errors
- Request-fatal errors (unsupported provider)
- Locally recovered errors (provider call failures)
- Configuration errors

All exceptions inherit from SearchError to allow catching all search-related
errors in a single except block when needed.
"""


class SearchError(Exception):
    """Base exception for all search errors

    Use this to catch any error raised by the aggregator:
    ```python
    try:
        totals = await aggregator.aggregate(query, engines)
    except SearchError as e:
        logger.error("search_failed", error=str(e))
    ```
    """

    pass


class UnsupportedProviderError(SearchError, ValueError):
    """Requested provider is not in the registry

    Raised when:
    - A provider identifier has no registry entry (case-insensitive)

    This is request-fatal and is raised before any network call is made.
    """

    def __init__(self, provider: str) -> None:
        super().__init__(f"Unsupported search engine: {provider}")
        self.provider = provider


class ProviderCallError(SearchError):
    """A single (word, provider) call failed

    Raised when:
    - HTTP request returns a non-success status
    - Network timeout or connection error
    - Response body is not a JSON object

    Never escapes the provider client: it is converted into a failed
    ProviderResponse and the word contributes 0 to the provider total.
    """

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


class ConfigValidationError(SearchError):
    """Configuration validation failed

    Raised when:
    - The config file cannot be read
    - YAML is malformed or env substitution fails
    - Values fail pydantic validation
    """

    pass
