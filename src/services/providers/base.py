from abc import ABC, abstractmethod

from src.models.search import ProviderConfig, ProviderResponse


class SearchProvider(ABC):
    """Abstract base class for result-count search backends

    A backend performs exactly one outbound call per fetch() and reports the
    outcome as a ProviderResponse. Implementations must not raise for
    transport, status or parse failures; those become failed responses.
    """

    @abstractmethod
    async def fetch(self, word: str, config: ProviderConfig) -> ProviderResponse:
        """Fetch the raw response document for one word from one provider

        Args:
            word: Single query word (not yet encoded)
            config: Provider configuration from the registry

        Returns:
            ProviderResponse carrying the parsed JSON document or an error
        """
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Backend name for logging and identification"""
        pass

    @property
    @abstractmethod
    def requires_api_key(self) -> bool:
        """Whether this backend requires an API key"""
        pass
