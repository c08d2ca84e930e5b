"""Provider registry: the fixed table of supported search engines."""

from types import MappingProxyType
from typing import Iterable, List, Mapping, Optional

import structlog

from src.models.search import ProviderConfig
from src.utils.exceptions import UnsupportedProviderError

logger = structlog.get_logger()


DEFAULT_PROVIDERS = (
    ProviderConfig(
        identifier="google",
        engine_name="google",
        query_param="q",
        fallback_multiplier=100000,
        display_name="Google",
    ),
    ProviderConfig(
        identifier="bing",
        engine_name="bing",
        query_param="q",
        fallback_multiplier=50000,
        display_name="Bing",
    ),
    ProviderConfig(
        identifier="yahoo",
        engine_name="yahoo",
        query_param="p",
        fallback_multiplier=50000,
        display_name="Yahoo",
    ),
    ProviderConfig(
        identifier="duckduckgo",
        engine_name="duckduckgo",
        query_param="q",
        fallback_multiplier=25000,
        display_name="DuckDuckGo",
    ),
    ProviderConfig(
        identifier="baidu",
        engine_name="baidu",
        query_param="q",
        fallback_multiplier=30000,
        display_name="Baidu",
    ),
    ProviderConfig(
        identifier="yandex",
        engine_name="yandex",
        query_param="text",
        fallback_multiplier=40000,
        display_name="Yandex",
    ),
)


def _normalize(identifier: str) -> str:
    return identifier.strip().lower()


class ProviderRegistry:
    """Read-only, case-insensitive lookup of provider configurations.

    Built once at startup and shared by reference. There is no mutation API;
    the underlying mapping is a MappingProxyType.
    """

    def __init__(self, configs: Iterable[ProviderConfig]):
        table = {}
        for config in configs:
            key = _normalize(config.identifier)
            if key in table:
                raise ValueError(f"Duplicate provider identifier: {key}")
            table[key] = config
        self._configs: Mapping[str, ProviderConfig] = MappingProxyType(table)

    def lookup(self, identifier: str) -> ProviderConfig:
        """Resolve a provider identifier.

        Raises:
            UnsupportedProviderError: If the identifier is not registered.
        """
        if not isinstance(identifier, str):
            raise UnsupportedProviderError(str(identifier))

        config = self._configs.get(_normalize(identifier))
        if config is None:
            logger.warning("unsupported_provider", provider=identifier)
            raise UnsupportedProviderError(identifier)
        return config

    def get(self, identifier: str) -> Optional[ProviderConfig]:
        """Like lookup() but returns None for unknown identifiers."""
        if not isinstance(identifier, str):
            return None
        return self._configs.get(_normalize(identifier))

    def __contains__(self, identifier: object) -> bool:
        return isinstance(identifier, str) and _normalize(identifier) in self._configs

    def __len__(self) -> int:
        return len(self._configs)

    @property
    def configs(self) -> Mapping[str, ProviderConfig]:
        return self._configs

    @property
    def supported_identifiers(self) -> List[str]:
        return list(self._configs.keys())

    @property
    def display_names(self) -> List[str]:
        return [c.display_name or c.identifier for c in self._configs.values()]


_default_registry: Optional[ProviderRegistry] = None


def get_default_registry() -> ProviderRegistry:
    """Get the process-wide registry seeded with DEFAULT_PROVIDERS."""
    global _default_registry
    if _default_registry is None:
        _default_registry = ProviderRegistry(DEFAULT_PROVIDERS)
    return _default_registry
