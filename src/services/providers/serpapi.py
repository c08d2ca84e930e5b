import aiohttp
import asyncio
import time
from typing import Optional
from urllib.parse import quote
import structlog

from src.services.providers.base import SearchProvider
from src.models.search import ProviderConfig, ProviderResponse
from src.observability.metrics import PROVIDER_REQUESTS, PROVIDER_REQUEST_DURATION
from src.utils.exceptions import ProviderCallError

logger = structlog.get_logger()


class SerpApiProvider(SearchProvider):
    """Fetch raw search responses for any engine through SerpAPI"""

    BASE_URL = "https://serpapi.com/search.json"

    def __init__(
        self,
        api_key: str,
        base_url: Optional[str] = None,
        session: Optional[aiohttp.ClientSession] = None,
    ):
        self.api_key = api_key
        self.base_url = base_url or self.BASE_URL
        self._session = session

    @property
    def name(self) -> str:
        """Provider name"""
        return "serpapi"

    @property
    def requires_api_key(self) -> bool:
        """SerpAPI requires an API key"""
        return True

    def build_url(self, word: str, config: ProviderConfig) -> str:
        """Build the request URL with the provider's own query parameter"""
        return (
            f"{self.base_url}?engine={quote(config.engine_name, safe='')}"
            f"&{config.query_param}={quote(word, safe='')}"
            f"&api_key={quote(self.api_key, safe='')}"
        )

    async def fetch(self, word: str, config: ProviderConfig) -> ProviderResponse:
        """Issue one GET and return the parsed document or a failure"""
        url = self.build_url(word, config)
        provider = config.identifier
        start = time.perf_counter()

        try:
            if self._session is not None:
                data, status = await self._get_json(self._session, url, config)
            else:
                async with aiohttp.ClientSession() as session:
                    data, status = await self._get_json(session, url, config)

        except ProviderCallError as e:
            PROVIDER_REQUESTS.labels(provider=provider, status="failed").inc()
            return ProviderResponse.failed(provider, word, str(e), status=e.status)

        except asyncio.TimeoutError:
            logger.error("provider_timeout", provider=provider, word=word)
            PROVIDER_REQUESTS.labels(provider=provider, status="failed").inc()
            return ProviderResponse.failed(provider, word, "Request timed out")

        except (aiohttp.ClientError, ValueError) as e:
            logger.error(
                "provider_request_failed",
                provider=provider,
                word=word,
                error_type=type(e).__name__,
                error=str(e),
            )
            PROVIDER_REQUESTS.labels(provider=provider, status="failed").inc()
            return ProviderResponse.failed(provider, word, str(e))

        finally:
            PROVIDER_REQUEST_DURATION.labels(provider=provider).observe(
                time.perf_counter() - start
            )

        PROVIDER_REQUESTS.labels(provider=provider, status="success").inc()
        logger.debug("provider_response_received", provider=provider, word=word)
        return ProviderResponse.ok(provider, word, data, status=status)

    async def _get_json(
        self, session: aiohttp.ClientSession, url: str, config: ProviderConfig
    ) -> tuple:
        async with session.get(url) as response:
            if not 200 <= response.status < 300:
                text = await response.text()
                logger.error(
                    "provider_http_error",
                    provider=config.identifier,
                    status=response.status,
                    body=text,
                )
                raise ProviderCallError(
                    f"{config.identifier} returned status {response.status}",
                    status=response.status,
                )

            data = await response.json(content_type=None)

        if not isinstance(data, dict):
            logger.error(
                "provider_invalid_payload",
                provider=config.identifier,
                payload_type=type(data).__name__,
            )
            raise ProviderCallError(
                f"{config.identifier} returned a non-object JSON document",
                status=response.status,
            )

        return data, response.status
