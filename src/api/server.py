"""FastAPI search server.

Provides HTTP endpoints for:
- POST /api/search - Validate a query and return per-engine totals
- GET /api/search/engines - Supported search engines
- /live - Liveness probe
- /metrics - Prometheus metrics in text format

Usage:
    # Create and run server
    from src.api.server import run_server
    run_server(host="0.0.0.0", port=8000)

    # Or use with a custom aggregator
    from src.api.server import create_app
    app = create_app(aggregator=my_aggregator)
"""

from contextlib import asynccontextmanager
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request, Response, status
from fastapi.responses import JSONResponse, PlainTextResponse

from src.models.search import SearchRequest
from src.observability.logging import bind_context, clear_context, get_logger
from src.observability.metrics import (
    SEARCHES_TOTAL,
    get_metrics_text,
    get_metrics_content_type,
)
from src.orchestration.search_aggregator import SearchAggregator
from src.services.search_validator import SearchValidator
from src.utils.exceptions import UnsupportedProviderError

logger = get_logger("api")


def create_app(
    aggregator: SearchAggregator,
    validator: Optional[SearchValidator] = None,
    title: str = "Hitcount Search API",
    version: str = "1.0.0",
) -> FastAPI:
    """Create FastAPI application with search endpoints.

    Args:
        aggregator: Aggregator that serves search requests
        validator: Request validator (defaults to one sharing the
            aggregator's registry)
        title: API title
        version: API version

    Returns:
        Configured FastAPI application
    """
    validator = validator or SearchValidator(registry=aggregator.registry)

    @asynccontextmanager
    async def lifespan(app: FastAPI):  # pragma: no cover
        logger.info("search_server_starting", backend=aggregator.provider.name)
        yield
        logger.info("search_server_stopping")

    app = FastAPI(
        title=title,
        version=version,
        description="Aggregated result counts across web search engines",
        lifespan=lifespan,
    )

    @app.post(
        "/api/search",
        response_model=None,
        summary="Aggregated search",
        description="Search each word on each engine and sum counts per engine",
        responses={
            200: {"description": "Per-engine totals"},
            400: {"description": "Invalid query or engine selection"},
        },
    )
    async def search(request: SearchRequest, http_request: Request) -> Response:
        """Validate the request, then fan out across engines and words."""
        clear_context()
        if http_request.client is not None:
            bind_context(client_ip=http_request.client.host)

        validation = validator.validate(request.query, request.search_engines)
        if not validation.is_valid:
            SEARCHES_TOTAL.labels(status="rejected").inc()
            logger.info("search_rejected", reason=validation.error_message)
            return JSONResponse(
                content={"message": validation.error_message},
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        try:
            result = await aggregator.search(request)
        except UnsupportedProviderError as e:
            return JSONResponse(
                content={"message": str(e)},
                status_code=status.HTTP_400_BAD_REQUEST,
            )

        return JSONResponse(
            content=result.model_dump(by_alias=True),
            status_code=status.HTTP_200_OK,
        )

    @app.get(
        "/api/search/engines",
        summary="Supported engines",
    )
    async def engines() -> List[str]:
        """Display names of the supported search engines."""
        return aggregator.registry.display_names

    @app.get(
        "/live",
        response_model=None,
        summary="Liveness probe",
    )
    async def liveness_probe() -> Response:
        """Basic check that the service is running."""
        return JSONResponse(
            content={"alive": True, "message": "Service is alive"},
            status_code=status.HTTP_200_OK,
        )

    @app.get(
        "/metrics",
        response_class=PlainTextResponse,
        summary="Prometheus metrics",
    )
    async def prometheus_metrics() -> Response:
        """Prometheus metrics endpoint."""
        return Response(
            content=get_metrics_text(),
            media_type=get_metrics_content_type(),
        )

    @app.get(
        "/",
        response_model=None,
        summary="Root endpoint",
    )
    async def root() -> Dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": title,
            "version": version,
            "backend": aggregator.provider.name,
            "endpoints": {
                "search": "/api/search",
                "engines": "/api/search/engines",
                "live": "/live",
                "metrics": "/metrics",
            },
        }

    return app


def run_server(  # pragma: no cover
    aggregator: SearchAggregator,
    host: str = "0.0.0.0",
    port: int = 8000,
    log_level: str = "info",
) -> None:
    """Run search server (blocking).

    Args:
        aggregator: Aggregator that serves search requests
        host: Host to bind to
        port: Port to bind to
        log_level: Logging level
    """
    import uvicorn

    app = create_app(aggregator)
    logger.info("search_server_starting", host=host, port=port)
    uvicorn.run(app, host=host, port=port, log_level=log_level)
