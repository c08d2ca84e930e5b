"""Search command: aggregated result counts from the terminal."""

import asyncio
import json
from pathlib import Path
from typing import List, Optional

import typer

from src.cli.utils import (
    load_config,
    handle_errors,
    display_error,
    display_info,
    display_warning,
)
from src.models.search import SearchRequest, SearchResult
from src.orchestration.search_aggregator import create_aggregator
from src.services.search_validator import SearchValidator


@handle_errors
def search_command(
    query: str = typer.Argument(..., help="Query; each word is searched separately"),
    engines: List[str] = typer.Option(
        ..., "--engine", "-e", help="Search engine (repeatable)"
    ),
    config_path: Path = typer.Option(
        "config/hitcount.yaml",
        "--config",
        "-c",
        help="Path to config YAML",
    ),
    mock: bool = typer.Option(
        False, "--mock", help="Use deterministic offline results"
    ),
    as_json: bool = typer.Option(False, "--json", help="Print the result as JSON"),
    timeout: Optional[float] = typer.Option(
        None, "--timeout", min=0.1, help="Per-call deadline in seconds"
    ),
):
    """Sum result counts of every query word on each engine."""
    config = load_config(config_path)

    validator = SearchValidator()
    validation = validator.validate(query, engines)
    if not validation.is_valid:
        display_error(validation.error_message)
        raise typer.Exit(code=1)

    aggregator = create_aggregator(config, use_mock=True if mock else None)
    if timeout is not None:
        aggregator.word_timeout_seconds = timeout

    if aggregator.provider.requires_api_key and not config.serpapi.api_key:
        display_warning("No SerpAPI key configured; requests will likely fail.")

    request = SearchRequest(query=query, search_engines=engines)
    result = asyncio.run(aggregator.search(request))

    if as_json:
        typer.echo(json.dumps(result.model_dump(by_alias=True), indent=2))
    else:
        _display_result(result)


def _display_result(result: SearchResult) -> None:
    display_info(f"Query: {result.query}")
    width = max(len(name) for name in result.engine_totals) if result.engine_totals else 0
    for engine, total in sorted(
        result.engine_totals.items(), key=lambda item: item[1], reverse=True
    ):
        typer.echo(f"  {engine.ljust(width)}  {total:,}")
