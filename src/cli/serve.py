"""Serve command: run the HTTP search API."""

from pathlib import Path
from typing import Optional

import typer

from src.cli.utils import load_config, handle_errors, display_info
from src.orchestration.search_aggregator import create_aggregator


@handle_errors
def serve_command(
    host: Optional[str] = typer.Option(None, "--host", "-h", help="Bind host"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Bind port"),
    config_path: Path = typer.Option(
        "config/hitcount.yaml",
        "--config",
        "-c",
        help="Path to config YAML",
    ),
    mock: bool = typer.Option(
        False, "--mock", help="Use deterministic offline results"
    ),
):
    """Start the search API server."""
    from src.api.server import run_server

    config = load_config(config_path)
    aggregator = create_aggregator(config, use_mock=True if mock else None)

    bind_host = host or config.server.host
    bind_port = port or config.server.port
    display_info(f"Starting search server at http://{bind_host}:{bind_port}")
    run_server(
        aggregator,
        host=bind_host,
        port=bind_port,
        log_level=config.logging.level.lower(),
    )
