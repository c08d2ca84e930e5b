"""Engines command: list supported search engines."""

import typer

from src.cli.utils import handle_errors, display_info
from src.services.providers.registry import get_default_registry


@handle_errors
def engines_command():
    """List supported search engines."""
    registry = get_default_registry()
    display_info(f"{len(registry)} supported engines:")
    for identifier, config in registry.configs.items():
        typer.echo(f" - {config.display_name} ({identifier})")
