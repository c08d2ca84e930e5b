"""Hitcount CLI Package.

Provides the command-line interface for aggregated search result counts.

Usage:
    python -m src.cli search "hello world" -e google -e bing
    python -m src.cli search "hello world" -e google --mock --json
    python -m src.cli engines
    python -m src.cli validate "hello world" -e google
    python -m src.cli serve --port 8000
"""

import typer

from src.cli.search import search_command
from src.cli.engines import engines_command
from src.cli.validate import validate_command
from src.cli.serve import serve_command

# Create main app
app = typer.Typer(help="Hitcount: aggregated result counts across search engines")

# Register individual commands
app.command(name="search")(search_command)
app.command(name="engines")(engines_command)
app.command(name="validate")(validate_command)
app.command(name="serve")(serve_command)

__all__ = [
    "app",
    "search_command",
    "engines_command",
    "validate_command",
    "serve_command",
]
