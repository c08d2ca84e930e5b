"""Validate command for search input.

Runs the search validator without issuing any request.
"""

from typing import List

import typer

from src.services.search_validator import SearchValidator
from src.cli.utils import handle_errors, display_success, display_error


@handle_errors
def validate_command(
    query: str = typer.Argument(..., help="Query to validate"),
    engines: List[str] = typer.Option(
        ..., "--engine", "-e", help="Search engine (repeatable)"
    ),
):
    """Check a query and engine selection against the search rules."""
    result = SearchValidator().validate(query, engines)
    if not result.is_valid:
        display_error(f"Validation failed: {result.error_message}")
        raise typer.Exit(code=1)

    display_success("Search request is valid! ✅")
