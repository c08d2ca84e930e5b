"""HTTP API for aggregated search."""

from src.api.server import create_app, run_server

__all__ = ["create_app", "run_server"]
