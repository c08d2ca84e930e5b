"""Orchestration module for concurrent search fan-out."""

from src.orchestration.search_aggregator import SearchAggregator, create_aggregator

__all__ = [
    "SearchAggregator",
    "create_aggregator",
]
