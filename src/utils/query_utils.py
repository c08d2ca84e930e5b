"""Query utilities: splitting a multi-word query into searchable words."""

import re
from typing import List, Optional

_WHITESPACE = re.compile(r"\s+")


def decompose_query(query: Optional[str]) -> List[str]:
    """Split a query into non-empty whitespace-separated words.

    Splits on runs of any whitespace (spaces, tabs, newlines). Never raises:
    None, empty and whitespace-only input produce an empty list.

    Args:
        query: Raw query string.

    Returns:
        Words in their original order.
    """
    if not query:
        return []

    return [word for word in _WHITESPACE.split(query) if word]
