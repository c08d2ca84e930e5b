"""Search models: provider configuration, per-call responses and results."""

from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, ConfigDict


class ProviderConfig(BaseModel):
    """Static configuration for one search provider"""

    model_config = ConfigDict(frozen=True)

    identifier: str = Field(..., min_length=1, description="Lowercase lookup key")
    engine_name: str = Field(..., min_length=1, description="SerpAPI engine name")
    query_param: str = Field(..., min_length=1, description="Query parameter name")
    fallback_multiplier: int = Field(
        ..., ge=0, description="Estimate per organic result when no total exists"
    )
    display_name: str = ""


class ProviderResponse(BaseModel):
    """Outcome of a single (word, provider) call.

    Either carries the parsed JSON document or describes the failure.
    Failures never propagate as exceptions past the provider client.
    """

    provider: str
    word: str
    document: Optional[Dict[str, Any]] = None
    error: Optional[str] = None
    status: Optional[int] = None

    @property
    def success(self) -> bool:
        return self.document is not None

    @classmethod
    def ok(
        cls, provider: str, word: str, document: Dict[str, Any], status: int = 200
    ) -> "ProviderResponse":
        return cls(provider=provider, word=word, document=document, status=status)

    @classmethod
    def failed(
        cls, provider: str, word: str, error: str, status: Optional[int] = None
    ) -> "ProviderResponse":
        return cls(provider=provider, word=word, error=error, status=status)


class SearchRequest(BaseModel):
    """Incoming search request"""

    model_config = ConfigDict(populate_by_name=True)

    query: str = ""
    search_engines: List[str] = Field(default_factory=list, alias="searchEngines")


class SearchResult(BaseModel):
    """Per-engine totals for a query"""

    model_config = ConfigDict(populate_by_name=True)

    query: str
    search_engines: List[str] = Field(default_factory=list, alias="searchEngines")
    engine_totals: Dict[str, int] = Field(
        default_factory=dict, alias="engineTotals"
    )


class ValidationResult(BaseModel):
    """Result of validating user input"""

    is_valid: bool
    error_message: str = ""

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls(is_valid=True)

    @classmethod
    def failure(cls, message: str) -> "ValidationResult":
        return cls(is_valid=False, error_message=message)
