from typing import Optional
from pydantic import BaseModel, Field, field_validator


class SerpApiSettings(BaseModel):
    """SerpAPI connection settings"""

    api_key: str = ""
    base_url: str = Field(
        default="https://serpapi.com/search.json", pattern=r"^https?://"
    )


class AggregatorSettings(BaseModel):
    """Fan-out settings"""

    # None keeps the HTTP client's own default
    word_timeout_seconds: Optional[float] = Field(default=None, gt=0, le=600)


class LoggingSettings(BaseModel):
    """Structured logging settings"""

    level: str = "INFO"
    json_output: bool = True

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        upper = v.upper()
        if upper not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            raise ValueError(f"Unknown log level: {v}")
        return upper


class ServerSettings(BaseModel):
    """HTTP server settings"""

    host: str = "0.0.0.0"
    port: int = Field(default=8000, ge=1, le=65535)


class AppConfig(BaseModel):
    """Root configuration"""

    serpapi: SerpApiSettings = Field(default_factory=SerpApiSettings)
    aggregator: AggregatorSettings = Field(default_factory=AggregatorSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    server: ServerSettings = Field(default_factory=ServerSettings)

    # Serve deterministic offline results instead of calling SerpAPI
    use_mock: bool = False
