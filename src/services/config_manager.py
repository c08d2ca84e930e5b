import os
import yaml
from pathlib import Path
from string import Template
from typing import Optional
from dotenv import load_dotenv
import structlog
from pydantic import ValidationError

from src.models.config import AppConfig
from src.utils.exceptions import ConfigValidationError

logger = structlog.get_logger()

API_KEY_ENV = "SERPAPI_API_KEY"


class ConfigManager:
    """Loads application configuration from YAML, .env and the environment"""

    def __init__(self, config_path: Optional[str] = "config/hitcount.yaml"):
        self.config_path = Path(config_path) if config_path else None
        self.env_loaded = False
        self._config: Optional[AppConfig] = None

    def load_config(self) -> AppConfig:
        """Load and validate configuration.

        A missing config file is not an error: defaults are used. The
        SerpAPI key falls back to the SERPAPI_API_KEY environment variable.
        """
        if self._config:
            return self._config

        # 1. Load environment
        if not self.env_loaded:  # pragma: no cover
            load_dotenv()
            self.env_loaded = True

        # 2. Read YAML (optional)
        config_data: dict = {}
        if self.config_path is not None and self.config_path.exists():
            config_data = self._read_yaml(self.config_path)
        else:
            logger.info(
                "config_file_missing_using_defaults",
                path=str(self.config_path) if self.config_path else None,
            )

        # 3. Validate with Pydantic
        try:
            config = AppConfig(**config_data)
        except ValidationError as e:
            raise ConfigValidationError(f"Invalid configuration: {e}")

        # 4. Environment fallback for the API key
        if not config.serpapi.api_key:
            config.serpapi.api_key = os.environ.get(API_KEY_ENV, "")

        if not config.use_mock and not config.serpapi.api_key:
            logger.warning("serpapi_key_missing", env_var=API_KEY_ENV)

        self._config = config
        logger.info("config_loaded", use_mock=config.use_mock)
        return config

    def _read_yaml(self, path: Path) -> dict:
        try:
            with open(path) as f:
                raw_content = f.read()
        except OSError as e:
            raise ConfigValidationError(f"Failed to read config file: {e}")

        try:
            # safe_substitute leaves unknown ${VAR} references untouched
            template = Template(raw_content)
            substituted_content = template.safe_substitute(os.environ)
            data = yaml.safe_load(substituted_content)
        except (yaml.YAMLError, ValueError) as e:
            raise ConfigValidationError(
                f"Failed to parse YAML or substitute variables: {e}"
            )

        if data is None:
            return {}
        if not isinstance(data, dict):
            raise ConfigValidationError("Configuration root must be a mapping")
        return data
