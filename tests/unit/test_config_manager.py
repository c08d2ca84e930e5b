import pytest
import yaml
from unittest.mock import patch

from src.services.config_manager import ConfigManager, API_KEY_ENV
from src.utils.exceptions import ConfigValidationError


@pytest.fixture
def valid_config_file(tmp_path):
    config_content = {
        "serpapi": {"api_key": "file_key", "base_url": "https://example.test/s.json"},
        "aggregator": {"word_timeout_seconds": 12.5},
        "logging": {"level": "debug", "json_output": False},
        "server": {"host": "127.0.0.1", "port": 9000},
        "use_mock": True,
    }
    config_file = tmp_path / "hitcount.yaml"
    with open(config_file, "w") as f:
        yaml.dump(config_content, f)
    return config_file


def _manager(path):
    manager = ConfigManager(config_path=str(path))
    manager.env_loaded = True
    return manager


def test_load_valid_config(valid_config_file):
    config = _manager(valid_config_file).load_config()

    assert config.serpapi.api_key == "file_key"
    assert config.serpapi.base_url == "https://example.test/s.json"
    assert config.aggregator.word_timeout_seconds == 12.5
    assert config.logging.level == "DEBUG"
    assert config.logging.json_output is False
    assert config.server.port == 9000
    assert config.use_mock is True


def test_config_is_cached(valid_config_file):
    manager = _manager(valid_config_file)
    assert manager.load_config() is manager.load_config()


def test_missing_file_uses_defaults(tmp_path, monkeypatch):
    monkeypatch.setenv(API_KEY_ENV, "env_key")

    config = _manager(tmp_path / "nonexistent.yaml").load_config()

    assert config.serpapi.api_key == "env_key"
    assert config.serpapi.base_url == "https://serpapi.com/search.json"
    assert config.aggregator.word_timeout_seconds is None
    assert config.use_mock is False


def test_file_key_wins_over_env(valid_config_file, monkeypatch):
    monkeypatch.setenv(API_KEY_ENV, "env_key")
    assert _manager(valid_config_file).load_config().serpapi.api_key == "file_key"


def test_env_substitution(tmp_path, monkeypatch):
    monkeypatch.setenv("MY_SERP_KEY", "substituted")
    config_file = tmp_path / "hitcount.yaml"
    config_file.write_text("serpapi:\n  api_key: ${MY_SERP_KEY}\n")

    config = _manager(config_file).load_config()

    assert config.serpapi.api_key == "substituted"


def test_empty_file_uses_defaults(tmp_path, monkeypatch):
    monkeypatch.delenv(API_KEY_ENV, raising=False)
    config_file = tmp_path / "hitcount.yaml"
    config_file.write_text("")

    config = _manager(config_file).load_config()

    assert config.serpapi.api_key == ""
    assert config.server.port == 8000


@pytest.mark.parametrize(
    "content",
    [
        "logging:\n  level: LOUD\n",
        "server:\n  port: 70000\n",
        "aggregator:\n  word_timeout_seconds: -1\n",
        "serpapi:\n  base_url: ftp://nope\n",
    ],
)
def test_invalid_values(tmp_path, content):
    config_file = tmp_path / "hitcount.yaml"
    config_file.write_text(content)

    with pytest.raises(ConfigValidationError, match="Invalid configuration"):
        _manager(config_file).load_config()


def test_malformed_yaml(tmp_path):
    config_file = tmp_path / "hitcount.yaml"
    config_file.write_text("serpapi: [unclosed\n")

    with pytest.raises(ConfigValidationError, match="Failed to parse YAML"):
        _manager(config_file).load_config()


def test_non_mapping_root(tmp_path):
    config_file = tmp_path / "hitcount.yaml"
    config_file.write_text("- a\n- b\n")

    with pytest.raises(ConfigValidationError, match="mapping"):
        _manager(config_file).load_config()


def test_load_config_read_error(valid_config_file):
    with patch("builtins.open", side_effect=PermissionError("denied")):
        with pytest.raises(ConfigValidationError, match="Failed to read config file"):
            _manager(valid_config_file).load_config()
