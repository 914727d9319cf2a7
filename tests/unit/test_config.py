import pytest

from furigana_tool.config import DEFAULT_ENDPOINT, ConfigError, FuriganaConfig


def test_from_env_requires_app_id() -> None:
    with pytest.raises(ConfigError):
        FuriganaConfig.from_env({})
    with pytest.raises(ConfigError):
        FuriganaConfig.from_env({"YAHOO_CLIENT_ID": "   "})


def test_from_env_defaults() -> None:
    config = FuriganaConfig.from_env({"YAHOO_CLIENT_ID": "abc"})

    assert config.app_id == "abc"
    assert config.endpoint == DEFAULT_ENDPOINT
    assert config.chunking.max_chunk_bytes == 3000


def test_from_env_overrides() -> None:
    config = FuriganaConfig.from_env(
        {
            "YAHOO_CLIENT_ID": "abc",
            "FURIGANA_ENDPOINT": "http://localhost:9000/furigana",
            "FURIGANA_TIMEOUT_SECONDS": "2.5",
            "FURIGANA_MAX_CHUNK_BYTES": "1200",
        }
    )

    assert config.endpoint == "http://localhost:9000/furigana"
    assert config.timeout_seconds == 2.5
    assert config.chunking.max_chunk_bytes == 1200


def test_from_env_invalid_values() -> None:
    with pytest.raises(ConfigError):
        FuriganaConfig.from_env({"YAHOO_CLIENT_ID": "abc", "FURIGANA_MAX_CHUNK_BYTES": "0"})
