"""Tests for settings loading."""

import pytest
from pydantic import ValidationError

from canonurl.config import Config, get_config, reset_config


@pytest.fixture(autouse=True)
def fresh_config():
    reset_config()
    yield
    reset_config()


def test_defaults(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    config = Config()

    assert config.platform_matching == "suffix"
    assert config.url_column == "url"
    assert config.log_level == "INFO"


def test_env_overrides(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("CANONURL_PLATFORM_MATCHING", "substring")
    monkeypatch.setenv("CANONURL_URL_COLUMN", "link")
    monkeypatch.setenv("CANONURL_LOG_LEVEL", "debug")

    config = get_config()

    assert config.platform_matching == "substring"
    assert config.url_column == "link"
    assert config.log_level == "DEBUG"


def test_global_instance_is_cached():
    assert get_config() is get_config()


def test_invalid_platform_matching(monkeypatch):
    monkeypatch.setenv("CANONURL_PLATFORM_MATCHING", "fuzzy")
    with pytest.raises(ValidationError):
        Config()


def test_invalid_log_level():
    with pytest.raises(ValidationError):
        Config(log_level="LOUD")
