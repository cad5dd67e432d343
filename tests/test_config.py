"""Tests for token lookup and transport settings."""

import pytest

from linearis.config import (
    DEFAULT_TIMEOUT,
    LINEAR_API_URL,
    ClientConfig,
    get_api_token,
    get_log_level,
    get_timeout,
)
from linearis.errors import AuthenticationError


@pytest.fixture
def token_file(tmp_path):
    path = tmp_path / "token"
    path.write_text("from-file\n", encoding="utf-8")
    return path


class TestApiToken:
    def test_explicit_wins(self, monkeypatch, token_file):
        monkeypatch.setenv("LINEAR_API_TOKEN", "from-env")
        assert get_api_token("explicit", token_file=token_file) == "explicit"

    def test_token_env_before_key_env(self, monkeypatch, token_file):
        monkeypatch.setenv("LINEAR_API_TOKEN", "token-env")
        monkeypatch.setenv("LINEAR_API_KEY", "key-env")
        assert get_api_token(token_file=token_file) == "token-env"

    def test_key_env(self, monkeypatch, token_file):
        monkeypatch.setenv("LINEAR_API_KEY", "key-env")
        assert get_api_token(token_file=token_file) == "key-env"

    def test_dotenv_file(self, tmp_path, token_file):
        dotenv = tmp_path / ".env"
        dotenv.write_text("LINEAR_API_KEY=dotenv-key\n", encoding="utf-8")
        assert get_api_token(token_file=token_file, dotenv_path=dotenv) == "dotenv-key"

    def test_token_file_is_last(self, token_file):
        assert get_api_token(token_file=token_file) == "from-file"

    def test_nothing_configured(self, tmp_path):
        with pytest.raises(AuthenticationError) as exc_info:
            get_api_token(token_file=tmp_path / "missing")
        assert "--api-token" in exc_info.value.message


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("LINEARIS_LOG_LEVEL", raising=False)
        config = ClientConfig(api_token="t")
        assert config.api_url == LINEAR_API_URL
        assert config.timeout == DEFAULT_TIMEOUT
        assert get_log_level() == "WARNING"

    def test_overrides(self, monkeypatch):
        monkeypatch.setenv("LINEARIS_TIMEOUT", "2.5")
        monkeypatch.setenv("LINEAR_API_URL", "http://localhost:9/graphql")
        config = ClientConfig(api_token="t")
        assert config.timeout == 2.5
        assert config.api_url == "http://localhost:9/graphql"

    def test_bad_timeout_falls_back(self, monkeypatch):
        monkeypatch.setenv("LINEARIS_TIMEOUT", "soon")
        assert get_timeout() == DEFAULT_TIMEOUT
