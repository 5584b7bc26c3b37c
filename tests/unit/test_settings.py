"""Unit tests for environment-driven configuration."""

import pytest

from dashscope_stream.config.constants import DEFAULT_CONNECT_TIMEOUT, DEFAULT_ENDPOINT, DEFAULT_READ_TIMEOUT
from dashscope_stream.config.settings import build_headers, load_settings


pytestmark = pytest.mark.unit


class TestLoadSettings:
    """Test load_settings."""

    def test_defaults(self, clean_env):
        settings = load_settings()

        assert settings.api_key is None
        assert settings.endpoint == DEFAULT_ENDPOINT
        assert settings.connect_timeout == DEFAULT_CONNECT_TIMEOUT
        assert settings.read_timeout == DEFAULT_READ_TIMEOUT
        assert settings.wait_timeout is None

    def test_reads_environment(self, mock_env_vars):
        settings = load_settings()

        assert settings.api_key == "test-dashscope-key"
        assert settings.endpoint == "https://dashscope.test/api/v1/generation"
        assert settings.connect_timeout == 3.0
        assert settings.read_timeout == 30.0
        assert settings.wait_timeout == 12.5

    def test_overrides_win(self, mock_env_vars):
        settings = load_settings(api_key="explicit", endpoint=None)

        assert settings.api_key == "explicit"
        assert settings.endpoint == "https://dashscope.test/api/v1/generation"

    @pytest.mark.parametrize("raw", ["soon", "-1", "0", "  "])
    def test_bad_numbers_fall_back(self, clean_env, monkeypatch, raw):
        monkeypatch.setenv("DASHSCOPE_READ_TIMEOUT", raw)
        monkeypatch.setenv("DASHSCOPE_STREAM_TIMEOUT", raw)

        settings = load_settings()

        assert settings.read_timeout == DEFAULT_READ_TIMEOUT
        assert settings.wait_timeout is None


def test_build_headers():
    assert build_headers("sk-123") == {
        "Authorization": "Bearer sk-123",
        "Content-Type": "application/json",
    }
