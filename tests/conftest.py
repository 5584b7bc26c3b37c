"""Shared pytest fixtures for DashScope Stream SDK tests."""

import pytest
from typing import Any, Dict

from dashscope_stream.config.constants import DEFAULT_ENDPOINT
from dashscope_stream.streaming.handler import StreamHandler
from tests.helpers.streaming_mocks import ScriptedTransport, dashscope_event


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests with no I/O")
    config.addinivalue_line("markers", "integration: tests spanning client, transport and handler")
    config.addinivalue_line("markers", "slow: tests that wait on real timeouts")


@pytest.fixture
def headers() -> Dict[str, str]:
    """Request headers as a caller would bind them."""
    return {
        "Authorization": "Bearer test-api-key",
        "Content-Type": "application/json",
    }


@pytest.fixture
def request_body() -> Dict[str, Any]:
    """A valid streaming request body."""
    return {
        "model": "qwen-max",
        "input": {"messages": [{"role": "user", "content": "Test input"}]},
        "parameters": {"incremental_output": True},
    }


@pytest.fixture
def stream_handler(headers) -> StreamHandler:
    """Handler with no transport; tests drive its delivery methods directly."""
    return StreamHandler(DEFAULT_ENDPOINT, headers)


@pytest.fixture
def hello_world_transport() -> ScriptedTransport:
    """Transport delivering "Hello" then " world!" and completing."""
    return ScriptedTransport([dashscope_event("Hello"), dashscope_event(" world!")])


@pytest.fixture
def mock_env_vars(monkeypatch):
    """Mock environment variables for testing."""
    env_vars = {
        "DASHSCOPE_API_KEY": "test-dashscope-key",
        "DASHSCOPE_ENDPOINT": "https://dashscope.test/api/v1/generation",
        "DASHSCOPE_CONNECT_TIMEOUT": "3",
        "DASHSCOPE_READ_TIMEOUT": "30",
        "DASHSCOPE_STREAM_TIMEOUT": "12.5",
    }
    for key, value in env_vars.items():
        monkeypatch.setenv(key, value)
    return env_vars


@pytest.fixture
def clean_env(monkeypatch):
    """Remove DashScope variables and stop .env files from leaking in."""
    for key in (
        "DASHSCOPE_API_KEY",
        "DASHSCOPE_ENDPOINT",
        "DASHSCOPE_CONNECT_TIMEOUT",
        "DASHSCOPE_READ_TIMEOUT",
        "DASHSCOPE_STREAM_TIMEOUT",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr("dashscope_stream.config.settings.load_dotenv", lambda *a, **k: False)
