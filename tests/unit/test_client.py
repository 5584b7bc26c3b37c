"""Unit tests for DashScopeClient."""

import pytest

from dashscope_stream.api.client import DashScopeClient
from dashscope_stream.config.settings import StreamSettings
from dashscope_stream.models.conversation_types import ConversationMessage, TurnRole
from dashscope_stream.providers.dashscope.transport import DashScopeTransport
from dashscope_stream.streaming.errors import ConfigurationError, StreamTimeoutError
from dashscope_stream.streaming.handler import StreamHandler
from tests.helpers.streaming_mocks import HangingTransport, ScriptedTransport, dashscope_event


pytestmark = pytest.mark.unit


class TestDashScopeClient:
    """Test handler construction and stream_chat."""

    def test_create_handler_binds_auth(self, mock_env_vars):
        client = DashScopeClient()

        handler = client.create_handler()

        assert isinstance(handler, StreamHandler)
        assert handler.endpoint == "https://dashscope.test/api/v1/generation"
        assert handler.headers["Authorization"] == "Bearer test-dashscope-key"
        assert isinstance(client.transport, DashScopeTransport)
        assert client.transport.connect_timeout == 3.0
        assert client.transport.read_timeout == 30.0

    def test_each_handler_is_fresh(self, mock_env_vars):
        client = DashScopeClient()

        assert client.create_handler() is not client.create_handler()

    def test_missing_api_key(self, clean_env):
        client = DashScopeClient()

        with pytest.raises(ConfigurationError, match="DASHSCOPE_API_KEY"):
            client.create_handler()

    def test_explicit_arguments_override_settings(self):
        settings = StreamSettings(api_key="from-settings", endpoint="https://a.test")

        client = DashScopeClient(api_key="explicit", settings=settings)

        assert client.settings.api_key == "explicit"
        assert client.settings.endpoint == "https://a.test"
        assert settings.api_key == "from-settings"

    def test_stream_chat(self):
        transport = ScriptedTransport([dashscope_event("Hello"), dashscope_event(" world!")])
        client = DashScopeClient(settings=StreamSettings(api_key="k"), transport=transport)
        received, completed = [], []

        messages = client.stream_chat(
            "qwen-max",
            [ConversationMessage(role=TurnRole.USER, content="Say hello")],
            on_message=received.append,
            on_complete=lambda: completed.append(True),
            temperature=0.3
        )

        assert messages == [ConversationMessage(role=TurnRole.ASSISTANT, content="Hello world!")]
        assert [m.content for m in received] == ["Hello", "Hello world!"]
        assert completed == [True]
        body = transport.calls[0]["body"]
        assert body["model"] == "qwen-max"
        assert body["input"]["messages"] == [{"role": "user", "content": "Say hello"}]
        assert body["parameters"]["temperature"] == 0.3
        assert transport.calls[0]["headers"]["Authorization"] == "Bearer k"

    def test_stream_chat_error(self):
        transport = ScriptedTransport(error=RuntimeError("boom"))
        client = DashScopeClient(settings=StreamSettings(api_key="k"), transport=transport)
        errors = []

        messages = client.stream_chat("qwen-max", [{"role": "user", "content": "x"}], on_error=errors.append)

        assert messages == []
        assert [str(e) for e in errors] == ["boom"]

    @pytest.mark.slow
    def test_default_wait_timeout_from_settings(self):
        client = DashScopeClient(
            settings=StreamSettings(api_key="k", wait_timeout=0.1),
            transport=HangingTransport()
        )

        with pytest.raises(StreamTimeoutError):
            client.stream_chat("qwen-max", [{"role": "user", "content": "x"}])
