"""Unit tests for request body construction."""

import pytest

from dashscope_stream.models.conversation_types import ConversationMessage, TurnRole
from dashscope_stream.providers.dashscope.payloads import build_request_body, format_messages


pytestmark = pytest.mark.unit


class TestBuildRequestBody:
    """Test build_request_body."""

    def test_basic_body(self):
        body = build_request_body(
            "qwen-max",
            [ConversationMessage(role=TurnRole.USER, content="Test input")]
        )

        assert body == {
            "model": "qwen-max",
            "input": {"messages": [{"role": "user", "content": "Test input"}]},
            "parameters": {"result_format": "text", "incremental_output": True},
        }

    def test_parameters_pass_through(self):
        body = build_request_body("qwen-max", [], temperature=0.2, top_p=None, seed=7)

        assert body["parameters"]["temperature"] == 0.2
        assert body["parameters"]["seed"] == 7
        assert "top_p" not in body["parameters"]

    def test_full_output_mode(self):
        body = build_request_body("qwen-max", [], incremental_output=False)

        assert "incremental_output" not in body["parameters"]


class TestFormatMessages:
    """Test format_messages."""

    def test_mixed_inputs(self):
        messages = [
            ConversationMessage(role=TurnRole.SYSTEM, content="Be brief."),
            {"role": "user", "content": "Hi"},
            {"role": TurnRole.ASSISTANT, "content": "Hello"},
        ]

        assert format_messages(messages) == [
            {"role": "system", "content": "Be brief."},
            {"role": "user", "content": "Hi"},
            {"role": "assistant", "content": "Hello"},
        ]

    def test_invalid_message(self):
        with pytest.raises(ValueError, match="Invalid message format"):
            format_messages([{"content": "no role"}])
