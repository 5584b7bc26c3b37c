"""Unit tests for SSE frame parsing."""

import pytest

from dashscope_stream.providers.dashscope.sse import SseFrame, parse_sse_frames


pytestmark = pytest.mark.unit


class TestParseSseFrames:
    """Test parse_sse_frames."""

    def test_service_frame(self):
        lines = [
            "id:1",
            "event:result",
            ":HTTP_STATUS/200",
            'data:{"output":{"text":"Hi"}}',
            "",
        ]

        frames = list(parse_sse_frames(lines))

        assert frames == [SseFrame(event="result", data='{"output":{"text":"Hi"}}', id="1", status=200)]

    def test_multiple_frames_reset_fields(self):
        lines = ["event:result", "data:a", "", "data:b", ""]

        frames = list(parse_sse_frames(lines))

        assert [(f.event, f.data) for f in frames] == [("result", "a"), (None, "b")]

    def test_multiline_data_joined(self):
        frames = list(parse_sse_frames(["data: first", "data: second", ""]))

        assert frames[0].data == "first\nsecond"

    def test_comments_and_unknown_fields_ignored(self):
        lines = [": keep-alive", "retry: 1000", "data:x", ""]

        assert [f.data for f in parse_sse_frames(lines)] == ["x"]

    def test_frame_without_data_not_dispatched(self):
        assert list(parse_sse_frames(["event:result", "id:3", ""])) == []

    def test_trailing_frame_without_blank_line(self):
        assert [f.data for f in parse_sse_frames(["data:tail"])] == ["tail"]

    def test_error_status_comment(self):
        lines = ["event:error", ":HTTP_STATUS/400", 'data:{"code":"InvalidParameter"}', ""]

        frame = next(parse_sse_frames(lines))

        assert frame.event == "error"
        assert frame.status == 400

    def test_crlf_lines(self):
        frames = list(parse_sse_frames(["data:x\r\n", "\r\n"]))

        assert frames == [SseFrame(event=None, data="x")]
