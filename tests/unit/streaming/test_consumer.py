"""Unit tests for consume_stream.

Tests that the consumer turns an astream into cumulative text deltas or a
single tool call, and rejects streams that break the completion protocol.
"""

import pytest
from langchain_core.messages import AIMessageChunk

from alfred.agents.streaming.consumer import chunk_text, consume_stream
from alfred.agents.streaming.events import TextDelta, ToolCall
from alfred.exceptions import StreamProtocolError, ValidationError
from tests.unit.conftest import async_iter, make_tool_call_chunk, text_chunks


async def collect(chunks):
    return [event async for event in consume_stream(async_iter(chunks))]


class TestChunkText:
    def test_plain_string(self):
        assert chunk_text("hello") == "hello"

    def test_content_blocks(self):
        blocks = [{"type": "text", "text": "a"}, {"type": "image_url"}, "b"]
        assert chunk_text(blocks) == "ab"

    def test_unknown_content(self):
        assert chunk_text(None) == ""


class TestTextStreaming:
    """Text completions."""

    @pytest.mark.asyncio
    async def test_deltas_are_cumulative(self):
        events = await collect(text_chunks("Hel", "lo", "!"))

        assert [e.content for e in events[:-1]] == ["Hel", "Hello", "Hello!"]
        assert all(not e.is_final for e in events[:-1])

    @pytest.mark.asyncio
    async def test_ends_with_exactly_one_final_delta(self):
        events = await collect(text_chunks("Hi", " there"))

        finals = [e for e in events if e.is_final]
        assert len(finals) == 1
        assert events[-1] == TextDelta(content="Hi there", is_final=True)

    @pytest.mark.asyncio
    async def test_empty_chunks_ignored(self):
        events = await collect(text_chunks("", "Real", ""))

        assert events == [TextDelta(content="Real"), TextDelta(content="Real", is_final=True)]

    @pytest.mark.asyncio
    async def test_empty_stream_yields_empty_final(self):
        events = await collect([])

        assert events == [TextDelta(content="", is_final=True)]


class TestToolCallStreaming:
    """Tool call completions."""

    @pytest.mark.asyncio
    async def test_chunks_accumulated_into_one_call(self):
        chunks = [
            make_tool_call_chunk("getFredData", '{"series', "call_9"),
            make_tool_call_chunk("", '_id": "UNRATE"}', ""),
        ]

        events = await collect(chunks)

        assert events == [ToolCall(name="getFredData", arguments={"series_id": "UNRATE"}, id="call_9")]

    @pytest.mark.asyncio
    async def test_no_text_deltas_for_tool_call(self):
        chunks = [make_tool_call_chunk("getFredData", "{}", "call_1")]

        events = await collect(chunks)

        assert not any(isinstance(e, TextDelta) for e in events)

    @pytest.mark.asyncio
    async def test_empty_arguments_decode_to_empty_dict(self):
        events = await collect([make_tool_call_chunk("getFredData", "", "call_1")])

        assert events[0].arguments == {}

    @pytest.mark.asyncio
    async def test_missing_name_raises_validation_error(self):
        with pytest.raises(ValidationError):
            await collect([make_tool_call_chunk("", '{"q": "x"}', "call_1")])

    @pytest.mark.asyncio
    async def test_invalid_json_raises_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            await collect([make_tool_call_chunk("googleCSESearch", '{"q": ', "call_1")])

        assert exc_info.value.tool == "googleCSESearch"

    @pytest.mark.asyncio
    async def test_non_object_arguments_rejected(self):
        with pytest.raises(ValidationError):
            await collect([make_tool_call_chunk("googleCSESearch", "[1, 2]", "call_1")])


class TestProtocolViolations:
    @pytest.mark.asyncio
    async def test_text_then_tool_call(self):
        chunks = [AIMessageChunk(content="Let me check"), make_tool_call_chunk("getFredData", "{}", "c1")]

        with pytest.raises(StreamProtocolError):
            await collect(chunks)

    @pytest.mark.asyncio
    async def test_tool_call_then_text(self):
        chunks = [make_tool_call_chunk("getFredData", "{}", "c1"), AIMessageChunk(content="done")]

        with pytest.raises(StreamProtocolError):
            await collect(chunks)

    @pytest.mark.asyncio
    async def test_second_tool_call_by_index(self):
        chunks = [
            make_tool_call_chunk("getFredData", "{}", "c1", index=0),
            make_tool_call_chunk("googleCSESearch", "{}", "c2", index=1),
        ]

        with pytest.raises(StreamProtocolError):
            await collect(chunks)

    @pytest.mark.asyncio
    async def test_second_tool_call_by_id(self):
        chunks = [
            make_tool_call_chunk("getFredData", "{}", "c1"),
            make_tool_call_chunk("getFredData", "{}", "c2"),
        ]

        with pytest.raises(StreamProtocolError):
            await collect(chunks)
