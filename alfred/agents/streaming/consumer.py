"""Stream consumer — turn an LLM astream into completion events.

Text chunks are forwarded as soon as they arrive, as cumulative TextDelta
snapshots. Tool call chunks are merged by index into a single buffer and
emitted as one ToolCall once the stream is exhausted (the arguments JSON
is only complete at the end).

The consumer enforces the completion protocol: text and a tool call never
both appear in one completion, and at most one tool call is accepted.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING, Any

from alfred.agents.streaming.events import TextDelta, ToolCall
from alfred.exceptions import StreamProtocolError, ValidationError

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, AsyncIterator

    from alfred.agents.streaming.events import CompletionEvent

logger = logging.getLogger(__name__)


def chunk_text(content: Any) -> str:
    """Extract plain text from a message chunk's content."""
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts)
    return ""


def _parse_arguments(name: str, raw_args: str) -> dict[str, Any]:
    try:
        args = json.loads(raw_args) if raw_args else {}
    except json.JSONDecodeError as e:
        raise ValidationError(
            f"Arguments for {name} are not valid JSON: {raw_args[:200]}", tool=name
        ) from e
    if not isinstance(args, dict):
        raise ValidationError(f"Arguments for {name} must be a JSON object", tool=name)
    return args


async def consume_stream(
    astream: AsyncIterator[Any],
) -> AsyncGenerator[CompletionEvent, None]:
    """Consume an LLM astream, yielding TextDelta or ToolCall events.

    Args:
        astream: Async iterator of LLM message chunks (e.g. from ``llm.astream()``).

    Yields:
        Non-final TextDelta events followed by one final TextDelta, or a
        single ToolCall.

    Raises:
        StreamProtocolError: Text and tool call chunks were mixed, or more
            than one tool call was streamed.
        ValidationError: The tool call had no name or unparseable arguments.
    """
    collected_content = ""
    tool_call_buffer: dict[str, Any] | None = None

    async for chunk in astream:
        tool_call_chunks = getattr(chunk, "tool_call_chunks", None) or []

        if tool_call_chunks:
            if collected_content:
                raise StreamProtocolError("Tool call started after text was streamed")
            for tc_chunk in tool_call_chunks:
                idx = tc_chunk.get("index") or 0
                chunk_id = tc_chunk.get("id") or ""
                if tool_call_buffer is None:
                    tool_call_buffer = {"index": idx, "name": "", "args": "", "id": ""}
                elif idx != tool_call_buffer["index"] or (
                    chunk_id and tool_call_buffer["id"] and chunk_id != tool_call_buffer["id"]
                ):
                    raise StreamProtocolError("Completion streamed more than one tool call")
                if tc_chunk.get("name"):
                    tool_call_buffer["name"] = tc_chunk["name"]
                if tc_chunk.get("args"):
                    tool_call_buffer["args"] += tc_chunk["args"]
                if chunk_id:
                    tool_call_buffer["id"] = chunk_id
            # Content co-located with tool chunks is partial JSON on some models
            continue

        token = chunk_text(getattr(chunk, "content", ""))
        if not token:
            continue
        if tool_call_buffer is not None:
            raise StreamProtocolError("Text streamed after a tool call started")
        collected_content += token
        yield TextDelta(content=collected_content)

    if tool_call_buffer is None:
        yield TextDelta(content=collected_content, is_final=True)
        return

    name = tool_call_buffer["name"]
    if not name:
        raise ValidationError("Tool call has no name (likely truncated LLM output)")
    args = _parse_arguments(name, tool_call_buffer["args"])
    logger.debug("Model selected tool %s with %d argument(s)", name, len(args))
    yield ToolCall(name=name, arguments=args, id=tool_call_buffer["id"])
