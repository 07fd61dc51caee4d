"""Streaming module — completion events, stream consumption and tool dispatch.

Provides independently testable components for LLM token streaming,
tool call extraction, and single-tool dispatch.
"""

from alfred.agents.streaming.completion import StreamingCompletionClient, to_langchain_messages
from alfred.agents.streaming.consumer import consume_stream
from alfred.agents.streaming.dispatcher import dispatch_tool_call, validate_tool_call
from alfred.agents.streaming.events import CompletionEvent, TextDelta, ToolCall

__all__ = [
    "CompletionEvent",
    "StreamingCompletionClient",
    "TextDelta",
    "ToolCall",
    "consume_stream",
    "dispatch_tool_call",
    "to_langchain_messages",
    "validate_tool_call",
]
