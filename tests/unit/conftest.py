"""Shared helpers and fixtures for unit tests."""

import json
from collections.abc import Callable
from typing import Any
from unittest.mock import MagicMock

import httpx
import pytest
from langchain_core.messages import AIMessageChunk


def make_tool_call_chunk(name: str, args_str: str, call_id: str, index: int = 0) -> AIMessageChunk:
    """Create an AIMessageChunk carrying one tool call chunk."""
    chunk = AIMessageChunk(content="")
    chunk.tool_call_chunks = [{"name": name, "args": args_str, "id": call_id, "index": index}]
    return chunk


def text_chunks(*parts: str) -> list[AIMessageChunk]:
    return [AIMessageChunk(content=part) for part in parts]


def tool_call_chunks(name: str, arguments: dict[str, Any], call_id: str = "call_1") -> list[AIMessageChunk]:
    """Split a tool call across chunks the way providers stream it."""
    args = json.dumps(arguments)
    middle = len(args) // 2
    first = make_tool_call_chunk(name, args[:middle], call_id)
    rest = make_tool_call_chunk("", args[middle:], "")
    return [first, rest]


async def async_iter(items):
    """Convert a list to an async iterator."""
    for item in items:
        yield item


def make_llm(*responses: list[Any]) -> MagicMock:
    """Mock chat model whose successive astream calls replay ``responses``.

    Works both with and without ``bind_tools``.
    """
    llm = MagicMock()
    streams = [async_iter(chunks) for chunks in responses]
    llm.astream.side_effect = streams
    llm.bind_tools.return_value = llm
    return llm


def mock_client(handler: Callable[[httpx.Request], httpx.Response]) -> httpx.AsyncClient:
    """AsyncClient answering every request with ``handler``."""
    return httpx.AsyncClient(transport=httpx.MockTransport(handler))


class RecordingHandler:
    """MockTransport handler returning a fixed response and recording requests."""

    def __init__(self, status_code: int = 200, body: str | bytes = "{}") -> None:
        self.status_code = status_code
        self.body = body.encode() if isinstance(body, str) else body
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return httpx.Response(self.status_code, content=self.body)

    @property
    def last(self) -> httpx.Request:
        return self.requests[-1]


@pytest.fixture
def recording_handler() -> RecordingHandler:
    return RecordingHandler()
