"""Streaming completion client.

Wraps a LangChain chat model bound to the tool catalogue. Each call to
``complete`` replays the transcript (after the system prompt) and yields
completion events as chunks arrive from the provider.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from langchain_core.messages import (
    AIMessage,
    BaseMessage,
    HumanMessage,
    SystemMessage,
    ToolMessage,
)

from alfred.agents.prompts import build_system_prompt
from alfred.agents.streaming.consumer import consume_stream
from alfred.conversation.turns import Role
from alfred.exceptions import AlfredError, LLMError

if TYPE_CHECKING:
    from collections.abc import AsyncGenerator, Callable, Sequence

    from langchain_core.language_models import BaseChatModel

    from alfred.agents.streaming.events import CompletionEvent
    from alfred.conversation.turns import ConversationTurn
    from alfred.tools.registry import ToolDescriptor, ToolRegistry

logger = logging.getLogger(__name__)


def to_langchain_messages(
    transcript: Sequence[ConversationTurn],
    system_prompt: str | None = None,
) -> list[BaseMessage]:
    """Convert transcript turns into chat messages.

    A tool turn becomes an AIMessage carrying the tool call followed by the
    matching ToolMessage, which is the pairing OpenAI-compatible APIs require.
    """
    messages: list[BaseMessage] = []
    if system_prompt:
        messages.append(SystemMessage(content=system_prompt))

    for index, turn in enumerate(transcript):
        if turn.role == Role.USER:
            messages.append(HumanMessage(content=turn.content))
        elif turn.role == Role.ASSISTANT:
            messages.append(AIMessage(content=turn.content))
        elif turn.role == Role.SYSTEM:
            messages.append(SystemMessage(content=turn.content))
        else:
            call_id = turn.tool_call_id or f"call_{index}"
            messages.append(
                AIMessage(
                    content="",
                    tool_calls=[
                        {"name": turn.tool_name, "args": turn.tool_arguments or {}, "id": call_id}
                    ],
                )
            )
            messages.append(
                ToolMessage(content=turn.content, tool_call_id=call_id, name=turn.tool_name)
            )
    return messages


class StreamingCompletionClient:
    """Opens one streaming completion per dispatch cycle."""

    def __init__(
        self,
        llm: BaseChatModel,
        *,
        system_prompt_builder: Callable[[Sequence[ToolDescriptor]], str] = build_system_prompt,
        provider: str | None = None,
    ) -> None:
        self.llm = llm
        self._system_prompt_builder = system_prompt_builder
        self._provider = provider

    async def complete(
        self,
        transcript: Sequence[ConversationTurn],
        tools: ToolRegistry,
    ) -> AsyncGenerator[CompletionEvent, None]:
        """Stream a completion for the transcript with the registry's tools bound.

        Yields:
            TextDelta events ending in a final delta, or a single ToolCall.

        Raises:
            StreamProtocolError / ValidationError: From the stream consumer.
            LLMError: The provider call itself failed.
        """
        messages = to_langchain_messages(transcript, self._system_prompt_builder(tools.list_tools()))
        tool_llm = (
            self.llm.bind_tools(
                tools.to_openai_tools(),
                tool_choice="auto",
                parallel_tool_calls=False,
            )
            if len(tools)
            else self.llm
        )

        logger.debug(
            "Opening completion: %d message(s), %d tool(s)", len(messages), len(tools)
        )
        try:
            async for event in consume_stream(tool_llm.astream(messages)):
                yield event
        except AlfredError:
            raise
        except Exception as e:
            raise LLMError(f"Completion failed: {e}", provider=self._provider) from e
