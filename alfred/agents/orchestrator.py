"""Dispatch orchestrator — drives one request/response cycle.

State machine per cycle::

    IDLE -> STREAMING -> FINALIZING (text) -> SEALED
                      -> INVOKING (tool)   -> SEALED

The orchestrator appends the user turn, opens a streaming completion over
the full transcript and tool catalogue, mirrors text deltas into the
StreamedReply, or validates and runs the one requested tool. Every error is
caught here and turned into a sealed ErrorView; a failed cycle never
appends a turn that describes data which was not actually produced.

Registry and completion client are injected once at process
start and shared by all cycles; the only per-conversation mutable state is
the ConversationStore, which the orchestrator holds exclusively for the
duration of a cycle.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

from alfred.agents.reply import StreamedReply
from alfred.agents.streaming.dispatcher import dispatch_tool_call, validate_tool_call
from alfred.agents.streaming.events import TextDelta, ToolCall
from alfred.conversation.turns import ConversationTurn
from alfred.exceptions import AlfredError, StreamProtocolError
from alfred.tools.views import ErrorView, TextView
from alfred.tracing import session_context, trace_with_uri

if TYPE_CHECKING:
    import httpx
    from langchain_core.language_models import BaseChatModel

    from alfred.agents.streaming.completion import StreamingCompletionClient
    from alfred.conversation.store import ConversationStore
    from alfred.settings import Settings
    from alfred.tools.registry import ToolRegistry
    from alfred.tools.views import ReplyView

logger = logging.getLogger(__name__)

FAILURE_NOTE = "I wasn't able to complete that request."
CANCELLED_MESSAGE = "The request was cancelled."
GENERIC_FAILURE_MESSAGE = "Something went wrong while handling your request."


class CycleState(StrEnum):
    IDLE = "idle"
    STREAMING = "streaming"
    FINALIZING = "finalizing"
    INVOKING = "invoking"
    SEALED = "sealed"


@dataclass
class Cycle:
    """Handle for a cycle started with ``submit``.

    Attributes:
        conversation_id: Conversation the cycle belongs to.
        reply: The cycle's StreamedReply (already visible to the caller).
        task: The running cycle; cancel it to abandon the request.
    """

    conversation_id: str
    reply: StreamedReply
    task: asyncio.Task[ReplyView]

    def cancel(self) -> bool:
        return self.task.cancel()

    async def wait(self) -> ReplyView:
        return await self.task


class DispatchOrchestrator:
    """Runs dispatch cycles against injected collaborators."""

    def __init__(
        self,
        *,
        registry: ToolRegistry,
        completion_client: StreamingCompletionClient,
        record_failure_notes: bool = False,
    ) -> None:
        self.registry = registry
        self.completion_client = completion_client
        self.record_failure_notes = record_failure_notes

    def submit(self, conversation: ConversationStore, user_text: str) -> Cycle:
        """Start a cycle in the background and return its handle immediately."""
        reply = StreamedReply()
        task = asyncio.create_task(
            self.run_cycle(conversation, user_text, reply),
            name=f"cycle-{conversation.conversation_id}",
        )
        return Cycle(conversation_id=conversation.conversation_id, reply=reply, task=task)

    @trace_with_uri(name="orchestrator.cycle", span_type="CHAIN")
    async def run_cycle(
        self,
        conversation: ConversationStore,
        user_text: str,
        reply: StreamedReply | None = None,
    ) -> ReplyView:
        """Run one cycle to completion and return the sealed view.

        Args:
            conversation: Transcript to read and append to.
            user_text: The user's submission.
            reply: Reply handle to drive (a new one is created if omitted).

        Returns:
            The reply's final view.
        """
        reply = reply if reply is not None else StreamedReply()
        with session_context(conversation.conversation_id):
            try:
                async with conversation.exclusive():
                    await self._run_locked(conversation, user_text.strip(), reply)
            except asyncio.CancelledError:
                # Cancelled while waiting for the conversation lock
                self._seal_error(reply, "CancelledError", CANCELLED_MESSAGE)
                raise
        return reply.value

    async def _run_locked(
        self,
        conversation: ConversationStore,
        user_text: str,
        reply: StreamedReply,
    ) -> None:
        state = CycleState.IDLE
        try:
            await conversation.append(ConversationTurn.user(user_text))
            state = self._transition(conversation, state, CycleState.STREAMING)

            tool_call: ToolCall | None = None
            final_text: str | None = None
            stream = self.completion_client.complete(
                conversation.read_all(), self.registry
            )
            async for event in stream:
                if final_text is not None or tool_call is not None:
                    raise StreamProtocolError("Event received after the completion ended")
                if isinstance(event, ToolCall):
                    tool_call = event
                    state = self._transition(conversation, state, CycleState.INVOKING)
                elif isinstance(event, TextDelta):
                    if event.is_final:
                        final_text = event.content
                        state = self._transition(conversation, state, CycleState.FINALIZING)
                    else:
                        reply.update(TextView(content=event.content))

            if tool_call is not None:
                await self._invoke(conversation, tool_call, reply)
            elif final_text is not None:
                reply.seal(TextView(content=final_text))
                await conversation.append(ConversationTurn.assistant(final_text))
            else:
                raise StreamProtocolError("Completion ended without a final text delta")

        except asyncio.CancelledError:
            logger.info("Cycle cancelled in %s (%s)", state.value, conversation.conversation_id)
            self._seal_error(reply, "CancelledError", CANCELLED_MESSAGE)
            raise
        except AlfredError as e:
            logger.warning(
                "Cycle failed in %s with %s (%s): %s",
                state.value,
                type(e).__name__,
                e.correlation_id,
                e,
            )
            self._seal_error(reply, type(e).__name__, e.user_message)
            await self._record_failure(conversation)
        except Exception as e:
            logger.exception("Unexpected error in cycle (%s)", conversation.conversation_id)
            self._seal_error(reply, type(e).__name__, GENERIC_FAILURE_MESSAGE)
            await self._record_failure(conversation)

        self._transition(conversation, state, CycleState.SEALED)

    async def _invoke(
        self,
        conversation: ConversationStore,
        tool_call: ToolCall,
        reply: StreamedReply,
    ) -> None:
        if tool_call.name in self.registry:
            reply.update(self.registry.adapter_for(tool_call.name).loading_view())
        arguments = validate_tool_call(self.registry, tool_call)

        result = await dispatch_tool_call(
            self.registry, tool_call, validated_arguments=arguments
        )

        reply.seal(result.normalized_view)
        await conversation.append(
            ConversationTurn.tool(
                tool_name=result.tool_name,
                content=result.raw_body,
                tool_call_id=tool_call.id or f"call_{len(conversation)}",
                tool_arguments=arguments,
            )
        )

    async def _record_failure(self, conversation: ConversationStore) -> None:
        if self.record_failure_notes:
            await conversation.append(ConversationTurn.assistant(FAILURE_NOTE))

    @staticmethod
    def _seal_error(reply: StreamedReply, error_type: str, message: str) -> None:
        if not reply.is_sealed:
            reply.seal(ErrorView(error_type=error_type, message=message))

    @staticmethod
    def _transition(
        conversation: ConversationStore, current: CycleState, new: CycleState
    ) -> CycleState:
        logger.debug(
            "cycle %s: %s -> %s", conversation.conversation_id, current.value, new.value
        )
        return new


def build_orchestrator(
    settings: Settings,
    http_client: httpx.AsyncClient,
    llm: BaseChatModel | None = None,
) -> DispatchOrchestrator:
    """Wire the default registry and completion client from settings.

    Args:
        settings: Application settings.
        http_client: Shared client used by every tool adapter.
        llm: Chat model override (defaults to ``get_llm(settings=settings)``).
    """
    from alfred.agents.streaming.completion import StreamingCompletionClient
    from alfred.llm import get_llm
    from alfred.tools.registry import build_default_registry

    registry = build_default_registry(settings, http_client)
    completion_client = StreamingCompletionClient(
        llm if llm is not None else get_llm(settings=settings),
        provider=settings.llm_provider,
    )
    logger.info("Orchestrator ready with %d tool(s)", len(registry))
    return DispatchOrchestrator(
        registry=registry,
        completion_client=completion_client,
        record_failure_notes=settings.record_failure_notes,
    )
