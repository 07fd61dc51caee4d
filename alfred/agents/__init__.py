"""Dispatch cycle components.

- prompts: system prompt assembly
- reply: StreamedReply handle observed by the caller
- streaming: completion client, stream consumer and tool dispatcher
- orchestrator: drives one cycle from user text to sealed reply
"""

from alfred.agents.orchestrator import (
    Cycle,
    CycleState,
    DispatchOrchestrator,
    build_orchestrator,
)
from alfred.agents.reply import ReplyState, StreamedReply

__all__ = [
    "Cycle",
    "CycleState",
    "DispatchOrchestrator",
    "ReplyState",
    "StreamedReply",
    "build_orchestrator",
]
