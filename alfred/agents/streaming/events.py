"""Completion stream events.

A completion yields either a run of TextDelta events ending with exactly one
``is_final`` delta, or exactly one ToolCall. The two are separate frozen
types so a mixed event cannot be represented.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class TextDelta:
    """Cumulative text snapshot of the model's answer.

    Attributes:
        content: All text received so far (not just the newest chunk).
        is_final: True on the last delta of the completion.
    """

    content: str
    is_final: bool = False


@dataclass(frozen=True)
class ToolCall:
    """The single tool the model chose to call.

    Attributes:
        name: Tool name as emitted by the model (not yet checked).
        arguments: JSON-decoded arguments (not yet validated).
        id: Tool call ID from the LLM.
    """

    name: str
    arguments: dict[str, Any] = field(default_factory=dict)
    id: str = ""


CompletionEvent = TextDelta | ToolCall
