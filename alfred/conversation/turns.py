"""Conversation turn model."""

from datetime import UTC, datetime
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class Role(StrEnum):
    """Author of a conversation turn."""

    USER = "user"
    ASSISTANT = "assistant"
    SYSTEM = "system"
    TOOL = "tool"


class ConversationTurn(BaseModel):
    """One immutable entry of a transcript.

    Tool turns carry the tool name, the call id and the validated arguments
    so the transcript can be replayed to the model as a matched
    tool-call / tool-result pair. ``content`` of a tool turn is the raw
    upstream response body.
    """

    model_config = ConfigDict(frozen=True)

    role: Role
    content: str
    tool_name: str | None = None
    tool_call_id: str | None = None
    tool_arguments: dict[str, Any] | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @model_validator(mode="after")
    def _tool_fields_only_on_tool_turns(self) -> "ConversationTurn":
        if self.role == Role.TOOL and not self.tool_name:
            raise ValueError("tool turns require tool_name")
        if self.role != Role.TOOL and (self.tool_name or self.tool_call_id):
            raise ValueError(f"{self.role.value} turns cannot carry tool fields")
        return self

    @classmethod
    def user(cls, content: str) -> "ConversationTurn":
        return cls(role=Role.USER, content=content)

    @classmethod
    def assistant(cls, content: str) -> "ConversationTurn":
        return cls(role=Role.ASSISTANT, content=content)

    @classmethod
    def tool(
        cls,
        *,
        tool_name: str,
        content: str,
        tool_call_id: str,
        tool_arguments: dict[str, Any] | None = None,
    ) -> "ConversationTurn":
        return cls(
            role=Role.TOOL,
            content=content,
            tool_name=tool_name,
            tool_call_id=tool_call_id,
            tool_arguments=tool_arguments or {},
        )
