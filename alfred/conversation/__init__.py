"""Conversation state: immutable turns and append-only transcripts."""

from alfred.conversation.store import ConversationManager, ConversationStore
from alfred.conversation.turns import ConversationTurn, Role

__all__ = [
    "ConversationManager",
    "ConversationStore",
    "ConversationTurn",
    "Role",
]
