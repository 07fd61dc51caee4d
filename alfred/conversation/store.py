"""Append-only conversation transcripts.

A ConversationStore exposes only ``read_all`` and ``append``: no deletion,
no reordering. Appends are serialized with a per-conversation lock, and
``exclusive()`` lets one dispatch cycle hold the conversation for its whole
duration so turns from two cycles never interleave.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING
from uuid import uuid4

from alfred.conversation.turns import ConversationTurn

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

logger = logging.getLogger(__name__)


class ConversationStore:
    """Transcript for a single conversation, owned by the caller."""

    def __init__(self, conversation_id: str | None = None) -> None:
        self.conversation_id = conversation_id or str(uuid4())
        self._turns: list[ConversationTurn] = []
        self._append_lock = asyncio.Lock()
        self._cycle_lock = asyncio.Lock()

    def __len__(self) -> int:
        return len(self._turns)

    def read_all(self) -> tuple[ConversationTurn, ...]:
        """Snapshot of every turn in chronological order."""
        return tuple(self._turns)

    async def append(self, turn: ConversationTurn) -> None:
        """Append a single, already-complete turn."""
        async with self._append_lock:
            self._turns.append(turn)
        logger.debug(
            "conversation %s: appended %s turn (%d total)",
            self.conversation_id,
            turn.role.value,
            len(self._turns),
        )

    @asynccontextmanager
    async def exclusive(self) -> AsyncIterator[ConversationStore]:
        """Hold the conversation for one dispatch cycle."""
        async with self._cycle_lock:
            yield self


class ConversationManager:
    """Process-lifetime map of conversation id to store."""

    def __init__(self) -> None:
        self._stores: dict[str, ConversationStore] = {}

    def get(self, conversation_id: str | None = None) -> ConversationStore:
        """Return the store for ``conversation_id``, creating it on first use."""
        if conversation_id is not None and conversation_id in self._stores:
            return self._stores[conversation_id]
        store = ConversationStore(conversation_id)
        self._stores[store.conversation_id] = store
        return store

    def __contains__(self, conversation_id: object) -> bool:
        return conversation_id in self._stores
