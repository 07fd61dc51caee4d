"""StreamedReply — the caller-visible, write-then-sealed output of a cycle.

States: ``pending`` (initial placeholder) → ``updating`` (any number of
``update`` calls) → ``sealed`` (one ``seal``; immutable afterwards).

Readers either poll ``value`` or iterate ``updates()``; both always see the
latest view at the time of reading. ``updates()`` may skip intermediate
views when the reader is slower than the writer, but never goes backwards.
"""

from __future__ import annotations

import asyncio
from enum import StrEnum
from typing import TYPE_CHECKING

from alfred.exceptions import ReplySealedError
from alfred.tools.views import LoadingView

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from alfred.tools.views import ReplyView


class ReplyState(StrEnum):
    PENDING = "pending"
    UPDATING = "updating"
    SEALED = "sealed"


class StreamedReply:
    """Single mutable-until-sealed view slot."""

    def __init__(self, initial: ReplyView | None = None) -> None:
        self._view: ReplyView = initial if initial is not None else LoadingView()
        self._state = ReplyState.PENDING
        self._version = 0
        self._changed = asyncio.Event()

    @property
    def state(self) -> ReplyState:
        return self._state

    @property
    def is_sealed(self) -> bool:
        return self._state == ReplyState.SEALED

    @property
    def value(self) -> ReplyView:
        """The latest view (the final view once sealed)."""
        return self._view

    @property
    def version(self) -> int:
        """Number of transitions so far; increases with every update/seal."""
        return self._version

    def update(self, view: ReplyView) -> None:
        """Replace the current view.

        Raises:
            ReplySealedError: The reply is already sealed.
        """
        if self.is_sealed:
            raise ReplySealedError("Cannot update a sealed reply")
        self._state = ReplyState.UPDATING
        self._publish(view)

    def seal(self, final_view: ReplyView) -> None:
        """Set the final view; the reply is immutable afterwards.

        Raises:
            ReplySealedError: The reply is already sealed (its value is unchanged).
        """
        if self.is_sealed:
            raise ReplySealedError("Reply is already sealed")
        self._state = ReplyState.SEALED
        self._publish(final_view)

    def _publish(self, view: ReplyView) -> None:
        self._view = view
        self._version += 1
        # Wake current waiters, then arm a fresh event for the next change
        changed, self._changed = self._changed, asyncio.Event()
        changed.set()

    async def wait_sealed(self) -> ReplyView:
        """Wait until the reply is sealed and return the final view."""
        while not self.is_sealed:
            await self._changed.wait()
        return self._view

    async def updates(self) -> AsyncIterator[ReplyView]:
        """Yield the current view, then each newer view, ending with the sealed one."""
        seen = -1
        while True:
            if self._version != seen:
                seen = self._version
                yield self._view
                if self.is_sealed:
                    return
                continue
            await self._changed.wait()
