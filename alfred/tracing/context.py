"""Session context management for trace correlation.

Provides a session ID that flows through all operations within a
conversation, so the completion and tool spans of one cycle can be
grouped together.
"""

from collections.abc import Generator
from contextlib import contextmanager
from contextvars import ContextVar
from uuid import uuid4

_session_id: ContextVar[str | None] = ContextVar("trace_session_id", default=None)


def get_session_id() -> str | None:
    """Get the current session ID, or None if no session is active."""
    return _session_id.get()


@contextmanager
def session_context(session_id: str | None = None) -> Generator[str, None, None]:
    """Context manager for session scope.

    Creates a new session or uses provided ID, then restores
    the previous session on exit.

    Args:
        session_id: Optional session ID to use (creates new if None)

    Yields:
        The active session ID
    """
    previous = _session_id.get()
    sid = session_id or str(uuid4())
    _session_id.set(sid)
    try:
        yield sid
    finally:
        _session_id.set(previous)


__all__ = [
    "get_session_id",
    "session_context",
]
