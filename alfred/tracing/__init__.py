"""MLflow tracing for ALFReD.

This module provides:
- MLflow initialization from settings
- A span decorator for completions and tool invocations
- Session context for trace correlation

Uses lazy imports to avoid loading MLflow until actually needed.
"""

from typing import TYPE_CHECKING

_EXPORTS = {
    "init_mlflow": "alfred.tracing.mlflow",
    "get_tracing_status": "alfred.tracing.mlflow",
    "trace_with_uri": "alfred.tracing.mlflow",
    "get_session_id": "alfred.tracing.context",
    "session_context": "alfred.tracing.context",
}

_cache: dict = {}


def __getattr__(name: str):
    """Lazy import attributes on first access."""
    if name in _cache:
        return _cache[name]

    if name in _EXPORTS:
        from importlib import import_module

        module = import_module(_EXPORTS[name])
        attr = getattr(module, name)
        _cache[name] = attr
        return attr

    raise AttributeError(f"module 'alfred.tracing' has no attribute '{name}'")


def __dir__() -> list[str]:
    """List all available attributes."""
    return list(_EXPORTS.keys())


if TYPE_CHECKING:
    from alfred.tracing.context import get_session_id, session_context
    from alfred.tracing.mlflow import get_tracing_status, init_mlflow, trace_with_uri

__all__ = [
    "get_session_id",
    "get_tracing_status",
    "init_mlflow",
    "session_context",
    "trace_with_uri",
]
