"""MLflow span tracing for completions and tool invocations.

Tracing is opt-in (``MLFLOW_TRACES_ENABLED``). All functions degrade
gracefully: if MLflow is not installed or the backend is misconfigured the
decorated call simply runs untraced. A failure inside the traced function
itself always propagates unchanged.
"""

import os

os.environ.setdefault("MLFLOW_HTTP_REQUEST_TIMEOUT", "3")
os.environ.setdefault("MLFLOW_HTTP_REQUEST_MAX_RETRIES", "0")

import functools
import inspect
import logging
from collections.abc import Callable
from typing import Any, ParamSpec, TypeVar

from alfred.settings import get_settings
from alfred.tracing.context import get_session_id

P = ParamSpec("P")
R = TypeVar("R")

_logger = logging.getLogger(__name__)

_mlflow_available: bool = True
_mlflow_initialized: bool = False


def _safe_import_mlflow() -> Any | None:
    """Safely import MLflow, returning None if unavailable."""
    global _mlflow_available
    if not _mlflow_available:
        return None
    try:
        import mlflow

        # Re-suppress noisy loggers after MLflow configures its own
        from alfred.logging_config import suppress_noisy_loggers

        suppress_noisy_loggers()
        return mlflow
    except ImportError:
        _mlflow_available = False
        _logger.debug("MLflow not installed, tracing disabled")
        return None


def init_mlflow() -> Any | None:
    """Point MLflow at the configured tracking server and experiment.

    Returns:
        The mlflow module when tracing is enabled and ready, else None.
    """
    global _mlflow_initialized, _mlflow_available

    settings = get_settings()
    if not settings.mlflow_traces_enabled or not _mlflow_available:
        return None

    mlflow = _safe_import_mlflow()
    if mlflow is None:
        return None
    if _mlflow_initialized:
        return mlflow

    try:
        mlflow.set_tracking_uri(settings.mlflow_tracking_uri)
        mlflow.set_experiment(settings.mlflow_experiment_name)
    except Exception as e:
        _mlflow_available = False
        _logger.debug("MLflow initialization failed: %s", e)
        return None

    _mlflow_initialized = True
    return mlflow


def get_tracing_status() -> dict[str, Any]:
    """Summarize tracing configuration for display."""
    settings = get_settings()
    return {
        "tracking_uri": settings.mlflow_tracking_uri,
        "experiment_name": settings.mlflow_experiment_name,
        "traces_enabled": settings.mlflow_traces_enabled and _mlflow_available,
    }


def trace_with_uri(
    name: str | None = None,
    span_type: str = "UNKNOWN",
    attributes: dict[str, Any] | None = None,
) -> Callable[[Callable[P, R]], Callable[P, R]]:
    """Trace an async function with an MLflow span.

    Args:
        name: Span name (defaults to function name)
        span_type: Type of span (CHAIN, TOOL, LLM, RETRIEVER, etc.)
        attributes: Additional attributes to attach to the span

    Returns:
        Decorated function with tracing
    """

    def decorator(func: Callable[P, R]) -> Callable[P, R]:
        span_name = name or func.__name__
        if not inspect.iscoroutinefunction(func):
            raise TypeError(f"trace_with_uri only supports coroutine functions: {span_name}")

        @functools.wraps(func)
        async def async_wrapper(*args: P.args, **kwargs: P.kwargs) -> Any:
            mlflow = init_mlflow()
            if mlflow is None:
                return await func(*args, **kwargs)  # type: ignore[misc]

            span_attributes = dict(attributes or {})
            session_id = get_session_id()
            if session_id:
                span_attributes["session.id"] = session_id

            try:
                span_cm = mlflow.start_span(
                    name=span_name, span_type=span_type, attributes=span_attributes
                )
                span_cm.__enter__()
            except Exception as e:
                _logger.debug("Span creation failed, running without trace: %s", e)
                return await func(*args, **kwargs)  # type: ignore[misc]

            try:
                result = await func(*args, **kwargs)  # type: ignore[misc]
            except BaseException as e:
                span_cm.__exit__(type(e), e, e.__traceback__)
                raise
            span_cm.__exit__(None, None, None)
            return result

        return async_wrapper  # type: ignore[return-value]

    return decorator
