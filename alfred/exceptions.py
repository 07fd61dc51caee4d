"""ALFReD exception hierarchy.

Base exceptions for all application layers with correlation ID support.
Every error that can end a dispatch cycle carries a short, human-readable
``user_message`` used for the sealed error view.

Usage:
    from alfred.exceptions import UpstreamError, ValidationError

    try:
        result = await adapter.invoke(arguments)
    except UpstreamError as e:
        logger.error("Adapter failed (%s): %s", e.correlation_id, e)
"""

import uuid
from typing import Any


class AlfredError(Exception):
    """Base exception for all ALFReD application errors.

    Carries a correlation_id for tracing errors across layers.
    """

    user_message = "Something went wrong while handling your request."

    def __init__(self, message: str, *, correlation_id: str | None = None):
        self.correlation_id = correlation_id or str(uuid.uuid4())
        super().__init__(message)


class ValidationError(AlfredError):
    """The model asked for an unknown tool or supplied invalid arguments."""

    user_message = "The assistant tried to use a tool incorrectly, so the request was not run."

    def __init__(
        self,
        message: str,
        *,
        tool: str | None = None,
        errors: list[dict[str, Any]] | None = None,
        **kwargs: Any,
    ):
        self.tool = tool
        self.errors = errors or []
        super().__init__(message, **kwargs)


class UpstreamError(AlfredError):
    """An upstream data API returned a non-2xx status or could not be reached.

    ``status`` is None for transport failures (DNS, connect, timeout).
    """

    user_message = "The data source did not respond successfully. Please try again later."

    def __init__(
        self,
        message: str,
        *,
        tool: str | None = None,
        status: int | None = None,
        body: str = "",
        **kwargs: Any,
    ):
        self.tool = tool
        self.status = status
        self.body = body
        super().__init__(message, **kwargs)


class MalformedResponseError(AlfredError):
    """An upstream data API answered 2xx with a body of the wrong shape."""

    user_message = "The data source returned a response that could not be read."

    def __init__(self, message: str, *, tool: str | None = None, body: str = "", **kwargs: Any):
        self.tool = tool
        self.body = body
        super().__init__(message, **kwargs)


class StreamProtocolError(AlfredError):
    """The completion stream mixed text and tool calls, or held several tool calls."""

    user_message = "The assistant's reply could not be processed."


class LLMError(AlfredError):
    """Errors from LLM provider operations."""

    user_message = "The language model is unavailable right now."

    def __init__(self, message: str, *, provider: str | None = None, **kwargs: Any):
        self.provider = provider
        super().__init__(message, **kwargs)


class ConfigurationError(AlfredError):
    """Errors from application configuration."""


class ReplySealedError(AlfredError):
    """A sealed StreamedReply was updated or sealed again."""
