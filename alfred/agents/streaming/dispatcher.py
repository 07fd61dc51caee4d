"""Tool dispatcher — validate a model tool call and run the matching adapter.

Validation always happens before the adapter is resolved, so an unknown
tool or a schema violation never reaches the network.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Any

from alfred.tracing import trace_with_uri

if TYPE_CHECKING:
    from alfred.agents.streaming.events import ToolCall
    from alfred.tools.base import ToolAdapter, ToolResult
    from alfred.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


def validate_tool_call(registry: ToolRegistry, call: ToolCall) -> dict[str, Any]:
    """Check the call against the registry.

    Returns:
        Validated arguments with declared defaults applied.

    Raises:
        ValidationError: Unknown tool name or arguments violating the schema.
    """
    return registry.validate(call.name, call.arguments)


@trace_with_uri(name="tools.invoke", span_type="TOOL")
async def invoke_adapter(adapter: ToolAdapter, arguments: dict[str, Any]) -> ToolResult:
    """Invoke an adapter once; failures propagate unchanged."""
    start_time = time.perf_counter()
    try:
        return await adapter.invoke(arguments)
    finally:
        logger.info(
            "Tool %s finished in %.0fms",
            adapter.name,
            (time.perf_counter() - start_time) * 1000,
        )


async def dispatch_tool_call(
    registry: ToolRegistry,
    call: ToolCall,
    *,
    validated_arguments: dict[str, Any] | None = None,
) -> ToolResult:
    """Validate (unless already done) and execute a single tool call.

    Args:
        registry: Tool catalogue.
        call: Tool call from the completion stream.
        validated_arguments: Result of a prior ``validate_tool_call``.

    Raises:
        ValidationError: The call is invalid; no adapter was invoked.
        UpstreamError / MalformedResponseError: The adapter failed.
    """
    arguments = (
        validated_arguments
        if validated_arguments is not None
        else validate_tool_call(registry, call)
    )
    adapter = registry.adapter_for(call.name)
    logger.info("Dispatching %s", call.name)
    return await invoke_adapter(adapter, arguments)
