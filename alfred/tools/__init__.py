"""Tool registry and the upstream data adapters."""

from alfred.tools.base import ToolAdapter, ToolResult
from alfred.tools.federal_register import FederalRegisterAdapter
from alfred.tools.fred import FredAdapter
from alfred.tools.google_cse import GoogleSearchAdapter
from alfred.tools.registry import ToolDescriptor, ToolRegistry, build_default_registry

__all__ = [
    "FederalRegisterAdapter",
    "FredAdapter",
    "GoogleSearchAdapter",
    "ToolAdapter",
    "ToolDescriptor",
    "ToolRegistry",
    "ToolResult",
    "build_default_registry",
]
