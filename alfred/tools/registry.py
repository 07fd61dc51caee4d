"""Tool registry: the static catalogue of tools the model may call.

The registry is built once at process start from a set of adapters and is
read-only afterwards. It owns argument validation so a bad call is rejected
before any adapter (and any network request) is reached.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError as PydanticValidationError

from alfred.exceptions import ConfigurationError, ValidationError
from alfred.tools.federal_register import FederalRegisterAdapter
from alfred.tools.fred import FredAdapter
from alfred.tools.google_cse import GoogleSearchAdapter

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    import httpx

    from alfred.settings import Settings
    from alfred.tools.base import ToolAdapter
    from alfred.tools.schemas import ToolParams

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolDescriptor:
    """A callable tool as presented to the model.

    Attributes:
        name: Unique tool name.
        description: Natural-language description consumed by the model.
        parameter_schema: Strict pydantic model for the arguments.
    """

    name: str
    description: str
    parameter_schema: type[ToolParams]

    def json_schema(self) -> dict[str, Any]:
        schema = self.parameter_schema.model_json_schema()
        schema.pop("title", None)
        schema.pop("description", None)
        return schema

    def to_openai_tool(self) -> dict[str, Any]:
        """OpenAI function-calling spec for ``bind_tools``."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.json_schema(),
            },
        }


class ToolRegistry:
    """Immutable name -> (descriptor, adapter) catalogue."""

    def __init__(self, adapters: Iterable[ToolAdapter]) -> None:
        descriptors: dict[str, ToolDescriptor] = {}
        by_name: dict[str, ToolAdapter] = {}
        for adapter in adapters:
            if adapter.name in descriptors:
                raise ConfigurationError(f"Duplicate tool name: {adapter.name}")
            descriptors[adapter.name] = ToolDescriptor(
                name=adapter.name,
                description=adapter.description,
                parameter_schema=adapter.params_model,
            )
            by_name[adapter.name] = adapter
        self._descriptors: Mapping[str, ToolDescriptor] = MappingProxyType(descriptors)
        self._adapters: Mapping[str, ToolAdapter] = MappingProxyType(by_name)

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors

    def __len__(self) -> int:
        return len(self._descriptors)

    def list_tools(self) -> tuple[ToolDescriptor, ...]:
        """All descriptors in registration order."""
        return tuple(self._descriptors.values())

    def get(self, name: str) -> ToolDescriptor:
        try:
            return self._descriptors[name]
        except KeyError:
            raise ValidationError(f"Unknown tool: {name}", tool=name) from None

    def adapter_for(self, name: str) -> ToolAdapter:
        """Adapter whose name matches exactly."""
        self.get(name)
        return self._adapters[name]

    def validate(self, name: str, arguments: Mapping[str, Any]) -> dict[str, Any]:
        """Validate a tool call against its descriptor.

        Returns:
            Arguments with declared defaults filled in and unset optional
            fields dropped.

        Raises:
            ValidationError: Unknown tool or arguments violating the schema.
        """
        descriptor = self.get(name)
        try:
            params = descriptor.parameter_schema.model_validate(dict(arguments))
        except PydanticValidationError as e:
            errors = e.errors(include_url=False)
            raise ValidationError(
                f"Invalid arguments for {name}: {e.error_count()} error(s)",
                tool=name,
                errors=errors,
            ) from e
        return params.model_dump(exclude_none=True)

    def to_openai_tools(self) -> list[dict[str, Any]]:
        return [descriptor.to_openai_tool() for descriptor in self.list_tools()]


def build_default_registry(settings: Settings, http_client: httpx.AsyncClient) -> ToolRegistry:
    """Register every adapter whose credentials are configured.

    The Federal Register API needs no key and is always registered; FRED and
    Google Custom Search are skipped (with a warning) until configured.
    """
    adapters: list[ToolAdapter] = [
        FederalRegisterAdapter(http_client, base_url=settings.federal_register_base_url)
    ]

    try:
        adapters.append(
            FredAdapter(
                http_client,
                base_url=settings.fred_base_url,
                api_key=settings.fred_api_key.get_secret_value(),
            )
        )
    except ConfigurationError as e:
        logger.warning("Skipping getFredData: %s", e)

    try:
        adapters.append(
            GoogleSearchAdapter(
                http_client,
                base_url=settings.google_cse_base_url,
                api_key=settings.google_api_key.get_secret_value(),
                engine_id=settings.google_cse_id,
            )
        )
    except ConfigurationError as e:
        logger.warning("Skipping googleCSESearch: %s", e)

    return ToolRegistry(adapters)
