"""Base HTTP adapter for the upstream data APIs.

An adapter turns validated tool arguments into one GET request against an
external API and the JSON response into a ToolResult. Adapters share a
single ``httpx.AsyncClient`` injected at construction, never retry, and
report failures as UpstreamError (status or transport) or
MalformedResponseError (2xx body that is not a JSON object).
"""

from __future__ import annotations

import json
import logging
import time
from abc import ABC, abstractmethod
from typing import Any, ClassVar

import httpx
from pydantic import BaseModel, ConfigDict

from alfred.exceptions import MalformedResponseError, UpstreamError
from alfred.tools.schemas import ToolParams
from alfred.tools.views import LoadingView, ResultView

logger = logging.getLogger(__name__)

_MAX_ERROR_BODY_CHARS = 2000

QueryParams = list[tuple[str, str]]


class ToolResult(BaseModel):
    """Outcome of one successful tool invocation.

    Attributes:
        tool_name: Registered tool name.
        raw_payload: Parsed JSON returned by the upstream API.
        raw_body: Exact response text, used verbatim in the transcript.
        normalized_view: Display projection of the payload.
    """

    model_config = ConfigDict(frozen=True)

    tool_name: str
    raw_payload: dict[str, Any]
    raw_body: str
    normalized_view: ResultView


def stringify(value: Any) -> str:
    """Render a query value the way the upstream APIs expect."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class ToolAdapter(ABC):
    """One external API exposed to the model as a tool."""

    name: ClassVar[str]
    description: ClassVar[str]
    params_model: ClassVar[type[ToolParams]]
    loading_message: ClassVar[str] = "Loading..."

    def __init__(self, http_client: httpx.AsyncClient, *, base_url: str) -> None:
        self._http = http_client
        self.base_url = base_url.rstrip("/")

    def loading_view(self) -> LoadingView:
        """Placeholder shown while this tool runs."""
        return LoadingView(tool_name=self.name, message=self.loading_message)

    @abstractmethod
    def build_request(self, params: ToolParams) -> tuple[str, QueryParams]:
        """Map validated parameters to a URL and query string pairs."""

    @abstractmethod
    def normalize(self, payload: dict[str, Any], params: ToolParams) -> ResultView:
        """Project the raw payload to a display view.

        Raises:
            UpstreamError: If the top-level result array is missing.
        """

    async def invoke(self, arguments: dict[str, Any]) -> ToolResult:
        """Call the upstream API with already-validated arguments."""
        params = self.params_model.model_validate(arguments)
        url, query = self.build_request(params)
        body = await self._get(url, query)
        payload = self._parse(body)
        view = self.normalize(payload, params)
        return ToolResult(
            tool_name=self.name,
            raw_payload=payload,
            raw_body=body,
            normalized_view=view,
        )

    async def _get(self, url: str, query: QueryParams) -> str:
        start_time = time.perf_counter()
        try:
            response = await self._http.get(url, params=query)
        except httpx.TimeoutException as e:
            raise UpstreamError(
                f"{self.name}: request timed out", tool=self.name, body=str(e)
            ) from e
        except httpx.HTTPError as e:
            raise UpstreamError(
                f"{self.name}: {type(e).__name__}", tool=self.name, body=str(e)
            ) from e

        duration_ms = (time.perf_counter() - start_time) * 1000
        logger.debug(
            "%s GET %s -> HTTP %d in %.0fms", self.name, url, response.status_code, duration_ms
        )

        if not response.is_success:
            raise UpstreamError(
                f"{self.name}: HTTP {response.status_code}",
                tool=self.name,
                status=response.status_code,
                body=response.text[:_MAX_ERROR_BODY_CHARS],
            )
        return response.text

    def _parse(self, body: str) -> dict[str, Any]:
        try:
            payload = json.loads(body)
        except json.JSONDecodeError as e:
            raise MalformedResponseError(
                f"{self.name}: response is not JSON ({e.msg})",
                tool=self.name,
                body=body[:_MAX_ERROR_BODY_CHARS],
            ) from e
        if not isinstance(payload, dict):
            raise MalformedResponseError(
                f"{self.name}: expected a JSON object, got {type(payload).__name__}",
                tool=self.name,
                body=body[:_MAX_ERROR_BODY_CHARS],
            )
        return payload

    def _require_list(self, payload: dict[str, Any], key: str) -> list[Any]:
        """Return ``payload[key]`` or fail when the result array is absent."""
        results = payload.get(key)
        if not isinstance(results, list):
            raise UpstreamError(
                f"{self.name}: response has no '{key}' array",
                tool=self.name,
                body=json.dumps(payload)[:_MAX_ERROR_BODY_CHARS],
            )
        return results
