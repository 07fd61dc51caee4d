"""Unit tests for tool call validation and dispatch."""

import json

import pytest

from alfred.agents.streaming.dispatcher import dispatch_tool_call, validate_tool_call
from alfred.agents.streaming.events import ToolCall
from alfred.exceptions import UpstreamError, ValidationError
from alfred.tools import FederalRegisterAdapter, ToolRegistry
from alfred.tools.views import DocumentListView
from tests.unit.conftest import RecordingHandler, mock_client

_BODY = json.dumps(
    {
        "count": 1,
        "results": [
            {
                "title": "Mortgage Servicing",
                "publication_date": "2024-02-01",
                "document_number": "2024-01234",
                "html_url": "https://www.federalregister.gov/d/2024-01234",
            }
        ],
    }
)


def make_registry(handler):
    return ToolRegistry(
        [FederalRegisterAdapter(mock_client(handler), base_url="https://fr.test/api/v1")]
    )


class TestValidateToolCall:
    def test_applies_defaults(self):
        registry = make_registry(RecordingHandler())

        args = validate_tool_call(
            registry, ToolCall(name="searchFederalRegisterDocuments", arguments={"term": "rent"})
        )

        assert args == {"term": "rent", "per_page": 20}

    def test_unknown_tool(self):
        registry = make_registry(RecordingHandler())

        with pytest.raises(ValidationError) as exc_info:
            validate_tool_call(registry, ToolCall(name="deleteEverything", arguments={}))

        assert exc_info.value.tool == "deleteEverything"

    def test_schema_violation_lists_errors(self):
        registry = make_registry(RecordingHandler())

        with pytest.raises(ValidationError) as exc_info:
            validate_tool_call(
                registry,
                ToolCall(name="searchFederalRegisterDocuments", arguments={"per_page": "twenty"}),
            )

        assert exc_info.value.errors
        assert exc_info.value.errors[0]["loc"] == ("per_page",)


class TestDispatchToolCall:
    @pytest.mark.asyncio
    async def test_invokes_adapter(self):
        handler = RecordingHandler(body=_BODY)
        registry = make_registry(handler)

        result = await dispatch_tool_call(
            registry, ToolCall(name="searchFederalRegisterDocuments", arguments={"term": "mortgage"})
        )

        assert len(handler.requests) == 1
        assert result.tool_name == "searchFederalRegisterDocuments"
        assert result.raw_body == _BODY
        assert isinstance(result.normalized_view, DocumentListView)

    @pytest.mark.asyncio
    async def test_invalid_call_never_reaches_network(self):
        handler = RecordingHandler(body=_BODY)
        registry = make_registry(handler)

        with pytest.raises(ValidationError):
            await dispatch_tool_call(
                registry,
                ToolCall(name="searchFederalRegisterDocuments", arguments={"bogus": True}),
            )

        assert handler.requests == []

    @pytest.mark.asyncio
    async def test_uses_prevalidated_arguments(self):
        handler = RecordingHandler(body=_BODY)
        registry = make_registry(handler)
        call = ToolCall(name="searchFederalRegisterDocuments", arguments={"term": "ignored"})

        await dispatch_tool_call(registry, call, validated_arguments={"term": "used", "per_page": 5})

        params = handler.last.url.params
        assert params["conditions[term]"] == "used"
        assert params["per_page"] == "5"

    @pytest.mark.asyncio
    async def test_adapter_failure_propagates(self):
        registry = make_registry(RecordingHandler(status_code=503, body="unavailable"))

        with pytest.raises(UpstreamError) as exc_info:
            await dispatch_tool_call(
                registry, ToolCall(name="searchFederalRegisterDocuments", arguments={})
            )

        assert exc_info.value.status == 503
