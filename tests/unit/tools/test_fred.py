"""Unit tests for the FRED adapter."""

import json

import pytest

from alfred.exceptions import ConfigurationError, UpstreamError
from alfred.tools.fred import WELL_KNOWN_SERIES, FredAdapter
from alfred.tools.views import SeriesChartView
from tests.unit.conftest import RecordingHandler, mock_client


def observations(*values: str) -> str:
    return json.dumps(
        {
            "units": "lin",
            "count": len(values),
            "observations": [
                {"date": f"2024-0{i + 1}-01", "value": value} for i, value in enumerate(values)
            ],
        }
    )


def make_adapter(handler) -> FredAdapter:
    return FredAdapter(mock_client(handler), base_url="https://fred.test/fred", api_key="secret")


class TestFredAdapter:
    def test_requires_api_key(self):
        with pytest.raises(ConfigurationError):
            FredAdapter(mock_client(RecordingHandler()), base_url="https://fred.test", api_key="")

    def test_description_lists_well_known_series(self):
        for series_id in WELL_KNOWN_SERIES:
            assert series_id in FredAdapter.description

    @pytest.mark.asyncio
    async def test_request_carries_key_and_json_format(self):
        handler = RecordingHandler(body=observations("3.7"))

        await make_adapter(handler).invoke(
            {"series_id": "UNRATE", "observation_start": "2021-01-20", "units": "pc1"}
        )

        request = handler.last
        assert request.url.path == "/fred/series/observations"
        params = request.url.params
        assert params["series_id"] == "UNRATE"
        assert params["observation_start"] == "2021-01-20"
        assert params["units"] == "pc1"
        assert params["api_key"] == "secret"
        assert params["file_type"] == "json"

    @pytest.mark.asyncio
    async def test_chart_summary(self):
        result = await make_adapter(RecordingHandler(body=observations("4.0", "3.8", "3.9"))).invoke(
            {"series_id": "UNRATE"}
        )

        view = result.normalized_view
        assert isinstance(view, SeriesChartView)
        assert view.indicator == "UNRATE"
        assert [o.value for o in view.observations] == [4.0, 3.8, 3.9]
        assert view.current_value == 3.9
        assert view.previous_value == 3.8
        assert view.percent_change == pytest.approx((3.9 - 3.8) / 3.8 * 100)
        assert view.start_date == "2024-01-01"
        assert view.end_date == "2024-03-01"

    @pytest.mark.asyncio
    async def test_descending_sort_order_summarizes_latest(self):
        body = json.dumps(
            {
                "observations": [
                    {"date": "2024-03-01", "value": "3.9"},
                    {"date": "2024-02-01", "value": "3.8"},
                    {"date": "2024-01-01", "value": "4.0"},
                ]
            }
        )
        handler = RecordingHandler(body=body)

        result = await make_adapter(handler).invoke({"series_id": "UNRATE", "sort_order": "desc"})

        assert handler.last.url.params["sort_order"] == "desc"
        view = result.normalized_view
        assert [o.date for o in view.observations] == ["2024-01-01", "2024-02-01", "2024-03-01"]
        assert view.current_value == 3.9
        assert view.previous_value == 3.8
        assert view.percent_change == pytest.approx((3.9 - 3.8) / 3.8 * 100)
        assert view.start_date == "2024-01-01"
        assert view.end_date == "2024-03-01"
        assert result.raw_body == body

    @pytest.mark.asyncio
    async def test_missing_values_become_none(self):
        result = await make_adapter(RecordingHandler(body=observations("65.9", "."))).invoke(
            {"series_id": "RSAHORUSQ156S"}
        )

        view = result.normalized_view
        assert view.observations[1].value is None
        assert view.current_value == 65.9
        assert view.percent_change == 0

    @pytest.mark.asyncio
    async def test_empty_observations(self):
        result = await make_adapter(RecordingHandler(body=observations())).invoke(
            {"series_id": "UNRATE"}
        )

        view = result.normalized_view
        assert view.observations == []
        assert view.current_value is None
        assert view.percent_change is None
        assert view.start_date is None

    @pytest.mark.asyncio
    async def test_raw_body_preserved(self):
        body = observations("1.5")

        result = await make_adapter(RecordingHandler(body=body)).invoke({"series_id": "UNRATE"})

        assert result.raw_body == body

    @pytest.mark.asyncio
    async def test_missing_observations_array(self):
        body = json.dumps({"error_code": 400, "error_message": "Bad Request."})

        with pytest.raises(UpstreamError):
            await make_adapter(RecordingHandler(body=body)).invoke({"series_id": "UNRATE"})

    @pytest.mark.asyncio
    async def test_bad_series_status(self):
        handler = RecordingHandler(
            status_code=400,
            body='{"error_code": 400, "error_message": "Bad Request.  The series does not exist."}',
        )

        with pytest.raises(UpstreamError) as exc_info:
            await make_adapter(handler).invoke({"series_id": "NOPE"})

        assert exc_info.value.status == 400
        assert "does not exist" in exc_info.value.body
