"""FRED (Federal Reserve Economic Data) series observations."""

from __future__ import annotations

from typing import Any

import httpx

from alfred.exceptions import ConfigurationError
from alfred.tools.base import QueryParams, ToolAdapter, stringify
from alfred.tools.schemas import FredObservationsParams
from alfred.tools.views import Observation, SeriesChartView

# FRED reports missing observations as "."
_MISSING = "."

WELL_KNOWN_SERIES: dict[str, str] = {
    "UNRATE": "the unemployment rate",
    "GDPC1": "real GDP",
    "A939RX0Q048SBEA": "real GDP per capita",
    "RSAHORUSQ156S": "the homeownership rate in the US",
    "TMBACBW027SBOG": "Mortgage-Backed Securities (MBS)",
    "OBMMIFHA30YF": "the FHA Mortgage Index",
    "BOAAAHORUSQ156N": "the Black homeownership rate in the US",
    "RRVRUSQ156N": "the rental vacancy rate",
    "CPILFESL": "inflation",
    "MORTGAGE30US": "the 30-year mortgage rate",
}


def _describe_series() -> str:
    lines = [
        "Fetches data from the FRED API based on the provided series identifier. "
        "Available series identifiers include:"
    ]
    for i, (series_id, label) in enumerate(WELL_KNOWN_SERIES.items(), 1):
        lines.append(f"{i}. '{series_id}' for {label}.")
    return "\n".join(lines)


def _to_float(raw: Any) -> float | None:
    if raw is None or raw == _MISSING:
        return None
    try:
        return float(raw)
    except (TypeError, ValueError):
        return None


class FredAdapter(ToolAdapter):
    name = "getFredData"
    description = _describe_series()
    params_model = FredObservationsParams
    loading_message = "Fetching FRED data..."

    def __init__(self, http_client: httpx.AsyncClient, *, base_url: str, api_key: str) -> None:
        if not api_key:
            raise ConfigurationError("FRED_API_KEY is required for getFredData")
        super().__init__(http_client, base_url=base_url)
        self._api_key = api_key

    def build_request(self, params: FredObservationsParams) -> tuple[str, QueryParams]:  # type: ignore[override]
        query: QueryParams = [
            (key, stringify(value)) for key, value in params.model_dump(exclude_none=True).items()
        ]
        query += [("api_key", self._api_key), ("file_type", "json")]
        return f"{self.base_url}/series/observations", query

    def normalize(self, payload: dict[str, Any], params: Any) -> SeriesChartView:
        observations = [
            Observation(date=str(obs.get("date", "")), value=_to_float(obs.get("value")))
            for obs in self._require_list(payload, "observations")
            if isinstance(obs, dict)
        ]
        # Oldest first regardless of the requested sort_order (ISO dates sort lexically)
        observations.sort(key=lambda obs: obs.date)

        values = [obs.value for obs in observations if obs.value is not None]
        current = values[-1] if values else None
        previous = values[-2] if len(values) > 1 else current
        percent_change = None
        if current is not None and previous:
            percent_change = (current - previous) / previous * 100

        return SeriesChartView(
            indicator=params.series_id,
            observations=observations,
            current_value=current,
            previous_value=previous,
            percent_change=percent_change,
            start_date=observations[0].date if observations else None,
            end_date=observations[-1].date if observations else None,
        )
