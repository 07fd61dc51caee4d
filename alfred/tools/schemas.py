"""Parameter schemas for the registered tools.

Each schema is a strict pydantic model: unknown fields are rejected and
values are never coerced across types, so a malformed tool call fails
before any network request is made. The JSON schema sent to the model is
derived from these classes.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

_DATE = r"^\d{4}-\d{2}-\d{2}$"
_YEAR = r"^\d{4}$"


class ToolParams(BaseModel):
    """Base class for tool parameter schemas."""

    model_config = ConfigDict(strict=True, extra="forbid", frozen=True)


class FederalRegisterSearchParams(ToolParams):
    """Arguments for ``searchFederalRegisterDocuments``."""

    per_page: int = Field(default=20, ge=1, le=1000, description="Documents per page (1-1000).")
    page: int | None = Field(default=None, ge=1, description="Page number of the result set.")
    order: Literal["relevance", "newest", "oldest", "executive_order_number"] | None = Field(
        default=None, description="Result ordering."
    )
    return_fields: list[str] | None = Field(
        default=None, description="Document fields to return (e.g. 'title', 'abstract')."
    )
    term: str | None = Field(default=None, description="Full-text search term.")
    publication_date_is: str | None = Field(
        default=None, pattern=_DATE, description="Exact publication date (YYYY-MM-DD)."
    )
    publication_date_year: str | None = Field(
        default=None, pattern=_YEAR, description="Publication year (YYYY)."
    )
    publication_date_gte: str | None = Field(
        default=None, pattern=_DATE, description="Published on or after (YYYY-MM-DD)."
    )
    publication_date_lte: str | None = Field(
        default=None, pattern=_DATE, description="Published on or before (YYYY-MM-DD)."
    )
    effective_date_is: str | None = Field(
        default=None, pattern=_DATE, description="Exact effective date (YYYY-MM-DD)."
    )
    effective_date_year: str | None = Field(
        default=None, pattern=_YEAR, description="Effective year (YYYY)."
    )
    effective_date_gte: str | None = Field(
        default=None, pattern=_DATE, description="Effective on or after (YYYY-MM-DD)."
    )
    effective_date_lte: str | None = Field(
        default=None, pattern=_DATE, description="Effective on or before (YYYY-MM-DD)."
    )
    agencies: list[str] | None = Field(
        default=None,
        description="Agency slugs, e.g. 'consumer-financial-protection-bureau', 'energy-department'.",
    )
    type: list[Literal["RULE", "PRORULE", "NOTICE", "PRESDOCU"]] | None = Field(
        default=None, description="Document types."
    )
    presidential_document_type: list[str] | None = Field(
        default=None, description="Presidential document types, e.g. 'executive_order'."
    )
    president: list[str] | None = Field(
        default=None, description="President slugs, e.g. 'joe-biden'."
    )
    docket_id: str | None = Field(default=None, description="Agency docket number.")
    regulation_id_number: str | None = Field(
        default=None, description="Regulation Identifier Number (RIN)."
    )
    sections: list[str] | None = Field(
        default=None, description="Federal Register sections, e.g. 'money'."
    )
    topics: list[str] | None = Field(default=None, description="CFR indexing topics.")
    significant: Literal["0", "1"] | None = Field(
        default=None, description="'1' for significant documents under EO 12866."
    )
    cfr_title: int | None = Field(default=None, ge=1, description="CFR title cited.")
    cfr_part: int | None = Field(default=None, ge=1, description="CFR part cited.")
    near_location: str | None = Field(
        default=None, description="Location (zip code or place) for proximity search."
    )
    near_within: int | None = Field(
        default=None, ge=1, le=200, description="Radius in miles around near_location."
    )


class FredObservationsParams(ToolParams):
    """Arguments for ``getFredData``."""

    series_id: str = Field(min_length=1, description="FRED series identifier, e.g. 'UNRATE'.")
    realtime_start: str | None = Field(default=None, pattern=_DATE)
    realtime_end: str | None = Field(default=None, pattern=_DATE)
    limit: int | None = Field(default=None, ge=1, le=100000)
    offset: int | None = Field(default=None, ge=0)
    sort_order: Literal["asc", "desc"] | None = None
    observation_start: str | None = Field(
        default=None, pattern=_DATE, description="First observation date (YYYY-MM-DD)."
    )
    observation_end: str | None = Field(
        default=None, pattern=_DATE, description="Last observation date (YYYY-MM-DD)."
    )
    units: Literal["lin", "chg", "ch1", "pch", "pc1", "pca", "cch", "cca", "log"] | None = Field(
        default=None, description="Data transformation, e.g. 'pc1' for percent change from a year ago."
    )
    frequency: (
        Literal[
            "d", "w", "bw", "m", "q", "sa", "a",
            "wef", "weth", "wew", "wetu", "wem", "wesu", "wesa", "bwew", "bwem",
        ]
        | None
    ) = Field(default=None, description="Aggregate to a lower frequency.")
    aggregation_method: Literal["avg", "sum", "eop"] | None = None
    output_type: Literal["1", "2", "3", "4"] | None = None
    vintage_dates: str | None = Field(
        default=None, description="Comma-separated vintage dates (YYYY-MM-DD)."
    )


class GoogleSearchParams(ToolParams):
    """Arguments for ``googleCSESearch``."""

    q: str = Field(min_length=1, description="Search query string.")
    dateRestrict: str | None = Field(  # noqa: N815
        default=None,
        pattern=r"^[dwmy]\d+$",
        description="Restrict by age: 'd[number]', 'w[number]', 'm[number]' or 'y[number]'.",
    )
    lr: str | None = Field(
        default=None, description="Restrict to a language, e.g. 'lang_en'."
    )
    cr: str | None = Field(
        default=None, description="Restrict to a country, e.g. 'countryUS'."
    )
    num: int = Field(default=10, ge=1, le=10, description="Number of results to return (1-10).")
    start: int | None = Field(
        default=None, ge=1, le=91, description="Index of the first result to return."
    )
    fileType: str | None = Field(  # noqa: N815
        default=None, description="Restrict to a file extension, e.g. 'pdf'."
    )
    sort: str | None = Field(default=None, description="Sort expression, e.g. 'date'.")
