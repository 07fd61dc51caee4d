"""Display-oriented views shown through a StreamedReply.

These replace the chat UI widgets (document cards, series chart, search
result cards and their loading skeletons) with plain data that any
caller-side renderer can draw.
"""

from __future__ import annotations

from typing import Annotated, Literal

from pydantic import BaseModel, ConfigDict, Field


class _View(BaseModel):
    model_config = ConfigDict(frozen=True)


class LoadingView(_View):
    """Placeholder shown while a tool call is in flight."""

    kind: Literal["loading"] = "loading"
    tool_name: str | None = None
    message: str = "Thinking..."


class TextView(_View):
    """Markdown text from the model (cumulative)."""

    kind: Literal["text"] = "text"
    content: str


class DocumentCard(_View):
    title: str
    publication_date: str
    document_number: str
    html_url: str | None = None
    follow_up_prompt: str


class DocumentListView(_View):
    """Federal Register documents."""

    kind: Literal["documents"] = "documents"
    documents: list[DocumentCard] = Field(default_factory=list)


class Observation(_View):
    date: str
    value: float | None = None


class SeriesChartView(_View):
    """FRED series observations plus the chart header figures."""

    kind: Literal["series_chart"] = "series_chart"
    indicator: str
    observations: list[Observation] = Field(default_factory=list)
    current_value: float | None = None
    previous_value: float | None = None
    percent_change: float | None = None
    start_date: str | None = None
    end_date: str | None = None


class SearchResultCard(_View):
    title: str
    link: str
    display_link: str
    snippet: str
    favicon_url: str | None = None
    follow_up_prompt: str


class SearchResultsView(_View):
    """Google Custom Search results."""

    kind: Literal["search_results"] = "search_results"
    query: str = ""
    items: list[SearchResultCard] = Field(default_factory=list)


class ErrorView(_View):
    """Human-readable failure for a cycle that did not complete."""

    kind: Literal["error"] = "error"
    error_type: str
    message: str


ResultView = DocumentListView | SeriesChartView | SearchResultsView

ReplyView = Annotated[
    LoadingView | TextView | DocumentListView | SeriesChartView | SearchResultsView | ErrorView,
    Field(discriminator="kind"),
]
