"""Rich renderables for reply views.

Strings from upstream APIs (titles, snippets, links) are wrapped in ``Text``
and never parsed as rich markup.
"""

from rich.console import Group, RenderableType
from rich.markdown import Markdown
from rich.panel import Panel
from rich.spinner import Spinner
from rich.style import Style
from rich.table import Table
from rich.text import Text

from alfred.tools.views import (
    DocumentListView,
    ErrorView,
    LoadingView,
    SearchResultsView,
    SeriesChartView,
    TextView,
)


def _format_number(value: float | None) -> str:
    return "n/a" if value is None else f"{value:,.2f}"


def _linked(text: str, url: str | None, *, dim: bool = False) -> Text:
    return Text(text, style=Style(dim=dim or None, link=url or None))


def render_documents(view: DocumentListView) -> RenderableType:
    if not view.documents:
        return Text("No Federal Register documents matched.", style="dim")

    table = Table(title="📜 Federal Register", show_lines=False)
    table.add_column("Published", style="cyan", no_wrap=True)
    table.add_column("Document", style="dim", no_wrap=True)
    table.add_column("Title")
    for doc in view.documents:
        table.add_row(
            Text(doc.publication_date),
            Text(doc.document_number),
            _linked(doc.title, doc.html_url),
        )
    return table


def render_series(view: SeriesChartView) -> RenderableType:
    change = (
        f"{view.percent_change:+.2f}%" if view.percent_change is not None else "n/a"
    )
    header = Text.assemble(
        (view.indicator, "bold"),
        "\n",
        f"Current: {_format_number(view.current_value)}  "
        f"Previous: {_format_number(view.previous_value)}  "
        f"Change: {change}\n",
        (f"{view.start_date or '?'} → {view.end_date or '?'}", "dim"),
    )

    table = Table(show_header=True, box=None)
    table.add_column("Date", style="cyan")
    table.add_column("Value", justify="right")
    # Most recent observations only; the full series stays in the view
    for obs in view.observations[-12:]:
        table.add_row(Text(obs.date), _format_number(obs.value))

    return Panel(Group(header, table), title="📈 FRED", border_style="green")


def render_search(view: SearchResultsView) -> RenderableType:
    if not view.items:
        return Text(f"No search results for '{view.query}'.", style="dim")

    panels = [
        Panel(
            Text.assemble(item.snippet, "\n", _linked(item.display_link, item.link, dim=True)),
            title=Text(item.title),
            title_align="left",
            border_style="blue",
        )
        for item in view.items
    ]
    return Group(*panels)


def render_view(view: object) -> RenderableType:
    """Return a rich renderable for any reply view."""
    if isinstance(view, LoadingView):
        return Spinner("dots", text=Text(view.message))
    if isinstance(view, TextView):
        return Markdown(view.content)
    if isinstance(view, DocumentListView):
        return render_documents(view)
    if isinstance(view, SeriesChartView):
        return render_series(view)
    if isinstance(view, SearchResultsView):
        return render_search(view)
    if isinstance(view, ErrorView):
        return Panel(
            Text(view.message),
            title=Text(f"❌ {view.error_type}"),
            border_style="red",
        )
    return Text(str(view))
