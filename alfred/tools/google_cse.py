"""Google Custom Search (Programmable Search Engine) JSON API."""

from __future__ import annotations

import logging
import re
from html import unescape
from typing import Any
from urllib.parse import urlsplit

import httpx

from alfred.exceptions import ConfigurationError
from alfred.tools.base import QueryParams, ToolAdapter, stringify
from alfred.tools.schemas import GoogleSearchParams
from alfred.tools.views import SearchResultCard, SearchResultsView

logger = logging.getLogger(__name__)

NO_TITLE = "No title provided"
NO_SNIPPET = "No snippet available"

_TAG_RE = re.compile(r"<[^>]+>")


def _strip_tags(html: str) -> str:
    """Remove HTML tags and unescape entities."""
    return unescape(_TAG_RE.sub("", html)).strip()


def favicon_url(link: str) -> str | None:
    domain = urlsplit(link).hostname
    if not domain:
        return None
    return f"https://www.google.com/s2/favicons?domain={domain}"


class GoogleSearchAdapter(ToolAdapter):
    name = "googleCSESearch"
    description = (
        "Perform searches using Google Custom Search Engine. The search can be "
        "customized with various parameters, including date restrictions, language, "
        "and file types. Use it for breaking news and current content related to "
        "the user's message."
    )
    params_model = GoogleSearchParams
    loading_message = "Searching the web..."

    def __init__(
        self,
        http_client: httpx.AsyncClient,
        *,
        base_url: str,
        api_key: str,
        engine_id: str,
    ) -> None:
        if not api_key or not engine_id:
            raise ConfigurationError("GOOGLE_API_KEY and GOOGLE_CSE_ID are required for googleCSESearch")
        super().__init__(http_client, base_url=base_url)
        self._api_key = api_key
        self._engine_id = engine_id

    def build_request(self, params: GoogleSearchParams) -> tuple[str, QueryParams]:  # type: ignore[override]
        logger.debug("Google CSE search params: %s", params.model_dump(exclude_none=True))
        query: QueryParams = [("key", self._api_key), ("cx", self._engine_id)]
        query += [
            (key, stringify(value)) for key, value in params.model_dump(exclude_none=True).items()
        ]
        return self.base_url, query

    def normalize(self, payload: dict[str, Any], params: Any) -> SearchResultsView:
        # Google omits "items" entirely when nothing matched
        if "items" not in payload and _total_results(payload) == 0:
            return SearchResultsView(query=params.q, items=[])

        items = []
        for item in self._require_list(payload, "items"):
            if not isinstance(item, dict) or not item.get("link"):
                continue
            link = item["link"]
            title = item.get("title") or _strip_tags(item.get("htmlTitle", "")) or NO_TITLE
            items.append(
                SearchResultCard(
                    title=title,
                    link=link,
                    display_link=item.get("displayLink") or urlsplit(link).hostname or link,
                    snippet=item.get("snippet") or _strip_tags(item.get("htmlSnippet", "")) or NO_SNIPPET,
                    favicon_url=favicon_url(link),
                    follow_up_prompt=f"View search result {link}",
                )
            )
        return SearchResultsView(query=params.q, items=items)


def _total_results(payload: dict[str, Any]) -> int | None:
    info = payload.get("searchInformation")
    if not isinstance(info, dict):
        return None
    try:
        return int(info.get("totalResults", ""))
    except (TypeError, ValueError):
        return None
