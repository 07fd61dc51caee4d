"""Federal Register document search.

Friendly argument names are mapped onto the API's bracketed
``conditions[...]`` query keys; list values become repeated ``[]`` keys.
"""

from __future__ import annotations

from typing import Any

from alfred.tools.base import QueryParams, ToolAdapter, stringify
from alfred.tools.schemas import FederalRegisterSearchParams
from alfred.tools.views import DocumentCard, DocumentListView

NO_TITLE = "No title provided"
NO_DATE = "No date provided"
NO_DOCUMENT_NUMBER = "No document number"

# Parameter name -> query key; keys ending in [] are repeated per list item
_QUERY_KEYS: dict[str, str] = {
    "per_page": "per_page",
    "page": "page",
    "order": "order",
    "return_fields": "fields[]",
    "term": "conditions[term]",
    "publication_date_is": "conditions[publication_date][is]",
    "publication_date_year": "conditions[publication_date][year]",
    "publication_date_gte": "conditions[publication_date][gte]",
    "publication_date_lte": "conditions[publication_date][lte]",
    "effective_date_is": "conditions[effective_date][is]",
    "effective_date_year": "conditions[effective_date][year]",
    "effective_date_gte": "conditions[effective_date][gte]",
    "effective_date_lte": "conditions[effective_date][lte]",
    "agencies": "conditions[agencies][]",
    "type": "conditions[type][]",
    "presidential_document_type": "conditions[presidential_document_type][]",
    "president": "conditions[president][]",
    "docket_id": "conditions[docket_id]",
    "regulation_id_number": "conditions[regulation_id_number]",
    "sections": "conditions[sections][]",
    "topics": "conditions[topics][]",
    "significant": "conditions[significant]",
    "cfr_title": "conditions[cfr][title]",
    "cfr_part": "conditions[cfr][part]",
    "near_location": "conditions[near][location]",
    "near_within": "conditions[near][within]",
}


class FederalRegisterAdapter(ToolAdapter):
    name = "searchFederalRegisterDocuments"
    description = (
        "Search all Federal Register documents published since 1994. "
        "Specify agencies like this 'consumer-financial-protection-bureau' or "
        "'defense-department' or 'energy-department'."
    )
    params_model = FederalRegisterSearchParams
    loading_message = "Searching the Federal Register..."

    def build_request(self, params: FederalRegisterSearchParams) -> tuple[str, QueryParams]:  # type: ignore[override]
        query: QueryParams = [("format", "json")]
        for field_name, value in params.model_dump(exclude_none=True).items():
            key = _QUERY_KEYS[field_name]
            if isinstance(value, list):
                query.extend((key, stringify(item)) for item in value)
            else:
                query.append((key, stringify(value)))
        return f"{self.base_url}/documents.json", query

    def normalize(self, payload: dict[str, Any], params: Any) -> DocumentListView:
        # The API omits "results" when nothing matched
        if "results" not in payload and payload.get("count") == 0:
            return DocumentListView(documents=[])

        documents = []
        for doc in self._require_list(payload, "results"):
            if not isinstance(doc, dict):
                continue
            number = doc.get("document_number") or NO_DOCUMENT_NUMBER
            documents.append(
                DocumentCard(
                    title=doc.get("title") or NO_TITLE,
                    publication_date=doc.get("publication_date") or NO_DATE,
                    document_number=number,
                    html_url=doc.get("html_url"),
                    follow_up_prompt=f"View document {number}",
                )
            )
        return DocumentListView(documents=documents)
