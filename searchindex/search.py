"""Full text search tool using the Elasticsearch Search and Count APIs."""

import logging
from collections.abc import Mapping
from typing import Any, Final

from httpx import Response
from pydantic import ValidationError

from searchindex.exceptions import InvalidResponseError, SearchIndexError
from searchindex.helper import IndexHelper, check_body, check_status, parse_json
from searchindex.models import SEARCH_INFO_KEY, SearchResult
from searchindex.query import Query, as_query

logger = logging.getLogger(__name__)

DEFAULT_LIMIT: Final[int] = 10
MATCH_ALL_SORT: Final[list[dict[str, str]]] = [{"id": "asc"}]


def build_simple_query(
    keywords: str | None,
    field_name: str,
    limit: int | None = None,
    offset: int = 0,
) -> dict[str, Any]:
    """Build the DSL query used by the keyword search.

    Without keywords every document matches, ordered by `id`. Otherwise the
    keywords are matched against `field_name`.
    """
    query: dict[str, Any] = {
        "from": offset,
        "size": DEFAULT_LIMIT if limit is None else limit,
    }
    if not keywords:
        query["sort"] = list(MATCH_ALL_SORT)
        query["query"] = {"match_all": {}}
    else:
        query["query"] = {"match": {field_name: keywords}}
    return query


def normalize_search_response(data: Any) -> SearchResult:
    """Turn a search response into a `SearchResult`.

    Each document is the hit's `_source`, tagged with the hit's relevance score
    under `__search_info.score`.
    """
    if not isinstance(data, dict) or not isinstance(data.get("hits"), dict):
        raise InvalidResponseError("Search response has no hits.")
    if "timed_out" not in data or data["timed_out"]:
        raise InvalidResponseError("Search request timed out.")
    hits = data["hits"]
    if not hits.get("hits"):
        raise InvalidResponseError("Search returned no documents.")

    documents = []
    for hit in hits["hits"]:
        if not isinstance(hit, dict):
            raise InvalidResponseError(f"Malformed search hit: {hit!r}")
        source = hit.get("_source") or {}
        if not isinstance(source, Mapping):
            raise InvalidResponseError(f"Malformed search hit source: {source!r}")
        document = dict(source)
        # A stored value that is not a mapping is replaced.
        search_info = document.get(SEARCH_INFO_KEY)
        search_info = dict(search_info) if isinstance(search_info, Mapping) else {}
        search_info["score"] = hit.get("_score")
        document[SEARCH_INFO_KEY] = search_info
        documents.append(document)

    total = hits.get("total")
    if isinstance(total, dict):
        total = total.get("value")

    try:
        return SearchResult(documents=documents, total=total, max_score=hits.get("max_score"))
    except ValidationError as ex:
        raise InvalidResponseError(f"Malformed search response: {ex}") from ex


class DocumentSearchHelper(IndexHelper):
    """Run DSL queries against the index."""

    def _post_search(self, query: Any) -> Response:
        parsed: Query = as_query(query)
        response = self.send("POST", self.search_index.search_url(), **parsed.request_kwargs())
        check_status(response, (200,))
        return response

    def search(self, query: Any) -> SearchResult | None:
        """Return the documents matching the DSL query, or None if errors occurred.

        `query` is a mapping or a preformatted JSON string.
        """
        try:
            return normalize_search_response(parse_json(self._post_search(query)))
        except SearchIndexError as ex:
            self.fail("search", ex)
            return None

    def search_raw(self, query: Any) -> str | None:
        """Return the unprocessed response body of a search, or None if errors occurred."""
        try:
            return check_body(self._post_search(query))
        except SearchIndexError as ex:
            self.fail("search_raw", ex)
            return None

    def count(self, query: Any) -> int | None:
        """Return the number of documents matching the DSL query, or None if errors occurred."""
        try:
            parsed: Query = as_query(query)
            response = self.send("POST", self.search_index.count_url(), **parsed.request_kwargs())
            check_status(response, (200,))
            data = parse_json(response)
            count = data.get("count") if isinstance(data, dict) else None
            # bool is a subclass of int but never a valid count.
            if not isinstance(count, int) or isinstance(count, bool):
                raise InvalidResponseError("Count response has no integer 'count'.")
        except SearchIndexError as ex:
            self.fail("count", ex)
            return None
        return count

    def search_simple(
        self,
        keywords: str | None,
        field_name: str,
        limit: int | None = None,
        offset: int = 0,
    ) -> SearchResult | None:
        """Full text search by keywords in a given document field."""
        return self.search(build_simple_query(keywords, field_name, limit, offset))

    def search_simple_raw(
        self,
        keywords: str | None,
        field_name: str,
        limit: int | None = None,
        offset: int = 0,
    ) -> str | None:
        """Keyword search returning the unprocessed response body."""
        return self.search_raw(build_simple_query(keywords, field_name, limit, offset))
