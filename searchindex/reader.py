"""Tool for retrieving documents from an Elasticsearch index."""

from typing import Any, Final

from searchindex.exceptions import InvalidResponseError, SearchIndexError
from searchindex.helper import IndexHelper, check_status, parse_json
from searchindex.models import SearchResult
from searchindex.search import MATCH_ALL_SORT

MATCH_ALL_QUERY: Final[dict[str, Any]] = {"query": {"match_all": {}}}


def build_all_documents_query(limit: int, offset: int = 0) -> dict[str, Any]:
    """Build a `match_all` query for one page of documents ordered by `id`."""
    return {
        "from": offset,
        "size": limit,
        "sort": list(MATCH_ALL_SORT),
        "query": {"match_all": {}},
    }


class DocumentReader(IndexHelper):
    """Retrieve documents by id or page through all of them."""

    def get_document_by_id(self, doc_id: Any) -> dict[str, Any] | None:
        """Return the stored document with its metadata, or None.

        A missing document and a failed request both yield None.
        """
        try:
            response = self.send("GET", self.search_index.document_url(doc_id))
            check_status(response, (200,))
            data = parse_json(response)
            # When the document exists, `found` is true and `_source` is not empty.
            if not isinstance(data, dict) or not data.get("found") or not data.get("_source"):
                raise InvalidResponseError(f"Document {doc_id!r} not found.")
        except SearchIndexError as ex:
            self.fail("get_document_by_id", ex)
            return None
        return data

    def _resolve_limit(self, limit: int | None, offset: int) -> tuple[int | None, int | None]:
        """Return the page size to fetch and the document count it is based on.

        Without an explicit limit, everything after `offset` is fetched. The count
        and the fetch are separate requests, so documents written in between may
        be missed or returned twice.
        """
        if limit is not None:
            return limit, None
        total = self.get_all_documents_count()
        if total is None:
            return None, None
        return total - offset, total

    def get_all_documents(self, limit: int | None = None, offset: int = 0) -> SearchResult | None:
        """Return a page of all documents ordered by `id`, or None if errors occurred."""
        size, total = self._resolve_limit(limit, offset)
        if size is None:
            return None
        if size <= 0:
            return SearchResult(documents=[], total=total)
        return self.search_index.search(build_all_documents_query(size, offset))

    def get_all_documents_raw(self, limit: int | None = None, offset: int = 0) -> str | None:
        """Return the unprocessed search response for a page of all documents."""
        size, _ = self._resolve_limit(limit, offset)
        if size is None:
            return None
        return self.search_index.search_raw(build_all_documents_query(max(size, 0), offset))

    def get_all_documents_count(self) -> int | None:
        """Return the number of documents in the index, or None if errors occurred."""
        return self.search_index.count(MATCH_ALL_QUERY)
