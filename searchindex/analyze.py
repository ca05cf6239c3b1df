"""Tool for using the Elasticsearch Analyze API."""

from typing import Any

from searchindex.exceptions import InvalidResponseError, SearchIndexError
from searchindex.helper import IndexHelper, check_status, parse_json
from searchindex.query import as_query


class AnalyzeApi(IndexHelper):
    """Run text analysis against the cluster or one of its indices."""

    def analyze(self, query: Any, index_name: str | None = None) -> dict[str, Any] | None:
        """Perform analysis on a text string and return the resulting tokens.

        `query` is an analyze request body, as a mapping or a JSON string. When
        `index_name` is given, the analyzers of that index are available.
        Returns the parsed response verbatim, or None if errors occurred.
        """
        try:
            parsed = as_query(query)
            response = self.send(
                "GET", self.search_index.analyze_url(index_name), **parsed.request_kwargs()
            )
            check_status(response, (200,))
            data = parse_json(response)
            if not data:
                raise InvalidResponseError("Analyze response is empty.")
        except SearchIndexError as ex:
            self.fail("analyze", ex)
            return None
        return data
