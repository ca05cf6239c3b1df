"""searchindex specific exceptions.

These are raised inside the helpers and caught at the public API of
`SearchIndex`, where they are turned into the operation's failure value and
recorded as the index's last error.
"""


class SearchIndexError(Exception):
    """Base class for every failure of a search index operation."""


class TransportError(SearchIndexError):
    """Raised when the HTTP request could not be completed (connect, timeout, DNS, TLS)."""


class UnexpectedStatusError(SearchIndexError):
    """Raised when the cluster answers with a status the operation does not accept."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class InvalidResponseError(SearchIndexError):
    """Raised for empty, unparsable or semantically invalid response bodies."""


class InvalidQueryError(SearchIndexError, ValueError):
    """Raised when a query is neither a mapping nor a string."""


class InvalidDocumentError(SearchIndexError, ValueError):
    """Raised when a document cannot be written, e.g. it has no `id`."""
