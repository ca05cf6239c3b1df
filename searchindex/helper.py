"""Shared plumbing of the tools that operate on behalf of a `SearchIndex`."""

import json
import logging
from collections.abc import Container
from typing import TYPE_CHECKING, Any

from httpx import RequestError, Response

from searchindex.exceptions import (
    InvalidResponseError,
    SearchIndexError,
    TransportError,
    UnexpectedStatusError,
)

if TYPE_CHECKING:  # pragma: no cover
    from searchindex.index import SearchIndex

logger = logging.getLogger(__name__)


def send_request(search_index: "SearchIndex", method: str, url: str, **kwargs: Any) -> Response:
    """Issue a single HTTP request bounded by the index's timeout.

    `TransportError` will be raised if the request could not be completed.
    """
    try:
        return search_index.http_client.request(
            method, url, timeout=search_index.timeout, **kwargs
        )
    except RequestError as ex:
        raise TransportError(str(ex) or type(ex).__name__) from ex


def report_failure(search_index: "SearchIndex", operation: str, error: SearchIndexError) -> None:
    """Log a failed operation and record it as the index's last error."""
    extra: dict[str, Any] = {"operation": operation, "index": search_index.index_name}
    if isinstance(error, UnexpectedStatusError):
        extra["status_code"] = error.status_code
    logger.warning(f"{operation} failed: {error}", extra=extra)
    search_index.set_error(str(error))


class IndexHelper:
    """Base class for the writer, reader, search and analyze tools.

    A helper holds a non-owning reference to its `SearchIndex` and consults it
    for the host, index name, timeout and HTTP client of every request. Failed
    operations are reported back through `SearchIndex.set_error`.
    """

    search_index: "SearchIndex"

    def __init__(self, search_index: "SearchIndex") -> None:
        """Initialize the helper."""
        self.search_index = search_index

    def send(self, method: str, url: str, **kwargs: Any) -> Response:
        """Issue a request on behalf of the index. See `send_request`."""
        return send_request(self.search_index, method, url, **kwargs)

    def fail(self, operation: str, error: SearchIndexError) -> None:
        """Report a failed operation to the index. See `report_failure`."""
        report_failure(self.search_index, operation, error)


def check_status(response: Response, accepted: Container[int]) -> None:
    """Make sure the response status is one the operation accepts."""
    if response.status_code not in accepted:
        raise UnexpectedStatusError(
            f"Unexpected status {response.status_code} for "
            f"{response.request.method} {response.request.url}",
            response.status_code,
        )


def check_body(response: Response) -> str:
    """Return the response body as text, raising if it is empty."""
    if not response.content:
        raise InvalidResponseError(
            f"Empty response body for {response.request.method} {response.request.url}"
        )
    return response.text


def parse_json(response: Response) -> Any:
    """Decode a non-empty JSON response body.

    `InvalidResponseError` will be raised if the body is empty or not JSON.
    """
    body = check_body(response)
    try:
        return json.loads(body)
    except ValueError as ex:
        raise InvalidResponseError(f"Invalid JSON in response: {ex}") from ex
