"""Full text search over a single Elasticsearch index.

`SearchIndex` is the entry point of the package: it holds the connection
settings of one index, owns the tools that write, read, search and analyze
documents, and records the error of the most recent failing operation.
"""

import logging
from collections.abc import Iterable, Mapping
from typing import Any
from urllib.parse import quote

from httpx import Client, Timeout

from searchindex.analyze import AnalyzeApi
from searchindex.configs import settings
from searchindex.exceptions import SearchIndexError
from searchindex.helper import check_body, check_status, report_failure, send_request
from searchindex.models import Document, SearchResult
from searchindex.query import as_query
from searchindex.reader import DocumentReader
from searchindex.search import DocumentSearchHelper
from searchindex.utils.http_client import create_http_client
from searchindex.writer import DocumentWriter

logger = logging.getLogger(__name__)


class SearchIndex:
    """Create, fill and query an Elasticsearch index.

    Unset (None or empty) connection settings fall back to the configured
    defaults, so the host, index name and timeout are never empty.

    Every operation returns a failure value (False or None) instead of raising;
    the reason of the last failure is available from `error`. The error slot is
    shared by all operations, so a handle used from several threads needs
    external synchronization.
    """

    http_client: Client

    def __init__(
        self,
        index_name: str | None = None,
        host: str | None = None,
        config_json: str | Mapping[str, Any] | None = None,
        request_timeout: float | None = None,
        http_client: Client | None = None,
    ) -> None:
        """Initialize the index handle.

        Args:
          - `index_name`: The index name. Defaults to `elasticsearch.index_name`.
          - `host`: The base URL of the cluster. Defaults to `elasticsearch.host`.
          - `config_json`: Settings and mappings used by `create_index`, as a JSON
            string or a mapping.
          - `request_timeout`: Read and write timeout of every request in seconds. Defaults to
            `elasticsearch.request_timeout_sec`.
          - `http_client`: An `httpx.Client` to send requests with. One is created
            (and closed by `close`) when not given.
        """
        self.index_name = index_name
        self.host = host
        self.request_timeout = request_timeout
        self.config_json = config_json
        self.error: str | None = None

        self._owns_http_client = http_client is None
        self.http_client = (
            http_client
            if http_client is not None
            else create_http_client(
                max_connections=settings.elasticsearch.max_connections,
                connect_timeout=settings.elasticsearch.connect_timeout_sec,
                request_timeout=self.request_timeout,
                pool_timeout=settings.elasticsearch.pool_timeout_sec,
            )
        )

        self.document_search_helper = DocumentSearchHelper(self)
        self.document_reader = DocumentReader(self)
        self.document_writer = DocumentWriter(self)
        self.analyze_api = AnalyzeApi(self)

    def __enter__(self) -> "SearchIndex":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the HTTP client if this handle created it."""
        if self._owns_http_client:
            self.http_client.close()

    @property
    def index_name(self) -> str:
        """The name of the index."""
        return self._index_name

    @index_name.setter
    def index_name(self, index_name: str | None) -> None:
        self._index_name = index_name or settings.elasticsearch.index_name

    @property
    def host(self) -> str:
        """The base URL of the cluster, without a trailing slash."""
        return self._host

    @host.setter
    def host(self, host: str | None) -> None:
        self._host = (host or settings.elasticsearch.host).rstrip("/")

    @property
    def request_timeout(self) -> float:
        """The read and write timeout of every request in seconds."""
        return self._request_timeout

    @request_timeout.setter
    def request_timeout(self, request_timeout: float | None) -> None:
        self._request_timeout = float(
            request_timeout or settings.elasticsearch.request_timeout_sec
        )

    @property
    def timeout(self) -> Timeout:
        """The timeout passed with every request.

        Reads and writes are bounded by `request_timeout`; connecting and
        acquiring a pooled connection keep their configured limits.
        """
        return Timeout(
            self.request_timeout,
            connect=settings.elasticsearch.connect_timeout_sec,
            pool=settings.elasticsearch.pool_timeout_sec,
        )

    @property
    def config_json(self) -> str | Mapping[str, Any] | None:
        """The index settings sent by `create_index`, if any."""
        return self._config_json

    @config_json.setter
    def config_json(self, config_json: str | Mapping[str, Any] | None) -> None:
        self._config_json = config_json or None

    def set_error(self, error: str | None) -> None:
        """Record the error of the most recent failing operation."""
        self.error = error

    def get_error(self) -> str | None:
        """Return the error of the most recent failing operation."""
        return self.error

    # URLs of the endpoints used by the tools.

    def index_url(self) -> str:
        """Return the URL of the index."""
        return f"{self.host}/{quote(self.index_name, safe='')}"

    def document_url(self, doc_id: Any) -> str:
        """Return the URL of the document stored under `doc_id`."""
        return f"{self.index_url()}/_doc/{quote(str(doc_id), safe='')}"

    def bulk_url(self) -> str:
        """Return the URL of the Bulk API."""
        return f"{self.host}/_bulk"

    def search_url(self) -> str:
        """Return the URL of the Search API for the index."""
        return f"{self.index_url()}/_doc/_search"

    def count_url(self) -> str:
        """Return the URL of the Count API for the index."""
        return f"{self.index_url()}/_count"

    def analyze_url(self, index_name: str | None = None) -> str:
        """Return the URL of the Analyze API, optionally scoped to an index."""
        if index_name:
            return f"{self.host}/{quote(index_name, safe='')}/_analyze"
        return f"{self.host}/_analyze"

    # Index management.

    def is_index_exists(self) -> bool:
        """Return True if the index exists."""
        try:
            response = send_request(self, "HEAD", self.index_url())
            check_status(response, (200,))
        except SearchIndexError as ex:
            report_failure(self, "is_index_exists", ex)
            return False
        return True

    def show_indexes_list(self) -> str | None:
        """Return the table of all indices of the cluster as plain text."""
        try:
            response = send_request(self, "GET", f"{self.host}/_cat/indices?v")
            check_status(response, (200,))
            return check_body(response)
        except SearchIndexError as ex:
            report_failure(self, "show_indexes_list", ex)
            return None

    def create_index(self) -> bool:
        """Create the index, with `config_json` as its settings when given."""
        try:
            kwargs = as_query(self.config_json).request_kwargs() if self.config_json else {}
            response = send_request(self, "PUT", self.index_url(), **kwargs)
            check_status(response, (200, 201))
            check_body(response)
        except SearchIndexError as ex:
            report_failure(self, "create_index", ex)
            return False
        logger.info("Created index", extra={"index": self.index_name})
        return True

    def delete_index(self) -> bool:
        """Delete the index."""
        try:
            response = send_request(self, "DELETE", self.index_url())
            check_status(response, (200,))
        except SearchIndexError as ex:
            report_failure(self, "delete_index", ex)
            return False
        logger.info("Deleted index", extra={"index": self.index_name})
        return True

    # Search.

    def search(self, query: Any) -> SearchResult | None:
        """Return the documents matching a DSL query given as a mapping or JSON string."""
        return self.document_search_helper.search(query)

    def search_raw(self, query: Any) -> str | None:
        """Return the unprocessed response body of a DSL search."""
        return self.document_search_helper.search_raw(query)

    def count(self, query: Any) -> int | None:
        """Return the number of documents matching a DSL query."""
        return self.document_search_helper.count(query)

    def search_simple(
        self,
        keywords: str | None,
        field_name: str,
        limit: int | None = None,
        offset: int = 0,
    ) -> SearchResult | None:
        """Full text search by keywords in a given document field."""
        return self.document_search_helper.search_simple(keywords, field_name, limit, offset)

    def search_simple_raw(
        self,
        keywords: str | None,
        field_name: str,
        limit: int | None = None,
        offset: int = 0,
    ) -> str | None:
        """Keyword search returning the unprocessed response body."""
        return self.document_search_helper.search_simple_raw(keywords, field_name, limit, offset)

    # Reading.

    def get_document_by_id(self, doc_id: Any) -> dict[str, Any] | None:
        """Return a stored document with its metadata, or None."""
        return self.document_reader.get_document_by_id(doc_id)

    def get_all_documents(self, limit: int | None = None, offset: int = 0) -> SearchResult | None:
        """Return a page of all documents ordered by `id`."""
        return self.document_reader.get_all_documents(limit, offset)

    def get_all_documents_raw(self, limit: int | None = None, offset: int = 0) -> str | None:
        """Return the unprocessed search response for a page of all documents."""
        return self.document_reader.get_all_documents_raw(limit, offset)

    def get_all_documents_count(self) -> int | None:
        """Return the number of documents in the index."""
        return self.document_reader.get_all_documents_count()

    # Writing.

    def create_or_update_document(self, document: Document) -> bool:
        """Create a document or replace the one with the same `id`."""
        return self.document_writer.create_or_update_document(document)

    def create_documents(self, documents: Iterable[Document]) -> bool:
        """Create a set of documents in one Bulk API request."""
        return self.document_writer.create_documents(documents)

    def delete_document(self, doc_id: Any) -> bool:
        """Delete a document by its `id`."""
        return self.document_writer.delete_document(doc_id)

    # Analysis.

    def analyze(self, query: Any, index_name: str | None = None) -> dict[str, Any] | None:
        """Perform analysis on a text string and return the resulting tokens."""
        return self.analyze_api.analyze(query, index_name)
