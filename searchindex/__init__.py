"""A client for full text search over an Elasticsearch index."""

from searchindex.index import SearchIndex
from searchindex.models import SearchResult
from searchindex.query import RawQuery, StructuredQuery

__all__ = ["RawQuery", "SearchIndex", "SearchResult", "StructuredQuery"]
