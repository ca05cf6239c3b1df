"""Result models returned by the search index."""

from typing import Any

from pydantic import BaseModel, Field

# A document is an opaque mapping which carries its external identifier
# under the `id` key.
Document = dict[str, Any]

# Key injected into every document returned by a search.
SEARCH_INFO_KEY = "__search_info"


class SearchResult(BaseModel):
    """Normalized response of a search request."""

    documents: list[Document] = Field(default_factory=list)
    total: int | None = None
    max_score: float | None = None
