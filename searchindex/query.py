"""Query values accepted by search, count, analyze and index creation.

A query is either a structured DSL mapping, sent as a JSON body, or a
preformatted JSON string, sent verbatim.
"""

import json
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from searchindex.exceptions import InvalidQueryError

INVALID_QUERY_MESSAGE = "Invalid query value."

JSON_HEADERS: dict[str, str] = {"Content-Type": "application/json"}


@dataclass(frozen=True)
class StructuredQuery:
    """A DSL query given as a mapping."""

    body: Mapping[str, Any]

    def request_kwargs(self) -> dict[str, Any]:
        """Return the keyword arguments for `httpx.Client.request`."""
        return {"json": self.body}


@dataclass(frozen=True)
class RawQuery:
    """A DSL query given as a preformatted JSON string."""

    body: str

    def request_kwargs(self) -> dict[str, Any]:
        """Return the keyword arguments for `httpx.Client.request`."""
        return {"content": self.body, "headers": JSON_HEADERS}


Query = StructuredQuery | RawQuery


def as_query(value: Any) -> Query:
    """Wrap a caller supplied value into a `Query`.

    Raises:
        InvalidQueryError: if the value is neither a mapping nor a string.
    """
    match value:
        case StructuredQuery() | RawQuery():
            return value
        case str():
            return RawQuery(value)
        case Mapping():
            return StructuredQuery(value)
        case _:
            raise InvalidQueryError(INVALID_QUERY_MESSAGE)


def dumps_compact(value: Any) -> str:
    """Serialize a value as single line JSON, as required by NDJSON bodies."""
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False)
