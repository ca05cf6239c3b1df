# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Module for test configurations for the unit test directory."""

import json
from typing import Any

import pytest
from httpx import Client, Request, Response, Timeout
from pytest_mock import MockerFixture

from searchindex import SearchIndex
from searchindex.configs import settings
from tests.unit.types import RespondFixture

HOST = "http://es.test:9200"
INDEX = "test-index"
TIMEOUT = 2.0
REQUEST_TIMEOUT = Timeout(
    TIMEOUT,
    connect=settings.elasticsearch.connect_timeout_sec,
    pool=settings.elasticsearch.pool_timeout_sec,
)


@pytest.fixture(name="http_client")
def fixture_http_client(mocker: MockerFixture) -> Any:
    """Return a mocked synchronous HTTP client."""
    return mocker.MagicMock(spec=Client)


@pytest.fixture(name="search_index")
def fixture_search_index(http_client: Any) -> SearchIndex:
    """Return a SearchIndex using the testing settings and the mocked HTTP client."""
    return SearchIndex(http_client=http_client)


@pytest.fixture(name="respond", scope="session")
def fixture_respond() -> RespondFixture:
    """Return a function that builds an `httpx.Response` for a canned answer.

    Mappings and lists are serialized as JSON, strings and bytes are sent as-is
    and `None` gives an empty body.
    """

    def respond(
        status_code: int, body: Any = None, method: str = "GET", url: str = HOST
    ) -> Response:
        match body:
            case None:
                content: str | bytes = b""
            case str() | bytes():
                content = body
            case _:
                content = json.dumps(body)
        return Response(
            status_code=status_code,
            content=content,
            request=Request(method=method, url=url),
        )

    return respond


@pytest.fixture(name="search_response")
def fixture_search_response() -> dict[str, Any]:
    """Return a successful response of the Search API with two hits."""
    return {
        "took": 3,
        "timed_out": False,
        "_shards": {"total": 1, "successful": 1, "skipped": 0, "failed": 0},
        "hits": {
            "total": {"value": 12, "relation": "eq"},
            "max_score": 1.7,
            "hits": [
                {
                    "_index": INDEX,
                    "_id": "1",
                    "_score": 1.7,
                    "_source": {"id": 1, "title": "Red fox"},
                },
                {
                    "_index": INDEX,
                    "_id": "2",
                    "_score": 0.4,
                    "_source": {"id": 2, "title": "Lazy dog"},
                },
            ],
        },
    }
