# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Unit tests for the Analyze API tool."""

from typing import Any

import pytest
from httpx import ConnectError

from searchindex import SearchIndex
from tests.unit.conftest import HOST, INDEX, REQUEST_TIMEOUT
from tests.unit.types import RespondFixture

ANALYZE_REQUEST = {"analyzer": "standard", "text": "Quick Brown Foxes"}
ANALYZE_RESPONSE = {
    "tokens": [
        {"token": token, "start_offset": start, "end_offset": start + 5, "position": position}
        for position, (token, start) in enumerate([("quick", 0), ("brown", 6), ("foxes", 12)])
    ]
}


def test_analyze_cluster(
    search_index: SearchIndex, http_client: Any, respond: RespondFixture
) -> None:
    """Test that the tokens are returned verbatim from the cluster level endpoint."""
    http_client.request.return_value = respond(200, ANALYZE_RESPONSE, url=f"{HOST}/_analyze")

    assert search_index.analyze(ANALYZE_REQUEST) == ANALYZE_RESPONSE
    http_client.request.assert_called_once_with(
        "GET", f"{HOST}/_analyze", timeout=REQUEST_TIMEOUT, json=ANALYZE_REQUEST
    )


def test_analyze_index(
    search_index: SearchIndex, http_client: Any, respond: RespondFixture
) -> None:
    """Test that the analysis is scoped to the given index."""
    http_client.request.return_value = respond(200, ANALYZE_RESPONSE)
    query = '{"field": "title", "text": "Quick Brown Foxes"}'

    assert search_index.analyze(query, INDEX) == ANALYZE_RESPONSE
    http_client.request.assert_called_once_with(
        "GET",
        f"{HOST}/{INDEX}/_analyze",
        timeout=REQUEST_TIMEOUT,
        content=query,
        headers={"Content-Type": "application/json"},
    )


def test_analyze_invalid_query(search_index: SearchIndex, http_client: Any) -> None:
    """Test that an invalid query fails without a request."""
    assert search_index.analyze(3.14) is None
    assert search_index.error == "Invalid query value."
    http_client.request.assert_not_called()


@pytest.mark.parametrize(
    ["status_code", "body"],
    [(400, {"error": "illegal_argument_exception"}), (200, "tokens"), (200, {}), (200, None)],
    ids=["bad_request", "invalid_json", "empty_json", "empty_body"],
)
def test_analyze_failure(
    search_index: SearchIndex,
    http_client: Any,
    respond: RespondFixture,
    status_code: int,
    body: Any,
) -> None:
    """Test that unusable answers give None."""
    http_client.request.return_value = respond(status_code, body)

    assert search_index.analyze(ANALYZE_REQUEST) is None
    assert search_index.error


def test_analyze_transport_error(search_index: SearchIndex, http_client: Any) -> None:
    """Test that a transport failure gives None and records its message."""
    http_client.request.side_effect = ConnectError("Name or service not known")

    assert search_index.analyze(ANALYZE_REQUEST) is None
    assert search_index.error == "Name or service not known"
