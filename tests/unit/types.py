# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this
# file, You can obtain one at http://mozilla.org/MPL/2.0/.

"""Type definitions for unit test modules."""

from typing import Any, Protocol

from httpx import Response


class RespondFixture(Protocol):
    """Build an `httpx.Response` for a canned Elasticsearch answer."""

    def __call__(
        self, status_code: int, body: Any = None, method: str = "GET", url: str = ...
    ) -> Response:  # pragma: no cover
        """Return the response."""
        ...
