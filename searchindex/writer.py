"""Tool for creating, updating and deleting documents in an Elasticsearch index."""

import logging
from collections.abc import Iterable
from typing import Any, Final

from searchindex.exceptions import InvalidDocumentError, InvalidResponseError, SearchIndexError
from searchindex.helper import IndexHelper, check_status, parse_json
from searchindex.models import Document
from searchindex.query import JSON_HEADERS, dumps_compact

logger = logging.getLogger(__name__)

WRITE_RESULTS: Final[frozenset[str]] = frozenset({"created", "updated"})
NDJSON_HEADERS: Final[dict[str, str]] = {"Content-Type": "application/x-ndjson"}


def document_id(document: Document) -> Any:
    """Return the external identifier of a document."""
    try:
        doc_id = document["id"]
    except (KeyError, TypeError) as ex:
        raise InvalidDocumentError("Document has no 'id' field.") from ex
    if doc_id is None or doc_id == "":
        raise InvalidDocumentError("Document has an empty 'id' field.")
    return doc_id


def encode_document(value: Any) -> str:
    """Serialize a document, or a bulk action line, as single line JSON."""
    try:
        return dumps_compact(value)
    except (TypeError, ValueError) as ex:
        raise InvalidDocumentError(f"Document is not JSON serializable: {ex}") from ex


class DocumentWriter(IndexHelper):
    """Create, update and delete documents."""

    def create_or_update_document(self, document: Document) -> bool:
        """Create a document or replace the one stored under the same `id`.

        Returns True when Elasticsearch reports the document as `created` or
        `updated`.
        """
        try:
            url = self.search_index.document_url(document_id(document))
            body = encode_document(document)
            response = self.send("PUT", url, content=body, headers=JSON_HEADERS)
            check_status(response, (200, 201))
            data = parse_json(response)
            if not isinstance(data, dict) or data.get("result") not in WRITE_RESULTS:
                raise InvalidResponseError(f"Document was not written: {data!r}")
        except SearchIndexError as ex:
            self.fail("create_or_update_document", ex)
            return False
        return True

    def create_documents(self, documents: Iterable[Document]) -> bool:
        """Create a set of documents in one request to the Bulk API.

        The batch succeeds or fails as a whole: failures of individual items are
        only visible through the aggregate `errors` flag of the response.
        """
        try:
            body = self.build_bulk_body(documents)
            response = self.send(
                "POST", self.search_index.bulk_url(), content=body, headers=NDJSON_HEADERS
            )
            check_status(response, (200, 201))
            data = parse_json(response)
            if not isinstance(data, dict) or "errors" not in data:
                raise InvalidResponseError("Bulk response has no 'errors' flag.")
            if data["errors"]:
                logger.debug(
                    "Bulk request reported item errors",
                    extra={"items": len(data.get("items") or [])},
                )
                raise InvalidResponseError("Bulk request reported errors.")
        except SearchIndexError as ex:
            self.fail("create_documents", ex)
            return False
        return True

    def delete_document(self, doc_id: Any) -> bool:
        """Delete a document by its `id`."""
        try:
            response = self.send("DELETE", self.search_index.document_url(doc_id))
            check_status(response, (200,))
            data = parse_json(response)
            if not isinstance(data, dict) or data.get("result") != "deleted":
                raise InvalidResponseError(f"Document was not deleted: {data!r}")
        except SearchIndexError as ex:
            self.fail("delete_document", ex)
            return False
        return True

    def build_bulk_body(self, documents: Iterable[Document]) -> str:
        """Build the NDJSON body of a bulk index request.

        Every document contributes an action line naming the index and the
        document `id`, followed by the document itself, in input order.
        """
        lines: list[str] = []
        for document in documents:
            action = {
                "index": {"_index": self.search_index.index_name, "_id": document_id(document)}
            }
            lines.append(encode_document(action))
            lines.append(encode_document(document))
        # The Bulk API requires the body to end with a newline.
        return "".join(f"{line}\n" for line in lines)
