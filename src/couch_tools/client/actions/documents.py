"""Create, update, and delete documents."""

from http import HTTPStatus
from typing import Any

from ..action import Action
from ..document import Document, WriteResult
from ..exceptions import (
    CouchAPIError,
    CouchConflictError,
    CouchJsonEncodeError,
    CouchNotFoundError,
    CouchUnauthorizedError,
    error_from_response,
)
from ..options import RequestOptions
from ..paths import DatabaseName, DocumentId, DocumentPath, Revision, into_database_name, into_document_path
from ..transport import CouchResponse


def _take_write_response(response: CouchResponse, success: tuple[int, ...]) -> WriteResult:
    """Shared response handling for document writes."""
    status = response.status_code
    if status in success:
        return response.decode_json_body(WriteResult)
    if status == HTTPStatus.CONFLICT:
        raise error_from_response(CouchConflictError, response)
    if status == HTTPStatus.NOT_FOUND:
        raise error_from_response(CouchNotFoundError, response)
    if status == HTTPStatus.UNAUTHORIZED:
        raise error_from_response(CouchUnauthorizedError, response)
    raise CouchAPIError.from_response(response)


class CreateDocument(Action[tuple[DocumentId, Revision], None]):
    """Create a document with ``POST /db``.

    Without ``with_document_id`` the server assigns the id.

    Errors:
        CouchConflictError: A document with the given id already exists
        CouchNotFoundError: The database does not exist
        CouchUnauthorizedError: The client lacks permission to write
    """

    def __init__(self, db_name: "DatabaseName | str", content: Any):
        super().__init__()
        self._db_name = db_name
        self._content = content
        self._document_id: DocumentId | None = None

    def with_document_id(self, document_id: str) -> "CreateDocument":
        """Create the document under a client-chosen id."""
        self._check_not_consumed()
        self._document_id = DocumentId(document_id)
        return self

    def _build_request(self, transport):
        db_name = into_database_name(self._db_name)
        options = RequestOptions().with_accept_json()
        if self._document_id is None:
            options = options.with_json_body(self._content)
        else:
            content = RequestOptions().with_json_body(self._content).jsonable_body()
            if not isinstance(content, dict):
                raise CouchJsonEncodeError("Document content must serialize to a JSON object")
            options = options.with_json_body({**content, "_id": str(self._document_id)})
        return transport.post([str(db_name)], options), None

    @classmethod
    def take_response(cls, response: CouchResponse, state: None) -> tuple[DocumentId, Revision]:
        result = _take_write_response(response, (HTTPStatus.CREATED, HTTPStatus.ACCEPTED))
        return DocumentId(result.id), result.rev


class UpdateDocument(Action[Revision, None]):
    """Write a new revision of a document with ``PUT /db/docid``.

    The body carries the document's current ``_rev``; the server answers
    with the new one.

    Errors:
        CouchConflictError: The document's revision is not the latest
        CouchNotFoundError: The database does not exist
        CouchUnauthorizedError: The client lacks permission to write
    """

    def __init__(self, document: Document):
        super().__init__()
        self._document = document

    def _build_request(self, transport):
        options = RequestOptions().with_accept_json().with_json_body(self._document.to_json_body())
        return transport.put(self._document.path.segments(), options), None

    @classmethod
    def take_response(cls, response: CouchResponse, state: None) -> Revision:
        result = _take_write_response(response, (HTTPStatus.CREATED, HTTPStatus.ACCEPTED))
        return result.rev


class DeleteDocument(Action[Revision, None]):
    """Delete a document with ``DELETE /db/docid?rev=<rev>``.

    Returns the revision of the deletion tombstone.

    Errors:
        CouchConflictError: The given revision is not the latest
        CouchNotFoundError: The database or document does not exist
        CouchUnauthorizedError: The client lacks permission to delete
    """

    def __init__(self, doc_path: "DocumentPath | str | tuple[str, str]", revision: "Revision | str"):
        super().__init__()
        self._doc_path = doc_path
        self._revision = revision

    def _build_request(self, transport):
        doc_path = into_document_path(self._doc_path)
        revision = self._revision if isinstance(self._revision, Revision) else Revision.parse(self._revision)
        options = RequestOptions().with_accept_json().with_revision_query(revision)
        return transport.delete(doc_path.segments(), options), None

    @classmethod
    def take_response(cls, response: CouchResponse, state: None) -> Revision:
        result = _take_write_response(response, (HTTPStatus.OK, HTTPStatus.ACCEPTED))
        return result.rev
