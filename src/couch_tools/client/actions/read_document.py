"""Read a document from the server."""

from enum import Enum
from http import HTTPStatus

from ..action import Action
from ..document import DecodedDocument, Document
from ..exceptions import (
    CouchAPIError,
    CouchNotFoundError,
    CouchUnauthorizedError,
    error_from_response,
)
from ..options import RequestOptions
from ..paths import DatabaseName, DocumentPath, Revision, into_document_path
from ..transport import CouchResponse, CouchTransport


class AttachmentContent(Enum):
    """Which attachments the server should send content for.

    Maps to the ``attachments`` query parameter of ``GET /db/docid``. By
    default the server sends stubs with no content.
    """

    NONE = "none"
    ALL = "all"


class ReadDocument(Action[Document, DatabaseName]):
    """Read a document with ``GET /db/docid``.

    The database name is carried to the response phase, since the response
    body only has the document's ``_id`` and ``_rev``.

    Errors:
        CouchNotFoundError: The database or document does not exist
        CouchUnauthorizedError: The client lacks permission to read the document

    Usage:
        action = ReadDocument("/baseball/babe-ruth").with_revision("1-abc123")
        document = run_action(action, transport)
    """

    def __init__(self, doc_path: "DocumentPath | str | tuple[str, str]"):
        super().__init__()
        self._doc_path = doc_path
        self._revision: Revision | None = None
        self._attachment_content: AttachmentContent | None = None

    def with_revision(self, revision: "Revision | str") -> "ReadDocument":
        """Read the given revision instead of the latest one (``rev`` query)."""
        self._check_not_consumed()
        self._revision = revision if isinstance(revision, Revision) else Revision.parse(revision)
        return self

    def with_attachment_content(self, attachment_content: AttachmentContent) -> "ReadDocument":
        """Ask for (or explicitly decline) attachment content."""
        self._check_not_consumed()
        self._attachment_content = attachment_content
        return self

    def _build_request(self, transport: CouchTransport):
        options = RequestOptions().with_accept_json()

        if self._attachment_content is AttachmentContent.NONE:
            options = options.with_attachments_query(False)
        elif self._attachment_content is AttachmentContent.ALL:
            options = options.with_attachments_query(True)

        if self._revision is not None:
            options = options.with_revision_query(self._revision)

        doc_path = into_document_path(self._doc_path)
        request = transport.get(doc_path.segments(), options)
        return request, doc_path.database

    @classmethod
    def take_response(cls, response: CouchResponse, state: DatabaseName) -> Document:
        status = response.status_code
        if status == HTTPStatus.OK:
            decoded = response.decode_json_body(DecodedDocument)
            return Document.from_decoded(state, decoded)
        if status == HTTPStatus.NOT_FOUND:
            raise error_from_response(CouchNotFoundError, response)
        if status == HTTPStatus.UNAUTHORIZED:
            raise error_from_response(CouchUnauthorizedError, response)
        raise CouchAPIError.from_response(response)
