"""High-level API for CouchDB operations.

This module provides the main client interface. Each method builds the
matching action and runs it through the configured transport.
"""

from typing import Any

from .action import Action, Output, run_action
from .actions import (
    AttachmentContent,
    CreateDatabase,
    CreateDocument,
    DeleteDatabase,
    DeleteDocument,
    ReadDocument,
    UpdateDocument,
)
from .config import CouchConfig
from .document import Document
from .factory import create_transport
from .paths import DatabaseName, DocumentId, DocumentPath, Revision
from .transport import CouchTransport


class CouchAPI:
    """High-level API for CouchDB operations.

    Usage:
        # Auto-configure from environment
        api = CouchAPI()
        doc_id, rev = api.create_document("baseball", {"name": "Babe Ruth"})
        document = api.read_document(("baseball", doc_id))

        # Explicit configuration
        api = CouchAPI(CouchConfig(url="http://couch.local:5984"))

        # Inject custom transport (for testing)
        api = CouchAPI(transport=MockTransport())
    """

    def __init__(
        self,
        config: CouchConfig | None = None,
        transport: CouchTransport | None = None,
    ):
        """Initialize API client.

        Args:
            config: Configuration (loads from environment if None)
            transport: Optional pre-configured transport (for testing/advanced use).
                If provided, config is still stored but not used to create transport.
        """
        self.config = config or CouchConfig()
        self._client = transport or create_transport(self.config)

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False

    @property
    def transport(self) -> CouchTransport:
        return self._client

    @property
    def last_request_id(self) -> str | None:
        """Get request id from last API call."""
        return self._client.last_request_id

    def close(self) -> None:
        """Close API client and release resources."""
        self._client.close()

    def run(self, action: Action[Output, Any]) -> Output:
        """Execute any action against this client's transport.

        Args:
            action: Action to execute (consumed by this call)

        Returns:
            The action's output
        """
        return run_action(action, self._client)

    def create_database(self, db_name: "DatabaseName | str") -> None:
        """Create a database.

        Args:
            db_name: Database name, with or without a leading slash
        """
        self.run(CreateDatabase(db_name))

    def delete_database(self, db_name: "DatabaseName | str") -> None:
        """Delete a database and all its documents.

        Args:
            db_name: Database name, with or without a leading slash
        """
        self.run(DeleteDatabase(db_name))

    def create_document(
        self,
        db_name: "DatabaseName | str",
        content: Any,
        document_id: str | None = None,
    ) -> tuple[DocumentId, Revision]:
        """Create a document.

        Args:
            db_name: Target database
            content: JSON-serializable content (dict, pydantic model, dataclass)
            document_id: Optional id; the server assigns one if omitted

        Returns:
            Tuple of (document id, first revision)
        """
        action = CreateDocument(db_name, content)
        if document_id is not None:
            action.with_document_id(document_id)
        return self.run(action)

    def read_document(
        self,
        doc_path: "DocumentPath | str | tuple[str, str]",
        revision: "Revision | str | None" = None,
        attachment_content: AttachmentContent | None = None,
    ) -> Document:
        """Read a document.

        Args:
            doc_path: "/db/docid" string, (db, docid) tuple, or DocumentPath
            revision: Optional revision to read instead of the latest
            attachment_content: Optional attachment content selection

        Returns:
            The document
        """
        action = ReadDocument(doc_path)
        if revision is not None:
            action.with_revision(revision)
        if attachment_content is not None:
            action.with_attachment_content(attachment_content)
        return self.run(action)

    def update_document(self, document: Document) -> Revision:
        """Save a modified document.

        Args:
            document: Document with its current revision and new content

        Returns:
            The new revision
        """
        return self.run(UpdateDocument(document))

    def delete_document(
        self,
        doc_path: "DocumentPath | str | tuple[str, str]",
        revision: "Revision | str",
    ) -> Revision:
        """Delete a document.

        Args:
            doc_path: "/db/docid" string, (db, docid) tuple, or DocumentPath
            revision: Current revision of the document

        Returns:
            Revision of the deletion
        """
        return self.run(DeleteDocument(doc_path, revision))
