"""Database names, document ids, revisions, and document paths.

These values are passed through the action pipeline untouched. The only
structure the pipeline relies on is a document path's ordered URL segments.
"""

import re
from dataclasses import dataclass

from .exceptions import CouchPathError, CouchRevisionError

DESIGN_PREFIX = "_design/"
LOCAL_PREFIX = "_local/"

_REVISION_RE = re.compile(r"([0-9]+)-([0-9a-fA-F]+)")


class DatabaseName(str):
    """Name of a database."""

    def __repr__(self) -> str:
        return f"DatabaseName({str.__repr__(self)})"


class DocumentId(str):
    """Identifier of a document within a database.

    Design documents (``_design/name``) and local documents
    (``_local/name``) keep their prefix as a separate URL segment.
    """

    def __repr__(self) -> str:
        return f"DocumentId({str.__repr__(self)})"

    @property
    def is_design(self) -> bool:
        return self.startswith(DESIGN_PREFIX)

    @property
    def is_local(self) -> bool:
        return self.startswith(LOCAL_PREFIX)

    def segments(self) -> list[str]:
        """Split the id into URL path segments."""
        for prefix in (DESIGN_PREFIX, LOCAL_PREFIX):
            if self.startswith(prefix):
                return [prefix[:-1], str(self[len(prefix):])]
        return [str(self)]


@dataclass(frozen=True)
class Revision:
    """A specific version of a stored document, e.g. ``1-967a00dff5e02add41819138abb3284d``."""

    sequence_number: int
    digest: str

    @classmethod
    def parse(cls, text: str) -> "Revision":
        """Parse a revision token.

        Raises:
            CouchRevisionError: If the token is not ``<number>-<hex digest>``
        """
        match = _REVISION_RE.fullmatch(text)
        if not match:
            raise CouchRevisionError(f"Invalid revision: {text!r}")
        sequence_number = int(match.group(1))
        if sequence_number == 0:
            raise CouchRevisionError(f"Invalid revision: {text!r} (sequence number must be positive)")
        return cls(sequence_number, match.group(2).lower())

    def __str__(self) -> str:
        return f"{self.sequence_number}-{self.digest}"


@dataclass(frozen=True)
class DocumentPath:
    """Location of a document: database name plus document id."""

    database: DatabaseName
    document_id: DocumentId

    @classmethod
    def parse(cls, text: str) -> "DocumentPath":
        """Parse ``/db/docid``, ``/db/_design/name`` or ``/db/_local/name``.

        Raises:
            CouchPathError: If the path is malformed
        """
        if not text.startswith("/"):
            raise CouchPathError(f"Document path must begin with a slash: {text!r}")
        parts = text[1:].split("/")
        if len(parts) == 3 and parts[1] + "/" in (DESIGN_PREFIX, LOCAL_PREFIX):
            db_name, doc_id = parts[0], f"{parts[1]}/{parts[2]}"
        elif len(parts) == 2:
            db_name, doc_id = parts
        else:
            raise CouchPathError(f"Invalid document path: {text!r}")
        return cls.from_parts(db_name, doc_id)

    @classmethod
    def from_parts(cls, database: str, document_id: str) -> "DocumentPath":
        """Build a path from a database name and document id.

        Raises:
            CouchPathError: If either part is empty
        """
        if not database:
            raise CouchPathError("Database name must not be empty")
        doc_id = DocumentId(document_id)
        if not document_id or not all(doc_id.segments()):
            raise CouchPathError(f"Invalid document id: {document_id!r}")
        return cls(DatabaseName(database), doc_id)

    def segments(self) -> list[str]:
        """Ordered URL path segments, e.g. ``["db", "_design", "name"]``."""
        return [str(self.database), *self.document_id.segments()]

    def __str__(self) -> str:
        return f"/{self.database}/{self.document_id}"


def into_document_path(value: "DocumentPath | str | tuple[str, str]") -> DocumentPath:
    """Convert a path string, ``(db, docid)`` tuple, or DocumentPath."""
    if isinstance(value, DocumentPath):
        return value
    if isinstance(value, tuple):
        if len(value) != 2:
            raise CouchPathError(f"Expected (database, document_id), got {value!r}")
        return DocumentPath.from_parts(*value)
    if isinstance(value, str):
        return DocumentPath.parse(value)
    raise CouchPathError(f"Cannot use {type(value).__name__} as a document path")


def into_database_name(value: str) -> DatabaseName:
    """Convert ``db`` or ``/db`` into a DatabaseName.

    Raises:
        CouchPathError: If the name is empty or has more than one segment
    """
    if isinstance(value, DatabaseName):
        return value
    name = value[1:] if value.startswith("/") else value
    if not name or "/" in name:
        raise CouchPathError(f"Invalid database name: {value!r}")
    return DatabaseName(name)
