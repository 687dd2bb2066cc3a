"""Document values and the response shapes they are decoded from."""

from dataclasses import dataclass, field
from typing import Annotated, Any, TypeVar

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, TypeAdapter

from .exceptions import CouchRevisionError
from .paths import DatabaseName, DocumentId, DocumentPath, Revision

T = TypeVar("T")


def _parse_revision(value: Any) -> Revision:
    if isinstance(value, Revision):
        return value
    if not isinstance(value, str):
        raise ValueError("revision must be a string")
    try:
        return Revision.parse(value)
    except CouchRevisionError as e:
        # pydantic only collects ValueError into a ValidationError
        raise ValueError(e.message) from e


RevisionField = Annotated[Revision, BeforeValidator(_parse_revision)]


class DecodedDocument(BaseModel):
    """Body of a successful document read.

    Fields without a leading underscore are the document content and end up
    in ``model_extra``.
    """

    model_config = ConfigDict(extra="allow", arbitrary_types_allowed=True)

    id: str = Field(alias="_id")
    rev: RevisionField = Field(alias="_rev")
    deleted: bool = Field(default=False, alias="_deleted")
    attachments: dict[str, Any] = Field(default_factory=dict, alias="_attachments")

    @property
    def content(self) -> dict[str, Any]:
        extra = self.model_extra or {}
        return {k: v for k, v in extra.items() if not k.startswith("_")}


class WriteResult(BaseModel):
    """Body returned by the server after creating, updating, or deleting a document."""

    model_config = ConfigDict(extra="ignore", arbitrary_types_allowed=True)

    ok: bool = True
    id: str
    rev: RevisionField


@dataclass
class Document:
    """A document as stored on the server, at one revision."""

    database: DatabaseName
    id: DocumentId
    revision: Revision
    content: dict[str, Any] = field(default_factory=dict)
    attachments: dict[str, Any] = field(default_factory=dict)
    deleted: bool = False

    @classmethod
    def from_decoded(cls, database: DatabaseName, decoded: DecodedDocument) -> "Document":
        """Combine a decoded response body with the database it was read from."""
        return cls(
            database=DatabaseName(database),
            id=DocumentId(decoded.id),
            revision=decoded.rev,
            content=decoded.content,
            attachments=dict(decoded.attachments),
            deleted=decoded.deleted,
        )

    @property
    def path(self) -> DocumentPath:
        return DocumentPath(self.database, self.id)

    def get_content(self, model: type[T] = dict) -> T:
        """Validate the content into ``model`` (a pydantic model, dataclass, TypedDict, ...)."""
        return TypeAdapter(model).validate_python(self.content)

    def to_json_body(self) -> dict[str, Any]:
        """Serialize for a PUT back to the server."""
        body: dict[str, Any] = dict(self.content)
        body["_id"] = str(self.id)
        body["_rev"] = str(self.revision)
        if self.attachments:
            body["_attachments"] = self.attachments
        if self.deleted:
            body["_deleted"] = True
        return body
