"""Actions: one small class per API operation."""

from .databases import CreateDatabase, DeleteDatabase
from .documents import CreateDocument, DeleteDocument, UpdateDocument
from .read_document import AttachmentContent, ReadDocument

__all__ = [
    "AttachmentContent",
    "CreateDatabase",
    "CreateDocument",
    "DeleteDatabase",
    "DeleteDocument",
    "ReadDocument",
    "UpdateDocument",
]
