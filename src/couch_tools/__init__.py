"""Couch Tools - Client library and CLI for CouchDB."""

from couch_tools.client import CouchAPI as CouchClient
from couch_tools.client.config import CouchConfig
from couch_tools.client.document import Document
from couch_tools.client.exceptions import (
    CouchAPIError,
    CouchConflictError,
    CouchConnectionError,
    CouchError,
    CouchNotFoundError,
    CouchUnauthorizedError,
)

try:
    from importlib.metadata import version
    __version__ = version("couch-tools")
except Exception:
    __version__ = "0.1.0"  # Fallback for development

__all__ = [
    "CouchAPIError",
    "CouchClient",
    "CouchConfig",
    "CouchConflictError",
    "CouchConnectionError",
    "CouchError",
    "CouchNotFoundError",
    "CouchUnauthorizedError",
    "Document",
    "__version__",
]
