"""CouchDB API client.

This package provides the client library for talking to a CouchDB server.
Every operation is an Action: a small object that builds one request and
interprets one response. Actions run against a transport:

HTTP Transport (default):
    Real network requests through httpx, with optional basic or OAuth2 auth.

Mock Transport:
    In-memory test double (couch_tools.client.testing). Records requests and
    answers with hand-built responses.

Usage:
    from couch_tools.client import CouchAPI, CouchConfig

    # Configure from environment (COUCH_URL, COUCH_USERNAME, ...)
    api = CouchAPI()
    document = api.read_document("/baseball/babe-ruth")

    # Run an action directly
    from couch_tools.client.actions import ReadDocument
    document = api.run(ReadDocument("/baseball/babe-ruth").with_revision(rev))
"""

from .action import Action, run_action
from .api import CouchAPI
from .config import CouchConfig
from .document import Document
from .exceptions import (
    CouchActionConsumedError,
    CouchAPIError,
    CouchConflictError,
    CouchConnectionError,
    CouchConstructionError,
    CouchDatabaseExistsError,
    CouchError,
    CouchJsonDecodeError,
    CouchJsonEncodeError,
    CouchNotFoundError,
    CouchPathError,
    CouchResponseNotJsonError,
    CouchRevisionError,
    CouchServerError,
    CouchTransportError,
    CouchUnauthorizedError,
)
from .factory import create_transport
from .http import HTTPTransport
from .options import RequestOptions
from .paths import DatabaseName, DocumentId, DocumentPath, Revision
from .transport import CouchResponse, CouchTransport, Method

__all__ = [
    # Main API
    "CouchAPI",
    "CouchConfig",
    # Action pipeline
    "Action",
    "RequestOptions",
    "run_action",
    # Transport protocol and factory
    "CouchResponse",
    "CouchTransport",
    "Method",
    "create_transport",
    # Transport implementations
    "HTTPTransport",
    # Values
    "DatabaseName",
    "Document",
    "DocumentId",
    "DocumentPath",
    "Revision",
    # Exceptions
    "CouchAPIError",
    "CouchActionConsumedError",
    "CouchConflictError",
    "CouchConnectionError",
    "CouchConstructionError",
    "CouchDatabaseExistsError",
    "CouchError",
    "CouchJsonDecodeError",
    "CouchJsonEncodeError",
    "CouchNotFoundError",
    "CouchPathError",
    "CouchResponseNotJsonError",
    "CouchRevisionError",
    "CouchServerError",
    "CouchTransportError",
    "CouchUnauthorizedError",
]
