"""Request options: the non-path HTTP intent of an action.

A RequestOptions value says which Accept header, query parameters, and JSON
body a request should carry. It knows nothing about any transport. Unset
fields mean the matching HTTP artifact is left out entirely.

Usage:
    options = (
        RequestOptions()
        .with_accept_json()
        .with_revision_query(rev)
    )
    request = transport.get(["db", "doc"], options)
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Any

from pydantic_core import PydanticSerializationError, to_json, to_jsonable_python

from .exceptions import CouchJsonEncodeError
from .paths import Revision

JSON_CONTENT_TYPE = "application/json"


class Accept(Enum):
    """Response media types an action can ask for."""

    JSON = JSON_CONTENT_TYPE


@dataclass(frozen=True)
class JsonBody:
    """A value to send as the JSON request body."""

    value: Any


@dataclass(frozen=True)
class RequestOptions:
    """Immutable, incrementally built request options.

    Each ``with_*`` setter returns a new value. Setters do not check how
    fields combine; that is up to the action calling them. Calling the same
    setter twice is a caller error and the later value wins.
    """

    accept: Accept | None = None
    revision: Revision | None = None
    attachments: bool | None = None
    body: JsonBody | None = None

    def with_accept_json(self) -> "RequestOptions":
        return replace(self, accept=Accept.JSON)

    def with_revision_query(self, revision: Revision) -> "RequestOptions":
        return replace(self, revision=revision)

    def with_attachments_query(self, attachments: bool) -> "RequestOptions":
        return replace(self, attachments=attachments)

    def with_json_body(self, value: Any) -> "RequestOptions":
        return replace(self, body=JsonBody(value))

    def headers(self) -> dict[str, str]:
        """Headers implied by the options."""
        headers = {}
        if self.accept is not None:
            headers["Accept"] = self.accept.value
        if self.body is not None:
            headers["Content-Type"] = JSON_CONTENT_TYPE
        return headers

    def query_params(self) -> dict[str, str]:
        """Query string parameters implied by the options."""
        params = {}
        if self.revision is not None:
            params["rev"] = str(self.revision)
        if self.attachments is not None:
            params["attachments"] = "true" if self.attachments else "false"
        return params

    def encode_body(self) -> bytes | None:
        """Serialize the body to JSON bytes, or None when no body is set.

        Raises:
            CouchJsonEncodeError: If the body is not JSON-serializable
        """
        if self.body is None:
            return None
        try:
            return to_json(self.body.value)
        except PydanticSerializationError as e:
            raise CouchJsonEncodeError(f"Cannot encode request body as JSON: {e}", cause=e)

    def jsonable_body(self) -> Any:
        """The body as plain JSON-compatible Python data (dicts, lists, scalars).

        Raises:
            CouchJsonEncodeError: If the body is not JSON-serializable
        """
        if self.body is None:
            return None
        try:
            return to_jsonable_python(self.body.value)
        except PydanticSerializationError as e:
            raise CouchJsonEncodeError(f"Cannot encode request body as JSON: {e}", cause=e)
