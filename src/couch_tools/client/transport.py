"""Transport protocol for CouchDB communication.

This module defines the interface every transport must implement. The
production HTTP transport and the in-memory mock transport both conform to
it, so actions and CouchAPI work with either one interchangeably.

A transport has two jobs, kept separate so that building a request never
does I/O:
- ``request`` turns a method, path segments, and RequestOptions into a
  transport-native request value
- ``send`` delivers that request and returns a CouchResponse
"""

from collections.abc import Iterable
from enum import Enum
from typing import Any, Protocol, TypeVar, runtime_checkable

from .options import RequestOptions

T = TypeVar("T")


class Method(str, Enum):
    """HTTP methods used by actions."""

    GET = "GET"
    PUT = "PUT"
    POST = "POST"
    DELETE = "DELETE"


@runtime_checkable
class CouchResponse(Protocol):
    """Protocol defining what actions may read from a response.

    HTTP error statuses are not transport failures. They are data for the
    action's ``take_response`` to interpret.
    """

    @property
    def status_code(self) -> int:
        """Numeric HTTP status code."""
        ...

    @property
    def text(self) -> str | None:
        """Raw response body, or None if there is none."""
        ...

    @property
    def request_id(self) -> str | None:
        """Server-assigned request id (``X-Couch-Request-ID``), if any."""
        ...

    def decode_json_body(self, model: type[T]) -> T:
        """Decode the JSON body into ``model``.

        Raises:
            CouchResponseNotJsonError: If there is no JSON body
            CouchJsonDecodeError: If the body is invalid JSON or doesn't fit ``model``
        """
        ...


@runtime_checkable
class CouchTransport(Protocol):
    """Protocol defining the transport interface.

    Transports are responsible for:
    - Escaping path segments into a URL path
    - Rendering RequestOptions into headers, query string, and body
    - Executing requests and wrapping the responses
    - Raising CouchTransportError (or CouchConnectionError) when delivery fails
    """

    @property
    def last_request_id(self) -> str | None:
        """Get request id from last response (for debugging)."""
        ...

    def request(self, method: Method, path: Iterable[str], options: RequestOptions) -> Any:
        """Build a request without sending it.

        Args:
            method: HTTP method
            path: Ordered, unescaped path segments (e.g., ["db", "doc-1"])
            options: Headers, query parameters, and body to render

        Returns:
            A transport-native request value

        Raises:
            CouchPathError: If a path segment is empty
            CouchJsonEncodeError: If the body cannot be serialized
        """
        ...

    def get(self, path: Iterable[str], options: RequestOptions) -> Any:
        """Build a GET request."""
        ...

    def put(self, path: Iterable[str], options: RequestOptions) -> Any:
        """Build a PUT request."""
        ...

    def post(self, path: Iterable[str], options: RequestOptions) -> Any:
        """Build a POST request."""
        ...

    def delete(self, path: Iterable[str], options: RequestOptions) -> Any:
        """Build a DELETE request."""
        ...

    def send(self, request: Any) -> CouchResponse:
        """Execute a request built by this transport.

        Raises:
            CouchConnectionError: If unable to connect or the request timed out
            CouchTransportError: For other delivery failures
        """
        ...

    def close(self) -> None:
        """Clean up resources. Safe to call multiple times."""
        ...
