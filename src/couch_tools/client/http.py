"""HTTP transport over httpx.

This module implements the production transport. Requests are built with
``httpx.Client.build_request`` (no I/O) and executed with
``httpx.Client.send``. Status codes are handed back untouched; only
delivery failures become exceptions.
"""

import logging
from collections.abc import Iterable
from typing import TypeVar
from urllib.parse import quote

import httpx
from httpx_auth import HttpxAuthException, OAuth2ClientCredentials
from pydantic import TypeAdapter, ValidationError

from .config import CouchConfig
from .exceptions import (
    CouchConnectionError,
    CouchJsonDecodeError,
    CouchPathError,
    CouchResponseNotJsonError,
    CouchTransportError,
)
from .options import RequestOptions
from .transport import Method

logger = logging.getLogger("couch-tools")

T = TypeVar("T")

REQUEST_ID_HEADER = "X-Couch-Request-ID"

_DOT_SEGMENTS = {".": "%2E", "..": "%2E%2E"}


def encode_path(segments: Iterable[str]) -> str:
    """Join path segments into an escaped URL path.

    Every character outside the unreserved set is percent-encoded, including
    ``/``, so a segment can never split into two. Whole-segment ``.`` and
    ``..`` are escaped as ``%2E`` so URL normalization keeps them.

    Raises:
        CouchPathError: If there are no segments or one is empty
    """
    segments = [str(segment) for segment in segments]
    if not segments or not all(segments):
        raise CouchPathError(f"Invalid path segments: {segments!r}")
    return "/" + "/".join(_DOT_SEGMENTS.get(segment) or quote(segment, safe="") for segment in segments)


class HTTPResponse:
    """CouchResponse backed by an httpx.Response."""

    def __init__(self, response: httpx.Response):
        self._response = response

    def __repr__(self) -> str:
        return f"HTTPResponse({self._response.status_code})"

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def text(self) -> str | None:
        return self._response.text or None

    @property
    def request_id(self) -> str | None:
        return self._response.headers.get(REQUEST_ID_HEADER)

    def decode_json_body(self, model: type[T]) -> T:
        """Decode the JSON body into ``model``.

        Raises:
            CouchResponseNotJsonError: If the body is empty or not labelled JSON
            CouchJsonDecodeError: If the body is invalid JSON or doesn't fit ``model``
        """
        content_type = self._response.headers.get("content-type", "")
        if not self._response.content or not content_type.lower().startswith("application/json"):
            raise CouchResponseNotJsonError(
                f"Response is not JSON (content-type: {content_type or 'none'})",
                self.request_id,
            )
        try:
            return TypeAdapter(model).validate_json(self._response.content)
        except ValidationError as e:
            raise CouchJsonDecodeError(f"Cannot decode response body: {e}", cause=e, request_id=self.request_id)


class HTTPTransport:
    """HTTP transport with optional basic or OAuth2 authentication.

    Implements CouchTransport for a CouchDB server reachable over HTTP.

    Usage:
        transport = HTTPTransport(config)
        request = transport.get(["db", "doc"], RequestOptions().with_accept_json())
        response = transport.send(request)
        transport.close()

    Or as context manager:
        with HTTPTransport(config) as transport:
            ...
    """

    def __init__(self, config: CouchConfig | None = None, client: httpx.Client | None = None):
        """Initialize HTTP transport.

        Args:
            config: Client configuration. If None, loads from environment.
            client: Optional pre-built httpx client (for testing/advanced use).
        """
        self.config = config or CouchConfig()
        self._client: httpx.Client | None = client
        self._last_request_id: str | None = None

    @property
    def client(self) -> httpx.Client:
        """Lazy-initialize HTTP client with optional authentication."""
        if self._client is None:
            auth = None
            if self.config.oauth_enabled:
                auth = OAuth2ClientCredentials(
                    token_url=self.config.oauth_token_url,
                    client_id=self.config.oauth_client_id,
                    client_secret=self.config.oauth_client_secret,
                    scope=self.config.oauth_scope,
                )
            elif self.config.basic_auth_enabled:
                auth = httpx.BasicAuth(self.config.username, self.config.password)
            self._client = httpx.Client(
                base_url=self.config.url,
                timeout=self.config.timeout,
                auth=auth,
            )
        return self._client

    @property
    def last_request_id(self) -> str | None:
        """Get request id from last response."""
        return self._last_request_id

    def __enter__(self) -> "HTTPTransport":
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit - close client."""
        self.close()

    def close(self) -> None:
        """Close HTTP client and release resources."""
        if self._client:
            self._client.close()
            self._client = None

    def request(self, method: Method, path: Iterable[str], options: RequestOptions) -> httpx.Request:
        """Build an httpx.Request without sending it.

        Args:
            method: HTTP method
            path: Unescaped path segments, relative to the configured URL
            options: Rendered into headers, query string, and body

        Returns:
            The built request
        """
        return self.client.build_request(
            method.value,
            encode_path(path),
            params=options.query_params() or None,
            headers=options.headers(),
            content=options.encode_body(),
        )

    def get(self, path: Iterable[str], options: RequestOptions) -> httpx.Request:
        return self.request(Method.GET, path, options)

    def put(self, path: Iterable[str], options: RequestOptions) -> httpx.Request:
        return self.request(Method.PUT, path, options)

    def post(self, path: Iterable[str], options: RequestOptions) -> httpx.Request:
        return self.request(Method.POST, path, options)

    def delete(self, path: Iterable[str], options: RequestOptions) -> httpx.Request:
        return self.request(Method.DELETE, path, options)

    def send(self, request: httpx.Request) -> HTTPResponse:
        """Execute a request built by ``request``.

        Raises:
            CouchConnectionError: If unable to connect or the request timed out
            CouchTransportError: For other transport, body decoding, or auth failures
        """
        try:
            response = self.client.send(request)
        except httpx.ConnectError as e:
            raise CouchConnectionError(f"Cannot connect to {self.config.url}: {e}", cause=e)
        except httpx.TimeoutException as e:
            raise CouchConnectionError(f"Request timeout to {self.config.url}: {e}", cause=e)
        except httpx.HTTPError as e:
            raise CouchTransportError(f"Request to {self.config.url} failed: {e}", cause=e)
        except HttpxAuthException as e:
            raise CouchTransportError(f"Authentication with {self.config.url} failed: {e}", cause=e)

        wrapped = HTTPResponse(response)
        self._last_request_id = wrapped.request_id
        logger.debug(f"{request.method} {request.url.path} -> {response.status_code}")
        return wrapped
