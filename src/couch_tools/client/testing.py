"""In-memory transport for testing actions without a server.

MockTransport builds MockRequest values that record the method, path, and
fully rendered options, so tests can compare an action's request against an
expected one with ``==``. MockResponse is built by hand with a status code
and an optional JSON body, so every branch of an action's take_response can
be exercised directly.

Usage:
    transport = MockTransport()
    expected = transport.get(["db", "doc"], RequestOptions().with_accept_json())
    request, state = ReadDocument("/db/doc").make_request(transport)
    assert request == expected

    response = MockResponse(200).with_json_body({"_id": "doc", "_rev": "1-abc"})
    document = ReadDocument.take_response(response, DatabaseName("db"))
"""

import json
from collections import deque
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError
from pydantic_core import to_jsonable_python

from .exceptions import (
    CouchJsonDecodeError,
    CouchPathError,
    CouchResponseNotJsonError,
    CouchTransportError,
)
from .options import Accept, JsonBody, RequestOptions
from .paths import Revision
from .transport import Method

T = TypeVar("T")


@dataclass(frozen=True)
class MockRequest:
    """A request recorded by MockTransport. Compared by value."""

    method: Method
    path: tuple[str, ...]
    accept: Accept | None = None
    revision_query: Revision | None = None
    attachments_query: bool | None = None
    body: JsonBody | None = None


class MockResponse:
    """A hand-built response with a status code and optional JSON body."""

    def __init__(self, status_code: int, request_id: str | None = None):
        self._status_code = int(status_code)
        self._request_id = request_id
        self._body: JsonBody | None = None

    def __repr__(self) -> str:
        return f"MockResponse({self._status_code})"

    def with_json_body(self, body: Any) -> "MockResponse":
        """Set the JSON body. A response can have only one.

        Raises:
            ValueError: If a body was already set
        """
        if self._body is not None:
            raise ValueError("MockResponse already has a JSON body")
        self._body = JsonBody(to_jsonable_python(body))
        return self

    @property
    def status_code(self) -> int:
        return self._status_code

    @property
    def text(self) -> str | None:
        if self._body is None:
            return None
        return json.dumps(self._body.value)

    @property
    def request_id(self) -> str | None:
        return self._request_id

    def decode_json_body(self, model: type[T]) -> T:
        if self._body is None:
            raise CouchResponseNotJsonError("Response has no JSON body", self._request_id)
        try:
            return TypeAdapter(model).validate_python(self._body.value)
        except ValidationError as e:
            raise CouchJsonDecodeError(f"Cannot decode response body: {e}", cause=e, request_id=self._request_id)


class MockTransport:
    """Transport that performs no I/O.

    ``request`` returns MockRequest values. ``send`` records each request in
    ``sent`` and answers with the next response from ``queue_response``.

    Usage:
        transport = MockTransport()
        transport.queue_response(MockResponse(201).with_json_body({"ok": True}))
        api = CouchAPI(transport=transport)
        api.create_database("baseball")
        assert transport.sent[0].method is Method.PUT
    """

    def __init__(self, responses: Iterable[MockResponse] = ()):
        self._responses: deque[MockResponse] = deque(responses)
        self.sent: list[MockRequest] = []
        self.closed = False
        self._last_request_id: str | None = None

    @property
    def last_request_id(self) -> str | None:
        return self._last_request_id

    def queue_response(self, response: MockResponse) -> None:
        """Add a response for a later ``send``."""
        self._responses.append(response)

    def request(self, method: Method, path: Iterable[str], options: RequestOptions) -> MockRequest:
        segments = tuple(str(segment) for segment in path)
        if not segments or not all(segments):
            raise CouchPathError(f"Invalid path segments: {list(segments)!r}")
        body = None
        if options.body is not None:
            body = JsonBody(options.jsonable_body())
        return MockRequest(
            method=method,
            path=segments,
            accept=options.accept,
            revision_query=options.revision,
            attachments_query=options.attachments,
            body=body,
        )

    def get(self, path: Iterable[str], options: RequestOptions) -> MockRequest:
        return self.request(Method.GET, path, options)

    def put(self, path: Iterable[str], options: RequestOptions) -> MockRequest:
        return self.request(Method.PUT, path, options)

    def post(self, path: Iterable[str], options: RequestOptions) -> MockRequest:
        return self.request(Method.POST, path, options)

    def delete(self, path: Iterable[str], options: RequestOptions) -> MockRequest:
        return self.request(Method.DELETE, path, options)

    def send(self, request: MockRequest) -> MockResponse:
        """Record the request and return the next queued response.

        Raises:
            CouchTransportError: If no response is queued
        """
        self.sent.append(request)
        if not self._responses:
            raise CouchTransportError(f"No response queued for {request!r}")
        response = self._responses.popleft()
        self._last_request_id = response.request_id
        return response

    def close(self) -> None:
        self.closed = True

    def __enter__(self) -> "MockTransport":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
