"""Custom exceptions for the CouchDB client."""

from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict

if TYPE_CHECKING:
    from .transport import CouchResponse


class CouchError(Exception):
    """Base exception for all couch-tools errors."""

    def __init__(self, message: str, request_id: str | None = None):
        self.message = message
        self.request_id = request_id
        super().__init__(message)

    def __str__(self) -> str:
        if self.request_id:
            return f"{self.message} (request_id: {self.request_id})"
        return self.message


class CouchConstructionError(CouchError):
    """Invalid input while building a request. Nothing was sent."""
    pass


class CouchPathError(CouchConstructionError):
    """Malformed database name, document id, or document path."""
    pass


class CouchRevisionError(CouchConstructionError):
    """Malformed revision token."""
    pass


class CouchJsonEncodeError(CouchConstructionError):
    """Request body could not be serialized as JSON."""

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class CouchActionConsumedError(CouchError):
    """An action was used again after its request was built."""
    pass


class CouchTransportError(CouchError):
    """The transport failed to deliver the request or read the response."""

    def __init__(self, message: str, cause: BaseException | None = None):
        super().__init__(message)
        self.cause = cause


class CouchConnectionError(CouchTransportError):
    """Cannot reach the server, or the request timed out."""
    pass


class CouchResponseNotJsonError(CouchError):
    """Response has no JSON body."""
    pass


class CouchJsonDecodeError(CouchError):
    """Response body is not valid JSON for the expected shape."""

    def __init__(self, message: str, cause: BaseException | None = None, request_id: str | None = None):
        super().__init__(message, request_id)
        self.cause = cause


class CouchAPIError(CouchError):
    """Unexpected server response.

    Keeps the status code and the raw body for diagnostics.
    """

    def __init__(self, status_code: int, body: str | None, request_id: str | None = None):
        message = body or f"HTTP {status_code}"
        super().__init__(message, request_id)
        self.status_code = status_code
        self.body = body

    def __str__(self) -> str:
        base = f"HTTP {self.status_code}: {self.message}"
        if self.request_id:
            return f"{base} (request_id: {self.request_id})"
        return base

    @classmethod
    def from_response(cls, response: "CouchResponse") -> "CouchAPIError":
        return cls(response.status_code, response.text, response.request_id)


class CouchServerError(CouchError):
    """Base for errors the server reported with an error/reason payload.

    The server's ``error`` and ``reason`` strings are kept verbatim.
    """

    status_code: int = 0

    def __init__(self, error: str, reason: str, request_id: str | None = None):
        super().__init__(f"{error}: {reason}", request_id)
        self.error = error
        self.reason = reason


class CouchNotFoundError(CouchServerError):
    """Database or document not found (404)."""

    status_code = 404


class CouchUnauthorizedError(CouchServerError):
    """Client lacks permission for the operation (401)."""

    status_code = 401


class CouchConflictError(CouchServerError):
    """Document update conflict (409)."""

    status_code = 409


class CouchDatabaseExistsError(CouchServerError):
    """Database already exists (412)."""

    status_code = 412


class ErrorResponse(BaseModel):
    """Error payload sent by the server for failed requests."""

    model_config = ConfigDict(extra="ignore")

    error: str
    reason: str


def error_from_response(error_class: type[CouchServerError], response: "CouchResponse") -> CouchError:
    """Build a named server error from a response's error payload.

    Falls back to CouchAPIError when the payload cannot be decoded, so the
    raw body is kept either way.

    Args:
        error_class: Server error subclass matching the response status
        response: Response with a ``{"error": ..., "reason": ...}`` body

    Returns:
        The exception to raise
    """
    try:
        payload = response.decode_json_body(ErrorResponse)
    except (CouchResponseNotJsonError, CouchJsonDecodeError):
        return CouchAPIError.from_response(response)
    return error_class(payload.error, payload.reason, response.request_id)
