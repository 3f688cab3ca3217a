"""
Error types for billwerk_client.

Every failure of an API call surfaces as a subclass of BillwerkError:

- ConstructionError: the request could not be materialized
- TransportError: network, TLS, timeout or context failure during dispatch
- APIError: non-success status with a structured error body
- UnknownAPIError: non-success status with an unrecognized body
- DecodeError: success status but the body did not fit the decode target
"""
from dataclasses import dataclass, fields
from typing import Any, Optional


class BillwerkError(Exception):
    """Base class for errors raised by billwerk_client."""


class ConstructionError(BillwerkError):
    """Raised when a request builder cannot produce a request."""


class TransportError(BillwerkError):
    """Raised when a request could not be dispatched or its response not received."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class DecodeError(BillwerkError):
    """Raised when a success response body cannot be decoded."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


@dataclass
class ErrorResponse:
    """Error body returned by the API for failed calls."""

    code: int = 0
    error: str = ""
    message: str = ""
    http_reason: str = ""
    http_status: int = 0
    path: str = ""
    timestamp: str = ""
    request_id: str = ""
    transaction_error: Optional[str] = None

    def __str__(self) -> str:
        text = self.error
        if self.message:
            text += ": " + self.message
        return text


ERROR_RESPONSE_FIELDS = frozenset(f.name for f in fields(ErrorResponse))


class APIError(BillwerkError):
    """Raised for a non-success status whose body is an ErrorResponse.

    The ErrorResponse fields are readable directly on the exception
    (``err.code``, ``err.request_id``, ...).
    """

    def __init__(self, response: ErrorResponse, status_code: int):
        super().__init__(str(response))
        self.response = response
        self.status_code = status_code

    def __getattr__(self, name: str) -> Any:
        response = self.__dict__.get("response")
        if response is not None and name in ERROR_RESPONSE_FIELDS:
            return getattr(response, name)
        raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")


class UnknownAPIError(BillwerkError):
    """Raised for a non-success status whose body is not an ErrorResponse."""

    def __init__(self, status_code: int):
        super().__init__(f"unknown error, status code: {status_code}")
        self.status_code = status_code


class ContextError(Exception):
    """Base class for RequestContext termination reasons."""


class ContextCancelledError(ContextError):
    """The request context was cancelled."""


class ContextDeadlineError(ContextError, TimeoutError):
    """The request context deadline passed."""
