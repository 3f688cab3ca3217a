"""
Response decoding for billwerk_client.

Turns a status code and body into either a decoded value or the matching
BillwerkError. Independent of httpx so the sync and async clients share it.
"""
import dataclasses
import json
import logging
from typing import Any, Callable, List, Optional

from ..errors import (
    APIError,
    BillwerkError,
    DecodeError,
    ErrorResponse,
    UnknownAPIError,
)
from ..types import JSONValue

logger = logging.getLogger("billwerk_client.response_decoder")

# Anything that turns parsed JSON into the caller's value
DecodeTarget = Callable[[Any], Any]


def is_success_status(status_code: int) -> bool:
    """Statuses in [200, 400) are decoded as success."""
    return 200 <= status_code < 400


def raw_json(data: JSONValue) -> JSONValue:
    """Decode target returning the parsed JSON untouched."""
    return data


def list_of(item: Any) -> DecodeTarget:
    """Decode target for a JSON array whose items decode with ``item``."""

    def decode(data: Any) -> List[Any]:
        if not isinstance(data, list):
            raise TypeError(f"expected a JSON array, got {type(data).__name__}")
        return [convert(item, entry) for entry in data]

    return decode


def convert(into: Any, data: Any) -> Any:
    """Apply a decode target to parsed JSON.

    - classes with a ``from_dict`` classmethod (API models)
    - plain dataclasses, filled from the keys matching their fields
    - any other callable, called with the parsed JSON
    """
    from_dict = getattr(into, "from_dict", None)
    if from_dict is not None:
        return from_dict(data)
    if isinstance(into, type) and dataclasses.is_dataclass(into):
        if not isinstance(data, dict):
            raise TypeError(f"{into.__name__} expects a JSON object, got {type(data).__name__}")
        names = {f.name for f in dataclasses.fields(into)}
        return into(**{key: value for key, value in data.items() if key in names})
    return into(data)


def decode_success(content: bytes, into: Any) -> Any:
    """Decode a success body into ``into``; failures raise DecodeError."""
    try:
        data = json.loads(content)
        return convert(into, data)
    except (ValueError, TypeError, KeyError, AttributeError) as e:
        raise DecodeError(f"failed to decode response body: {e}", e) from e


def _field_matches(name: str, value: Any) -> bool:
    if value is None:
        return True
    if name in ("code", "http_status"):
        return isinstance(value, int) and not isinstance(value, bool)
    return isinstance(value, str)


def parse_error_response(content: bytes) -> Optional[ErrorResponse]:
    """Parse an error body, or return None when it is not an ErrorResponse.

    The body must be a JSON object with at least one known field, and every
    known field present must have the expected JSON type.
    """
    try:
        data = json.loads(content)
    except ValueError:
        return None
    if not isinstance(data, dict):
        return None

    known = {f.name for f in dataclasses.fields(ErrorResponse)}
    values = {key: value for key, value in data.items() if key in known}
    if not values:
        return None
    if not all(_field_matches(key, value) for key, value in values.items()):
        return None

    return ErrorResponse(**{key: value for key, value in values.items() if value is not None})


def error_for_status(status_code: int, content: bytes) -> BillwerkError:
    """Build the error for a non-success response."""
    error_response = parse_error_response(content)
    if error_response is None:
        logger.debug(f"error_for_status: undecodable error body for status {status_code}")
        return UnknownAPIError(status_code)
    logger.debug(
        f"error_for_status: status={status_code}, code={error_response.code}, "
        f"error={error_response.error}, request_id={error_response.request_id}"
    )
    return APIError(error_response, status_code)
