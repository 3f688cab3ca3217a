"""
Request builder for billwerk_client.

A RequestBuilder collects the parts of one API call through chained calls and
is consumed by exactly one terminal verb (get/post/put/delete), which returns
an ``httpx.Request`` ready for ``execute``.
"""
import json
import logging
from datetime import date, datetime
from enum import Enum
from typing import IO, Any, Dict, List, Optional, Union
from urllib.parse import quote_plus, urlsplit, urlunsplit

import httpx

from .._version import __version__
from ..auth import encode_basic_auth
from ..errors import ConstructionError
from ..models.base import json_default
from ..types import HttpMethod, RequestContext

logger = logging.getLogger("billwerk_client.request_builder")

USER_AGENT = f"billwerk-client/{__version__}"
CONTENT_TYPE_JSON = "application/json; charset=utf-8"

# request.extensions key carrying the RequestContext to the executor
CONTEXT_EXTENSION = "billwerk.context"

Body = Union[str, bytes, IO[bytes]]


def format_param_value(value: Any) -> str:
    """Render a query parameter value as text."""
    if isinstance(value, Enum):
        value = value.value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    return str(value)


def encode_query(params: Dict[str, List[str]]) -> str:
    """Encode a query multimap.

    Keys are sorted; the values of a repeated key keep their insertion order
    and render as repeated ``key=value`` pairs.
    """
    parts = []
    for key in sorted(params):
        escaped_key = quote_plus(key)
        for value in params[key]:
            parts.append(f"{escaped_key}={quote_plus(value)}")
    return "&".join(parts)


def _read_body(body: Optional[Body]) -> Optional[bytes]:
    if body is None:
        return None
    if isinstance(body, bytes):
        return body
    if isinstance(body, str):
        return body.encode("utf-8")
    if isinstance(body, (bytearray, memoryview)):
        return bytes(body)
    if hasattr(body, "read"):
        data = body.read()
        return data.encode("utf-8") if isinstance(data, str) else bytes(data)
    raise ConstructionError(f"unsupported body type: {type(body).__name__}")


class RequestBuilder:
    """Fluent accumulator for one API request."""

    def __init__(self, ctx: Optional[RequestContext]):
        self._ctx = ctx
        self._method: HttpMethod = "GET"
        self._base_url = ""
        self._endpoint = ""
        self._headers = httpx.Headers()
        self._params: Dict[str, List[str]] = {}
        self._body: Optional[Body] = None
        self._body_error: Optional[Exception] = None
        self._consumed = False

    @property
    def method(self) -> HttpMethod:
        return self._method

    @property
    def url(self) -> str:
        """Base URL and endpoint joined verbatim, without query string."""
        return self._base_url + self._endpoint

    @property
    def headers(self) -> httpx.Headers:
        return httpx.Headers(self._headers)

    @property
    def params(self) -> Dict[str, List[str]]:
        return {key: list(values) for key, values in self._params.items()}

    def with_base_url(self, base_url: str) -> "RequestBuilder":
        """Set the base URL, including scheme and host (e.g. https://api.reepay.com/v1)."""
        self._base_url = base_url
        return self

    def with_endpoint(self, endpoint: str) -> "RequestBuilder":
        """Set the endpoint appended to the base URL (e.g. /plan)."""
        self._endpoint = endpoint
        return self

    def with_param(self, key: str, value: Any) -> "RequestBuilder":
        """Set a query parameter, replacing earlier values of the key."""
        self._params[key] = [format_param_value(value)]
        return self

    def add_param(self, key: str, value: Any) -> "RequestBuilder":
        """Append a value to a query parameter, keeping earlier values."""
        self._params.setdefault(key, []).append(format_param_value(value))
        return self

    def with_header(self, key: str, value: str) -> "RequestBuilder":
        """Set a header, replacing any earlier value (case-insensitive)."""
        self._headers[key] = value
        return self

    def with_basic_auth(self, username: str, password: str) -> "RequestBuilder":
        return self.with_header("Authorization", encode_basic_auth(username, password))

    def with_content_type_json(self) -> "RequestBuilder":
        return self.with_header("Content-Type", CONTENT_TYPE_JSON)

    def with_body(self, body: Body) -> "RequestBuilder":
        """Set a raw body (bytes, str or binary file-like). Content-Type is left as is."""
        self._body = body
        self._body_error = None
        return self

    def with_json_body(self, value: Any) -> "RequestBuilder":
        """Set the JSON encoding of value as body and the JSON Content-Type.

        A value that cannot be encoded makes the terminal verb raise
        ConstructionError.
        """
        self.with_content_type_json()
        try:
            self._body = json.dumps(value, default=json_default).encode("utf-8")
            self._body_error = None
        except (TypeError, ValueError) as e:
            logger.debug(f"RequestBuilder.with_json_body: encoding failed: {e}")
            self._body = None
            self._body_error = e
        return self

    def get(self) -> httpx.Request:
        return self._build("GET")

    def post(self) -> httpx.Request:
        return self._build("POST")

    def put(self) -> httpx.Request:
        return self._build("PUT")

    def delete(self) -> httpx.Request:
        return self._build("DELETE")

    def _build(self, method: HttpMethod) -> httpx.Request:
        if self._consumed:
            raise ConstructionError("request builder has already been materialized")
        self._consumed = True
        self._method = method

        if not isinstance(self._ctx, RequestContext):
            raise ConstructionError(
                f"a RequestContext is required, got {type(self._ctx).__name__}"
            )

        if self._body_error is not None:
            raise ConstructionError(
                f"failed to encode JSON body: {self._body_error}"
            ) from self._body_error

        raw_url = self.url
        try:
            parts = urlsplit(raw_url)
        except ValueError as e:
            raise ConstructionError(f"invalid request URL {raw_url!r}: {e}") from e
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ConstructionError(f"invalid request URL {raw_url!r}")

        # the encoded params replace any query string already in the URL
        url = urlunsplit(
            (parts.scheme, parts.netloc, parts.path, encode_query(self._params), parts.fragment)
        )

        headers = httpx.Headers(self._headers)
        headers["User-Agent"] = USER_AGENT

        extensions: Dict[str, Any] = {CONTEXT_EXTENSION: self._ctx}
        remaining = self._ctx.remaining()
        if remaining is not None:
            extensions["timeout"] = httpx.Timeout(remaining).as_dict()

        try:
            request = httpx.Request(
                method,
                url,
                headers=headers,
                content=_read_body(self._body),
                extensions=extensions,
            )
        except (httpx.InvalidURL, ValueError, TypeError) as e:
            raise ConstructionError(f"cannot build {method} {url}: {e}") from e

        logger.debug(f"RequestBuilder._build: method={method}, url={request.url}")
        return request
