"""
API clients using httpx.

Both clients hold only immutable configuration and the httpx client, so one
instance can serve concurrent callers.
"""
import asyncio
import logging
import os
from typing import Any, Optional

import httpx

from .. import _console
from ..config import ClientConfig, ResolvedConfig, resolve_config
from ..errors import TransportError
from ..types import RequestContext
from .request_builder import CONTENT_TYPE_JSON, CONTEXT_EXTENSION, RequestBuilder
from .response_decoder import decode_success, error_for_status, is_success_status

logger = logging.getLogger("billwerk_client.base_client")


def _is_ssl_verify_disabled_by_env() -> bool:
    """
    Check if SSL verification is disabled via environment variables.

    Returns True if any of these are set:
    - NODE_TLS_REJECT_UNAUTHORIZED=0
    - SSL_CERT_VERIFY=0
    """
    node_tls = os.environ.get("NODE_TLS_REJECT_UNAUTHORIZED", "")
    ssl_cert_verify = os.environ.get("SSL_CERT_VERIFY", "")
    return node_tls == "0" or ssl_cert_verify == "0"


def _httpx_timeout(config: ResolvedConfig) -> httpx.Timeout:
    return httpx.Timeout(
        connect=config.timeout.connect,
        read=config.timeout.read,
        write=config.timeout.write,
        pool=config.timeout.pool,
    )


def _describe(request: httpx.Request) -> str:
    return f"{request.method} {request.url}"


class _BaseBillwerkClient:
    """Request construction and response handling shared by both clients."""

    def __init__(self, config: ClientConfig):
        self._config = resolve_config(config)
        self._closed = False

    @property
    def config(self) -> ResolvedConfig:
        return self._config

    @property
    def base_url(self) -> str:
        return self._config.base_url

    @property
    def closed(self) -> bool:
        return self._closed

    def new_request(self, ctx: Optional[RequestContext] = None) -> RequestBuilder:
        """Return a builder carrying base URL, Basic auth and Accept header.

        Call sites only add endpoint, params and body.
        """
        if ctx is None:
            ctx = RequestContext.background()
        return (
            RequestBuilder(ctx)
            .with_base_url(self._config.base_url)
            .with_basic_auth(self._config.api_key, "")
            .with_header("Accept", CONTENT_TYPE_JSON)
        )

    def _prepare(self, request: httpx.Request, default_timeout: httpx.Timeout) -> Optional[RequestContext]:
        if self._closed:
            raise RuntimeError("Client has been closed")

        ctx = request.extensions.get(CONTEXT_EXTENSION)
        if ctx is not None:
            self._raise_if_done(request, ctx)
        if "timeout" not in request.extensions:
            request.extensions["timeout"] = default_timeout.as_dict()

        logger.debug(f"{type(self).__name__}.execute: dispatching {_describe(request)}")
        if self._config.debug:
            _console.print_request(request)
        return ctx

    @staticmethod
    def _raise_if_done(request: httpx.Request, ctx: RequestContext) -> None:
        err = ctx.error()
        if err is not None:
            raise TransportError(f"{_describe(request)}: {err}", err) from err

    @staticmethod
    def _transport_error(request: httpx.Request, cause: Exception) -> TransportError:
        logger.debug(f"transport failure for {_describe(request)}: {cause!r}")
        return TransportError(f"{_describe(request)}: {cause}", cause)

    def _finish(self, response: httpx.Response, content: Optional[bytes], into: Any) -> Any:
        """Turn a received response into a value or raise its error."""
        if self._config.debug:
            _console.print_response(response, content)

        status_code = response.status_code
        logger.debug(f"{type(self).__name__}.execute: status={status_code}")
        if not is_success_status(status_code):
            raise error_for_status(status_code, content or b"")
        if into is None:
            return None
        return decode_success(content or b"", into)


class SyncBillwerkClient(_BaseBillwerkClient):
    """Blocking client backed by httpx.Client."""

    def __init__(
        self,
        config: ClientConfig,
        httpx_client: Optional[httpx.Client] = None,
    ):
        super().__init__(config)
        client = httpx_client if httpx_client is not None else self._config.httpx_client
        self._owns_client = client is None
        if client is None:
            # NODE_TLS_REJECT_UNAUTHORIZED=0 or SSL_CERT_VERIFY=0 disable SSL verification
            client = httpx.Client(
                timeout=_httpx_timeout(self._config),
                verify=not _is_ssl_verify_disabled_by_env(),
            )
        self._client = client

    def execute(self, request: httpx.Request, into: Any = None) -> Any:
        """Send a request built by ``new_request`` and decode the response.

        Returns the body decoded with ``into``, or None when ``into`` is None
        (the body is then never read). Raises TransportError, APIError,
        UnknownAPIError or DecodeError.
        """
        ctx = self._prepare(request, self._client.timeout)

        try:
            response = self._client.send(request, stream=True)
        except httpx.TransportError as e:
            raise self._transport_error(request, e) from e

        try:
            # blocking I/O cannot be interrupted; a cancel during the send or read wins here
            self._raise_if_cancelled(request, ctx)
            content = None
            if into is not None or not is_success_status(response.status_code):
                try:
                    content = response.read()
                except httpx.TransportError as e:
                    raise self._transport_error(request, e) from e
                self._raise_if_cancelled(request, ctx)
        finally:
            response.close()
        return self._finish(response, content, into)

    def _raise_if_cancelled(self, request: httpx.Request, ctx: Optional[RequestContext]) -> None:
        if ctx is not None and ctx.cancelled:
            self._raise_if_done(request, ctx)

    def close(self) -> None:
        """Close the client. A caller-supplied httpx client stays open."""
        self._closed = True
        if self._owns_client:
            self._client.close()

    def __enter__(self) -> "SyncBillwerkClient":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()


class AsyncBillwerkClient(_BaseBillwerkClient):
    """Asyncio client backed by httpx.AsyncClient."""

    def __init__(
        self,
        config: ClientConfig,
        httpx_client: Optional[httpx.AsyncClient] = None,
    ):
        super().__init__(config)
        client = httpx_client if httpx_client is not None else self._config.httpx_client
        self._owns_client = client is None
        if client is None:
            # NODE_TLS_REJECT_UNAUTHORIZED=0 or SSL_CERT_VERIFY=0 disable SSL verification
            client = httpx.AsyncClient(
                timeout=_httpx_timeout(self._config),
                verify=not _is_ssl_verify_disabled_by_env(),
            )
        self._client = client

    async def execute(self, request: httpx.Request, into: Any = None) -> Any:
        """Send a request built by ``new_request`` and decode the response.

        Cancelling the request's context aborts the in-flight exchange, body
        read included, and raises TransportError caused by
        ContextCancelledError.
        """
        ctx = self._prepare(request, self._client.timeout)
        task = asyncio.ensure_future(self._exchange(request, into))
        remove_callback = None
        if ctx is not None:
            loop = asyncio.get_running_loop()
            remove_callback = ctx.add_cancel_callback(lambda: loop.call_soon_threadsafe(task.cancel))

        try:
            response, content = await task
        except asyncio.CancelledError:
            if ctx is None or not ctx.cancelled:
                raise
            err = ctx.error()
            raise TransportError(f"{_describe(request)}: {err}", err) from err
        finally:
            if remove_callback is not None:
                remove_callback()

        return self._finish(response, content, into)

    async def _exchange(self, request: httpx.Request, into: Any):
        """Send the request and read the body when it will be used.

        Returns ``(response, content)`` with the response already closed.
        """
        try:
            response = await self._client.send(request, stream=True)
        except httpx.TransportError as e:
            raise self._transport_error(request, e) from e

        try:
            content = None
            if into is not None or not is_success_status(response.status_code):
                try:
                    content = await response.aread()
                except httpx.TransportError as e:
                    raise self._transport_error(request, e) from e
            return response, content
        finally:
            await response.aclose()

    async def close(self) -> None:
        """Close the client. A caller-supplied httpx client stays open."""
        self._closed = True
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "AsyncBillwerkClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.close()
