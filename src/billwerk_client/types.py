"""
Type definitions for billwerk_client.
"""
import threading
import time
from typing import Any, Callable, Dict, List, Literal, Optional, Union

from .errors import ContextCancelledError, ContextDeadlineError, ContextError

# HTTP methods used by the API
HttpMethod = Literal["GET", "POST", "PUT", "DELETE"]

# Opaque JSON value, passed through without a fixed schema (plan metadata)
JSONValue = Union[Dict[str, Any], List[Any], str, int, float, bool, None]


class RequestContext:
    """Cancellation and deadline scope for API calls.

    A context created without a timeout only ends when ``cancel()`` is called.
    With a timeout, the deadline is fixed at creation time and every request
    bound to the context gets the remaining time as its httpx timeout.

    Contexts may be shared between threads and between calls.
    """

    def __init__(self, timeout: Optional[float] = None):
        if timeout is not None and timeout < 0:
            raise ValueError("timeout must be >= 0")
        self._timeout = timeout
        self._deadline = time.monotonic() + timeout if timeout is not None else None
        self._cancelled = threading.Event()
        self._lock = threading.Lock()
        self._callbacks: List[Callable[[], None]] = []

    @classmethod
    def background(cls) -> "RequestContext":
        """Context that never expires."""
        return cls()

    @property
    def timeout(self) -> Optional[float]:
        return self._timeout

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    @property
    def done(self) -> bool:
        return self.cancelled or self.expired

    def remaining(self) -> Optional[float]:
        """Seconds left before the deadline, or None without a deadline."""
        if self._deadline is None:
            return None
        return max(self._deadline - time.monotonic(), 0.0)

    def error(self) -> Optional[ContextError]:
        """Reason the context ended, or None while it is still live."""
        if self.cancelled:
            return ContextCancelledError("context cancelled")
        if self.expired:
            return ContextDeadlineError("context deadline exceeded")
        return None

    def cancel(self) -> None:
        """Cancel the context and run registered callbacks once."""
        with self._lock:
            if self._cancelled.is_set():
                return
            self._cancelled.set()
            callbacks, self._callbacks = self._callbacks, []
        for callback in callbacks:
            callback()

    def add_cancel_callback(self, callback: Callable[[], None]) -> Callable[[], None]:
        """Register a callback for ``cancel()`` and return a function removing it.

        The callback runs immediately when the context is already cancelled.
        """
        with self._lock:
            if not self._cancelled.is_set():
                self._callbacks.append(callback)
                return lambda: self._remove_callback(callback)
        callback()
        return lambda: None

    def _remove_callback(self, callback: Callable[[], None]) -> None:
        with self._lock:
            if callback in self._callbacks:
                self._callbacks.remove(callback)

    def __repr__(self) -> str:
        return (
            f"RequestContext(timeout={self._timeout!r}, "
            f"cancelled={self.cancelled}, expired={self.expired})"
        )
