"""
Tests for types.py (RequestContext)
Logic testing: State Transition, Boundary Value coverage
"""
import pytest
from unittest.mock import MagicMock

from billwerk_client.errors import ContextCancelledError, ContextDeadlineError
from billwerk_client.types import RequestContext


class TestRequestContext:
    """Tests for RequestContext."""

    # Path: background context never ends on its own
    def test_background(self):
        ctx = RequestContext.background()
        assert ctx.timeout is None
        assert ctx.remaining() is None
        assert ctx.done is False
        assert ctx.error() is None

    # Error Path: negative timeout
    def test_negative_timeout(self):
        with pytest.raises(ValueError, match="timeout must be >= 0"):
            RequestContext(timeout=-1)

    # Boundary: zero timeout is already expired
    def test_zero_timeout(self):
        ctx = RequestContext(timeout=0)
        assert ctx.expired is True
        assert ctx.remaining() == 0.0
        assert isinstance(ctx.error(), ContextDeadlineError)

    def test_remaining_within_timeout(self):
        ctx = RequestContext(timeout=60)
        assert 0 < ctx.remaining() <= 60
        assert ctx.expired is False

    # State: cancel
    def test_cancel(self):
        ctx = RequestContext(timeout=60)
        ctx.cancel()
        assert ctx.cancelled is True
        assert ctx.done is True
        assert isinstance(ctx.error(), ContextCancelledError)

    # State: cancellation reported before expiry
    def test_cancel_wins_over_deadline(self):
        ctx = RequestContext(timeout=0)
        ctx.cancel()
        assert isinstance(ctx.error(), ContextCancelledError)

    # State: callbacks run once
    def test_callbacks_run_once(self):
        ctx = RequestContext()
        callback = MagicMock()
        ctx.add_cancel_callback(callback)

        ctx.cancel()
        ctx.cancel()

        callback.assert_called_once_with()

    # Decision: registering on a cancelled context runs immediately
    def test_callback_after_cancel(self):
        ctx = RequestContext()
        ctx.cancel()
        callback = MagicMock()
        remove = ctx.add_cancel_callback(callback)

        callback.assert_called_once_with()
        remove()

    # Path: removed callbacks do not run
    def test_remove_callback(self):
        ctx = RequestContext()
        callback = MagicMock()
        remove = ctx.add_cancel_callback(callback)
        remove()
        remove()

        ctx.cancel()
        callback.assert_not_called()

    def test_repr(self):
        assert repr(RequestContext()) == "RequestContext(timeout=None, cancelled=False, expired=False)"
