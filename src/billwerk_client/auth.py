"""
Authorization header encoding for billwerk_client.
"""
import base64
import logging
from typing import Optional

logger = logging.getLogger("billwerk_client.auth")


def _base64_encode(text: str) -> str:
    return base64.b64encode(text.encode("utf-8")).decode("utf-8")


def _mask_sensitive(value: Optional[str], visible_chars: int = 10) -> str:
    """Mask sensitive value for safe logging."""
    if value is None:
        return "<None>"
    if len(value) <= visible_chars:
        return "*" * len(value)
    return value[:visible_chars] + "*" * (len(value) - visible_chars)


def encode_basic_auth(username: str, password: str = "") -> str:
    """Return the Basic Authorization header value for the credentials.

    The API authenticates with the private API key as username and an empty
    password, so an empty password is accepted here.
    """
    if username is None:
        raise ValueError("Basic auth requires a username")
    value = "Basic " + _base64_encode(f"{username}:{password or ''}")
    logger.debug(
        f"encode_basic_auth: username={_mask_sensitive(username)} -> "
        f"Authorization={_mask_sensitive(value, 15)}"
    )
    return value
