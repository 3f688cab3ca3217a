"""
Core modules for billwerk_client.
"""
from .base_client import AsyncBillwerkClient, SyncBillwerkClient
from .request_builder import (
    CONTENT_TYPE_JSON,
    USER_AGENT,
    RequestBuilder,
    encode_query,
    format_param_value,
)
from .response_decoder import (
    convert,
    decode_success,
    error_for_status,
    is_success_status,
    list_of,
    parse_error_response,
    raw_json,
)

__all__ = [
    "AsyncBillwerkClient",
    "SyncBillwerkClient",
    "CONTENT_TYPE_JSON",
    "USER_AGENT",
    "RequestBuilder",
    "encode_query",
    "format_param_value",
    "convert",
    "decode_success",
    "error_for_status",
    "is_success_status",
    "list_of",
    "parse_error_response",
    "raw_json",
]
