"""Utility modules for the upload relay."""

from upload_relay.utils.logging import (
    clear_request_context,
    configure_logging,
    get_logger,
    redact_url,
    set_request_context,
)
from upload_relay.utils.payload import build_destination_path, decode_content
from upload_relay.utils.responses import empty_response, json_response

__all__ = [
    "build_destination_path",
    "clear_request_context",
    "configure_logging",
    "decode_content",
    "empty_response",
    "get_logger",
    "json_response",
    "redact_url",
    "set_request_context",
]
