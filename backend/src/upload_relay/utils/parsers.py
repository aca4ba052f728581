"""Shared parsing utilities for Lambda proxy events."""

from __future__ import annotations

import base64
import json
from typing import Any
from typing import Mapping


def parse_http_method(event: Mapping[str, Any]) -> str:
    """Return the upper-cased HTTP method of an event.

    REST API events carry ``httpMethod``; HTTP API (payload v2) and
    Function URL events carry ``requestContext.http.method``.

    Args:
        event: The Lambda event.

    Returns:
        The method, or an empty string if the event has none.
    """
    method = event.get("httpMethod")
    if not method:
        request_context = event.get("requestContext") or {}
        method = (request_context.get("http") or {}).get("method")
    return str(method or "").upper()


def parse_request_id(event: Mapping[str, Any], context: Any = None) -> str:
    """Return the request id from the Lambda context or the event."""
    aws_request_id = getattr(context, "aws_request_id", None)
    if aws_request_id:
        return str(aws_request_id)
    return str((event.get("requestContext") or {}).get("requestId") or "")


def decode_body(body: str | bytes | None, is_base64: bool = False) -> str:
    """Return a request body as text.

    API Gateway base64-encodes bodies it considers binary and flags them
    with ``isBase64Encoded``.

    Raises:
        ValueError: If the body cannot be decoded to UTF-8 text.
    """
    if not body:
        return ""
    if is_base64:
        body = base64.b64decode(body)
    if isinstance(body, bytes):
        return body.decode("utf-8")
    return body


def parse_json_object(raw: str) -> dict[str, Any]:
    """Parse a JSON request body.

    An empty body, or one that is valid JSON but not an object, yields an
    empty dict so that field validation reports what is missing.

    Raises:
        ValueError: If the body is not valid JSON.
    """
    if not raw:
        return {}
    payload = json.loads(raw)
    if not isinstance(payload, dict):
        return {}
    return payload
