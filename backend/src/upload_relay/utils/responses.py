"""Shared response utilities for the Lambda handler."""

from __future__ import annotations

import json
from typing import Any
from typing import Optional

ALLOWED_METHODS = "POST, OPTIONS"
ALLOWED_HEADERS = "Content-Type, Authorization"


def get_security_headers() -> dict[str, str]:
    """Get security headers for all responses.

    SECURITY: These headers protect against common web vulnerabilities:
    - X-Content-Type-Options: Prevents MIME type sniffing
    - X-Frame-Options: Prevents clickjacking
    - Cache-Control: Prevents caching of upstream file metadata

    Returns:
        Dictionary of security headers.
    """
    return {
        "X-Content-Type-Options": "nosniff",
        "X-Frame-Options": "DENY",
        "Cache-Control": "no-store, no-cache, must-revalidate",
        "Pragma": "no-cache",
    }


def get_cors_headers() -> dict[str, str]:
    """Get CORS headers for the response.

    The relay is called directly from browsers on arbitrary origins, so any
    origin is allowed.
    """
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": ALLOWED_METHODS,
        "Access-Control-Allow-Headers": ALLOWED_HEADERS,
    }


def _base_headers() -> dict[str, str]:
    headers = get_security_headers()
    headers.update(get_cors_headers())
    return headers


def json_response(
    status_code: int,
    body: Any,
    headers: Optional[dict[str, str]] = None,
) -> dict[str, Any]:
    """Create a JSON API Gateway response.

    Args:
        status_code: HTTP status code.
        body: Response body (dict or an object with ``to_dict``).
        headers: Optional additional headers to include.

    Returns:
        API Gateway response dictionary.
    """
    response_headers = {"Content-Type": "application/json"}
    response_headers.update(_base_headers())
    if headers:
        response_headers.update(headers)

    return {
        "statusCode": status_code,
        "headers": response_headers,
        "body": json.dumps(_serialize_body(body), default=str),
    }


def empty_response(status_code: int = 204) -> dict[str, Any]:
    """Create a response with no body (used for CORS pre-flight)."""
    return {
        "statusCode": status_code,
        "headers": _base_headers(),
        "body": "",
    }


def _serialize_body(body: Any) -> Any:
    if hasattr(body, "to_dict"):
        return body.to_dict()
    return body

