"""Outbound HTTP helper built on urllib.request.

Non-2xx responses are returned, not raised, so callers can relay the
upstream status and body. Transport failures (DNS, connection refused,
TLS) still raise ``urllib.error.URLError``.
"""

from __future__ import annotations

import json
import urllib.error
import urllib.request
from dataclasses import dataclass
from dataclasses import field
from typing import Any
from typing import Optional
from urllib.parse import quote
from urllib.parse import urlparse
from urllib.parse import urlsplit
from urllib.parse import urlunsplit

ALLOWED_SCHEMES = ("http", "https")

_PATH_SAFE = "/:@!$&'()*+,;=%~"
_QUERY_SAFE = _PATH_SAFE + "?"


@dataclass(frozen=True)
class HttpResponse:
    """Status, headers and raw body of an upstream response."""

    status: int
    body: bytes = b""
    headers: dict[str, str] = field(default_factory=dict)

    @property
    def ok(self) -> bool:
        return 200 <= self.status < 300

    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")

    def json(self) -> Any:
        return json.loads(self.body)


def is_allowed_url(url: str) -> bool:
    """Return True for absolute http(s) URLs with a host."""
    try:
        parsed = urlparse(url)
    except ValueError:
        return False
    return parsed.scheme in ALLOWED_SCHEMES and bool(parsed.netloc)


def quote_url(url: str) -> str:
    """Percent-encode spaces and non-ASCII characters in a URL.

    Existing ``%XX`` escapes and reserved characters are left alone, so an
    already encoded URL passes through unchanged. The host is not touched.

    Examples:
        >>> quote_url("https://example.com/my photo.png?q=café")
        'https://example.com/my%20photo.png?q=caf%C3%A9'
    """
    parts = urlsplit(url)
    return urlunsplit(
        (
            parts.scheme,
            parts.netloc,
            quote(parts.path, safe=_PATH_SAFE),
            quote(parts.query, safe=_QUERY_SAFE),
            quote(parts.fragment, safe=_QUERY_SAFE),
        )
    )


def send(
    method: str,
    url: str,
    headers: Optional[dict[str, str]] = None,
    data: Optional[bytes] = None,
) -> HttpResponse:
    """Send a single HTTP request and read the whole response body.

    No timeout is set; the Lambda runtime limit is the only bound.

    Args:
        method: HTTP method.
        url: Absolute http(s) URL; spaces and non-ASCII characters are
            percent-encoded before sending.
        headers: Optional request headers.
        data: Optional request body.

    Raises:
        ValueError: If the URL scheme is not http or https, or the URL
            cannot be put on the request line.
        urllib.error.URLError: On transport failure.
    """
    if not is_allowed_url(url):
        raise ValueError("Only http and https URLs are allowed")

    request = urllib.request.Request(
        quote_url(url),
        data=data,
        headers=headers or {},
        method=method.upper(),
    )
    try:
        # URL scheme is restricted above so file:// and ftp:// cannot be opened.
        with urllib.request.urlopen(request) as resp:  # nosec B310
            return HttpResponse(
                status=resp.status,
                body=resp.read(),
                headers=dict(resp.getheaders()),
            )
    except urllib.error.HTTPError as exc:
        try:
            body = exc.read()
        except Exception:  # nosec B110 - best-effort body read; empty body is fine
            body = b""
        return HttpResponse(
            status=exc.code,
            body=body or b"",
            headers=dict(exc.headers) if exc.headers else {},
        )


def get(url: str, headers: Optional[dict[str, str]] = None) -> HttpResponse:
    """GET a URL and return the full response."""
    return send("GET", url, headers=headers)
