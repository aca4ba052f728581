"""Dropbox content-upload client.

Implements the single-request ``/2/files/upload`` call: the file bytes are
the request body and the upload arguments travel JSON-encoded in the
``Dropbox-API-Arg`` header.
"""

from __future__ import annotations

import json
from typing import Any
from typing import Callable
from typing import Optional

from upload_relay.config import DEFAULT_UPLOAD_URL
from upload_relay.services import http
from upload_relay.services.http import HttpResponse

API_ARG_HEADER = "Dropbox-API-Arg"

Sender = Callable[..., HttpResponse]


def build_upload_arg(path: str) -> dict[str, Any]:
    """Return the upload arguments for ``path``.

    ``mode: add`` with ``autorename`` never overwrites: a name collision
    makes Dropbox store the file under a suffixed name instead.
    """
    return {
        "path": path,
        "mode": "add",
        "autorename": True,
        "mute": False,
        "strict_conflict": False,
    }


def encode_api_arg(arg: dict[str, Any]) -> str:
    """JSON-encode an API argument for use as an HTTP header value.

    Header values must be ASCII, so non-ASCII characters are escaped.
    """
    return json.dumps(arg, ensure_ascii=True)


class DropboxClient:
    """Minimal client for the Dropbox upload endpoint."""

    def __init__(
        self,
        access_token: str,
        upload_url: str = DEFAULT_UPLOAD_URL,
        sender: Optional[Sender] = None,
    ) -> None:
        self._access_token = access_token
        self._upload_url = upload_url
        self._send = sender or http.send

    def upload_headers(self, path: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self._access_token}",
            "Content-Type": "application/octet-stream",
            API_ARG_HEADER: encode_api_arg(build_upload_arg(path)),
        }

    def upload(self, path: str, payload: bytes) -> HttpResponse:
        """Upload ``payload`` to ``path``; the response is returned as-is."""
        return self._send(
            "POST",
            self._upload_url,
            headers=self.upload_headers(path),
            data=payload,
        )
