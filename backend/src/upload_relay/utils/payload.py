"""Helpers for turning request fields into upload bytes and paths."""

from __future__ import annotations

import base64
import re
from typing import Optional

_NON_BASE64 = re.compile(r"[^A-Za-z0-9+/]")
_SLASH_RUNS = re.compile(r"/+")
_URLSAFE_TO_STANDARD = str.maketrans("-_", "+/")

DATA_URL_DELIMITER = ","


def strip_data_url_prefix(content: str) -> str:
    """Drop a ``data:...;base64,`` style prefix.

    Everything up to and including the last comma is discarded, so
    ``"data:text/plain;base64,aGk="`` becomes ``"aGk="``.
    """
    if DATA_URL_DELIMITER in content:
        return content.rsplit(DATA_URL_DELIMITER, 1)[1]
    return content


def decode_base64_lenient(data: str) -> bytes:
    """Decode base64 without validating the input.

    URL-safe characters are accepted, any other character outside the
    alphabet is skipped and padding is optional. Decoding stops at the
    first ``=``. A trailing group of a single character carries no full
    byte and is dropped. Malformed input therefore yields truncated or
    garbage bytes instead of an error.
    """
    data = data.split("=", 1)[0]
    cleaned = _NON_BASE64.sub("", data.translate(_URLSAFE_TO_STANDARD))
    remainder = len(cleaned) % 4
    if remainder == 1:
        cleaned = cleaned[:-1]
    elif remainder:
        cleaned += "=" * (4 - remainder)
    return base64.b64decode(cleaned)


def decode_content(content: str) -> bytes:
    """Decode a ``content`` field (plain base64 or data URL) to bytes."""
    return decode_base64_lenient(strip_data_url_prefix(content))


def build_destination_path(
    filename: str,
    folder: Optional[str] = None,
    default_folder: Optional[str] = None,
) -> str:
    """Join folder and filename into a Dropbox path.

    Runs of slashes collapse into one and the result always starts with
    exactly one slash. ``..`` segments are passed through untouched.

    Examples:
        >>> build_destination_path("b.txt", folder="/a/")
        '/a/b.txt'
        >>> build_destination_path("x.png", folder="")
        '/x.png'
    """
    base = folder or default_folder or ""
    path = _SLASH_RUNS.sub("/", f"{base}/{filename}")
    if not path.startswith("/"):
        path = "/" + path
    return path
