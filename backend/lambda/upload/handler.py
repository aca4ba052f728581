"""Lambda entrypoint for the Dropbox upload relay."""

from __future__ import annotations

from typing import Any
from typing import Mapping

from upload_relay.api.upload import lambda_handler as _handler


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    """Delegate to the upload relay handler."""
    return _handler(event, context)
