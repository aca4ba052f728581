"""Relay configuration.

Configuration is read from the environment once per invocation and passed
into ``UploadRelay`` explicitly, so tests can build a ``RelayConfig`` with
fake values instead of patching ``os.environ``.

Environment:
    DROPBOX_ACCESS_TOKEN      Bearer token for the Dropbox API.
    DROPBOX_TOKEN_SECRET_ARN  Secrets Manager secret holding the token, used
                              only when DROPBOX_ACCESS_TOKEN is unset.
    DROPBOX_TOKEN_SECRET_KEY  JSON key of the token in that secret
                              (default ``access_token``).
    DROPBOX_FOLDER            Default destination folder (default empty).
    DROPBOX_UPLOAD_URL        Upload endpoint override.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from upload_relay.exceptions import ConfigurationError
from upload_relay.services.secrets import get_secret_value

TOKEN_ENV_VAR = "DROPBOX_ACCESS_TOKEN"
DEFAULT_UPLOAD_URL = "https://content.dropboxapi.com/2/files/upload"
DEFAULT_SECRET_KEY = "access_token"


@dataclass(frozen=True)
class RelayConfig:
    """Process-wide, read-only settings for the relay."""

    access_token: Optional[str] = None
    token_secret_arn: Optional[str] = None
    token_secret_key: str = DEFAULT_SECRET_KEY
    default_folder: str = ""
    upload_url: str = DEFAULT_UPLOAD_URL

    @classmethod
    def from_env(cls) -> "RelayConfig":
        """Build a config from environment variables."""
        return cls(
            access_token=os.getenv(TOKEN_ENV_VAR) or None,
            token_secret_arn=os.getenv("DROPBOX_TOKEN_SECRET_ARN") or None,
            token_secret_key=(
                os.getenv("DROPBOX_TOKEN_SECRET_KEY") or DEFAULT_SECRET_KEY
            ),
            default_folder=os.getenv("DROPBOX_FOLDER", ""),
            upload_url=os.getenv("DROPBOX_UPLOAD_URL") or DEFAULT_UPLOAD_URL,
        )

    def resolve_access_token(self) -> str:
        """Return the Dropbox token.

        Raises:
            ConfigurationError: if neither the plain token nor the secret
                provides one.
        """
        if self.access_token:
            return self.access_token
        if self.token_secret_arn:
            token = get_secret_value(self.token_secret_arn, self.token_secret_key)
            if token:
                return token
        raise ConfigurationError(TOKEN_ENV_VAR)
