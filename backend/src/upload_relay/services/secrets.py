"""Secrets Manager lookup for the Dropbox access token.

Deployments that do not want the token in a plain environment variable
point ``DROPBOX_TOKEN_SECRET_ARN`` at a JSON secret instead. Both the boto3
client and the parsed secret are cached for the lifetime of the container.
"""

from __future__ import annotations

import base64
import json
from typing import Any

import boto3

_SECRET_CACHE: dict[str, dict[str, Any]] = {}
_secretsmanager_client: Any = None


def _get_client() -> Any:
    global _secretsmanager_client
    if _secretsmanager_client is None:
        _secretsmanager_client = boto3.client("secretsmanager")
    return _secretsmanager_client


def get_secret_json(secret_arn: str) -> dict[str, Any]:
    """Fetch a secret from AWS Secrets Manager and parse it as JSON."""
    if secret_arn in _SECRET_CACHE:
        return _SECRET_CACHE[secret_arn]

    response = _get_client().get_secret_value(SecretId=secret_arn)
    secret_str = response.get("SecretString")
    if not secret_str and response.get("SecretBinary"):
        secret_str = base64.b64decode(response["SecretBinary"]).decode("utf-8")
    if not secret_str:
        raise RuntimeError("Secret value is empty")

    payload = json.loads(secret_str)
    if not isinstance(payload, dict):
        raise RuntimeError("Secret value must be a JSON object")
    _SECRET_CACHE[secret_arn] = payload
    return payload


def get_secret_value(secret_arn: str, key: str) -> str | None:
    """Return a single string field of a JSON secret, or None if absent."""
    value = get_secret_json(secret_arn).get(key)
    if value is None or value == "":
        return None
    return str(value)


def clear_secret_cache() -> None:
    """Clear cached secrets and the client (useful in tests)."""
    global _secretsmanager_client
    _SECRET_CACHE.clear()
    _secretsmanager_client = None
