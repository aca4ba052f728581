"""Pytest configuration and fixtures for relay tests.

Provides API Gateway event fixtures, a ready-made ``RelayConfig`` and a
recording fake for outbound HTTP so no test touches the network.
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Any
from typing import Optional
from uuid import uuid4

import pytest

# Add backend source to path for imports
sys.path.insert(0, str(Path(__file__).resolve().parents[1] / 'backend' / 'src'))

from upload_relay.services.http import HttpResponse  # noqa: E402

_RELAY_ENV_VARS = (
    'DROPBOX_ACCESS_TOKEN',
    'DROPBOX_TOKEN_SECRET_ARN',
    'DROPBOX_TOKEN_SECRET_KEY',
    'DROPBOX_FOLDER',
    'DROPBOX_UPLOAD_URL',
)


@pytest.fixture(autouse=True)
def clean_relay_env(monkeypatch):
    """Start every test without relay configuration or cached secrets."""
    from upload_relay.services.secrets import clear_secret_cache

    for name in _RELAY_ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    clear_secret_cache()
    yield
    clear_secret_cache()


# --- Config Fixtures ---


@pytest.fixture
def relay_config():
    """Config with a fake token and no default folder."""
    from upload_relay.config import RelayConfig

    return RelayConfig(access_token='test-token')


# --- HTTP Fakes ---


class RecordingSender:
    """Stands in for ``http.send``; replays queued responses and records calls."""

    def __init__(self, *responses: HttpResponse) -> None:
        self.responses = list(responses)
        self.calls: list[dict[str, Any]] = []

    def __call__(
        self,
        method: str,
        url: str,
        headers: Optional[dict[str, str]] = None,
        data: Optional[bytes] = None,
    ) -> HttpResponse:
        self.calls.append(
            {'method': method, 'url': url, 'headers': headers or {}, 'data': data}
        )
        if not self.responses:
            raise AssertionError('Unexpected outbound request')
        return self.responses.pop(0)


@pytest.fixture
def make_sender():
    """Factory for ``RecordingSender`` instances."""
    return RecordingSender


# --- API Event Fixtures ---


@pytest.fixture
def api_gateway_event() -> dict:
    """Base REST API (payload v1) upload event."""
    return {
        'httpMethod': 'POST',
        'path': '/upload',
        'queryStringParameters': None,
        'headers': {'Content-Type': 'application/json'},
        'requestContext': {'requestId': str(uuid4())},
        'body': None,
        'isBase64Encoded': False,
    }


@pytest.fixture
def http_api_event() -> dict:
    """HTTP API / Function URL (payload v2) upload event."""
    return {
        'version': '2.0',
        'rawPath': '/upload',
        'headers': {'content-type': 'application/json'},
        'requestContext': {
            'requestId': str(uuid4()),
            'http': {'method': 'POST', 'path': '/upload'},
        },
        'body': None,
        'isBase64Encoded': False,
    }
