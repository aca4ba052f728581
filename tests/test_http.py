"""Tests for the outbound HTTP helper."""

from __future__ import annotations

import io
import sys
import urllib.error
from pathlib import Path

import pytest

sys.path.append(str(Path(__file__).resolve().parents[1] / "backend" / "src"))

from upload_relay.services import http  # noqa: E402
from upload_relay.services.http import HttpResponse  # noqa: E402


@pytest.fixture
def mock_urlopen(mocker):
    """Patch urlopen with a context manager returning a 200 response."""
    mock = mocker.patch("urllib.request.urlopen")
    resp = mock.return_value.__enter__.return_value
    resp.status = 200
    resp.read.return_value = b"file-bytes"
    resp.getheaders.return_value = [("Content-Type", "image/png")]
    return mock


class TestHttpResponse:
    """Tests for HttpResponse."""

    @pytest.mark.parametrize("status,ok", [(200, True), (204, True), (301, False), (404, False)])
    def test_ok(self, status: int, ok: bool) -> None:
        assert HttpResponse(status=status).ok is ok

    def test_text_and_json(self) -> None:
        response = HttpResponse(status=200, body=b'{"id": "123"}')
        assert response.text() == '{"id": "123"}'
        assert response.json() == {"id": "123"}


class TestIsAllowedUrl:
    """Tests for URL scheme validation."""

    @pytest.mark.parametrize("url", ["https://example.com/a.png", "http://example.com"])
    def test_http_urls_allowed(self, url: str) -> None:
        assert http.is_allowed_url(url)

    @pytest.mark.parametrize(
        "url",
        ["file:///etc/passwd", "ftp://example.com/a", "example.com/a.png", "https://", "http://[::1"],
    )
    def test_other_urls_rejected(self, url: str) -> None:
        assert not http.is_allowed_url(url)


class TestSend:
    """Tests for send()."""

    def test_success(self, mock_urlopen) -> None:
        response = http.send(
            "post",
            "https://example.com/upload",
            headers={"X-Test": "1"},
            data=b"payload",
        )

        assert response.status == 200
        assert response.body == b"file-bytes"
        assert response.headers == {"Content-Type": "image/png"}

        request = mock_urlopen.call_args.args[0]
        assert request.get_method() == "POST"
        assert request.full_url == "https://example.com/upload"
        assert request.data == b"payload"
        assert request.get_header("X-test") == "1"

    def test_http_error_is_returned(self, mocker) -> None:
        mocker.patch(
            "urllib.request.urlopen",
            side_effect=urllib.error.HTTPError(
                "https://example.com/missing",
                404,
                "Not Found",
                {},
                io.BytesIO(b"not found"),
            ),
        )

        response = http.get("https://example.com/missing")

        assert response.status == 404
        assert response.body == b"not found"
        assert not response.ok

    def test_transport_error_raises(self, mocker) -> None:
        mocker.patch(
            "urllib.request.urlopen",
            side_effect=urllib.error.URLError("Name or service not known"),
        )

        with pytest.raises(urllib.error.URLError):
            http.get("https://unreachable.invalid/a.png")

    def test_rejects_file_scheme(self, mock_urlopen) -> None:
        with pytest.raises(ValueError):
            http.get("file:///etc/passwd")
        mock_urlopen.assert_not_called()

    def test_space_in_path_is_encoded(self, mock_urlopen) -> None:
        http.get("https://example.com/my photo.png")

        request = mock_urlopen.call_args.args[0]
        assert request.full_url == "https://example.com/my%20photo.png"

    def test_non_ascii_path_is_encoded(self, mock_urlopen) -> None:
        http.get("https://example.com/café.png")

        request = mock_urlopen.call_args.args[0]
        assert request.full_url == "https://example.com/caf%C3%A9.png"


class TestQuoteUrl:
    """Tests for quote_url()."""

    @pytest.mark.parametrize(
        "url,expected",
        [
            ("https://example.com/my photo.png", "https://example.com/my%20photo.png"),
            ("https://example.com/café.png", "https://example.com/caf%C3%A9.png"),
            ("https://example.com/a.png?q=café", "https://example.com/a.png?q=caf%C3%A9"),
        ],
    )
    def test_unsafe_characters_encoded(self, url: str, expected: str) -> None:
        assert http.quote_url(url) == expected

    @pytest.mark.parametrize(
        "url",
        [
            "https://example.com/my%20photo.png",
            "https://example.com/a.png?size=large&v=2",
            "https://user@example.com:8443/a/b.png#top",
        ],
    )
    def test_valid_urls_unchanged(self, url: str) -> None:
        assert http.quote_url(url) == url
