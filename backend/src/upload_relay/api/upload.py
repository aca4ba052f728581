"""Lambda handler for the Dropbox upload relay.

``UploadRelay`` holds the validate -> acquire -> upload pipeline and returns
a ``RelayOutcome`` instead of raising, so it can be exercised without an
API Gateway event. ``lambda_handler`` is the thin adapter that turns an
event into a ``handle`` call and the outcome into a proxy response.
"""

from __future__ import annotations

import time
from typing import Any
from typing import Callable
from typing import Mapping
from typing import Optional

from pydantic import ValidationError as PydanticValidationError

from upload_relay.api.schemas import REQUIRED_FIELDS_MESSAGE
from upload_relay.api.schemas import RelayOutcome
from upload_relay.api.schemas import UploadRequestSchema
from upload_relay.api.schemas import UploadResult
from upload_relay.config import RelayConfig
from upload_relay.exceptions import AppError
from upload_relay.exceptions import MethodNotAllowedError
from upload_relay.exceptions import SourceFetchError
from upload_relay.exceptions import UploadFailedError
from upload_relay.exceptions import ValidationError
from upload_relay.services import http
from upload_relay.services.dropbox import DropboxClient
from upload_relay.services.http import HttpResponse
from upload_relay.utils.logging import clear_request_context
from upload_relay.utils.logging import configure_logging
from upload_relay.utils.logging import get_logger
from upload_relay.utils.logging import log_lambda_event
from upload_relay.utils.logging import log_response
from upload_relay.utils.logging import redact_url
from upload_relay.utils.logging import set_request_context
from upload_relay.utils.parsers import decode_body
from upload_relay.utils.parsers import parse_http_method
from upload_relay.utils.parsers import parse_json_object
from upload_relay.utils.parsers import parse_request_id
from upload_relay.utils.payload import build_destination_path
from upload_relay.utils.payload import decode_content
from upload_relay.utils.responses import empty_response
from upload_relay.utils.responses import json_response

# Configure logging on module load
configure_logging()
logger = get_logger(__name__)

UPLOAD_METHOD = "POST"
PREFLIGHT_METHOD = "OPTIONS"

Fetcher = Callable[[str], HttpResponse]
ClientFactory = Callable[[str], DropboxClient]


def parse_upload_request(raw: str) -> UploadRequestSchema:
    """Parse and validate the JSON request body.

    Raises:
        ValidationError: If the body is not JSON or required fields are missing.
    """
    try:
        payload = parse_json_object(raw)
    except ValueError as exc:
        raise ValidationError("Invalid JSON body") from exc

    try:
        return UploadRequestSchema.model_validate(payload)
    except PydanticValidationError as exc:
        raise ValidationError(REQUIRED_FIELDS_MESSAGE) from exc


class UploadRelay:
    """Stateless relay from an upload request to Dropbox.

    Args:
        config: Relay settings.
        fetcher: Downloads a source URL; defaults to ``http.get``.
        client_factory: Builds a ``DropboxClient`` from an access token.
    """

    def __init__(
        self,
        config: RelayConfig,
        fetcher: Optional[Fetcher] = None,
        client_factory: Optional[ClientFactory] = None,
    ) -> None:
        self._config = config
        self._fetch = fetcher or http.get
        self._client_factory = client_factory or self._default_client

    def _default_client(self, access_token: str) -> DropboxClient:
        return DropboxClient(access_token, upload_url=self._config.upload_url)

    def handle(
        self,
        method: str,
        body: str | bytes | None = None,
        is_base64: bool = False,
    ) -> RelayOutcome:
        """Run one request through the relay.

        Never raises: every failure is turned into an error outcome.
        """
        method = (method or "").upper()
        if method == PREFLIGHT_METHOD:
            return RelayOutcome(204)

        try:
            return self._relay(method, body, is_base64)
        except AppError as exc:
            logger.warning(
                f"Upload rejected: {exc.message}",
                extra={"status_code": exc.status_code},
            )
            return RelayOutcome(
                exc.status_code,
                UploadResult.from_error(exc),
            )
        except Exception as exc:
            logger.exception("Unexpected error in upload relay")
            return RelayOutcome(
                500,
                UploadResult.failure(str(exc) or "Unexpected error"),
            )

    def _relay(
        self,
        method: str,
        body: str | bytes | None,
        is_base64: bool,
    ) -> RelayOutcome:
        if method != UPLOAD_METHOD:
            raise MethodNotAllowedError(method)

        access_token = self._config.resolve_access_token()

        try:
            raw = decode_body(body, is_base64)
        except ValueError as exc:
            raise ValidationError("Invalid JSON body") from exc
        request = parse_upload_request(raw)

        payload = self._acquire_bytes(request)
        path = build_destination_path(
            request.filename,
            folder=request.folder,
            default_folder=self._config.default_folder,
        )

        response = self._client_factory(access_token).upload(path, payload)
        if not response.ok:
            raise UploadFailedError(response.text(), upstream_status=response.status)

        logger.info(
            "Uploaded file to Dropbox",
            extra={"path": path, "size": len(payload)},
        )
        return RelayOutcome(200, UploadResult.success(response.json()))

    def _acquire_bytes(self, request: UploadRequestSchema) -> bytes:
        if request.url:
            return self._fetch_source(request.url)
        return decode_content(request.content or "")

    def _fetch_source(self, url: str) -> bytes:
        if not http.is_allowed_url(url):
            raise SourceFetchError("unsupported URL")

        try:
            response = self._fetch(url)
        except OSError as exc:
            logger.warning(
                f"Source fetch failed: {type(exc).__name__}",
                extra={"url": redact_url(url)},
            )
            raise SourceFetchError(getattr(exc, "reason", None) or exc) from exc
        except ValueError as exc:
            logger.warning(
                f"Source URL rejected: {type(exc).__name__}",
                extra={"url": redact_url(url)},
            )
            raise SourceFetchError("invalid URL") from exc

        if not response.ok:
            raise SourceFetchError(response.status)

        logger.info(
            "Fetched source file",
            extra={"url": redact_url(url), "size": len(response.body)},
        )
        return response.body


def to_response(outcome: RelayOutcome) -> dict[str, Any]:
    """Convert a relay outcome into an API Gateway proxy response."""
    result = outcome.result
    if result is None:
        return empty_response(outcome.status_code)
    return json_response(outcome.status_code, result)


def lambda_handler(event: Mapping[str, Any], context: Any) -> dict[str, Any]:
    """Handle an API Gateway or Function URL request."""

    start_time = time.perf_counter()
    set_request_context(req_id=parse_request_id(event, context))
    method = parse_http_method(event)
    log_lambda_event(logger, event, method)

    try:
        relay = UploadRelay(RelayConfig.from_env())
        outcome = relay.handle(
            method,
            event.get("body"),
            is_base64=bool(event.get("isBase64Encoded")),
        )
        response = to_response(outcome)
        log_response(
            logger,
            response["statusCode"],
            (time.perf_counter() - start_time) * 1000,
        )
        return response
    finally:
        clear_request_context()
