"""Custom exception classes for the upload relay.

Each exception carries the HTTP status code it maps to at the handler
boundary, plus an optional ``details`` string that is echoed back to the
caller verbatim.
"""

from __future__ import annotations

from typing import Any
from typing import Optional


class AppError(Exception):
    """Base exception for relay errors.

    Attributes:
        message: Human-readable error message.
        status_code: HTTP status code (default 500).
        details: Optional diagnostic text returned alongside the message.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        details: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.details = details


class MethodNotAllowedError(AppError):
    """Raised when the request uses a verb other than POST or OPTIONS."""

    def __init__(self, method: str = ""):
        super().__init__("Method not allowed", status_code=405)
        self.method = method


class ConfigurationError(AppError):
    """Raised when required configuration is missing.

    Use when environment variables or secrets are not properly configured.
    """

    def __init__(self, config_name: str):
        super().__init__(
            f"Missing {config_name} env var",
            status_code=500,
        )
        self.config_name = config_name


class ValidationError(AppError):
    """Raised when input validation fails.

    Use for malformed JSON bodies and missing or unusable fields.
    """

    def __init__(self, message: str, field: Optional[str] = None):
        super().__init__(message, status_code=400)
        self.field = field


class SourceFetchError(ValidationError):
    """Raised when the source ``url`` cannot be downloaded."""

    def __init__(self, reason: Any):
        super().__init__(f"Failed to fetch URL ({reason})", field="url")
        self.reason = reason


class UploadFailedError(AppError):
    """Raised when Dropbox rejects the upload.

    The raw upstream response body is carried in ``details``.
    """

    def __init__(self, details: str, upstream_status: Optional[int] = None):
        super().__init__(
            "Dropbox upload failed",
            status_code=400,
            details=details,
        )
        self.upstream_status = upstream_status
