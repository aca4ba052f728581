"""Request and result schemas for the upload endpoint."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
from typing import Optional

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import model_validator

from upload_relay.exceptions import AppError

REQUIRED_FIELDS_MESSAGE = (
    "Provide 'filename' and either 'url' (public file URL) or 'content' (base64)."
)


class UploadRequestSchema(BaseModel):
    """Upload request body.

    ``url`` and ``content`` are alternatives; when both are set ``url`` is
    used. Empty strings count as absent.
    """

    model_config = ConfigDict(extra="ignore")

    filename: str
    url: Optional[str] = None
    content: Optional[str] = None
    folder: Optional[str] = None

    @model_validator(mode="after")
    def _require_filename_and_source(self) -> "UploadRequestSchema":
        if not self.filename or not (self.url or self.content):
            raise ValueError(REQUIRED_FIELDS_MESSAGE)
        return self


@dataclass
class UploadResult:
    """Body returned to the caller."""

    ok: bool = False
    file: Any = None
    error: Optional[str] = None
    details: Optional[str] = None

    @classmethod
    def success(cls, file: Any) -> "UploadResult":
        return cls(ok=True, file=file)

    @classmethod
    def failure(cls, error: str, details: Optional[str] = None) -> "UploadResult":
        return cls(ok=False, error=error, details=details)

    @classmethod
    def from_error(cls, exc: AppError) -> "UploadResult":
        return cls.failure(exc.message, exc.details)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        if self.ok:
            return {"ok": True, "file": self.file}
        result: dict[str, Any] = {"error": self.error or "Unexpected error"}
        if self.details is not None:
            result["details"] = self.details
        return result


@dataclass(frozen=True)
class RelayOutcome:
    """Status code plus result; ``result`` is None for empty responses."""

    status_code: int
    result: Optional[UploadResult] = None
