from __future__ import annotations

from typing import Any

from pydantic import ConfigDict, Field

from .base import CamelModel

# RFC 6838 restricted-name on both sides of the slash
MIME_TYPE_PATTERN = r"^[A-Za-z0-9][A-Za-z0-9!#$&^_.+\-]{0,126}/[A-Za-z0-9][A-Za-z0-9!#$&^_.+\-]{0,126}$"


class UploadRequest(CamelModel):
    model_config = ConfigDict(frozen=True)

    content: bytes = Field(repr=False)
    filename: str = Field(min_length=1)
    mime_type: str = Field(pattern=MIME_TYPE_PATTERN)
    size: int = Field(ge=0)


class UploadResponse(CamelModel):
    url: str


class UserError(CamelModel):
    field: list[str] | str | None = None
    message: str


class ValidationErrorResponse(CamelModel):
    errors: list[dict[str, Any]]


class ErrorResponse(CamelModel):
    error: str
    details: str | None = None
    status: str | None = None
