"""Failures that abort an upload and the response each one maps to."""
from __future__ import annotations

from typing import Any, Sequence

from ..schemas.upload import ErrorResponse


class UploadError(Exception):
    status_code: int = 500

    def to_payload(self) -> dict[str, Any]:
        return ErrorResponse(error=str(self)).to_json_dict()


class ValidationFailure(UploadError):
    """The platform (or ingress) rejected the input."""

    status_code = 422

    def __init__(self, errors: list[dict[str, Any]]) -> None:
        super().__init__(f"Validation failed: {errors}")
        self.errors = errors

    @classmethod
    def from_validation_errors(cls, errors: Sequence[Any]) -> "ValidationFailure":
        return cls([{"field": [str(loc) for loc in error["loc"]], "message": error["msg"]} for error in errors])

    def to_payload(self) -> dict[str, Any]:
        return {"errors": self.errors}


class StorageFailure(UploadError):
    """Blob storage answered the staged upload with a non-2xx status."""

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__("Storage upload failed")
        self.status_code = status_code
        self.body = body

    def to_payload(self) -> dict[str, Any]:
        return ErrorResponse(error=str(self), details=self.body).to_json_dict()


class TransportFailure(UploadError):
    """RPC-level failure: network error, malformed response or GraphQL errors."""


class TimeoutFailure(UploadError):
    """The file never reported READY with a URL within the attempt ceiling."""

    def __init__(self, last_status: str) -> None:
        super().__init__("File did not become READY in time")
        self.last_status = last_status

    def to_payload(self) -> dict[str, Any]:
        return ErrorResponse(error=str(self), status=self.last_status).to_json_dict()
