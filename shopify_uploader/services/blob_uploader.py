from __future__ import annotations

import logging

import httpx

from ..core.errors import StorageFailure, TransportFailure
from ..models.upload import StagedTarget
from ..schemas.upload import UploadRequest

logger = logging.getLogger(__name__)

FormPart = tuple[str, tuple[str | None, bytes] | tuple[str, bytes, str]]


def build_form(target: StagedTarget, request: UploadRequest) -> list[FormPart]:
    """Signed parameters in the order given, then the file part last.

    Storage backends verify the policy fields before the file, so the order
    must not change and duplicate names must survive.
    """
    parts: list[FormPart] = [(name, (None, value.encode("utf-8"))) for name, value in target.parameters]
    parts.append(("file", (request.filename, request.content, request.mime_type)))
    return parts


class BlobUploader:
    def __init__(self, http_client: httpx.AsyncClient, timeout_seconds: float = 30.0) -> None:
        self.http_client = http_client
        self.timeout_seconds = timeout_seconds

    async def upload(self, target: StagedTarget, request: UploadRequest) -> None:
        try:
            response = await self.http_client.post(
                target.url,
                files=build_form(target, request),
                timeout=self.timeout_seconds,
            )
        except httpx.HTTPError as exc:
            logger.error(f"[storage] Upload of {request.filename} to staged target failed: {exc}")
            raise TransportFailure(f"Storage request failed: {exc}") from exc

        if not response.is_success:
            logger.warning(f"[storage] Storage rejected {request.filename} with status {response.status_code}")
            raise StorageFailure(response.status_code, response.text)

        logger.info(f"[storage] Uploaded {request.size} bytes for {request.filename}")
