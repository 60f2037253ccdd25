from __future__ import annotations

import logging

from ..core.errors import TransportFailure, ValidationFailure
from ..models.enums import AssetContentType, FileKind
from ..models.upload import RegisteredAsset, StagedTarget
from .admin_client import AdminApiClient
from .queries import FILE_CREATE
from .staging_service import normalize_user_errors

logger = logging.getLogger(__name__)


class RegistrationService:
    def __init__(self, admin: AdminApiClient) -> None:
        self.admin = admin

    async def register(self, target: StagedTarget, filename: str, mime_type: str) -> RegisteredAsset:
        content_type = AssetContentType.from_mime(mime_type)
        variables = {
            "files": [
                {
                    "originalSource": target.resource_url,
                    "filename": filename,
                    "contentType": content_type.value,
                }
            ]
        }
        data = await self.admin.execute(FILE_CREATE, variables)
        payload = data.get("fileCreate") or {}

        user_errors = payload.get("userErrors") or []
        if user_errors:
            logger.warning(f"[register] Platform rejected {filename}: {user_errors}")
            raise ValidationFailure(normalize_user_errors(user_errors))

        files = payload.get("files") or []
        if not files:
            raise TransportFailure("fileCreate returned no file")

        created = files[0]
        typename = created.get("__typename")
        try:
            kind = FileKind(typename)
        except ValueError as exc:
            raise TransportFailure(f"fileCreate returned unsupported file type {typename!r}") from exc

        file_id = created.get("id")
        if not file_id:
            raise TransportFailure(f"fileCreate returned a {typename} without an id")

        logger.info(f"[register] Created file: {kind.value} {file_id} ({content_type.value})")
        return RegisteredAsset(kind=kind, id=file_id)
