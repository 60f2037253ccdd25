from __future__ import annotations

import logging
from typing import Any

from ..core.errors import TransportFailure, ValidationFailure
from ..models.upload import StagedTarget
from ..schemas.upload import UserError
from .admin_client import AdminApiClient
from .queries import STAGED_UPLOADS_CREATE

logger = logging.getLogger(__name__)


def normalize_user_errors(user_errors: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return [UserError.model_validate(error).model_dump(mode="json") for error in user_errors]


class StagingService:
    def __init__(self, admin: AdminApiClient) -> None:
        self.admin = admin

    async def stage(self, filename: str, mime_type: str, size: int) -> StagedTarget:
        variables = {
            "input": [
                {
                    "filename": filename,
                    "mimeType": mime_type,
                    "httpMethod": "POST",
                    "resource": "FILE",
                    "fileSize": str(size),
                }
            ]
        }
        data = await self.admin.execute(STAGED_UPLOADS_CREATE, variables)
        payload = data.get("stagedUploadsCreate") or {}

        user_errors = payload.get("userErrors") or []
        if user_errors:
            logger.warning(f"[staging] Platform rejected {filename}: {user_errors}")
            raise ValidationFailure(normalize_user_errors(user_errors))

        targets = payload.get("stagedTargets") or []
        if not targets:
            raise TransportFailure("stagedUploadsCreate returned no staged target")

        raw = targets[0]
        try:
            target = StagedTarget(
                url=raw["url"],
                resource_url=raw["resourceUrl"],
                parameters=tuple((param["name"], param["value"]) for param in raw.get("parameters") or []),
            )
        except (KeyError, TypeError) as exc:
            raise TransportFailure(f"stagedUploadsCreate returned a malformed target: {exc}") from exc
        logger.info(f"[staging] Upload target: {target.resource_url}")
        return target
