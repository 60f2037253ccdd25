from __future__ import annotations

from ..services.upload_service import UploadService


def get_upload_service() -> UploadService:
    from ..app import get_app_state

    return get_app_state().upload_service
