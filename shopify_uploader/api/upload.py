from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, File, UploadFile, status
from fastapi.responses import JSONResponse, PlainTextResponse
from pydantic import ValidationError
from starlette.datastructures import UploadFile as StarletteUploadFile

from ..core.errors import ValidationFailure
from ..schemas.upload import ErrorResponse, UploadRequest, UploadResponse, ValidationErrorResponse
from ..services.upload_service import UploadService
from .deps import get_upload_service

logger = logging.getLogger(__name__)

DEFAULT_MIME_TYPE = "application/octet-stream"

router = APIRouter(tags=["upload"])


@router.get("/", response_class=PlainTextResponse)
async def liveness() -> str:
    return "Server is live"


def _build_request(file: UploadFile, content: bytes) -> UploadRequest:
    mime_type = (file.content_type or DEFAULT_MIME_TYPE).split(";")[0].strip()
    try:
        return UploadRequest(
            content=content,
            filename=file.filename,
            mime_type=mime_type,
            size=len(content),
        )
    except ValidationError as exc:
        raise ValidationFailure.from_validation_errors(exc.errors()) from exc


@router.post(
    "/upload",
    response_model=UploadResponse,
    responses={
        400: {"model": ErrorResponse},
        422: {"model": ValidationErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def upload_file(
    file: UploadFile | str | None = File(default=None),
    uploads: UploadService = Depends(get_upload_service),
):
    logger.info("[upload] POST /upload invoked")
    # a plain text "file" field carries no upload
    if not isinstance(file, StarletteUploadFile) or not file.filename:
        return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content={"error": "No file provided"})

    try:
        content = await file.read()
    finally:
        await file.close()

    request = _build_request(file, content)
    url = await uploads.upload(request)
    return UploadResponse(url=url)
