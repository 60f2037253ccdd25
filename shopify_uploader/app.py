from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import cast

import httpx
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .api import upload
from .core.config import Settings, get_settings
from .core.errors import UploadError, ValidationFailure
from .core.logging_config import setup_logging
from .services.upload_service import UploadService

logger = logging.getLogger("shopify_uploader")


@dataclass
class AppState:
    settings: Settings
    http_client: httpx.AsyncClient
    upload_service: UploadService


def get_app_state() -> AppState:
    app = cast(FastAPI, app_instance)
    return cast(AppState, app.state.container)


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()
    setup_logging(settings.log_level)

    app = FastAPI(title="Shopify Uploader", version="0.1.0")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list(),
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )

    platform = settings.platform()
    http_client = httpx.AsyncClient(timeout=platform.http_timeout_seconds)
    app.state.container = AppState(
        settings=settings,
        http_client=http_client,
        upload_service=UploadService.from_platform(platform, http_client),
    )

    app.include_router(upload.router)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        method = request.method
        path = request.url.path
        start = time.perf_counter()
        logger.info(f"-> {method} {path}")
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - start) * 1000
        level = logging.WARNING if response.status_code >= 400 else logging.INFO
        logger.log(level, f"<- {method} {path} {response.status_code} {elapsed_ms:.0f}ms")
        return response

    @app.exception_handler(UploadError)
    async def upload_error_handler(request: Request, exc: UploadError) -> JSONResponse:
        logger.error(f"[upload] {request.url.path} failed: {type(exc).__name__}: {exc}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_payload())

    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        failure = ValidationFailure.from_validation_errors(exc.errors())
        return JSONResponse(status_code=failure.status_code, content=failure.to_payload())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled exception {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=500, content={"error": str(exc) or type(exc).__name__})

    @app.on_event("startup")
    async def log_startup() -> None:
        logger.info(
            f"🚀 Uploading to {platform.store_domain} (API {platform.api_version}, "
            f"poll {platform.poll_attempts}x{platform.poll_interval_seconds}s)"
        )

    @app.on_event("shutdown")
    async def close_http_client() -> None:
        await cast(AppState, app.state.container).http_client.aclose()

    return app


app_instance = create_app()
app = app_instance

__all__ = ["app", "create_app", "get_app_state"]
