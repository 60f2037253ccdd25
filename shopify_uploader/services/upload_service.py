from __future__ import annotations

import logging

import httpx

from ..core.config import PlatformSettings
from ..core.errors import TimeoutFailure
from ..models.enums import PollState, UNKNOWN_STATUS
from ..schemas.upload import UploadRequest
from .admin_client import AdminApiClient
from .blob_uploader import BlobUploader
from .readiness_poller import ReadinessPoller, Sleeper
from .registration_service import RegistrationService
from .staging_service import StagingService

logger = logging.getLogger(__name__)


class UploadService:
    """Runs stage -> upload -> register -> poll for a single file.

    Any failure aborts the remaining phases. Staged or registered files that
    never complete are left for the platform to clean up.
    """

    def __init__(
        self,
        staging: StagingService,
        uploader: BlobUploader,
        registration: RegistrationService,
        poller: ReadinessPoller,
    ) -> None:
        self.staging = staging
        self.uploader = uploader
        self.registration = registration
        self.poller = poller

    @classmethod
    def from_platform(
        cls,
        platform: PlatformSettings,
        http_client: httpx.AsyncClient,
        sleep: Sleeper | None = None,
    ) -> "UploadService":
        admin = AdminApiClient(platform, http_client)
        poller_kwargs = {"sleep": sleep} if sleep is not None else {}
        return cls(
            staging=StagingService(admin),
            uploader=BlobUploader(http_client, timeout_seconds=platform.http_timeout_seconds),
            registration=RegistrationService(admin),
            poller=ReadinessPoller(
                admin,
                max_attempts=platform.poll_attempts,
                interval_seconds=platform.poll_interval_seconds,
                **poller_kwargs,
            ),
        )

    async def upload(self, request: UploadRequest) -> str:
        logger.info(f"[upload] Received file: {request.filename} ({request.size} bytes, {request.mime_type})")

        target = await self.staging.stage(request.filename, request.mime_type, request.size)
        await self.uploader.upload(target, request)
        asset = await self.registration.register(target, request.filename, request.mime_type)
        outcome = await self.poller.wait_until_ready(asset)

        if outcome.state is not PollState.ready or not outcome.url:
            raise TimeoutFailure(outcome.last_status or UNKNOWN_STATUS)

        logger.info(f"[upload] Final file URL: {outcome.url}")
        return outcome.url
