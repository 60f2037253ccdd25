from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable

from ..models.enums import FileKind, PollState, READY_STATUS, UNKNOWN_STATUS
from ..models.upload import AssetStatus, PollOutcome, RegisteredAsset
from .admin_client import AdminApiClient
from .queries import FILE_STATUS

logger = logging.getLogger(__name__)

Sleeper = Callable[[float], Awaitable[Any]]


def _generic_file_url(node: dict[str, Any]) -> str | None:
    return node.get("url")


def _media_image_url(node: dict[str, Any]) -> str | None:
    image = node.get("image") or {}
    return image.get("url")


def _video_url(node: dict[str, Any]) -> str | None:
    sources = node.get("sources") or []
    if not sources:
        return None
    return (sources[0] or {}).get("url")


URL_EXTRACTORS: dict[FileKind, Callable[[dict[str, Any]], str | None]] = {
    FileKind.generic_file: _generic_file_url,
    FileKind.media_image: _media_image_url,
    FileKind.video: _video_url,
}


def parse_node(node: dict[str, Any]) -> AssetStatus:
    """Read one `node` observation; the URL is only extracted once READY."""
    try:
        kind: FileKind | None = FileKind(node.get("__typename"))
    except ValueError:
        kind = None
    file_status = node.get("fileStatus")
    url = None
    if file_status == READY_STATUS and kind is not None:
        url = URL_EXTRACTORS[kind](node) or None
    return AssetStatus(kind=kind, file_status=file_status, url=url)


class ReadinessPoller:
    """Polls a registered file until it is READY with a URL or attempts run out.

    PENDING -> READY on the first READY observation carrying a URL.
    PENDING -> EXHAUSTED when the node disappears or the ceiling is reached.
    The delay between attempts is fixed.
    """

    def __init__(
        self,
        admin: AdminApiClient,
        max_attempts: int = 30,
        interval_seconds: float = 1.0,
        sleep: Sleeper = asyncio.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self.admin = admin
        self.max_attempts = max_attempts
        self.interval_seconds = interval_seconds
        self.sleep = sleep

    async def observe(self, asset: RegisteredAsset) -> AssetStatus | None:
        data = await self.admin.execute(FILE_STATUS, {"id": asset.id})
        node = data.get("node")
        if not node:
            return None
        return parse_node(node)

    async def wait_until_ready(self, asset: RegisteredAsset) -> PollOutcome:
        last_status: str | None = None

        for attempt in range(1, self.max_attempts + 1):
            logger.info(f"[poll] Polling status of {asset.id}, attempt {attempt}/{self.max_attempts}")
            observed = await self.observe(asset)

            if observed is None:
                logger.warning(f"[poll] File {asset.id} is no longer resolvable")
                return PollOutcome(
                    state=PollState.exhausted,
                    attempts=attempt,
                    last_status=last_status or UNKNOWN_STATUS,
                )

            if observed.file_status is not None:
                last_status = observed.file_status

            if observed.is_ready:
                logger.info(f"[poll] File {asset.id} is READY after {attempt} attempt(s)")
                return PollOutcome(
                    state=PollState.ready,
                    attempts=attempt,
                    url=observed.url,
                    last_status=last_status,
                )

            if observed.file_status == READY_STATUS:
                logger.warning(f"[poll] File {asset.id} reported READY without a URL, polling again")

            if attempt < self.max_attempts:
                await self.sleep(self.interval_seconds)

        logger.warning(
            f"[poll] File {asset.id} not READY after {self.max_attempts} attempts (last status {last_status})"
        )
        return PollOutcome(
            state=PollState.exhausted,
            attempts=self.max_attempts,
            last_status=last_status or UNKNOWN_STATUS,
        )
