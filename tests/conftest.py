from __future__ import annotations

import os
from typing import AsyncIterator

import httpx
import pytest
import pytest_asyncio

os.environ.setdefault("SHOPIFY_STORE_DOMAIN", "test-shop.myshopify.com")
os.environ.setdefault("SHOPIFY_ADMIN_TOKEN", "shpat_test")
os.environ.setdefault("POLL_ATTEMPTS", "5")
os.environ.setdefault("POLL_INTERVAL_SECONDS", "0")

from shopify_uploader.core.config import PlatformSettings  # noqa: E402
from shopify_uploader.services.upload_service import UploadService  # noqa: E402

from .fakes import FakeShopify  # noqa: E402


@pytest.fixture
def fake_shopify() -> FakeShopify:
    return FakeShopify()


@pytest.fixture
def platform() -> PlatformSettings:
    return PlatformSettings(
        store_domain="test-shop.myshopify.com",
        access_token="shpat_test",
        poll_attempts=5,
        poll_interval_seconds=1.0,
    )


@pytest.fixture
def sleeps() -> list[float]:
    return []


@pytest.fixture
def fake_sleep(sleeps: list[float]):
    async def _sleep(seconds: float) -> None:
        sleeps.append(seconds)

    return _sleep


@pytest_asyncio.fixture
async def http_client(fake_shopify: FakeShopify) -> AsyncIterator[httpx.AsyncClient]:
    async with httpx.AsyncClient(transport=httpx.MockTransport(fake_shopify.handler)) as client:
        yield client


@pytest.fixture
def upload_service(platform: PlatformSettings, http_client: httpx.AsyncClient, fake_sleep) -> UploadService:
    return UploadService.from_platform(platform, http_client, sleep=fake_sleep)
