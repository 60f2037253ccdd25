from __future__ import annotations

import pytest

from shopify_uploader.core.config import PlatformSettings
from shopify_uploader.models.enums import FileKind, PollState
from shopify_uploader.models.upload import RegisteredAsset
from shopify_uploader.services.admin_client import AdminApiClient
from shopify_uploader.services.readiness_poller import ReadinessPoller, parse_node

from .fakes import missing_node_response, node_response

IMAGE = RegisteredAsset(kind=FileKind.media_image, id="gid://shopify/MediaImage/1")


@pytest.fixture
def make_poller(platform: PlatformSettings, http_client, fake_sleep):
    def _make(max_attempts: int = 5) -> ReadinessPoller:
        admin = AdminApiClient(platform, http_client)
        return ReadinessPoller(admin, max_attempts=max_attempts, interval_seconds=1.0, sleep=fake_sleep)

    return _make


@pytest.mark.asyncio
async def test_ready_on_first_attempt_does_not_sleep(make_poller, fake_shopify, sleeps) -> None:
    fake_shopify.nodes = [node_response("MediaImage", "READY", "https://cdn/cat.png")]

    outcome = await make_poller().wait_until_ready(IMAGE)

    assert outcome.state is PollState.ready
    assert outcome.url == "https://cdn/cat.png"
    assert outcome.attempts == 1
    assert sleeps == []


@pytest.mark.asyncio
async def test_stops_on_first_ready_after_other_statuses(make_poller, fake_shopify, sleeps) -> None:
    fake_shopify.nodes = [
        node_response("MediaImage", "UPLOADED"),
        node_response("MediaImage", "PROCESSING"),
        node_response("MediaImage", "READY", "https://cdn/cat.png"),
        node_response("MediaImage", "READY", "https://cdn/other.png"),
    ]

    outcome = await make_poller().wait_until_ready(IMAGE)

    assert outcome.url == "https://cdn/cat.png"
    assert outcome.attempts == 3
    assert sleeps == [1.0, 1.0]
    assert len(fake_shopify.nodes) == 1


@pytest.mark.asyncio
async def test_exhausts_after_exactly_ceiling_attempts(make_poller, fake_shopify, sleeps) -> None:
    fake_shopify.nodes = [
        node_response("GenericFile", "UPLOADED"),
        node_response("GenericFile", "PROCESSING"),
        node_response("GenericFile", "PROCESSING"),
        node_response("GenericFile", "FAILED"),
    ]

    outcome = await make_poller(max_attempts=4).wait_until_ready(
        RegisteredAsset(kind=FileKind.generic_file, id="gid://shopify/GenericFile/9")
    )

    assert outcome.state is PollState.exhausted
    assert outcome.attempts == 4
    assert outcome.last_status == "FAILED"
    assert fake_shopify.operations() == ["poll"] * 4
    # no delay after the final attempt
    assert sleeps == [1.0] * 3


@pytest.mark.asyncio
async def test_each_pending_observation_consumes_one_attempt(make_poller, fake_shopify) -> None:
    fake_shopify.nodes = [node_response("Video", "PROCESSING") for _ in range(3)]

    outcome = await make_poller(max_attempts=3).wait_until_ready(
        RegisteredAsset(kind=FileKind.video, id="gid://shopify/Video/3")
    )

    assert outcome.state is PollState.exhausted
    assert len(fake_shopify.graphql_calls) == 3
    assert all(call["variables"] == {"id": "gid://shopify/Video/3"} for call in fake_shopify.graphql_calls)


@pytest.mark.asyncio
async def test_ready_without_url_keeps_polling(make_poller, fake_shopify) -> None:
    fake_shopify.nodes = [
        node_response("MediaImage", "READY"),
        node_response("MediaImage", "READY", "https://cdn/cat.png"),
    ]

    outcome = await make_poller().wait_until_ready(IMAGE)

    assert outcome.state is PollState.ready
    assert outcome.attempts == 2


@pytest.mark.asyncio
async def test_ready_without_url_until_ceiling_reports_ready_status(make_poller, fake_shopify) -> None:
    fake_shopify.nodes = [node_response("Video", "READY"), node_response("Video", "READY")]

    outcome = await make_poller(max_attempts=2).wait_until_ready(
        RegisteredAsset(kind=FileKind.video, id="gid://shopify/Video/3")
    )

    assert outcome.state is PollState.exhausted
    assert outcome.last_status == "READY"


@pytest.mark.asyncio
async def test_vanished_node_stops_immediately(make_poller, fake_shopify, sleeps) -> None:
    fake_shopify.nodes = [missing_node_response(), node_response("MediaImage", "READY", "https://cdn/x.png")]

    outcome = await make_poller().wait_until_ready(IMAGE)

    assert outcome.state is PollState.exhausted
    assert outcome.last_status == "UNKNOWN"
    assert outcome.attempts == 1
    assert sleeps == []


@pytest.mark.asyncio
async def test_vanished_node_keeps_last_known_status(make_poller, fake_shopify) -> None:
    fake_shopify.nodes = [node_response("MediaImage", "PROCESSING"), missing_node_response()]

    outcome = await make_poller().wait_until_ready(IMAGE)

    assert outcome.state is PollState.exhausted
    assert outcome.last_status == "PROCESSING"
    assert outcome.attempts == 2


@pytest.mark.asyncio
async def test_rejects_non_positive_ceiling(platform, http_client) -> None:
    with pytest.raises(ValueError):
        ReadinessPoller(AdminApiClient(platform, http_client), max_attempts=0)


@pytest.mark.parametrize(
    ("node", "expected_url"),
    [
        ({"__typename": "GenericFile", "fileStatus": "READY", "url": "https://cdn/a.pdf"}, "https://cdn/a.pdf"),
        ({"__typename": "MediaImage", "fileStatus": "READY", "image": {"url": "https://cdn/a.png"}}, "https://cdn/a.png"),
        (
            {
                "__typename": "Video",
                "fileStatus": "READY",
                "sources": [{"url": "https://cdn/a.m3u8", "format": "m3u8"}, {"url": "https://cdn/a.mp4", "format": "mp4"}],
            },
            "https://cdn/a.m3u8",
        ),
        ({"__typename": "MediaImage", "fileStatus": "READY", "image": None}, None),
        ({"__typename": "Video", "fileStatus": "READY", "sources": []}, None),
        ({"__typename": "GenericFile", "fileStatus": "PROCESSING", "url": "https://cdn/a.pdf"}, None),
        ({"__typename": "Model3d", "fileStatus": "READY"}, None),
    ],
)
def test_parse_node_extracts_url_per_kind(node, expected_url) -> None:
    assert parse_node(node).url == expected_url
