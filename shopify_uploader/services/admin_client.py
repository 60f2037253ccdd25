from __future__ import annotations

import json
import logging
from typing import Any

import httpx

from ..core.config import PlatformSettings
from ..core.errors import TransportFailure

logger = logging.getLogger(__name__)


class AdminApiClient:
    """Single GraphQL entry point for the Shopify Admin API."""

    def __init__(self, platform: PlatformSettings, http_client: httpx.AsyncClient) -> None:
        self.platform = platform
        self.http_client = http_client

    async def execute(self, query: str, variables: dict[str, Any]) -> dict[str, Any]:
        headers = {
            "Content-Type": "application/json",
            "X-Shopify-Access-Token": self.platform.access_token,
        }
        try:
            response = await self.http_client.post(
                self.platform.graphql_url,
                json={"query": query, "variables": variables},
                headers=headers,
                timeout=self.platform.http_timeout_seconds,
            )
        except httpx.HTTPError as exc:
            logger.error(f"[admin] Request to {self.platform.graphql_url} failed: {exc}")
            raise TransportFailure(f"Admin API request failed: {exc}") from exc

        try:
            body = response.json()
        except ValueError as exc:
            raise TransportFailure(
                f"Admin API returned a non-JSON response (status {response.status_code})"
            ) from exc

        if not isinstance(body, dict):
            raise TransportFailure("Admin API returned an unexpected response shape")

        errors = body.get("errors")
        if errors:
            raise TransportFailure(f"GraphQL errors: {json.dumps(errors)}")

        data = body.get("data")
        if not isinstance(data, dict):
            raise TransportFailure(f"Admin API response has no data (status {response.status_code})")
        return data
