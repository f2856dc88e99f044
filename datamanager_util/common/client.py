from __future__ import annotations

import asyncio
import logging
import random
from collections.abc import Awaitable, Callable, Mapping
from typing import Any

import httpx

from datamanager_util.common.config import ClientConfig
from datamanager_util.common.schema import (
    ApiModel,
    IngestAudienceMembersRequest,
    IngestEventsRequest,
)

logger = logging.getLogger(__name__)

AUDIENCE_MEMBERS_PATH = "/v1/audienceMembers:ingest"
EVENTS_PATH = "/v1/events:ingest"


class AsyncIngestionClient:
    def __init__(
        self,
        base_url: str,
        timeout: float,
        *,
        max_retries: int = 3,
        backoff_base_s: float = 0.2,
        backoff_max_s: float = 5.0,
        headers: Mapping[str, str] | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._max_retries = max_retries
        self._backoff_base_s = backoff_base_s
        self._backoff_max_s = backoff_max_s
        self._headers = dict(headers or {})
        self._client = client
        self._owns_client = client is None

    @classmethod
    def from_config(cls, config: ClientConfig) -> "AsyncIngestionClient":
        return cls(
            base_url=config.base_url,
            timeout=config.timeout_s,
            max_retries=config.max_retries,
            backoff_base_s=config.backoff_base_s,
            backoff_max_s=config.backoff_max_s,
            headers=config.headers,
        )

    async def _post(self, path: str, request: ApiModel) -> dict[str, Any]:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self._base_url,
                timeout=self._timeout,
                headers=self._headers,
            )
        payload = request.to_payload()

        attempt = 0
        while True:
            response = await self._client.post(path, json=payload)
            status = response.status_code

            if status in (429, 503) and attempt < self._max_retries:
                delay = min(self._backoff_base_s * (2**attempt), self._backoff_max_s)
                logger.warning("status=%d path=%s retry_in_s=%.3f", status, path, delay)
                await asyncio.sleep(delay + random.uniform(0.0, delay * 0.1))
                attempt += 1
                continue

            response.raise_for_status()
            logger.info("status=%d path=%s attempts=%d", status, path, attempt + 1)
            if not response.content:
                return {}
            return dict(response.json())

    async def ingest_audience_members(
        self, request: IngestAudienceMembersRequest
    ) -> dict[str, Any]:
        return await self._post(AUDIENCE_MEMBERS_PATH, request)

    async def ingest_events(self, request: IngestEventsRequest) -> dict[str, Any]:
        return await self._post(EVENTS_PATH, request)

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None


class IngestionClient:
    """Blocking facade over :class:`AsyncIngestionClient` for the CLI scripts."""

    def __init__(self, async_client: AsyncIngestionClient) -> None:
        self._async_client = async_client

    @classmethod
    def from_config(cls, config: ClientConfig) -> "IngestionClient":
        return cls(AsyncIngestionClient.from_config(config))

    def _run(self, send: Callable[[], Awaitable[dict[str, Any]]]) -> dict[str, Any]:
        async def _send() -> dict[str, Any]:
            try:
                return await send()
            finally:
                await self._async_client.aclose()

        return asyncio.run(_send())

    def ingest_audience_members(self, request: IngestAudienceMembersRequest) -> dict[str, Any]:
        return self._run(lambda: self._async_client.ingest_audience_members(request))

    def ingest_events(self, request: IngestEventsRequest) -> dict[str, Any]:
        return self._run(lambda: self._async_client.ingest_events(request))


__all__ = [
    "AUDIENCE_MEMBERS_PATH",
    "EVENTS_PATH",
    "AsyncIngestionClient",
    "IngestionClient",
]
