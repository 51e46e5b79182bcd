"""HTTP client for the YouTube Data API v3."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING, Final

from pydantic import ValidationError

from creatorsync.adapters.http_resilience import ResilientClient
from creatorsync.config.youtube import YOUTUBE_BASE_URL

from .schema import Channel, ChannelListResponse, ErrorResponse

if TYPE_CHECKING:
    from collections.abc import Callable

    import httpx

    from creatorsync.config.http_resilience import ResilienceConfig
    from creatorsync.config.youtube import YouTubeConfig

log = getLogger(__name__)

QUOTA_REASONS: Final[frozenset[str]] = frozenset(
    {"quotaExceeded", "rateLimitExceeded", "userRateLimitExceeded", "dailyLimitExceeded"}
)


class YouTubeAPIError(RuntimeError):
    """Raised when the YouTube API returns an error or an unexpected payload."""

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        reasons: frozenset[str] = frozenset(),
    ) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reasons = reasons


class YouTubeQuotaError(YouTubeAPIError):
    """Raised when the request was refused because of quota or rate limits."""


class YouTubeClient:
    """Low-level HTTP client for channel lookups and thumbnail downloads."""

    def __init__(
        self,
        *,
        config: YouTubeConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    def fetch_channel_by_id(self, channel_id: str) -> Channel | None:
        return asyncio.run(self._fetch_channel_async({"id": channel_id}))

    def fetch_channel_by_handle(self, handle: str) -> Channel | None:
        return asyncio.run(self._fetch_channel_async({"forHandle": handle}))

    def download(self, url: str) -> tuple[bytes, str | None]:
        """Return the body and content type found at ``url``."""

        return asyncio.run(self._download_async(url))

    async def _fetch_channel_async(self, lookup: dict[str, str]) -> Channel | None:
        params = {"part": "snippet", **lookup, "key": self._config.api_key}
        async with self._client_factory(self._resilience) as client:
            response = await self._perform_request(client=client, params=params)
        if not response.items:
            return None
        return response.items[0]

    async def _download_async(self, url: str) -> tuple[bytes, str | None]:
        async with self._client_factory(self._config.asset_resilience) as client:
            response = await client.get(url)
            response.raise_for_status()
            return response.content, response.headers.get("content-type")

    async def _perform_request(
        self,
        *,
        client: ResilientClient,
        params: dict[str, str],
    ) -> ChannelListResponse:
        base_url = (self._resilience.base_url or YOUTUBE_BASE_URL).rstrip("/")
        response = await client.get(f"{base_url}/channels", params=params)
        if response.is_error:
            raise _api_error(response)

        try:
            payload = response.json()
        except ValueError as exc:
            raise YouTubeAPIError("YouTube response is not JSON") from exc
        if not isinstance(payload, dict):
            raise YouTubeAPIError("Unexpected YouTube response payload")
        try:
            return ChannelListResponse.model_validate(payload)
        except ValidationError as exc:
            raise YouTubeAPIError(f"Unexpected YouTube response payload: {exc}") from exc


def _api_error(response: httpx.Response) -> YouTubeAPIError:
    message = f"YouTube API error: {response.status_code} {response.reason_phrase}"
    reasons: frozenset[str] = frozenset()
    try:
        error = ErrorResponse.model_validate(response.json()).error
    except ValueError:
        pass
    else:
        message = f"YouTube API error {error.code}: {error.message}"
        reasons = frozenset(detail.reason for detail in error.errors if detail.reason)
    log.error(message)

    if response.status_code == 429 or reasons & QUOTA_REASONS:
        return YouTubeQuotaError(message, status_code=response.status_code, reasons=reasons)
    return YouTubeAPIError(message, status_code=response.status_code, reasons=reasons)
