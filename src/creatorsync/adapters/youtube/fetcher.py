"""Channel metadata fetcher backed by the YouTube Data API."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Protocol

import httpx

from creatorsync.config.youtube import get_youtube_config
from creatorsync.domain.errors import (
    AssetDownloadError,
    ChannelNotFoundError,
    RateLimitedError,
    ResolutionError,
)
from creatorsync.domain.model import (
    Asset,
    ChannelMetadata,
    ExternalIdKind,
    InvalidExternalIdError,
    parse_external_id,
)
from creatorsync.domain.model.remote import DEFAULT_ASSET_CONTENT_TYPE

from .client import YouTubeAPIError, YouTubeClient, YouTubeQuotaError

if TYPE_CHECKING:
    from creatorsync.config.youtube import YouTubeConfig

    from .schema import Channel

log = getLogger(__name__)


class ChannelLookupClient(Protocol):
    def fetch_channel_by_id(self, channel_id: str) -> Channel | None: ...

    def fetch_channel_by_handle(self, handle: str) -> Channel | None: ...

    def download(self, url: str) -> tuple[bytes, str | None]: ...


@dataclass(slots=True)
class YouTubeChannelFetcher:
    """Resolve channel ids or handles to the stable channel id and display data."""

    client: ChannelLookupClient

    def resolve(self, external_id: str) -> ChannelMetadata:
        try:
            identifier = parse_external_id(external_id)
        except InvalidExternalIdError as exc:
            raise ResolutionError(str(exc)) from exc

        try:
            if identifier.kind is ExternalIdKind.CHANNEL_ID:
                channel = self.client.fetch_channel_by_id(identifier.value)
            else:
                channel = self.client.fetch_channel_by_handle(identifier.value)
        except YouTubeQuotaError as exc:
            raise RateLimitedError(f"Quota exhausted resolving {external_id}: {exc}") from exc
        except (YouTubeAPIError, httpx.HTTPError) as exc:
            raise ResolutionError(f"Error fetching channel info for {external_id}: {exc}") from exc

        if channel is None:
            raise ChannelNotFoundError(f"Channel not found: {external_id}")

        avatar_url = channel.snippet.thumbnails.best_url()
        if avatar_url is None:
            raise ResolutionError(f"No thumbnail found for channel: {external_id}")

        return ChannelMetadata(
            canonical_id=channel.id,
            title=channel.snippet.title,
            avatar_url=avatar_url,
        )

    def download_asset(self, url: str) -> Asset:
        try:
            content, content_type = self.client.download(url)
        except httpx.HTTPError as exc:
            raise AssetDownloadError(f"Failed to download image from {url}: {exc}") from exc
        if not content:
            raise AssetDownloadError(f"Empty image downloaded from {url}")
        log.debug("Downloaded %d bytes from %s", len(content), url)
        return Asset(content=content, content_type=content_type or DEFAULT_ASSET_CONTENT_TYPE)


def build_youtube_fetcher(*, config: YouTubeConfig | None = None) -> YouTubeChannelFetcher:
    return YouTubeChannelFetcher(client=YouTubeClient(config=config or get_youtube_config()))

