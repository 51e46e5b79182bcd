"""Public interface for the YouTube adapter."""

from __future__ import annotations

from .client import YouTubeAPIError, YouTubeClient, YouTubeQuotaError
from .fetcher import YouTubeChannelFetcher, build_youtube_fetcher
from .schema import THUMBNAIL_TIERS, Channel, ChannelListResponse, ChannelThumbnails

__all__ = [
    "THUMBNAIL_TIERS",
    "Channel",
    "ChannelListResponse",
    "ChannelThumbnails",
    "YouTubeAPIError",
    "YouTubeChannelFetcher",
    "YouTubeClient",
    "YouTubeQuotaError",
    "build_youtube_fetcher",
]
