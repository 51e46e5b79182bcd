"""YouTube Data API configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import require_env_vars
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy

YOUTUBE_BASE_URL = "https://www.googleapis.com/youtube/v3"
YOUTUBE_TIMEOUT_SECONDS = 10.0
ASSET_TIMEOUT_SECONDS = 20.0
# found channels are served from the on-disk cache for a day, across runs
CHANNEL_CACHE_TTL_SECONDS = 24 * 60 * 60.0


@dataclass(frozen=True, slots=True)
class YouTubeConfig:
    """Holds YouTube Data API configuration values."""

    api_key: str
    resilience: ResilienceConfig
    asset_resilience: ResilienceConfig


def _cache_found_channels(payload: object) -> bool:
    # only lookups that found a channel are cached
    return isinstance(payload, dict) and bool(payload.get("items"))


def default_asset_resilience() -> ResilienceConfig:
    return ResilienceConfig(
        name="youtube-assets",
        timeout_seconds=ASSET_TIMEOUT_SECONDS,
        retry=RetryPolicy(total=2),
        cache=None,
    )


def get_youtube_config(*, resilience: ResilienceConfig | None = None) -> YouTubeConfig:
    values = require_env_vars(("YOUTUBE_API_KEY",))
    return YouTubeConfig(
        api_key=values["YOUTUBE_API_KEY"],
        resilience=resilience
        or ResilienceConfig(
            name="youtube",
            base_url=YOUTUBE_BASE_URL,
            timeout_seconds=YOUTUBE_TIMEOUT_SECONDS,
            ratelimit=RateLimit(max_calls=10, per_seconds=1.0),
            cache=CacheConfig(
                default_ttl_seconds=CHANNEL_CACHE_TTL_SECONDS,
                should_cache=_cache_found_channels,
            ),
        ),
        asset_resilience=default_asset_resilience(),
    )
