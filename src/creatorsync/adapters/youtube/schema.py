"""Pydantic models describing the YouTube Data API payloads we use."""

from __future__ import annotations

from typing import Final

from pydantic import BaseModel, ConfigDict, Field

# best first
THUMBNAIL_TIERS: Final[tuple[str, ...]] = ("maxres", "standard", "high", "medium", "default")


class YouTubeBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class Thumbnail(YouTubeBaseModel):
    url: str
    width: int | None = None
    height: int | None = None


class ChannelThumbnails(YouTubeBaseModel):
    default: Thumbnail | None = None
    medium: Thumbnail | None = None
    high: Thumbnail | None = None
    standard: Thumbnail | None = None
    maxres: Thumbnail | None = None

    def best_url(self) -> str | None:
        """Return the URL of the highest available quality tier."""

        for tier in THUMBNAIL_TIERS:
            thumbnail: Thumbnail | None = getattr(self, tier)
            if thumbnail is not None and thumbnail.url:
                return thumbnail.url
        return None


class ChannelSnippet(YouTubeBaseModel):
    title: str
    description: str | None = None
    custom_url: str | None = Field(default=None, alias="customUrl")
    thumbnails: ChannelThumbnails = Field(default_factory=ChannelThumbnails)


class Channel(YouTubeBaseModel):
    id: str
    snippet: ChannelSnippet


class ChannelListResponse(YouTubeBaseModel):
    kind: str | None = None
    items: list[Channel] = Field(default_factory=list["Channel"])


class ErrorDetail(YouTubeBaseModel):
    reason: str | None = None
    message: str | None = None
    domain: str | None = None


class ErrorBody(YouTubeBaseModel):
    code: int
    message: str = ""
    errors: list[ErrorDetail] = Field(default_factory=list["ErrorDetail"])


class ErrorResponse(YouTubeBaseModel):
    error: ErrorBody
