"""Ports for fetching external channel metadata."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from creatorsync.domain.model import Asset, ChannelMetadata


@runtime_checkable
class ChannelMetadataFetcher(Protocol):
    """Resolves authored external ids and downloads display assets.

    ``resolve`` raises ``ResolutionError`` (or one of its subclasses) and
    ``download_asset`` raises ``AssetDownloadError``.
    """

    def resolve(self, external_id: str) -> ChannelMetadata: ...

    def download_asset(self, url: str) -> Asset: ...


__all__ = ["ChannelMetadataFetcher"]
