"""Error kinds raised while reconciling a record.

Adapters translate library exceptions into these at their boundary, so the
engine only ever has to reason about ``SyncError`` subclasses. Every class
carries the ``FailureKind`` reported in record outcomes.
"""

from __future__ import annotations

from enum import StrEnum
from typing import ClassVar


class FailureKind(StrEnum):
    RESOLUTION = "resolution"
    STORE_READ = "store_read"
    STORE_WRITE = "store_write"
    ASSET_DOWNLOAD = "asset_download"
    ASSET_UPLOAD = "asset_upload"
    TAG_SYNC = "tag_sync"


class SyncError(RuntimeError):
    """Base class for record-level failures."""

    kind: ClassVar[FailureKind]


class ResolutionError(SyncError):
    """The external metadata API could not resolve an identifier."""

    kind = FailureKind.RESOLUTION


class ChannelNotFoundError(ResolutionError):
    """The external metadata API has no channel for the identifier."""


class RateLimitedError(ResolutionError):
    """The external metadata API rejected the call because of its quota."""


class StoreReadError(SyncError):
    kind = FailureKind.STORE_READ


class StoreWriteError(SyncError):
    kind = FailureKind.STORE_WRITE


class DuplicateEntityError(StoreWriteError):
    """An entity with the same external id already exists."""

    def __init__(self, external_id: str) -> None:
        super().__init__(f"Entity with external id {external_id!r} already exists")
        self.external_id = external_id


class DuplicateTagError(StoreWriteError):
    """A tag with the same name already exists."""

    def __init__(self, name: str) -> None:
        super().__init__(f"Tag {name!r} already exists")
        self.name = name


class AssetDownloadError(SyncError):
    kind = FailureKind.ASSET_DOWNLOAD


class AssetUploadError(SyncError):
    kind = FailureKind.ASSET_UPLOAD


class BlobExistsError(AssetUploadError):
    """Object storage refused to overwrite an existing path."""

    def __init__(self, path: str) -> None:
        super().__init__(f"Blob already exists at {path!r}")
        self.path = path


class TagSyncError(SyncError):
    kind = FailureKind.TAG_SYNC
