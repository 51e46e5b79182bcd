"""Write-once blob storage on the local filesystem."""

from __future__ import annotations

from logging import getLogger
from pathlib import Path, PurePosixPath

from creatorsync.domain.errors import AssetUploadError, BlobExistsError

log = getLogger(__name__)


class FilesystemBlobStorage:
    """Store blobs as files below ``root``; keys are ``/``-separated relative paths."""

    def __init__(self, root: Path) -> None:
        self.root = root

    def resolve(self, path: str) -> Path:
        key = PurePosixPath(path)
        if not path or key.is_absolute() or ".." in key.parts:
            raise AssetUploadError(f"Invalid blob path {path!r}")
        return self.root.joinpath(*key.parts)

    def upload(self, path: str, data: bytes, *, content_type: str) -> None:
        target = self.resolve(path)
        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            with target.open("xb") as handle:
                handle.write(data)
        except FileExistsError as exc:
            raise BlobExistsError(path) from exc
        except OSError as exc:
            raise AssetUploadError(f"Failed to write {path}: {exc}") from exc
        log.debug("Stored %s (%s, %d bytes) at %s", path, content_type, len(data), target)
