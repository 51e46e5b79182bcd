"""Port for write-once object storage."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class BlobStorage(Protocol):
    """Stores blobs under caller-chosen paths.

    ``upload`` must fail with ``BlobExistsError`` instead of overwriting and
    raises ``AssetUploadError`` for any other failure.
    """

    def upload(self, path: str, data: bytes, *, content_type: str) -> None: ...
