from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from creatorsync.adapters.blob_storage import FilesystemBlobStorage
from creatorsync.domain.errors import AssetUploadError, BlobExistsError

if TYPE_CHECKING:
    from pathlib import Path


def test_upload_writes_nested_file(tmp_path: Path) -> None:
    storage = FilesystemBlobStorage(tmp_path)

    storage.upload("abc/avatar/1700000000000.jpg", b"jpeg", content_type="image/jpeg")

    assert (tmp_path / "abc" / "avatar" / "1700000000000.jpg").read_bytes() == b"jpeg"


def test_existing_path_is_never_overwritten(tmp_path: Path) -> None:
    storage = FilesystemBlobStorage(tmp_path)
    storage.upload("abc/avatar/1.jpg", b"first", content_type="image/jpeg")

    with pytest.raises(BlobExistsError):
        storage.upload("abc/avatar/1.jpg", b"second", content_type="image/jpeg")

    assert (tmp_path / "abc" / "avatar" / "1.jpg").read_bytes() == b"first"


@pytest.mark.parametrize("path", ["", "/etc/passwd", "../escape.jpg", "a/../../b.jpg"])
def test_paths_outside_the_root_are_rejected(tmp_path: Path, path: str) -> None:
    storage = FilesystemBlobStorage(tmp_path / "blobs")

    with pytest.raises(AssetUploadError):
        storage.upload(path, b"x", content_type="image/jpeg")
