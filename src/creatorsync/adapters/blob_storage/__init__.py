"""Blob storage adapters for avatar uploads."""

from __future__ import annotations

from .filesystem import FilesystemBlobStorage
from .http import HttpBlobStorage, build_blob_storage

__all__ = ["FilesystemBlobStorage", "HttpBlobStorage", "build_blob_storage"]
