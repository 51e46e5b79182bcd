"""Blob storage client for a Supabase-compatible storage API."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from creatorsync.adapters.http_resilience import ResilientClient
from creatorsync.config import get_blob_storage_config, get_storage_config
from creatorsync.domain.errors import AssetUploadError, BlobExistsError

from .filesystem import FilesystemBlobStorage

if TYPE_CHECKING:
    from collections.abc import Callable

    from creatorsync.config import BlobStorageConfig, StorageConfig
    from creatorsync.config.http_resilience import ResilienceConfig
    from creatorsync.domain.ports import BlobStorage

log = getLogger(__name__)


def _is_duplicate(response: httpx.Response) -> bool:
    if response.status_code == httpx.codes.CONFLICT:
        return True
    # the storage API reports conflicts as 400 with the real status in the body
    try:
        payload = response.json()
    except ValueError:
        return False
    if not isinstance(payload, dict):
        return False
    return str(payload.get("statusCode")) == "409" or payload.get("error") == "Duplicate"


class HttpBlobStorage:
    """Upload objects into one bucket; existing objects are never overwritten."""

    def __init__(
        self,
        *,
        config: BlobStorageConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._client_factory = client_factory or ResilientClient

    def object_url(self, path: str) -> str:
        return f"{self._config.base_url}/storage/v1/object/{self._config.bucket}/{path}"

    def upload(self, path: str, data: bytes, *, content_type: str) -> None:
        asyncio.run(self._upload_async(path, data, content_type))

    async def _upload_async(self, path: str, data: bytes, content_type: str) -> None:
        headers = {
            "Authorization": f"Bearer {self._config.service_key}",
            "apikey": self._config.service_key,
            "Content-Type": content_type,
            "x-upsert": "false",
        }
        try:
            async with self._client_factory(self._config.resilience) as client:
                response = await client.post(self.object_url(path), content=data, headers=headers)
        except httpx.HTTPError as exc:
            raise AssetUploadError(f"Upload of {path} failed: {exc}") from exc

        if response.is_success:
            log.debug("Uploaded %s to bucket %s", path, self._config.bucket)
            return
        if _is_duplicate(response):
            raise BlobExistsError(path)
        raise AssetUploadError(
            f"Upload of {path} failed: {response.status_code} {response.text[:200]}"
        )


def build_blob_storage(
    *,
    config: BlobStorageConfig | None = None,
    storage: StorageConfig | None = None,
) -> BlobStorage:
    """Return the remote bucket when configured, otherwise the local blob directory."""

    remote = config or get_blob_storage_config()
    if remote is not None:
        log.info("Using storage bucket %s at %s", remote.bucket, remote.base_url)
        return HttpBlobStorage(config=remote)
    root = (storage or get_storage_config()).blob_root()
    log.info("Using local blob storage at %s", root)
    return FilesystemBlobStorage(root)
