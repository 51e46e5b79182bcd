"""Object storage configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import optional_env_var, require_env_vars
from .http_resilience import ResilienceConfig, RetryPolicy

DEFAULT_STORAGE_BUCKET = "creators"
STORAGE_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class BlobStorageConfig:
    """Holds settings for a Supabase-compatible storage endpoint."""

    base_url: str
    service_key: str
    bucket: str
    resilience: ResilienceConfig


def get_blob_storage_config() -> BlobStorageConfig | None:
    """Return remote storage settings, or ``None`` when ``STORAGE_URL`` is unset."""

    base_url = optional_env_var("STORAGE_URL")
    if base_url is None:
        return None
    values = require_env_vars(("STORAGE_SERVICE_KEY",))
    return BlobStorageConfig(
        base_url=base_url.rstrip("/"),
        service_key=values["STORAGE_SERVICE_KEY"],
        bucket=optional_env_var("STORAGE_BUCKET") or DEFAULT_STORAGE_BUCKET,
        resilience=ResilienceConfig(
            name="blob-storage",
            timeout_seconds=STORAGE_TIMEOUT_SECONDS,
            # uploads are write-once; only reads are retried
            retry=RetryPolicy(allowed_methods=frozenset({"GET", "HEAD"})),
            cache=None,
        ),
    )
