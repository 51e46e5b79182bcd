"""Application configuration helpers."""

from __future__ import annotations

from .blob_storage import BlobStorageConfig, get_blob_storage_config
from .env import load_environment, optional_env_var, require_env_vars
from .errors import ConfigurationError, MissingConfigurationError
from .http_resilience import CacheConfig, RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .storage import DatabaseConfig, StorageConfig, get_database_config, get_storage_config
from .sync import SyncConfig, get_sync_config
from .youtube import YouTubeConfig, get_youtube_config

__all__ = [
    "BlobStorageConfig",
    "CacheConfig",
    "ConfigurationError",
    "DatabaseConfig",
    "MissingConfigurationError",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "StorageConfig",
    "SyncConfig",
    "YouTubeConfig",
    "configure_logging",
    "get_blob_storage_config",
    "get_database_config",
    "get_storage_config",
    "get_sync_config",
    "get_youtube_config",
    "load_environment",
    "optional_env_var",
    "require_env_vars",
]
