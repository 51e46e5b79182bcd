"""Synchronization defaults for catalog runs."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from creatorsync.domain.reconciliation.sequencer import DEFAULT_RECORD_DELAY_SECONDS

from .errors import ConfigurationError

DEFAULT_CATALOG_DIRNAME = "data"


@dataclass(frozen=True, slots=True)
class SyncConfig:
    catalog_dir: Path
    record_delay_seconds: float = DEFAULT_RECORD_DELAY_SECONDS


def get_sync_config() -> SyncConfig:
    env_dir = os.getenv("CATALOG_DATA_DIR")
    catalog_dir = Path(env_dir) if env_dir else Path.cwd() / DEFAULT_CATALOG_DIRNAME

    delay = DEFAULT_RECORD_DELAY_SECONDS
    raw_delay = os.getenv("CREATORSYNC_RECORD_DELAY")
    if raw_delay:
        try:
            delay = float(raw_delay)
        except ValueError as exc:
            raise ConfigurationError(f"Invalid CREATORSYNC_RECORD_DELAY: {raw_delay}") from exc
        if delay < 0:
            raise ConfigurationError("CREATORSYNC_RECORD_DELAY must be non-negative")

    return SyncConfig(catalog_dir=catalog_dir, record_delay_seconds=delay)
