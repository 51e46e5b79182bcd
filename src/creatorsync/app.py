"""Application orchestration entry points."""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from creatorsync.adapters.blob_storage import build_blob_storage
from creatorsync.adapters.catalog import (
    CatalogLoadError,
    load_catalog,
    load_group_file,
    rebuild_catalog_indexes,
    rebuild_master_index,
)
from creatorsync.adapters.sqlalchemy import SqlAlchemyCatalogStore, is_started, startup
from creatorsync.adapters.youtube import build_youtube_fetcher
from creatorsync.config import get_sync_config
from creatorsync.domain.reconciliation import (
    EXIT_FAILURES,
    EXIT_OK,
    ReconciliationEngine,
    RunResult,
    Sequencer,
    format_run_summary,
)

if TYPE_CHECKING:
    from pathlib import Path

    from creatorsync.adapters.catalog import IndexReport
    from creatorsync.domain.model import CatalogGroup
    from creatorsync.domain.ports import BlobStorage, CatalogStore, ChannelMetadataFetcher

StopPredicate = Callable[[], bool]

log = getLogger(__name__)


def _never_stop() -> bool:
    return False


@dataclass(slots=True)
class SyncReport:
    run: RunResult
    catalog_errors: list[CatalogLoadError] = field(default_factory=list[CatalogLoadError])

    @property
    def exit_code(self) -> int:
        code = self.run.exit_code
        if code == EXIT_OK and self.catalog_errors:
            return EXIT_FAILURES
        return code


def build_reconciliation_engine(
    *,
    store: CatalogStore | None = None,
    fetcher: ChannelMetadataFetcher | None = None,
    blob_storage: BlobStorage | None = None,
) -> ReconciliationEngine:
    """Wire the engine to the configured adapters; explicit arguments win."""

    if store is None:
        if not is_started():
            startup()
        store = SqlAlchemyCatalogStore()
    return ReconciliationEngine(
        store=store,
        fetcher=fetcher or build_youtube_fetcher(),
        blob_storage=blob_storage or build_blob_storage(),
    )


def _run_groups(
    groups: list[CatalogGroup],
    *,
    engine: ReconciliationEngine | None,
    delay_seconds: float | None,
    should_stop: StopPredicate,
    sleep: Callable[[float], None],
) -> RunResult:
    if delay_seconds is None:
        delay_seconds = get_sync_config().record_delay_seconds
    effective_engine = engine or build_reconciliation_engine()
    sequencer = Sequencer(
        reconcile=effective_engine.reconcile,
        delay_seconds=delay_seconds,
        sleep=sleep,
        should_stop=should_stop,
    )
    log.info(
        "Starting sync: groups=%d, records=%d, delay=%ss",
        len(groups),
        sum(len(group.records) for group in groups),
        delay_seconds,
    )
    result = sequencer.run(groups)
    for line in format_run_summary(result).splitlines():
        log.info(line)
    return result


def sync_catalog(
    *,
    catalog_dir: Path | None = None,
    engine: ReconciliationEngine | None = None,
    delay_seconds: float | None = None,
    should_stop: StopPredicate = _never_stop,
    sleep: Callable[[float], None] = time.sleep,
) -> SyncReport:
    """Reconcile every group of the catalog tree against the remote store."""

    root = catalog_dir or get_sync_config().catalog_dir
    loaded = load_catalog(root)
    run = _run_groups(
        loaded.groups,
        engine=engine,
        delay_seconds=delay_seconds,
        should_stop=should_stop,
        sleep=sleep,
    )
    for error in loaded.errors:
        log.error("Not synced, catalog file unusable: %s", error.path)
    return SyncReport(run=run, catalog_errors=loaded.errors)


def sync_group_file(
    path: Path,
    *,
    engine: ReconciliationEngine | None = None,
    delay_seconds: float | None = None,
    should_stop: StopPredicate = _never_stop,
    sleep: Callable[[float], None] = time.sleep,
) -> SyncReport:
    """Reconcile the records of a single members file."""

    group = load_group_file(path)
    run = _run_groups(
        [group],
        engine=engine,
        delay_seconds=delay_seconds,
        should_stop=should_stop,
        sleep=sleep,
    )
    return SyncReport(run=run)


def update_catalog_indexes(*, catalog_dir: Path | None = None) -> IndexReport:
    root = catalog_dir or get_sync_config().catalog_dir
    report = rebuild_catalog_indexes(root)
    log.info("Index update finished: %d files written", len(report.written))
    return report


def update_master_index(*, catalog_dir: Path | None = None) -> IndexReport:
    root = catalog_dir or get_sync_config().catalog_dir
    report = rebuild_master_index(root)
    log.info("master.json regenerated with %d members", report.member_count)
    return report
