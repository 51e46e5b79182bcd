"""Reconciliation of canonical catalog records against the remote store."""

from __future__ import annotations

from .engine import ReconciliationEngine, avatar_path
from .outcome import RecordOutcome, RecordStatus, SyncOutcome
from .reader import RemoteStateReader
from .sequencer import (
    EXIT_FAILURES,
    EXIT_INTERRUPTED,
    EXIT_OK,
    GroupResult,
    RunResult,
    Sequencer,
)
from .summary import format_group_summary, format_run_summary
from .tags import TagSynchronizer, desired_tag_names

__all__ = [
    "EXIT_FAILURES",
    "EXIT_INTERRUPTED",
    "EXIT_OK",
    "GroupResult",
    "ReconciliationEngine",
    "RecordOutcome",
    "RecordStatus",
    "RemoteStateReader",
    "RunResult",
    "Sequencer",
    "SyncOutcome",
    "TagSynchronizer",
    "avatar_path",
    "desired_tag_names",
    "format_group_summary",
    "format_run_summary",
]
