"""Strictly sequential driver for catalog groups.

Records run one at a time, and a fixed delay follows every record whatever its
outcome. That delay is the whole rate-limit contract towards the metadata API.
A stop predicate is only consulted between records, so a stopped run never
leaves a record half processed.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from functools import reduce
from logging import getLogger
from typing import TYPE_CHECKING

from .outcome import RecordOutcome, SyncOutcome
from .summary import format_group_summary

if TYPE_CHECKING:
    from collections.abc import Iterable

    from creatorsync.domain.model import CanonicalRecord, CatalogGroup

log = getLogger(__name__)

DEFAULT_RECORD_DELAY_SECONDS = 0.1

EXIT_OK = 0
EXIT_FAILURES = 1
EXIT_INTERRUPTED = 130

ReconcileRecord = Callable[["CanonicalRecord"], RecordOutcome]


def _never_stop() -> bool:
    return False


@dataclass(slots=True)
class GroupResult:
    category: str
    group: str
    expected: int
    outcome: SyncOutcome = field(default_factory=SyncOutcome)
    records: list[RecordOutcome] = field(default_factory=list["RecordOutcome"])

    @property
    def label(self) -> str:
        return f"{self.category} / {self.group}"

    def add(self, record_outcome: RecordOutcome) -> None:
        self.records.append(record_outcome)
        self.outcome.add(record_outcome.status)


@dataclass(slots=True)
class RunResult:
    groups: list[GroupResult] = field(default_factory=list["GroupResult"])
    interrupted: bool = False

    @property
    def totals(self) -> SyncOutcome:
        return reduce(lambda acc, group: acc + group.outcome, self.groups, SyncOutcome())

    @property
    def succeeded(self) -> bool:
        return not self.interrupted and self.totals.failed == 0

    @property
    def failures(self) -> list[RecordOutcome]:
        return [outcome for group in self.groups for outcome in group.records if not outcome.ok]

    @property
    def exit_code(self) -> int:
        if self.interrupted:
            return EXIT_INTERRUPTED
        return EXIT_OK if self.totals.failed == 0 else EXIT_FAILURES


@dataclass(slots=True)
class Sequencer:
    """Run records through ``reconcile`` one at a time with a fixed pause after each."""

    reconcile: ReconcileRecord
    delay_seconds: float = DEFAULT_RECORD_DELAY_SECONDS
    sleep: Callable[[float], None] = field(default=time.sleep)
    should_stop: Callable[[], bool] = field(default=_never_stop)

    def run(self, groups: Iterable[CatalogGroup]) -> RunResult:
        result = RunResult()
        for group in groups:
            if self.should_stop():
                result.interrupted = True
                break
            group_result = self.run_group(group)
            result.groups.append(group_result)
            if len(group_result.records) < group_result.expected:
                result.interrupted = True
                break
        if result.interrupted:
            log.warning("Run stopped before all records were processed")
        return result

    def run_group(self, group: CatalogGroup) -> GroupResult:
        total = len(group.records)
        result = GroupResult(category=group.category, group=group.group, expected=total)
        log.info("Processing group %s (%d records)", group.label, total)

        for index, record in enumerate(group.records, start=1):
            if self.should_stop():
                log.warning(
                    "Stop requested; %d records of %s not processed",
                    total - index + 1,
                    group.label,
                )
                break
            log.info("[%d/%d] %s", index, total, record.display_name)
            result.add(self.reconcile(record))
            self.sleep(self.delay_seconds)

        for line in format_group_summary(result).splitlines():
            log.info(line)
        return result
