"""Per-record outcomes and their folded counts."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID

    from creatorsync.domain.errors import FailureKind
    from creatorsync.domain.model import CanonicalRecord


class RecordStatus(StrEnum):
    CREATED = "created"
    UPDATED = "updated"
    UNCHANGED = "unchanged"
    SKIPPED = "skipped"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class RecordOutcome:
    """What happened to one record, classified from the path the engine took."""

    record: CanonicalRecord
    status: RecordStatus
    entity_id: UUID | None = None
    changed_fields: tuple[str, ...] = ()
    tags_replaced: bool = False
    failure: FailureKind | None = None
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.status is not RecordStatus.FAILED


@dataclass(slots=True)
class SyncOutcome:
    """Outcome counts for a group or a whole run.

    ``created`` doubles as the ``success`` bucket. Existing entities that needed
    changes count as ``updated``; those already converged count as
    ``unchanged``. Records without an external id count as ``skipped``.
    """

    created: int = 0
    updated: int = 0
    unchanged: int = 0
    skipped: int = 0
    failed: int = 0

    @property
    def success(self) -> int:
        return self.created

    @property
    def total(self) -> int:
        return self.created + self.updated + self.unchanged + self.skipped + self.failed

    def add(self, status: RecordStatus) -> None:
        match status:
            case RecordStatus.CREATED:
                self.created += 1
            case RecordStatus.UPDATED:
                self.updated += 1
            case RecordStatus.UNCHANGED:
                self.unchanged += 1
            case RecordStatus.SKIPPED:
                self.skipped += 1
            case RecordStatus.FAILED:
                self.failed += 1

    def __add__(self, other: SyncOutcome) -> SyncOutcome:
        return SyncOutcome(
            created=self.created + other.created,
            updated=self.updated + other.updated,
            unchanged=self.unchanged + other.unchanged,
            skipped=self.skipped + other.skipped,
            failed=self.failed + other.failed,
        )
