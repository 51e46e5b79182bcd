"""Per-record reconciliation state machine.

For one canonical record the engine resolves channel metadata, probes the store
by the resolved channel id and then either converges the existing entity
(field diff plus tag sync) or creates a new one (download, insert, upload,
patch, tag sync). Upload failure after the insert is the only step that is
compensated: the fresh row is deleted again.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from creatorsync.domain.errors import (
    AssetUploadError,
    DuplicateEntityError,
    StoreReadError,
    StoreWriteError,
    SyncError,
)
from creatorsync.domain.model import EntityChanges, NewEntity

from .outcome import RecordOutcome, RecordStatus
from .reader import RemoteStateReader
from .tags import TagSynchronizer, desired_tag_names

if TYPE_CHECKING:
    from uuid import UUID

    from creatorsync.domain.model import CanonicalRecord, ChannelMetadata, RemoteEntity
    from creatorsync.domain.ports import BlobStorage, CatalogStore, ChannelMetadataFetcher

log = getLogger(__name__)


def _utcnow() -> datetime:
    return datetime.now(UTC)


def avatar_path(entity_id: UUID, created_at: datetime, extension: str = ".jpg") -> str:
    """Storage key for an entity's avatar: ``{id}/avatar/{epoch millis}{ext}``."""

    timestamp = int(created_at.timestamp() * 1000)
    return f"{entity_id}/avatar/{timestamp}{extension}"


@dataclass(slots=True)
class ReconciliationEngine:
    """Converge one remote entity on one canonical record."""

    store: CatalogStore
    fetcher: ChannelMetadataFetcher
    blob_storage: BlobStorage
    clock: Callable[[], datetime] = field(default=_utcnow)
    reader: RemoteStateReader = field(init=False)
    tags: TagSynchronizer = field(init=False)

    def __post_init__(self) -> None:
        self.reader = RemoteStateReader(self.store)
        self.tags = TagSynchronizer(store=self.store, reader=self.reader)

    def reconcile(self, record: CanonicalRecord) -> RecordOutcome:
        """Run the state machine for ``record``; failures become failed outcomes."""

        log.info("Processing: %s (%s)", record.display_name, record.external_id or "-")
        if not record.is_linkable:
            log.info("Skipping %s: no external id", record.display_name)
            return RecordOutcome(record=record, status=RecordStatus.SKIPPED)

        try:
            metadata = self.fetcher.resolve(record.external_id)
            log.info("Resolved %s -> %s", record.external_id, metadata.canonical_id)
            existing = self.reader.lookup_by_external_id(metadata.canonical_id)
            if existing is not None:
                return self._converge(record, metadata, existing)
            return self._create(record, metadata)
        except SyncError as exc:
            log.warning("Failed to sync %s: %s", record.display_name, exc)
            return RecordOutcome(
                record=record,
                status=RecordStatus.FAILED,
                failure=exc.kind,
                detail=str(exc),
            )

    def _converge(
        self,
        record: CanonicalRecord,
        metadata: ChannelMetadata,
        existing: RemoteEntity,
    ) -> RecordOutcome:
        changes = EntityChanges(
            display_name=(
                record.display_name if existing.display_name != record.display_name else None
            ),
            external_title=(
                metadata.title if existing.external_title != metadata.title else None
            ),
        )
        changed_fields = tuple(changes.as_values())
        if changes:
            log.info("Updating %s: %s", existing.id, ", ".join(changed_fields))
            self.store.update(existing.id, changes)

        tags_replaced = self.tags.replace_associations(existing.id, desired_tag_names(record))

        status = (
            RecordStatus.UPDATED if changed_fields or tags_replaced else RecordStatus.UNCHANGED
        )
        log.info("%s %s (%s)", status.capitalize(), record.display_name, existing.id)
        return RecordOutcome(
            record=record,
            status=status,
            entity_id=existing.id,
            changed_fields=changed_fields,
            tags_replaced=tags_replaced,
        )

    def _create(self, record: CanonicalRecord, metadata: ChannelMetadata) -> RecordOutcome:
        asset = self.fetcher.download_asset(metadata.avatar_url)

        try:
            entity = self.store.insert(
                NewEntity(
                    display_name=record.display_name,
                    external_id=metadata.canonical_id,
                    external_title=metadata.title,
                )
            )
        except DuplicateEntityError:
            log.info("%s was created concurrently; switching to update", metadata.canonical_id)
            existing = self.reader.lookup_by_external_id(metadata.canonical_id)
            if existing is None:
                raise StoreReadError(
                    f"Entity {metadata.canonical_id} conflicted on insert but cannot be read back"
                ) from None
            return self._converge(record, metadata, existing)
        log.info("Created entity %s for %s", entity.id, record.display_name)

        path = avatar_path(entity.id, self.clock(), asset.extension)
        try:
            self.blob_storage.upload(path, asset.content, content_type=asset.content_type)
        except AssetUploadError as exc:
            detail = self._compensate(entity.id, exc)
            return RecordOutcome(
                record=record,
                status=RecordStatus.FAILED,
                failure=exc.kind,
                detail=detail,
            )
        log.info("Uploaded avatar %s", path)

        self.store.update(entity.id, EntityChanges(asset_path=path))
        tags_replaced = self.tags.replace_associations(entity.id, desired_tag_names(record))

        log.info("Created %s (%s)", record.display_name, entity.id)
        return RecordOutcome(
            record=record,
            status=RecordStatus.CREATED,
            entity_id=entity.id,
            tags_replaced=tags_replaced,
        )

    def _compensate(self, entity_id: UUID, cause: AssetUploadError) -> str:
        log.warning("Avatar upload failed for %s, deleting entity: %s", entity_id, cause)
        try:
            self.store.delete(entity_id)
        except StoreWriteError as exc:
            log.error("Rollback of %s failed, entity left without avatar: %s", entity_id, exc)
            return f"{cause} (rollback failed: {exc})"
        return str(cause)
