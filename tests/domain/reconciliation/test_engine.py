from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from uuid import uuid4

import pytest

from creatorsync.domain.errors import (
    AssetDownloadError,
    AssetUploadError,
    FailureKind,
    RateLimitedError,
    StoreReadError,
    StoreWriteError,
)
from creatorsync.domain.model import Asset, CatalogGroup, RemoteEntity
from creatorsync.domain.reconciliation import (
    ReconciliationEngine,
    RecordStatus,
    Sequencer,
    avatar_path,
)
from tests.helpers.catalog import (
    FakeBlobStorage,
    FakeCatalogStore,
    FakeFetcher,
    channel_id,
    make_metadata,
    make_record,
)

FIXED_NOW = datetime(2024, 5, 1, 12, 0, tzinfo=UTC)


@pytest.fixture
def engine(
    fake_store: FakeCatalogStore,
    fake_fetcher: FakeFetcher,
    fake_blobs: FakeBlobStorage,
) -> ReconciliationEngine:
    return ReconciliationEngine(
        store=fake_store,
        fetcher=fake_fetcher,
        blob_storage=fake_blobs,
        clock=lambda: FIXED_NOW,
    )


def test_avatar_path_uses_epoch_milliseconds() -> None:
    entity_id = uuid4()

    path = avatar_path(entity_id, FIXED_NOW, ".png")

    assert path == f"{entity_id}/avatar/{int(FIXED_NOW.timestamp() * 1000)}.png"


def test_record_without_external_id_is_skipped(
    engine: ReconciliationEngine,
    fake_store: FakeCatalogStore,
    fake_fetcher: FakeFetcher,
) -> None:
    outcome = engine.reconcile(make_record(external_id=""))

    assert outcome.status is RecordStatus.SKIPPED
    assert fake_fetcher.resolved == []
    assert fake_store.writes == []


def test_new_record_creates_entity_uploads_avatar_and_tags(
    engine: ReconciliationEngine,
    fake_store: FakeCatalogStore,
    fake_fetcher: FakeFetcher,
    fake_blobs: FakeBlobStorage,
) -> None:
    record = make_record(options=["2023"])
    fake_fetcher.add(record.external_id, make_metadata(record.external_id))

    outcome = engine.reconcile(record)

    assert outcome.status is RecordStatus.CREATED
    assert outcome.entity_id is not None
    entity = fake_store.entities[outcome.entity_id]
    assert entity.external_id == record.external_id
    assert entity.external_title == "Alpha Channel"
    assert entity.asset_path == avatar_path(outcome.entity_id, FIXED_NOW)
    assert list(fake_blobs.blobs) == [entity.asset_path]
    assert fake_store.tag_names(entity.id) == {"Creators", "Alpha", "2023"}


def test_handle_is_stored_as_canonical_channel_id(
    engine: ReconciliationEngine,
    fake_store: FakeCatalogStore,
    fake_fetcher: FakeFetcher,
) -> None:
    canonical = channel_id("h")
    record = make_record(external_id="@alpha")
    fake_fetcher.add("@alpha", make_metadata(canonical))

    outcome = engine.reconcile(record)

    assert outcome.status is RecordStatus.CREATED
    assert [e.external_id for e in fake_store.entities.values()] == [canonical]


def test_existing_entity_with_same_fields_is_unchanged(
    engine: ReconciliationEngine,
    fake_store: FakeCatalogStore,
    fake_fetcher: FakeFetcher,
) -> None:
    record = make_record()
    fake_fetcher.add(record.external_id, make_metadata(record.external_id))
    fake_store.seed_entity(record.external_id, tags=["Creators", "Alpha"])

    outcome = engine.reconcile(record)

    assert outcome.status is RecordStatus.UNCHANGED
    assert fake_store.writes == []
    assert fake_fetcher.downloads == []


def test_existing_entity_gets_one_sparse_update(
    engine: ReconciliationEngine,
    fake_store: FakeCatalogStore,
    fake_fetcher: FakeFetcher,
) -> None:
    record = make_record("Renamed Creator")
    fake_fetcher.add(record.external_id, make_metadata(record.external_id))
    existing = fake_store.seed_entity(record.external_id, tags=["Creators", "Alpha"])

    outcome = engine.reconcile(record)

    assert outcome.status is RecordStatus.UPDATED
    assert outcome.changed_fields == ("display_name",)
    assert not outcome.tags_replaced
    assert fake_store.writes == ["update:display_name"]
    assert fake_store.entities[existing.id].display_name == "Renamed Creator"


def test_existing_entity_with_stale_tags_is_updated(
    engine: ReconciliationEngine,
    fake_store: FakeCatalogStore,
    fake_fetcher: FakeFetcher,
) -> None:
    record = make_record(options=["2023"])
    fake_fetcher.add(record.external_id, make_metadata(record.external_id))
    existing = fake_store.seed_entity(record.external_id, tags=["Creators", "Beta", "2022"])

    outcome = engine.reconcile(record)

    assert outcome.status is RecordStatus.UPDATED
    assert outcome.tags_replaced
    assert outcome.changed_fields == ()
    assert fake_store.tag_names(existing.id) == {"Creators", "Alpha", "2023"}


def test_insert_conflict_falls_back_to_update(
    engine: ReconciliationEngine,
    fake_store: FakeCatalogStore,
    fake_fetcher: FakeFetcher,
    fake_blobs: FakeBlobStorage,
) -> None:
    record = make_record()
    fake_fetcher.add(record.external_id, make_metadata(record.external_id))
    racer = RemoteEntity(
        id=uuid4(),
        display_name="Someone Else",
        external_id=record.external_id,
        external_title="Alpha Channel",
    )
    fake_store.simulate_concurrent_insert(racer)

    outcome = engine.reconcile(record)

    assert outcome.status is RecordStatus.UPDATED
    assert outcome.entity_id == racer.id
    assert len(fake_store.by_external_id(record.external_id)) == 1
    assert fake_store.entities[racer.id].display_name == record.display_name
    assert fake_blobs.attempts == []


def test_upload_failure_deletes_the_new_entity(
    engine: ReconciliationEngine,
    fake_store: FakeCatalogStore,
    fake_fetcher: FakeFetcher,
    fake_blobs: FakeBlobStorage,
) -> None:
    record = make_record()
    fake_fetcher.add(record.external_id, make_metadata(record.external_id))
    fake_blobs.error = AssetUploadError("bucket offline")

    outcome = engine.reconcile(record)

    assert outcome.status is RecordStatus.FAILED
    assert outcome.failure is FailureKind.ASSET_UPLOAD
    assert fake_store.entities == {}
    assert fake_store.writes == ["insert", "delete"]


def test_failed_rollback_is_reported(
    engine: ReconciliationEngine,
    fake_store: FakeCatalogStore,
    fake_fetcher: FakeFetcher,
    fake_blobs: FakeBlobStorage,
) -> None:
    record = make_record()
    fake_fetcher.add(record.external_id, make_metadata(record.external_id))
    fake_blobs.error = AssetUploadError("bucket offline")
    fake_store.failures["delete"] = StoreWriteError("connection lost")

    outcome = engine.reconcile(record)

    assert outcome.status is RecordStatus.FAILED
    assert outcome.detail is not None
    assert "rollback failed" in outcome.detail
    assert len(fake_store.entities) == 1


def test_download_failure_happens_before_insert(
    engine: ReconciliationEngine,
    fake_store: FakeCatalogStore,
    fake_fetcher: FakeFetcher,
) -> None:
    record = make_record()
    fake_fetcher.add(record.external_id, make_metadata(record.external_id))
    fake_fetcher.download_error = AssetDownloadError("404")

    outcome = engine.reconcile(record)

    assert outcome.status is RecordStatus.FAILED
    assert outcome.failure is FailureKind.ASSET_DOWNLOAD
    assert fake_store.writes == []


def test_resolution_failure_is_a_failed_outcome(
    engine: ReconciliationEngine,
    fake_store: FakeCatalogStore,
    fake_fetcher: FakeFetcher,
) -> None:
    record = make_record()
    fake_fetcher.failures[record.external_id] = RateLimitedError("quota")

    outcome = engine.reconcile(record)

    assert outcome.status is RecordStatus.FAILED
    assert outcome.failure is FailureKind.RESOLUTION
    assert fake_store.writes == []


def test_avatar_extension_follows_content_type(
    engine: ReconciliationEngine,
    fake_store: FakeCatalogStore,
    fake_fetcher: FakeFetcher,
    fake_blobs: FakeBlobStorage,
) -> None:
    record = make_record()
    fake_fetcher.add(record.external_id, make_metadata(record.external_id))
    fake_fetcher.asset = Asset(content=b"png", content_type="image/png")

    outcome = engine.reconcile(record)

    assert outcome.entity_id is not None
    assert fake_store.entities[outcome.entity_id].asset_path.endswith(".png")
    assert next(iter(fake_blobs.blobs.values())) == (b"png", "image/png")


def test_asset_path_patch_failure_keeps_the_uploaded_entity(
    engine: ReconciliationEngine,
    fake_store: FakeCatalogStore,
    fake_fetcher: FakeFetcher,
    fake_blobs: FakeBlobStorage,
) -> None:
    record = make_record()
    fake_fetcher.add(record.external_id, make_metadata(record.external_id))
    fake_store.failures["update"] = StoreWriteError("connection lost")

    outcome = engine.reconcile(record)

    assert outcome.status is RecordStatus.FAILED
    assert outcome.failure is FailureKind.STORE_WRITE
    (entity,) = fake_store.entities.values()
    assert entity.asset_path == ""
    assert len(fake_blobs.blobs) == 1
    assert "delete" not in fake_store.writes


def test_tag_sync_failure_after_upload_keeps_the_entity(
    engine: ReconciliationEngine,
    fake_store: FakeCatalogStore,
    fake_fetcher: FakeFetcher,
) -> None:
    record = make_record()
    fake_fetcher.add(record.external_id, make_metadata(record.external_id))
    fake_store.failures["delete_associations"] = StoreWriteError("deadlock")

    outcome = engine.reconcile(record)

    assert outcome.status is RecordStatus.FAILED
    assert outcome.failure is FailureKind.TAG_SYNC
    (entity,) = fake_store.entities.values()
    assert entity.asset_path == avatar_path(entity.id, FIXED_NOW)
    assert "delete" not in fake_store.writes


@dataclass
class _FlakyLookupStore(FakeCatalogStore):
    unreadable: set[str] = field(default_factory=set[str])

    def get_by_external_id(self, external_id: str) -> RemoteEntity | None:
        if external_id in self.unreadable:
            raise StoreReadError(f"timeout reading {external_id}")
        return super().get_by_external_id(external_id)


def test_lookup_failure_fails_only_that_record(
    fake_fetcher: FakeFetcher,
    fake_blobs: FakeBlobStorage,
) -> None:
    first = make_record("First", external_id=channel_id("1"))
    second = make_record("Second", external_id=channel_id("2"))
    for record in (first, second):
        fake_fetcher.add(record.external_id, make_metadata(record.external_id))
    store = _FlakyLookupStore(unreadable={first.external_id})
    engine = ReconciliationEngine(store=store, fetcher=fake_fetcher, blob_storage=fake_blobs)
    sequencer = Sequencer(reconcile=engine.reconcile, delay_seconds=0, sleep=lambda _: None)

    result = sequencer.run([CatalogGroup("Creators", "Alpha", (first, second))])

    failed, created = result.groups[0].records
    assert failed.status is RecordStatus.FAILED
    assert failed.failure is FailureKind.STORE_READ
    assert created.status is RecordStatus.CREATED
    assert store.by_external_id(second.external_id)
    assert result.exit_code == 1
