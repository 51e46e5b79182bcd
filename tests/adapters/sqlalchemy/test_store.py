from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import uuid4

import pytest

from creatorsync.domain.errors import DuplicateEntityError, DuplicateTagError, StoreWriteError
from creatorsync.domain.model import EntityChanges, NewEntity
from tests.helpers.catalog import channel_id

if TYPE_CHECKING:
    from creatorsync.adapters.sqlalchemy import SqlAlchemyCatalogStore


def _new_entity(seed: str = "a", name: str = "Alpha Creator") -> NewEntity:
    return NewEntity(display_name=name, external_id=channel_id(seed), external_title="Alpha")


def test_insert_and_read_back(sqlite_store: SqlAlchemyCatalogStore) -> None:
    created = sqlite_store.insert(_new_entity())

    assert sqlite_store.get(created.id) == created
    assert sqlite_store.get_by_external_id(channel_id("a")) == created
    assert sqlite_store.get_by_external_id(channel_id("b")) is None


def test_duplicate_external_id_is_rejected(sqlite_store: SqlAlchemyCatalogStore) -> None:
    sqlite_store.insert(_new_entity())

    with pytest.raises(DuplicateEntityError) as excinfo:
        sqlite_store.insert(_new_entity(name="Other"))

    assert excinfo.value.external_id == channel_id("a")
    # the failed insert left the store usable
    assert sqlite_store.get_by_external_id(channel_id("a")) is not None


def test_update_applies_only_given_fields(sqlite_store: SqlAlchemyCatalogStore) -> None:
    created = sqlite_store.insert(_new_entity())

    sqlite_store.update(created.id, EntityChanges(asset_path=f"{created.id}/avatar/1.jpg"))

    stored = sqlite_store.get(created.id)
    assert stored is not None
    assert stored.asset_path == f"{created.id}/avatar/1.jpg"
    assert stored.display_name == "Alpha Creator"


def test_update_of_missing_entity_fails(sqlite_store: SqlAlchemyCatalogStore) -> None:
    with pytest.raises(StoreWriteError):
        sqlite_store.update(uuid4(), EntityChanges(display_name="Ghost"))


def test_delete_removes_entity_and_associations(sqlite_store: SqlAlchemyCatalogStore) -> None:
    created = sqlite_store.insert(_new_entity())
    tag = sqlite_store.insert_tag("Creators")
    sqlite_store.insert_associations(created.id, [tag.id])

    sqlite_store.delete(created.id)

    assert sqlite_store.get(created.id) is None
    assert sqlite_store.tag_names_for(created.id) == frozenset()
    assert sqlite_store.get_tag("Creators") == tag


def test_duplicate_tag_is_rejected(sqlite_store: SqlAlchemyCatalogStore) -> None:
    sqlite_store.insert_tag("Alpha")

    with pytest.raises(DuplicateTagError):
        sqlite_store.insert_tag("Alpha")


def test_associations_replace_cycle(sqlite_store: SqlAlchemyCatalogStore) -> None:
    created = sqlite_store.insert(_new_entity())
    first = sqlite_store.insert_tag("Creators")
    second = sqlite_store.insert_tag("Alpha")

    sqlite_store.insert_associations(created.id, [first.id, second.id])
    assert sqlite_store.tag_names_for(created.id) == {"Creators", "Alpha"}

    sqlite_store.delete_associations(created.id)
    sqlite_store.insert_associations(created.id, [second.id])
    assert sqlite_store.tag_names_for(created.id) == {"Alpha"}


def test_duplicate_association_is_a_write_error(sqlite_store: SqlAlchemyCatalogStore) -> None:
    created = sqlite_store.insert(_new_entity())
    tag = sqlite_store.insert_tag("Creators")
    sqlite_store.insert_associations(created.id, [tag.id])

    with pytest.raises(StoreWriteError):
        sqlite_store.insert_associations(created.id, [tag.id])
