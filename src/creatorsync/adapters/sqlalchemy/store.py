"""Catalog store capability on top of short-lived SQLAlchemy units of work.

Every call opens its own unit of work and commits it before returning, so a
failure in one step never leaves uncommitted work behind for the next one.
Integrity violations on the unique columns surface as duplicate errors; any
other driver error becomes a read or write failure.
"""

from __future__ import annotations

from contextlib import contextmanager
from logging import getLogger
from typing import TYPE_CHECKING

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from creatorsync.adapters.sqlalchemy.unit_of_work import SqlAlchemyCatalogUnitOfWork
from creatorsync.domain.errors import (
    DuplicateEntityError,
    DuplicateTagError,
    StoreReadError,
    StoreWriteError,
)

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator
    from uuid import UUID

    from creatorsync.domain.model import EntityChanges, NewEntity, RemoteEntity, Tag
    from creatorsync.domain.ports import CatalogRepositories, CatalogUnitOfWork

log = getLogger(__name__)


class SqlAlchemyCatalogStore:
    def __init__(
        self,
        unit_of_work_factory: Callable[[], CatalogUnitOfWork] | None = None,
    ) -> None:
        self._uow_factory = unit_of_work_factory or SqlAlchemyCatalogUnitOfWork

    @contextmanager
    def _reading(self, what: str) -> Iterator[CatalogRepositories]:
        try:
            with self._uow_factory() as uow:
                yield uow.repositories
        except SQLAlchemyError as exc:
            raise StoreReadError(f"Failed to read {what}: {exc}") from exc

    @contextmanager
    def _writing(
        self,
        what: str,
        *,
        conflict: StoreWriteError | None = None,
    ) -> Iterator[CatalogRepositories]:
        try:
            with self._uow_factory() as uow:
                yield uow.repositories
                uow.commit()
        except IntegrityError as exc:
            if conflict is not None:
                raise conflict from exc
            raise StoreWriteError(f"Failed to write {what}: {exc.orig}") from exc
        except SQLAlchemyError as exc:
            raise StoreWriteError(f"Failed to write {what}: {exc}") from exc

    # entities

    def get(self, entity_id: UUID) -> RemoteEntity | None:
        with self._reading(f"creator {entity_id}") as repos:
            return repos.creators.get(entity_id)

    def get_by_external_id(self, external_id: str) -> RemoteEntity | None:
        with self._reading(f"creator {external_id}") as repos:
            return repos.creators.get_by_external_id(external_id)

    def insert(self, entity: NewEntity) -> RemoteEntity:
        conflict = DuplicateEntityError(entity.external_id)
        with self._writing(f"creator {entity.external_id}", conflict=conflict) as repos:
            return repos.creators.add(entity)

    def update(self, entity_id: UUID, changes: EntityChanges) -> None:
        if not changes:
            return
        with self._writing(f"creator {entity_id}") as repos:
            matched = repos.creators.update(entity_id, changes)
            if matched == 0:
                raise StoreWriteError(f"Creator {entity_id} does not exist")

    def delete(self, entity_id: UUID) -> None:
        with self._writing(f"creator {entity_id}") as repos:
            removed = repos.creators.remove(entity_id)
        if removed == 0:
            log.debug("Creator %s was already gone", entity_id)

    # tags

    def get_tag(self, name: str) -> Tag | None:
        with self._reading(f"tag {name!r}") as repos:
            return repos.tags.get_by_name(name)

    def insert_tag(self, name: str) -> Tag:
        with self._writing(f"tag {name!r}", conflict=DuplicateTagError(name)) as repos:
            return repos.tags.add(name)

    def tag_names_for(self, entity_id: UUID) -> frozenset[str]:
        with self._reading(f"tags of {entity_id}") as repos:
            return repos.tags.names_for(entity_id)

    def delete_associations(self, entity_id: UUID) -> None:
        with self._writing(f"tags of {entity_id}") as repos:
            repos.tags.remove_associations(entity_id)

    def insert_associations(self, entity_id: UUID, tag_ids: Iterable[UUID]) -> None:
        tag_ids = list(tag_ids)
        with self._writing(f"tags of {entity_id}") as repos:
            repos.tags.add_associations(entity_id, tag_ids)


if TYPE_CHECKING:
    from creatorsync.domain.ports import CatalogStore

    _store_check: CatalogStore = SqlAlchemyCatalogStore()
