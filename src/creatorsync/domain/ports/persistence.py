"""Ports for the remote relational store.

Every method is one independently atomic call. Read failures raise
``StoreReadError``, write failures ``StoreWriteError``; unique-constraint
conflicts surface as ``DuplicateEntityError`` / ``DuplicateTagError``.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from creatorsync.domain.model import EntityChanges, NewEntity, RemoteEntity, Tag


@runtime_checkable
class EntityStore(Protocol):
    def get(self, entity_id: UUID) -> RemoteEntity | None: ...

    def get_by_external_id(self, external_id: str) -> RemoteEntity | None: ...

    def insert(self, entity: NewEntity) -> RemoteEntity: ...

    def update(self, entity_id: UUID, changes: EntityChanges) -> None: ...

    def delete(self, entity_id: UUID) -> None: ...


@runtime_checkable
class TagStore(Protocol):
    def get_tag(self, name: str) -> Tag | None: ...

    def insert_tag(self, name: str) -> Tag: ...

    def tag_names_for(self, entity_id: UUID) -> frozenset[str]: ...

    def delete_associations(self, entity_id: UUID) -> None: ...

    def insert_associations(self, entity_id: UUID, tag_ids: Iterable[UUID]) -> None: ...


@runtime_checkable
class CatalogStore(EntityStore, TagStore, Protocol):
    """Entity and tag capabilities of one store."""
