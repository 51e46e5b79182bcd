"""Unit-of-work abstractions for coordinating repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable
    from types import TracebackType
    from uuid import UUID

    from creatorsync.domain.model import EntityChanges, NewEntity, RemoteEntity, Tag


@runtime_checkable
class RepositoryCollection(Protocol):
    """Marker protocol for groups of repositories managed together."""


@runtime_checkable
class UnitOfWork[TRepositories: RepositoryCollection](Protocol):
    """Generic unit-of-work boundary around a repository collection."""

    @property
    def repositories(self) -> TRepositories: ...

    def __enter__(self) -> UnitOfWork[TRepositories]: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...


@runtime_checkable
class CreatorRepository(Protocol):
    def get(self, entity_id: UUID) -> RemoteEntity | None: ...

    def get_by_external_id(self, external_id: str) -> RemoteEntity | None: ...

    def add(self, entity: NewEntity) -> RemoteEntity: ...

    def update(self, entity_id: UUID, changes: EntityChanges) -> int: ...

    def remove(self, entity_id: UUID) -> int: ...


@runtime_checkable
class TagRepository(Protocol):
    def get_by_name(self, name: str) -> Tag | None: ...

    def add(self, name: str) -> Tag: ...

    def names_for(self, entity_id: UUID) -> frozenset[str]: ...

    def remove_associations(self, entity_id: UUID) -> int: ...

    def add_associations(self, entity_id: UUID, tag_ids: Iterable[UUID]) -> None: ...


@dataclass(slots=True)
class CatalogRepositories(RepositoryCollection):
    """Repositories backing the catalog store."""

    creators: CreatorRepository
    tags: TagRepository


type CatalogUnitOfWork = UnitOfWork[CatalogRepositories]
