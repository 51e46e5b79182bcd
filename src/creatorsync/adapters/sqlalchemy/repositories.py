"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING, Any, cast

from sqlalchemy import delete, insert, select, update

from creatorsync.adapters.sqlalchemy.mappings import creator_table, creator_tag_table, tag_table
from creatorsync.domain.model import RemoteEntity, Tag

if TYPE_CHECKING:
    from collections.abc import Iterable

    from sqlalchemy import CursorResult, Executable, Row
    from sqlalchemy.orm import Session

    from creatorsync.domain.model import EntityChanges, NewEntity


def _to_entity(row: Row[Any]) -> RemoteEntity:
    return RemoteEntity(
        id=row.id,
        display_name=row.display_name,
        external_id=row.external_id,
        external_title=row.external_title,
        asset_path=row.asset_path,
    )


def _rowcount(session: Session, statement: Executable) -> int:
    result = cast("CursorResult[Any]", session.execute(statement))
    return result.rowcount


class SqlAlchemyCreatorRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get(self, entity_id: uuid.UUID) -> RemoteEntity | None:
        stmt = select(creator_table).where(creator_table.c.id == entity_id)
        row = self.session.execute(stmt).one_or_none()
        return _to_entity(row) if row is not None else None

    def get_by_external_id(self, external_id: str) -> RemoteEntity | None:
        stmt = select(creator_table).where(creator_table.c.external_id == external_id)
        row = self.session.execute(stmt).one_or_none()
        return _to_entity(row) if row is not None else None

    def add(self, entity: NewEntity) -> RemoteEntity:
        entity_id = uuid.uuid4()
        self.session.execute(
            insert(creator_table).values(
                id=entity_id,
                display_name=entity.display_name,
                external_id=entity.external_id,
                external_title=entity.external_title,
                asset_path=entity.asset_path,
            )
        )
        return RemoteEntity(
            id=entity_id,
            display_name=entity.display_name,
            external_id=entity.external_id,
            external_title=entity.external_title,
            asset_path=entity.asset_path,
        )

    def update(self, entity_id: uuid.UUID, changes: EntityChanges) -> int:
        values = changes.as_values()
        if not values:
            return 0
        stmt = update(creator_table).where(creator_table.c.id == entity_id).values(**values)
        return _rowcount(self.session, stmt)

    def remove(self, entity_id: uuid.UUID) -> int:
        self.session.execute(
            delete(creator_tag_table).where(creator_tag_table.c.creator_id == entity_id)
        )
        return _rowcount(self.session, delete(creator_table).where(creator_table.c.id == entity_id))


class SqlAlchemyTagRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def get_by_name(self, name: str) -> Tag | None:
        stmt = select(tag_table.c.id, tag_table.c.name).where(tag_table.c.name == name)
        row = self.session.execute(stmt).one_or_none()
        return Tag(id=row.id, name=row.name) if row is not None else None

    def add(self, name: str) -> Tag:
        tag_id = uuid.uuid4()
        self.session.execute(insert(tag_table).values(id=tag_id, name=name))
        return Tag(id=tag_id, name=name)

    def names_for(self, entity_id: uuid.UUID) -> frozenset[str]:
        stmt = (
            select(tag_table.c.name)
            .join_from(creator_tag_table, tag_table, creator_tag_table.c.tag_id == tag_table.c.id)
            .where(creator_tag_table.c.creator_id == entity_id)
        )
        return frozenset(self.session.scalars(stmt))

    def remove_associations(self, entity_id: uuid.UUID) -> int:
        stmt = delete(creator_tag_table).where(creator_tag_table.c.creator_id == entity_id)
        return _rowcount(self.session, stmt)

    def add_associations(self, entity_id: uuid.UUID, tag_ids: Iterable[uuid.UUID]) -> None:
        rows = [{"creator_id": entity_id, "tag_id": tag_id} for tag_id in tag_ids]
        if rows:
            self.session.execute(insert(creator_tag_table), rows)


if TYPE_CHECKING:
    from creatorsync.domain.ports import CreatorRepository, TagRepository

    _session_stub = cast("Session", object())
    _creator_repo: CreatorRepository = SqlAlchemyCreatorRepository(_session_stub)
    _tag_repo: TagRepository = SqlAlchemyTagRepository(_session_stub)
