"""SQLAlchemy table metadata for the catalog store."""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import (
    Column,
    DateTime,
    Dialect,
    ForeignKey,
    MetaData,
    String,
    Table,
    TypeDecorator,
    UniqueConstraint,
    Uuid,
)

UUIDColumnType = Uuid[uuid.UUID]


def _utcnow() -> datetime:
    return datetime.now(UTC)


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_name)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_name)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

creator_table = Table(
    "creator",
    metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("display_name", String, nullable=False),
    # always the stable channel id, never an authored handle
    Column("external_id", String, nullable=False),
    Column("external_title", String, nullable=False, default=""),
    Column("asset_path", String, nullable=False, default=""),
    Column("created_at", UTCDateTime, nullable=False, default=_utcnow),
    Column("updated_at", UTCDateTime, nullable=False, default=_utcnow, onupdate=_utcnow),
    UniqueConstraint("external_id"),
)

tag_table = Table(
    "tag",
    metadata,
    Column("id", UUIDColumnType, primary_key=True, default=uuid.uuid4),
    Column("name", String, nullable=False),
    Column("created_at", UTCDateTime, nullable=False, default=_utcnow),
    UniqueConstraint("name"),
)

creator_tag_table = Table(
    "creator_tag",
    metadata,
    Column(
        "creator_id",
        UUIDColumnType,
        ForeignKey("creator.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "tag_id",
        UUIDColumnType,
        ForeignKey("tag.id", ondelete="CASCADE"),
        primary_key=True,
    ),
)
