"""SQLAlchemy adapter package for creatorsync."""

from __future__ import annotations

from .mappings import creator_table, creator_tag_table, metadata, tag_table
from .repositories import SqlAlchemyCreatorRepository, SqlAlchemyTagRepository
from .store import SqlAlchemyCatalogStore
from .unit_of_work import (
    SqlAlchemyCatalogUnitOfWork,
    StartupError,
    configured_engine,
    is_started,
    shutdown,
    startup,
)

__all__ = [
    "SqlAlchemyCatalogStore",
    "SqlAlchemyCatalogUnitOfWork",
    "SqlAlchemyCreatorRepository",
    "SqlAlchemyTagRepository",
    "StartupError",
    "configured_engine",
    "creator_tag_table",
    "creator_table",
    "is_started",
    "metadata",
    "shutdown",
    "startup",
    "tag_table",
]
