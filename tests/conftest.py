from __future__ import annotations

import os
from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session, sessionmaker

from creatorsync.adapters.sqlalchemy import SqlAlchemyCatalogStore
from creatorsync.adapters.sqlalchemy.migrations import upgrade_head
from creatorsync.adapters.sqlalchemy.unit_of_work import shutdown, startup
from tests.helpers.catalog import FakeBlobStorage, FakeCatalogStore, FakeFetcher

os.environ.setdefault("DATABASE_URI", "sqlite+pysqlite:///:memory:")

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def sqlite_engine() -> Iterator[Engine]:
    engine = create_engine("sqlite+pysqlite:///:memory:", future=True)
    upgrade_head(engine=engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def sqlite_session(sqlite_engine: Engine) -> Iterator[Session]:
    session_factory = sessionmaker(bind=sqlite_engine, future=True)
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def sqlite_store(sqlite_engine: Engine) -> Iterator[SqlAlchemyCatalogStore]:
    startup(engine=sqlite_engine, force=True)
    try:
        yield SqlAlchemyCatalogStore()
    finally:
        shutdown()


@pytest.fixture
def fake_store() -> FakeCatalogStore:
    return FakeCatalogStore()


@pytest.fixture
def fake_fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def fake_blobs() -> FakeBlobStorage:
    return FakeBlobStorage()
