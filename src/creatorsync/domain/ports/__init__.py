"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import ChannelMetadataFetcher
from .persistence import CatalogStore, EntityStore, TagStore
from .storage import BlobStorage
from .unit_of_work import (
    CatalogRepositories,
    CatalogUnitOfWork,
    CreatorRepository,
    RepositoryCollection,
    TagRepository,
    UnitOfWork,
)

__all__ = [
    "BlobStorage",
    "CatalogRepositories",
    "CatalogStore",
    "CatalogUnitOfWork",
    "ChannelMetadataFetcher",
    "CreatorRepository",
    "EntityStore",
    "RepositoryCollection",
    "TagRepository",
    "TagStore",
    "UnitOfWork",
]
