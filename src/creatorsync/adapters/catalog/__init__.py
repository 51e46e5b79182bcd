"""Filesystem catalog adapter: members files and generated indexes."""

from __future__ import annotations

from .index import IndexReport, rebuild_catalog_indexes, rebuild_master_index
from .loader import (
    CatalogError,
    CatalogLoadError,
    CatalogLoadResult,
    load_catalog,
    load_group_file,
    read_members_file,
)
from .schema import MembersFile

__all__ = [
    "CatalogError",
    "CatalogLoadError",
    "CatalogLoadResult",
    "IndexReport",
    "MembersFile",
    "load_catalog",
    "load_group_file",
    "read_members_file",
    "rebuild_catalog_indexes",
    "rebuild_master_index",
]
