"""Domain model for the creator catalog."""

from __future__ import annotations

from .catalog import CanonicalRecord, CatalogGroup
from .external_ids import (
    EXTERNAL_ID_PATTERN,
    ExternalIdentifier,
    ExternalIdKind,
    InvalidExternalIdError,
    parse_external_id,
)
from .remote import Asset, ChannelMetadata, EntityChanges, NewEntity, RemoteEntity, Tag

__all__ = [
    "EXTERNAL_ID_PATTERN",
    "Asset",
    "CanonicalRecord",
    "CatalogGroup",
    "ChannelMetadata",
    "EntityChanges",
    "ExternalIdKind",
    "ExternalIdentifier",
    "InvalidExternalIdError",
    "NewEntity",
    "RemoteEntity",
    "Tag",
    "parse_external_id",
]
