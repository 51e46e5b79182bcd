"""Snapshots of remote state and the payloads used to change it."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import TYPE_CHECKING, Final

if TYPE_CHECKING:
    from uuid import UUID

DEFAULT_ASSET_CONTENT_TYPE: Final[str] = "image/jpeg"

_EXTENSIONS: Final[dict[str, str]] = {
    "image/jpeg": ".jpg",
    "image/jpg": ".jpg",
    "image/png": ".png",
    "image/webp": ".webp",
    "image/gif": ".gif",
}


@dataclass(frozen=True, slots=True)
class RemoteEntity:
    """A creator row as last read from the store."""

    id: UUID
    display_name: str
    external_id: str
    external_title: str
    asset_path: str = ""


@dataclass(frozen=True, slots=True)
class NewEntity:
    display_name: str
    external_id: str
    external_title: str
    asset_path: str = ""


@dataclass(frozen=True, slots=True)
class EntityChanges:
    """Sparse field patch; ``None`` means the field is left untouched."""

    display_name: str | None = None
    external_title: str | None = None
    asset_path: str | None = None

    def as_values(self) -> dict[str, str]:
        values: dict[str, str] = {}
        for item in fields(self):
            value = getattr(self, item.name)
            if value is not None:
                values[item.name] = value
        return values

    def __bool__(self) -> bool:
        return bool(self.as_values())


@dataclass(frozen=True, slots=True)
class Tag:
    id: UUID
    name: str


@dataclass(frozen=True, slots=True)
class ChannelMetadata:
    """Display metadata resolved from the external platform."""

    canonical_id: str
    title: str
    avatar_url: str


@dataclass(frozen=True, slots=True)
class Asset:
    content: bytes
    content_type: str = DEFAULT_ASSET_CONTENT_TYPE

    @property
    def extension(self) -> str:
        media_type = self.content_type.split(";", 1)[0].strip().lower()
        return _EXTENSIONS.get(media_type, ".jpg")
