"""Read access to the remote store's current state."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from uuid import UUID

    from creatorsync.domain.model import RemoteEntity
    from creatorsync.domain.ports import CatalogStore

log = getLogger(__name__)


@dataclass(slots=True)
class RemoteStateReader:
    """Uncached reads; every call reflects the latest committed state."""

    store: CatalogStore

    def lookup_by_external_id(self, external_id: str) -> RemoteEntity | None:
        entity = self.store.get_by_external_id(external_id)
        log.debug("Lookup %s -> %s", external_id, entity.id if entity else None)
        return entity

    def current_tags(self, entity_id: UUID) -> frozenset[str]:
        return frozenset(self.store.tag_names_for(entity_id))
