"""Tag convergence for a single entity.

The expected tag set is recomputed from the record on every run. When it
differs from the stored set, all associations are dropped and rebuilt; there
is a short window with no associations, which a later run repairs should the
rebuild fail halfway.
"""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from creatorsync.domain.errors import (
    DuplicateTagError,
    StoreReadError,
    StoreWriteError,
    TagSyncError,
)

if TYPE_CHECKING:
    from collections.abc import Iterable
    from uuid import UUID

    from creatorsync.domain.model import CanonicalRecord
    from creatorsync.domain.ports import TagStore

    from .reader import RemoteStateReader

log = getLogger(__name__)


def desired_tag_names(record: CanonicalRecord) -> frozenset[str]:
    """Tags an entity must carry: category, group and its option tags."""

    names = {record.category.strip(), record.group.strip()}
    names.update(option for option in record.option_tags if option.strip())
    names.discard("")
    return frozenset(names)


@dataclass(slots=True)
class TagSynchronizer:
    store: TagStore
    reader: RemoteStateReader

    def ensure_tags(self, names: Iterable[str]) -> dict[str, UUID]:
        """Get or create every tag in ``names`` and return their keys."""

        keys: dict[str, UUID] = {}
        for name in sorted(set(names)):
            keys[name] = self._get_or_create(name)
        return keys

    def replace_associations(self, entity_id: UUID, desired: Iterable[str]) -> bool:
        """Converge the entity's tags on ``desired``; return whether anything was written."""

        desired_set = frozenset(desired)
        current = self.reader.current_tags(entity_id)
        if current == desired_set:
            log.debug("Tags of %s already match", entity_id)
            return False

        log.info(
            "Updating tags of %s: [%s] -> [%s]",
            entity_id,
            ", ".join(sorted(current)),
            ", ".join(sorted(desired_set)),
        )
        keys = self.ensure_tags(desired_set)
        try:
            self.store.delete_associations(entity_id)
        except StoreWriteError as exc:
            raise TagSyncError(f"Failed to delete tags of {entity_id}: {exc}") from exc
        if keys:
            try:
                self.store.insert_associations(entity_id, keys.values())
            except StoreWriteError as exc:
                raise TagSyncError(f"Failed to associate tags with {entity_id}: {exc}") from exc
        return True

    def _get_or_create(self, name: str) -> UUID:
        try:
            existing = self.store.get_tag(name)
            if existing is not None:
                return existing.id
            try:
                return self.store.insert_tag(name).id
            except DuplicateTagError:
                log.info("Tag %r was created concurrently; re-reading", name)
            raced = self.store.get_tag(name)
        except (StoreReadError, StoreWriteError) as exc:
            raise TagSyncError(f"Failed to ensure tag {name!r}: {exc}") from exc
        if raced is None:
            raise TagSyncError(f"Tag {name!r} conflicted on insert but cannot be read back")
        return raced.id
