"""Locally authored catalog records."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class CanonicalRecord:
    """One validated, flattened creator entry of the catalog."""

    category: str
    group: str
    display_name: str
    external_id: str
    option_tags: frozenset[str] = field(default_factory=frozenset[str])

    @property
    def is_linkable(self) -> bool:
        """Whether the record points at an external account at all."""

        return bool(self.external_id.strip())


@dataclass(frozen=True, slots=True)
class CatalogGroup:
    """Ordered records sharing one ``(category, group)`` pair."""

    category: str
    group: str
    records: tuple[CanonicalRecord, ...] = ()
    source: str | None = None

    @property
    def label(self) -> str:
        return f"{self.category} / {self.group}"
