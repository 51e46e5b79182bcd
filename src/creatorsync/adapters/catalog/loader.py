"""Read the catalog directory tree into ``CatalogGroup`` values.

Layout: ``<root>/<category>/<group>/members.json``. Hidden directories and the
generated index files are ignored; categories and groups are visited in sorted
order so that runs are reproducible.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from pathlib import Path
from typing import Final

from pydantic import ValidationError

from creatorsync.domain.model import CanonicalRecord, CatalogGroup

from .schema import MembersFile

log = getLogger(__name__)

MEMBERS_FILENAME: Final[str] = "members.json"
JOBS_FILENAME: Final[str] = "jobs.json"
GROUPS_FILENAME: Final[str] = "groups.json"
MASTER_FILENAME: Final[str] = "master.json"
EXCLUDED_ENTRIES: Final[frozenset[str]] = frozenset(
    {"schema.json", "members.template.json", JOBS_FILENAME, MASTER_FILENAME, GROUPS_FILENAME}
)


class CatalogError(RuntimeError):
    """Raised when the catalog tree or one of its files cannot be used."""

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        super().__init__(message)
        self.path = path


@dataclass(frozen=True, slots=True)
class CatalogLoadError:
    path: Path
    message: str


@dataclass(slots=True)
class CatalogLoadResult:
    groups: list[CatalogGroup] = field(default_factory=list[CatalogGroup])
    errors: list[CatalogLoadError] = field(default_factory=list[CatalogLoadError])

    @property
    def ok(self) -> bool:
        return not self.errors

    @property
    def record_count(self) -> int:
        return sum(len(group.records) for group in self.groups)


def _is_visible_dir(path: Path) -> bool:
    return path.is_dir() and not path.name.startswith(".")


def list_category_dirs(root: Path) -> list[Path]:
    if not root.is_dir():
        raise CatalogError(f"Catalog directory not found: {root}", path=root)
    return sorted(
        entry
        for entry in root.iterdir()
        if entry.name not in EXCLUDED_ENTRIES and _is_visible_dir(entry)
    )


def list_group_dirs(category_dir: Path, *, require_members: bool = True) -> list[Path]:
    groups: list[Path] = []
    for entry in sorted(category_dir.iterdir()):
        if entry.name in EXCLUDED_ENTRIES or not _is_visible_dir(entry):
            continue
        if require_members and not (entry / MEMBERS_FILENAME).is_file():
            log.debug("Skipping %s: no %s", entry, MEMBERS_FILENAME)
            continue
        groups.append(entry)
    return groups


def read_members_file(path: Path) -> MembersFile:
    """Parse and validate one members file."""

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise CatalogError(f"Cannot read {path}: {exc}", path=path) from exc
    try:
        return MembersFile.model_validate_json(raw)
    except ValidationError as exc:
        raise CatalogError(f"Invalid catalog file {path}: {exc}", path=path) from exc


def to_catalog_group(members_file: MembersFile) -> CatalogGroup:
    metadata = members_file.metadata
    records = tuple(
        CanonicalRecord(
            category=metadata.job,
            group=metadata.group,
            display_name=member.name,
            external_id=member.youtube_id,
            option_tags=frozenset(
                option.strip() for option in member.options or () if option.strip()
            ),
        )
        for member in members_file.members
    )
    return CatalogGroup(
        category=metadata.job,
        group=metadata.group,
        records=records,
        source=metadata.source,
    )


def load_group_file(path: Path) -> CatalogGroup:
    group = to_catalog_group(read_members_file(path))
    log.info("Loaded %s: %d records", group.label, len(group.records))
    return group


def load_catalog(root: Path) -> CatalogLoadResult:
    """Load every group below ``root``; broken files are collected, not raised."""

    result = CatalogLoadResult()
    categories = list_category_dirs(root)
    log.info("Found %d categories in %s", len(categories), root)
    for category_dir in categories:
        for group_dir in list_group_dirs(category_dir):
            path = group_dir / MEMBERS_FILENAME
            try:
                result.groups.append(load_group_file(path))
            except CatalogError as exc:
                log.error("Skipping group %s/%s: %s", category_dir.name, group_dir.name, exc)
                result.errors.append(CatalogLoadError(path=path, message=str(exc)))
    log.info(
        "Catalog loaded: %d groups, %d records, %d broken files",
        len(result.groups),
        result.record_count,
        len(result.errors),
    )
    return result
