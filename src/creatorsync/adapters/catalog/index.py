"""Regenerate the catalog's index files from the members files."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING

from pydantic import ValidationError

from .loader import (
    GROUPS_FILENAME,
    JOBS_FILENAME,
    MASTER_FILENAME,
    MEMBERS_FILENAME,
    CatalogError,
    list_category_dirs,
    list_group_dirs,
    read_members_file,
)
from .schema import (
    GroupEntry,
    GroupsIndex,
    JobEntry,
    JobsIndex,
    MasterIndex,
    MasterMember,
    MembersFile,
)

if TYPE_CHECKING:
    from pathlib import Path

    from pydantic import BaseModel

log = getLogger(__name__)


@dataclass(slots=True)
class IndexReport:
    written: list[Path] = field(default_factory=list["Path"])
    warnings: list[str] = field(default_factory=list[str])
    member_count: int = 0

    def warn(self, message: str) -> None:
        log.warning(message)
        self.warnings.append(message)


def write_json(path: Path, model: BaseModel, *, exclude_none: bool = False) -> None:
    """Write ``model`` as two-space indented JSON with a trailing newline."""

    payload = model.model_dump(mode="json", exclude_none=exclude_none)
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    log.info("Wrote %s", path)


def _read_existing_groups(path: Path, report: IndexReport) -> GroupsIndex | None:
    if not path.is_file():
        return None
    try:
        return GroupsIndex.model_validate_json(path.read_text(encoding="utf-8"))
    except (OSError, ValidationError) as exc:
        report.warn(f"Ignoring unreadable {path}: {exc}")
        return None


def build_jobs_index(categories: list[Path]) -> JobsIndex:
    return JobsIndex(jobs=[JobEntry(name=category.name) for category in categories])


def build_groups_index(category_dir: Path, report: IndexReport) -> GroupsIndex:
    """Describe every group of a category.

    Entries of an existing ``groups.json`` whose group has no members file yet
    are kept after the generated ones.
    """

    existing = _read_existing_groups(category_dir / GROUPS_FILENAME, report)
    existing_by_name = {group.name: group for group in existing.groups} if existing else {}

    groups: list[GroupEntry] = []
    seen: set[str] = set()
    for group_dir in list_group_dirs(category_dir):
        try:
            members_file = read_members_file(group_dir / MEMBERS_FILENAME)
        except CatalogError as exc:
            report.warn(f"Using directory name for {category_dir.name}/{group_dir.name}: {exc}")
            groups.append(GroupEntry(name=group_dir.name))
            seen.add(group_dir.name)
            continue

        name = members_file.metadata.group or group_dir.name
        previous = existing_by_name.get(name)
        source = members_file.metadata.source or (previous.source if previous else None)
        groups.append(GroupEntry(name=name, source=source))
        seen.add(name)

    for group in existing.groups if existing else ():
        if group.name not in seen:
            log.info("Preserved group %s/%s", category_dir.name, group.name)
            groups.append(group)

    return GroupsIndex(groups=groups)


def rebuild_catalog_indexes(root: Path) -> IndexReport:
    """Rewrite ``jobs.json`` and every category's ``groups.json``."""

    report = IndexReport()
    categories = list_category_dirs(root)
    if not categories:
        report.warn(f"No categories found in {root}; nothing to update")
        return report

    jobs_path = root / JOBS_FILENAME
    write_json(jobs_path, build_jobs_index(categories))
    report.written.append(jobs_path)

    for category_dir in categories:
        if not list_group_dirs(category_dir, require_members=False):
            report.warn(f"No groups found in {category_dir.name}; skipping")
            continue
        groups_path = category_dir / GROUPS_FILENAME
        write_json(groups_path, build_groups_index(category_dir, report))
        report.written.append(groups_path)
    return report


def _master_members(members_file: MembersFile) -> list[MasterMember]:
    metadata = members_file.metadata
    return [
        MasterMember(
            job=metadata.job,
            group=metadata.group,
            name=member.name,
            youtube_id=member.youtube_id,
            options=member.options or None,
        )
        for member in members_file.members
    ]


def build_master_index(root: Path, report: IndexReport) -> MasterIndex:
    members: list[MasterMember] = []
    for category_dir in list_category_dirs(root):
        for group_dir in list_group_dirs(category_dir):
            try:
                members_file = read_members_file(group_dir / MEMBERS_FILENAME)
            except CatalogError as exc:
                report.warn(f"Skipping {category_dir.name}/{group_dir.name}: {exc}")
                continue
            members.extend(_master_members(members_file))
    return MasterIndex(members=members)


def rebuild_master_index(root: Path) -> IndexReport:
    """Rewrite ``master.json``, the flat list of all members of all groups."""

    report = IndexReport()
    master = build_master_index(root, report)
    master_path = root / MASTER_FILENAME
    # options are omitted for members without any
    write_json(master_path, master, exclude_none=True)
    report.written.append(master_path)
    report.member_count = len(master.members)
    log.info("master index holds %d members", report.member_count)
    return report
