"""Pydantic models for the catalog's JSON files."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, field_validator

from creatorsync.domain.model import EXTERNAL_ID_PATTERN


def _none_to_blank(value: object) -> object:
    if value is None:
        return ""
    if isinstance(value, str):
        return value.strip()
    return value


class CatalogBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class GroupMetadataPayload(CatalogBaseModel):
    job: str = Field(min_length=1)
    group: str = Field(min_length=1)
    options: list[str] | None = None
    source: str | None = None

    _strip_names = field_validator("job", "group", mode="before")(_none_to_blank)


class MemberPayload(CatalogBaseModel):
    name: str = Field(min_length=1)
    youtube_id: str = Field(default="", pattern=EXTERNAL_ID_PATTERN)
    options: list[str] | None = None

    _strip_name = field_validator("name", mode="before")(_none_to_blank)
    _blank_youtube_id = field_validator("youtube_id", mode="before")(_none_to_blank)


class MembersFile(CatalogBaseModel):
    """``<category>/<group>/members.json``."""

    metadata: GroupMetadataPayload
    members: list[MemberPayload] = Field(default_factory=list[MemberPayload])


class JobEntry(CatalogBaseModel):
    name: str


class JobsIndex(CatalogBaseModel):
    metadata: dict[str, object] = Field(default_factory=dict[str, object])
    jobs: list[JobEntry] = Field(default_factory=list[JobEntry])


class GroupEntry(CatalogBaseModel):
    name: str
    source: str | None = None


class GroupsIndex(CatalogBaseModel):
    metadata: dict[str, object] = Field(default_factory=dict[str, object])
    groups: list[GroupEntry] = Field(default_factory=list[GroupEntry])


class MasterMember(CatalogBaseModel):
    job: str
    group: str
    name: str
    youtube_id: str
    options: list[str] | None = None


class MasterIndex(CatalogBaseModel):
    members: list[MasterMember] = Field(default_factory=list[MasterMember])
