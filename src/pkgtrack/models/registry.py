"""Pydantic models for registry entities and API payloads."""

from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field

from pkgtrack.models.enums import PackageState

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

# Ids and epoch timestamps as accepted from callers; wider values cannot be stored
Int64 = Annotated[int, Field(ge=INT64_MIN, le=INT64_MAX)]


class Packager(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    tg_uid: int
    alias: str


class Package(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class Assignment(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    pkg: int
    # None for an unassign entry
    assignee: int | None = None
    assigned_at: int


class Mark(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    marked_by: int | None = None
    marked_at: int
    msg_id: int
    comment: str | None = None
    for_pkg: int | None = None


class PackageRelation(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    status: str
    required: int
    request: int


class PackageStatus(BaseModel):
    """Derived view of a package: who holds it and what blocks it."""

    package: Package
    assignee: Packager | None = None
    state: PackageState
    ready: bool
    blocked_by: list[int] = Field(default_factory=list)
    transitive_blockers: list[int] = Field(default_factory=list)
    cycle: list[int] | None = None


class WorkListUnit(BaseModel):
    """A package that currently has an assignee."""

    model_config = ConfigDict(populate_by_name=True)

    pkgname: str
    packager: str
    tg_uid: int = Field(alias="tgUid")
    assigned_at: int = Field(alias="assignedAt")


class MarkListUnit(BaseModel):
    """A mark joined with the package name and the marker alias."""

    model_config = ConfigDict(populate_by_name=True)

    name: str
    pkgname: str | None = None
    marked_by: str | None = Field(None, alias="markedBy")
    marked_at: int = Field(alias="markedAt")
    msg_id: int = Field(alias="msgId")
    comment: str | None = None


class PkgListResponse(BaseModel):
    """Body of ``GET /pkg``."""

    model_config = ConfigDict(populate_by_name=True)

    work_list: list[WorkListUnit] = Field(alias="workList")
    mark_list: list[MarkListUnit] = Field(alias="markList")


# -- Request bodies --------------------------------------------------------


class PackagerUpsert(BaseModel):
    model_config = ConfigDict(extra="forbid")

    alias: str = Field(..., min_length=1)


class PackageUpsert(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)


class AssignRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    packager_id: Int64
    now: Int64 | None = None


class MarkCreate(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(..., min_length=1)
    msg_id: Int64
    for_pkg: Int64 | None = None
    marked_by: Int64 | None = None
    comment: str | None = None
    now: Int64 | None = None


class RelationUpsert(BaseModel):
    model_config = ConfigDict(extra="forbid")

    status: str = Field(..., min_length=1)
