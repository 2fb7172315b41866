# ruff: noqa: TC003
from __future__ import annotations

import uuid

from pydantic import BaseModel, Field

from hrdesk.models.enums import CivilStatus, EmploymentType, Gender


class UpsertEmployeeRequest(BaseModel):
    """Request body for upserting an employee profile in the directory."""

    name: str = Field(min_length=1, max_length=200)
    employment_type: EmploymentType = EmploymentType.REGULAR
    department: str = Field(min_length=1, max_length=100)
    team: str | None = Field(default=None, max_length=100)
    position: str = Field(min_length=1, max_length=100)
    gender: Gender
    civil_status: CivilStatus = CivilStatus.SINGLE
    solo_parent: bool = False


class EmployeeResponse(BaseModel):
    """Response schema for an employee profile."""

    id: uuid.UUID
    name: str
    employment_type: EmploymentType
    department: str
    team: str | None
    position: str
    gender: Gender
    civil_status: CivilStatus
    solo_parent: bool


class EmployeeListResponse(BaseModel):
    """List of employee profiles."""

    items: list[EmployeeResponse]
    total: int
