# ruff: noqa: TC001, TC003
from __future__ import annotations

import uuid
from datetime import datetime
from typing import Any, Literal

from pydantic import BaseModel, Field

from hrdesk.models.enums import FormType, RequestStatus
from hrdesk.schemas.forms import RequestDetails

# ---------------------------------------------------------------------------
# Admin payloads
# ---------------------------------------------------------------------------


class StatusPayload(BaseModel):
    """Request body for an admin status decision."""

    status: Literal[RequestStatus.APPROVED, RequestStatus.REJECTED]


class FieldPatchPayload(BaseModel):
    """Request body for overwriting one field of a request's details."""

    field: str = Field(min_length=1, max_length=100)
    value: Any = None


class CommentPayload(BaseModel):
    """Request body for setting or clearing the admin remark."""

    comment: str | None = Field(default=None, max_length=2000)


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class RequestResponse(BaseModel):
    """Response schema for a single HR request."""

    id: uuid.UUID
    employee_id: uuid.UUID
    form_type: FormType
    status: RequestStatus
    details: RequestDetails
    admin_comment: str | None
    created_at: datetime
    updated_at: datetime | None
    decided_at: datetime | None
    decided_by: uuid.UUID | None


class OwnRequestResponse(RequestResponse):
    """A request as shown to its owner, with the self-service flag."""

    editable: bool


class OwnRequestListResponse(BaseModel):
    """The caller's requests, newest first."""

    items: list[OwnRequestResponse]
    total: int


class EmployeeIdentity(BaseModel):
    """Display identity of the employee who filed a request."""

    name: str | None = None
    department: str | None = None
    position: str | None = None


class AdminRequestResponse(RequestResponse):
    """A request joined with its owner's display identity."""

    employee: EmployeeIdentity


class AdminRequestListResponse(BaseModel):
    """All requests, newest first."""

    items: list[AdminRequestResponse]
    total: int
