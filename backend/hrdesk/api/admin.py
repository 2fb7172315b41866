# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid

from fastapi import APIRouter, Depends, Query, status

from hrdesk.api.deps import AdminDep, NowDep, require_admin
from hrdesk.db import SessionDep
from hrdesk.models.enums import FormType, RequestStatus
from hrdesk.schemas.request import (
    AdminRequestListResponse,
    CommentPayload,
    FieldPatchPayload,
    RequestResponse,
    StatusPayload,
)
from hrdesk.services import admin as admin_service

admin_router = APIRouter(
    prefix="/admin/requests",
    tags=["admin"],
    dependencies=[Depends(require_admin)],
)


@admin_router.get("", response_model=AdminRequestListResponse)
async def list_all_requests(
    session: SessionDep,
    status_filter: RequestStatus | None = Query(default=None, alias="status"),
    form_type: FormType | None = Query(default=None),
    employee_id: uuid.UUID | None = Query(default=None),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=100),
) -> AdminRequestListResponse:
    """List every employee's requests, newest first."""
    return await admin_service.list_all_requests(session, status_filter, form_type, employee_id, offset, limit)


@admin_router.post("/{request_id}/status", response_model=RequestResponse)
async def set_status(
    request_id: uuid.UUID,
    payload: StatusPayload,
    session: SessionDep,
    auth: AdminDep,
    now: NowDep,
) -> RequestResponse:
    """Approve or reject a request."""
    return await admin_service.set_status(session, auth, request_id, payload.status, now)


@admin_router.patch("/{request_id}/fields", response_model=RequestResponse)
async def patch_field(
    request_id: uuid.UUID,
    payload: FieldPatchPayload,
    session: SessionDep,
    auth: AdminDep,
    now: NowDep,
) -> RequestResponse:
    """Correct a single field of a request's details."""
    return await admin_service.patch_field(session, auth, request_id, payload.field, payload.value, now)


@admin_router.put("/{request_id}/comment", response_model=RequestResponse)
async def set_comment(
    request_id: uuid.UUID,
    payload: CommentPayload,
    session: SessionDep,
    auth: AdminDep,
    now: NowDep,
) -> RequestResponse:
    """Set, replace or clear the admin remark on a request."""
    return await admin_service.set_comment(session, auth, request_id, payload.comment, now)


@admin_router.delete("/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
async def force_delete(
    request_id: uuid.UUID,
    session: SessionDep,
    auth: AdminDep,
    confirm: bool = Query(default=False),
) -> None:
    """Permanently delete a request in any state."""
    await admin_service.force_delete(session, auth, request_id, confirm=confirm)
