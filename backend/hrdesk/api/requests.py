# ruff: noqa: B008, TC001, TC003
from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Body, Query, status

from hrdesk.api.deps import AuthDep, NowDep
from hrdesk.db import SessionDep
from hrdesk.models.enums import FormType, RequestStatus
from hrdesk.schemas.balance import BalanceSummaryResponse
from hrdesk.schemas.forms import AnyDraft
from hrdesk.schemas.request import OwnRequestListResponse, RequestResponse
from hrdesk.services import request as request_service

requests_router = APIRouter(prefix="/requests", tags=["requests"])


@requests_router.post("", response_model=RequestResponse, status_code=status.HTTP_201_CREATED)
async def create_request(
    draft: Annotated[AnyDraft, Body(discriminator="form_type")],
    session: SessionDep,
    auth: AuthDep,
    now: NowDep,
) -> RequestResponse:
    """File a new request of any form type."""
    return await request_service.create_request(session, auth, draft, now)


@requests_router.get("", response_model=OwnRequestListResponse)
async def list_my_requests(
    session: SessionDep,
    auth: AuthDep,
    now: NowDep,
    status_filter: RequestStatus | None = Query(default=None, alias="status"),
    form_type: FormType | None = Query(default=None),
    offset: int = Query(default=0, ge=0),
    limit: int = Query(default=50, ge=1, le=100),
) -> OwnRequestListResponse:
    """List the caller's own requests, newest first."""
    return await request_service.list_my_requests(session, auth, now, status_filter, form_type, offset, limit)


@requests_router.get("/balances", response_model=BalanceSummaryResponse)
async def get_balances(
    session: SessionDep,
    auth: AuthDep,
    exclude_request_id: uuid.UUID | None = Query(default=None),
) -> BalanceSummaryResponse:
    """Leave types the caller may file and the credits left on each tracked type."""
    return await request_service.get_balance_summary(session, auth, exclude_request_id)


@requests_router.get("/{request_id}", response_model=RequestResponse)
async def get_request(
    request_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
) -> RequestResponse:
    """Get a single request."""
    return await request_service.get_request(session, auth, request_id)


@requests_router.put("/{request_id}", response_model=RequestResponse)
async def update_request(
    request_id: uuid.UUID,
    draft: Annotated[AnyDraft, Body(discriminator="form_type")],
    session: SessionDep,
    auth: AuthDep,
    now: NowDep,
) -> RequestResponse:
    """Edit the caller's own pending request within 24 hours of filing."""
    return await request_service.update_request(session, auth, request_id, draft, now)


@requests_router.delete("/{request_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_request(
    request_id: uuid.UUID,
    session: SessionDep,
    auth: AuthDep,
    now: NowDep,
    confirm: bool = Query(default=False),
) -> None:
    """Delete the caller's own pending request within 24 hours of filing."""
    await request_service.delete_request(session, auth, request_id, now, confirm=confirm)
