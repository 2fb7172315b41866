# ruff: noqa: TC003
"""Admin operations on requests.

These deliberately bypass the owner-side status and 24-hour restrictions and
do not re-run the field validators; admin judgment is authoritative. They are
kept apart from the owner operations so the trust boundary stays visible.
"""

from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import TYPE_CHECKING, Any

from hrdesk.exceptions import AppError, ConfirmationRequired
from hrdesk.models.enums import FormType, RequestStatus
from hrdesk.schemas.request import AdminRequestListResponse, AdminRequestResponse, EmployeeIdentity
from hrdesk.services.employee import get_employee_service
from hrdesk.services.lifecycle import ADMIN_DECISIONS, apply_field_patch
from hrdesk.services.request import (
    build_request_response,
    commit,
    fetch_page,
    get_request_or_404,
    join_data,
    request_filters,
    response_fields,
    split_data,
)

if TYPE_CHECKING:
    from sqlalchemy.ext.asyncio import AsyncSession

    from hrdesk.schemas.auth import AuthContext
    from hrdesk.schemas.request import RequestResponse

logger = logging.getLogger(__name__)


async def set_status(
    session: AsyncSession,
    auth: AuthContext,
    request_id: uuid.UUID,
    status: RequestStatus,
    now: datetime,
) -> RequestResponse:
    """Approve or reject a request regardless of its current status or age."""
    if status not in ADMIN_DECISIONS:
        raise AppError(f"Admins may only set {', '.join(sorted(ADMIN_DECISIONS))}", status_code=400)

    request = await get_request_or_404(session, request_id)
    previous = request.status
    request.status = status.value
    request.decided_at = now
    request.decided_by = auth.user_id
    await commit(session)

    await session.refresh(request)
    logger.info("Request %s moved %s -> %s by admin %s", request.id, previous, status, auth.user_id)
    return build_request_response(request)


async def force_delete(
    session: AsyncSession,
    auth: AuthContext,
    request_id: uuid.UUID,
    confirm: bool = False,
) -> None:
    """Permanently remove a request in any state. Requires ``confirm``."""
    request = await get_request_or_404(session, request_id)
    if not confirm:
        raise ConfirmationRequired("permanently delete this request")

    await session.delete(request)
    await commit(session)
    logger.info("Request %s force-deleted by admin %s", request_id, auth.user_id)


async def patch_field(
    session: AsyncSession,
    auth: AuthContext,
    request_id: uuid.UUID,
    field: str,
    value: Any,
    now: datetime,
) -> RequestResponse:
    """Overwrite a single details field without re-running the policy validators."""
    request = await get_request_or_404(session, request_id)
    details, admin_comment = split_data(request.data)
    patched = apply_field_patch(FormType(request.form_type), details, field, value)
    request.data = join_data(patched, admin_comment)
    request.updated_at = now
    await commit(session)

    await session.refresh(request)
    logger.info("Request %s field %r patched by admin %s", request.id, field, auth.user_id)
    return build_request_response(request)


async def set_comment(
    session: AsyncSession,
    auth: AuthContext,
    request_id: uuid.UUID,
    comment: str | None,
    now: datetime,
) -> RequestResponse:
    """Set, replace or clear the admin remark. The details are left untouched."""
    request = await get_request_or_404(session, request_id)
    details, _ = split_data(request.data)
    if comment is not None:
        comment = comment.strip() or None
    request.data = join_data(details, comment)
    request.updated_at = now
    await commit(session)

    await session.refresh(request)
    logger.info("Admin remark on request %s updated by %s", request.id, auth.user_id)
    return build_request_response(request)


async def list_all_requests(
    session: AsyncSession,
    status_filter: RequestStatus | None = None,
    form_type: FormType | None = None,
    employee_id: uuid.UUID | None = None,
    offset: int = 0,
    limit: int = 50,
) -> AdminRequestListResponse:
    """List every request, newest first, joined with the filer's display identity."""
    filters = request_filters(status_filter, form_type, employee_id)
    requests, total = await fetch_page(session, filters, offset, limit)

    directory = get_employee_service()
    identities: dict[uuid.UUID, EmployeeIdentity] = {}
    for request in requests:
        if request.employee_id in identities:
            continue
        profile = await directory.get_employee(request.employee_id)
        identities[request.employee_id] = (
            EmployeeIdentity(name=profile.name, department=profile.department, position=profile.position)
            if profile is not None
            else EmployeeIdentity()
        )

    return AdminRequestListResponse(
        items=[
            AdminRequestResponse(**response_fields(r), employee=identities[r.employee_id]) for r in requests
        ],
        total=total,
    )
