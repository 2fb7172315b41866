# ruff: noqa: TC003
from __future__ import annotations

import asyncio
import logging
import uuid
import weakref
from contextlib import asynccontextmanager
from datetime import date, datetime
from typing import TYPE_CHECKING, Any
from zoneinfo import ZoneInfo

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import col

from hrdesk.config import get_settings
from hrdesk.exceptions import AppError, ConfirmationRequired, NotFound, PersistenceFailed
from hrdesk.models.base import as_utc
from hrdesk.models.enums import FormType, LeaveType, RequestStatus
from hrdesk.models.request import HRRequest
from hrdesk.schemas.forms import LeaveDraft, details_adapter
from hrdesk.schemas.request import OwnRequestListResponse, OwnRequestResponse, RequestResponse
from hrdesk.services.employee import EmployeeProfile, get_employee_service
from hrdesk.services.ledger import balance_summary, is_balance_tracked
from hrdesk.services.lifecycle import ensure_owner_can_modify, ensure_same_form_type, owner_denial
from hrdesk.services.validation import ValidationContext, validate_draft

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from sqlalchemy.ext.asyncio import AsyncSession

    from hrdesk.schemas.auth import AuthContext
    from hrdesk.schemas.balance import BalanceSummaryResponse
    from hrdesk.schemas.forms import RequestDetails, RequestDraft

logger = logging.getLogger(__name__)

ADMIN_COMMENT_KEY = "admin_comment"

# Serializes balance-checked writes per (employee, leave type) within this process.
# Entries vanish once no holder or waiter references the lock.
_balance_locks: weakref.WeakValueDictionary[tuple[uuid.UUID, LeaveType], asyncio.Lock] = weakref.WeakValueDictionary()


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------


def business_today(now: datetime) -> date:
    """Return the calendar date at ``now`` in the business timezone."""
    return as_utc(now).astimezone(ZoneInfo(get_settings().business_timezone)).date()


def split_data(data: dict[str, Any]) -> tuple[dict[str, Any], str | None]:
    """Separate the admin remark from the validated details stored beside it."""
    details = dict(data)
    admin_comment = details.pop(ADMIN_COMMENT_KEY, None)
    return details, admin_comment


def join_data(details: dict[str, Any], admin_comment: str | None) -> dict[str, Any]:
    data = dict(details)
    if admin_comment is not None:
        data[ADMIN_COMMENT_KEY] = admin_comment
    return data


def response_fields(request: HRRequest) -> dict[str, Any]:
    details, admin_comment = split_data(request.data)
    return {
        "id": request.id,
        "employee_id": request.employee_id,
        "form_type": FormType(request.form_type),
        "status": RequestStatus(request.status),
        "details": details_adapter.validate_python(details),
        "admin_comment": admin_comment,
        "created_at": as_utc(request.created_at),
        "updated_at": as_utc(request.updated_at) if request.updated_at else None,
        "decided_at": as_utc(request.decided_at) if request.decided_at else None,
        "decided_by": request.decided_by,
    }


def build_request_response(request: HRRequest) -> RequestResponse:
    """Map a request model to its response schema."""
    return RequestResponse(**response_fields(request))


def _build_own_response(request: HRRequest, now: datetime) -> OwnRequestResponse:
    editable = owner_denial(request, request.employee_id, now) is None
    return OwnRequestResponse(**response_fields(request), editable=editable)


async def get_request_or_404(session: AsyncSession, request_id: uuid.UUID) -> HRRequest:
    """Fetch a request by ID. Raises NotFound if it does not exist."""
    try:
        result = await session.execute(select(HRRequest).where(col(HRRequest.id) == request_id))
    except SQLAlchemyError as exc:
        logger.exception("Failed to read request %s", request_id)
        raise PersistenceFailed from exc
    request = result.scalar_one_or_none()
    if request is None:
        raise NotFound("Request")
    return request


async def commit(session: AsyncSession) -> None:
    """Commit the unit of work, surfacing store failures as PersistenceFailed without retrying."""
    try:
        await session.commit()
    except SQLAlchemyError as exc:
        await session.rollback()
        logger.exception("Record store rejected the write")
        raise PersistenceFailed from exc


async def _load_profile(employee_id: uuid.UUID) -> EmployeeProfile:
    profile = await get_employee_service().get_employee(employee_id)
    if profile is None:
        raise NotFound("Employee profile")
    return profile


async def _fetch_leave_requests(session: AsyncSession, employee_id: uuid.UUID) -> list[HRRequest]:
    """Snapshot of the employee's leave requests, the ledger's only input."""
    try:
        result = await session.execute(
            select(HRRequest).where(
                col(HRRequest.employee_id) == employee_id,
                col(HRRequest.form_type) == FormType.LEAVE.value,
            )
        )
    except SQLAlchemyError as exc:
        logger.exception("Failed to read leave requests for %s", employee_id)
        raise PersistenceFailed from exc
    return list(result.scalars().all())


def _balance_lock(employee_id: uuid.UUID, leave_type: LeaveType) -> asyncio.Lock:
    key = (employee_id, leave_type)
    lock = _balance_locks.get(key)
    if lock is None:
        lock = asyncio.Lock()
        _balance_locks[key] = lock
    return lock


@asynccontextmanager
async def _balance_guard(employee_id: uuid.UUID, draft: RequestDraft) -> AsyncIterator[None]:
    """Hold the (employee, leave type) lock across check and write for balance-tracked leave."""
    if isinstance(draft, LeaveDraft) and draft.leave_type is not None and is_balance_tracked(draft.leave_type):
        lock = _balance_lock(employee_id, draft.leave_type)
        async with lock:
            yield
    else:
        yield


async def _validate(
    session: AsyncSession,
    draft: RequestDraft,
    profile: EmployeeProfile,
    now: datetime,
    exclude_request_id: uuid.UUID | None = None,
) -> RequestDetails:
    existing = await _fetch_leave_requests(session, profile.id) if isinstance(draft, LeaveDraft) else []
    ctx = ValidationContext(
        today=business_today(now),
        profile=profile,
        existing=existing,
        exclude_request_id=exclude_request_id,
    )
    return validate_draft(draft, ctx)


# ---------------------------------------------------------------------------
# Owner operations
# ---------------------------------------------------------------------------


async def create_request(
    session: AsyncSession,
    auth: AuthContext,
    draft: RequestDraft,
    now: datetime,
) -> RequestResponse:
    """File a new request for the caller.

    1. Load the caller's profile.
    2. Validate the draft (leave drafts against a fresh ledger snapshot).
    3. Persist as PENDING with ``created_at = now``.
    """
    profile = await _load_profile(auth.user_id)

    async with _balance_guard(auth.user_id, draft):
        details = await _validate(session, draft, profile, now)
        request = HRRequest(
            employee_id=auth.user_id,
            form_type=details.form_type,
            status=RequestStatus.PENDING.value,
            data=details.model_dump(mode="json"),
            created_at=now,
        )
        session.add(request)
        await commit(session)

    await session.refresh(request)
    logger.info("Request %s (%s) filed by %s", request.id, request.form_type, auth.user_id)
    return build_request_response(request)


async def update_request(
    session: AsyncSession,
    auth: AuthContext,
    request_id: uuid.UUID,
    draft: RequestDraft,
    now: datetime,
) -> RequestResponse:
    """Replace the details of the caller's own PENDING request inside the edit window.

    The id, owner, status and ``created_at`` are kept; the draft is validated
    from scratch with the request itself left out of the leave ledger. An
    attachment already on file counts for the edited leave.
    """
    request = await get_request_or_404(session, request_id)
    ensure_owner_can_modify(request, auth.user_id, now)
    ensure_same_form_type(request, draft)
    profile = await _load_profile(auth.user_id)

    if isinstance(draft, LeaveDraft) and not draft.has_attachment and request.data.get("has_attachment"):
        draft = draft.model_copy(update={"has_attachment": True})

    async with _balance_guard(auth.user_id, draft):
        details = await _validate(session, draft, profile, now, exclude_request_id=request.id)
        _, admin_comment = split_data(request.data)
        request.data = join_data(details.model_dump(mode="json"), admin_comment)
        request.updated_at = now
        await commit(session)

    await session.refresh(request)
    logger.info("Request %s edited by %s", request.id, auth.user_id)
    return build_request_response(request)


async def delete_request(
    session: AsyncSession,
    auth: AuthContext,
    request_id: uuid.UUID,
    now: datetime,
    confirm: bool = False,
) -> None:
    """Delete the caller's own PENDING request inside the edit window. Requires ``confirm``."""
    request = await get_request_or_404(session, request_id)
    ensure_owner_can_modify(request, auth.user_id, now)
    if not confirm:
        raise ConfirmationRequired("delete this request")

    await session.delete(request)
    await commit(session)
    logger.info("Request %s deleted by its owner %s", request_id, auth.user_id)


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


async def get_request(
    session: AsyncSession,
    auth: AuthContext,
    request_id: uuid.UUID,
) -> RequestResponse:
    """Get a single request. Visible to its owner and to admins."""
    request = await get_request_or_404(session, request_id)
    if request.employee_id != auth.user_id and not auth.is_admin:
        raise AppError("Not authorized to view this request", status_code=403)
    return build_request_response(request)


def request_filters(
    status_filter: RequestStatus | None = None,
    form_type: FormType | None = None,
    employee_id: uuid.UUID | None = None,
) -> list[Any]:
    filters: list[Any] = []
    if status_filter is not None:
        filters.append(col(HRRequest.status) == status_filter.value)
    if form_type is not None:
        filters.append(col(HRRequest.form_type) == form_type.value)
    if employee_id is not None:
        filters.append(col(HRRequest.employee_id) == employee_id)
    return filters


async def fetch_page(
    session: AsyncSession,
    filters: list[Any],
    offset: int,
    limit: int,
) -> tuple[list[HRRequest], int]:
    """Return one page of requests ordered by created_at DESC, plus the total count."""
    try:
        count_result = await session.execute(select(func.count()).select_from(HRRequest).where(*filters))
        total = count_result.scalar_one()
        result = await session.execute(
            select(HRRequest)
            .where(*filters)
            .order_by(col(HRRequest.created_at).desc())
            .offset(offset)
            .limit(limit)
        )
    except SQLAlchemyError as exc:
        logger.exception("Failed to list requests")
        raise PersistenceFailed from exc
    return list(result.scalars().all()), total


async def list_my_requests(
    session: AsyncSession,
    auth: AuthContext,
    now: datetime,
    status_filter: RequestStatus | None = None,
    form_type: FormType | None = None,
    offset: int = 0,
    limit: int = 50,
) -> OwnRequestListResponse:
    """List the caller's requests, newest first, flagging which ones they can still change."""
    filters = request_filters(status_filter, form_type, employee_id=auth.user_id)
    requests, total = await fetch_page(session, filters, offset, limit)
    return OwnRequestListResponse(
        items=[_build_own_response(r, now) for r in requests],
        total=total,
    )


async def get_balance_summary(
    session: AsyncSession,
    auth: AuthContext,
    exclude_request_id: uuid.UUID | None = None,
) -> BalanceSummaryResponse:
    """Remaining leave credits for the caller, recomputed from their leave requests."""
    profile = await _load_profile(auth.user_id)
    requests = await _fetch_leave_requests(session, auth.user_id)
    return balance_summary(requests, profile, exclude_request_id)
