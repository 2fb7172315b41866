# ruff: noqa: TC003
"""Leave credit ledger.

Balances are never stored. They are recomputed from the owner's request set
on every read, so they cannot drift from the requests that consume them.
Remaining credit for a tracked type is its annual entitlement minus the days
of every non-rejected leave request of that exact type, optionally leaving
out the request currently being edited.
"""

from __future__ import annotations

import uuid
from collections.abc import Iterable
from typing import Any, Protocol

from hrdesk.models.enums import FormType, LeaveType, RequestStatus
from hrdesk.schemas.balance import BalanceSummaryResponse, LeaveBalance
from hrdesk.services.eligibility import available_leave_types
from hrdesk.services.employee import EmployeeProfile

# Annual entitlement in days for each balance-tracked leave type.
ENTITLEMENTS: dict[LeaveType, int] = {
    LeaveType.SICK: 15,
    LeaveType.VACATION: 15,
    LeaveType.SOLO_PARENT: 7,
}


class RequestRecord(Protocol):
    """The envelope fields the ledger reads from a stored request."""

    id: uuid.UUID
    employee_id: uuid.UUID
    form_type: str
    status: str
    data: dict[str, Any]


def is_balance_tracked(leave_type: LeaveType) -> bool:
    return leave_type in ENTITLEMENTS


def used_days(
    requests: Iterable[RequestRecord],
    employee_id: uuid.UUID,
    leave_type: LeaveType,
    exclude_request_id: uuid.UUID | None = None,
) -> int:
    """Sum the days of the employee's non-rejected leave requests of ``leave_type``."""
    total = 0
    for request in requests:
        if request.employee_id != employee_id or request.form_type != FormType.LEAVE:
            continue
        if request.status == RequestStatus.REJECTED:
            continue
        if exclude_request_id is not None and request.id == exclude_request_id:
            continue
        if request.data.get("leave_type") != leave_type:
            continue
        total += int(request.data.get("days", 0))
    return total


def remaining_balance(
    requests: Iterable[RequestRecord],
    employee_id: uuid.UUID,
    leave_type: LeaveType,
    exclude_request_id: uuid.UUID | None = None,
) -> int:
    """Return the credit left for a balance-tracked type. Raises KeyError for untracked types."""
    entitlement = ENTITLEMENTS[leave_type]
    return entitlement - used_days(requests, employee_id, leave_type, exclude_request_id)


def balance_summary(
    requests: Iterable[RequestRecord],
    profile: EmployeeProfile,
    exclude_request_id: uuid.UUID | None = None,
) -> BalanceSummaryResponse:
    """Build the balance panel shown next to the leave form."""
    snapshot = list(requests)
    available = available_leave_types(profile)
    balances = []
    for leave_type, entitlement in ENTITLEMENTS.items():
        if leave_type not in available:
            continue
        used = used_days(snapshot, profile.id, leave_type, exclude_request_id)
        balances.append(
            LeaveBalance(
                leave_type=leave_type,
                entitlement=entitlement,
                used=used,
                remaining=entitlement - used,
            )
        )
    return BalanceSummaryResponse(available_leave_types=available, balances=balances)
