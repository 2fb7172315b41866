# ruff: noqa: TC001
from __future__ import annotations

from pydantic import BaseModel

from hrdesk.models.enums import LeaveType


class LeaveBalance(BaseModel):
    """Remaining credits for one balance-tracked leave type."""

    leave_type: LeaveType
    entitlement: int
    used: int
    remaining: int


class BalanceSummaryResponse(BaseModel):
    """Leave types the employee may file and the credits left on each tracked type."""

    available_leave_types: list[LeaveType]
    balances: list[LeaveBalance]
